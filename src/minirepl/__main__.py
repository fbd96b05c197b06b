"""Entry point for running minirepl as a module."""

# No try/except here: run_repl() in cli.py is the boundary for critical
# errors and main() handles build errors.

from minirepl.cli import main

if __name__ == "__main__":
    main()
