"""Allow ``python -m codevault``."""

from codevault.cli import cli_main

if __name__ == "__main__":
    cli_main()
