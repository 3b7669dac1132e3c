"""Entry point for python -m aptvanity."""

import sys


def main():
    from aptvanity.cli import main as cli_main
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
