"""Main entry point for loadtrace."""
import sys

from loadtrace.cli import main


if __name__ == "__main__":
    sys.exit(main())
