"""Entry point for 'python -m swimclub' command."""

from swimclub.cli import main

if __name__ == "__main__":
    main()
