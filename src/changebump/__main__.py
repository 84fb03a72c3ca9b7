"""Allow running as ``python -m changebump``."""

from changebump.cli.app import main

if __name__ == "__main__":
    main()
