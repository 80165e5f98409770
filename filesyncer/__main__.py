"""Allow running FileSyncer with ``python -m filesyncer``."""

from .cli import main

if __name__ == "__main__":
    main()
