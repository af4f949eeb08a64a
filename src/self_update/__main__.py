"""Entry point for ``python -m src.self_update``."""

from src.self_update.cli import main

if __name__ == "__main__":
    main()
