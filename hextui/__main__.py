"""Module entrypoint for ``python -m hextui``."""

from .cli import main


if __name__ == "__main__":
    main()
