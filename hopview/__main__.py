"""Module entrypoint for ``python -m hopview``."""

from .cli import main


if __name__ == "__main__":
    main()
