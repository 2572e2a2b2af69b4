"""Module entrypoint to run the scopelog CLI with ``python -m scopelog``."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover - module CLI
    raise SystemExit(main())
