"""Entrypoint for `python -m metanav`."""

from .cli import app


if __name__ == "__main__":
    app()
