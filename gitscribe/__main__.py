"""Allow running gitscribe as `python -m gitscribe`."""

from gitscribe.cli import app

if __name__ == "__main__":
    app()
