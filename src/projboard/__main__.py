"""Allow ``python -m projboard``."""

from projboard.cli import app

if __name__ == "__main__":
    app()
