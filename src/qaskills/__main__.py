"""Allow running qaskills with ``python -m qaskills``."""

from qaskills.cli.app import app

if __name__ == "__main__":
    app()
