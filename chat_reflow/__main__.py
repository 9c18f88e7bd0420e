"""
Entry point for running the package as a module.

Usage:
    $ python -m chat_reflow format "Some raw reply"
    $ python -m chat_reflow --help
"""

from .main import app

if __name__ == "__main__":
    app()
