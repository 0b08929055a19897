"""Entry point for running shot as a module.

Usage:
    python -m shot [command] [options]

Example:
    python -m shot render page.shot --var title=Home
    python -m shot check page.shot
"""

from shot.cli import app

if __name__ == "__main__":
    app()
