"""
CLI module for web-surf.

Provides command-line interface using Typer:
- fetch: Open a page, list links and forms, save markup
- bookmark: Add, remove, list and open bookmarks
- config: Configuration inspection
"""

from web_surf.cli.main import app

__all__ = ["app"]
