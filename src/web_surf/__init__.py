"""
web-surf - a programmable, stateful HTTP browser.

Issues GET and POST requests, keeps cookies, parses pages into a
queryable tree and offers browser-style navigation on top of it:
links, forms, images, back, reload and bookmarks.
"""

__version__ = "0.1.0"
__author__ = "web-surf developers"

from web_surf.config import Settings, load_config
from web_surf.utils.logging import setup_logging, get_logger
from web_surf.core.exceptions import WebSurfError
from web_surf.browser import Attribute, Browser

__all__ = [
    "Settings",
    "load_config",
    "setup_logging",
    "get_logger",
    "WebSurfError",
    "Attribute",
    "Browser",
]
