"""
User-Agent string generation.
"""

import platform

DEFAULT_NAME = "WebSurf"


def create_user_agent(name: str = DEFAULT_NAME, version: str | None = None) -> str:
    """
    Build a User-Agent value identifying this client.

    Args:
        name: Product token
        version: Product version. Defaults to the package version.

    Returns:
        A string such as "WebSurf/0.1.0 (Linux x86_64; Python 3.12.1)"

    Example:
        >>> create_user_agent("MyBot", "2.0").startswith("MyBot/2.0 (")
        True
    """
    if version is None:
        from web_surf import __version__
        version = __version__

    system = platform.system() or "Unknown"
    machine = platform.machine()
    os_token = f"{system} {machine}" if machine else system

    return f"{name}/{version} ({os_token}; Python {platform.python_version()})"
