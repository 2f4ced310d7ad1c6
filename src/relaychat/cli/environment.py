"""Environment-driven setup for CLI commands.

Centralizes logging setup and settings creation from environment variables.
Hides configuration details from command implementations.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ..proxy import ProxySettings

# Default console for output
_console = Console()


def configure_logging(level: str = "info", console: Console | None = None) -> None:
    """Send ``relaychat`` log records to the terminal through Rich.

    Args:
        level: Log level name (debug, info, warning, error)
        console: Console to write to (default: stderr console)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    package_logger = logging.getLogger("relaychat")
    package_logger.handlers = [handler]
    package_logger.setLevel(level.upper())
    package_logger.propagate = False


def get_settings(console: Console | None = None) -> ProxySettings:
    """Create proxy settings from environment variables.

    Environment variables:
        API_KEY: OpenRouter API key (required to answer requests)
        OPENROUTER_BASE_URL, PUBLIC_URL, APP_TITLE, UPSTREAM_TIMEOUT: see ProxySettings
    """
    con = console or _console
    settings = ProxySettings.from_env()
    if not settings.has_api_key:
        con.print("[yellow]Warning: API_KEY not set, every chat request will answer 500[/yellow]")
    return settings
