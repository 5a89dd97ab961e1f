"""aiohttp server for Tabrelay.

Application factory and route registration.
"""

from aiohttp import web

from tabrelay.api.open import create_open_routes
from tabrelay.app_keys import browser_key, navigator_key
from tabrelay.config import Config
from tabrelay.core.navigator import Navigator, current_os, select_navigator
from tabrelay.core.process import SubprocessRunner


def create_app(config: Config, *, navigator: Navigator | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        navigator: Navigation strategy (default: chosen from the host platform)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    if navigator is None:
        navigator = select_navigator(current_os(), SubprocessRunner(), config.browser)

    app[navigator_key] = navigator
    app[browser_key] = config.browser

    app.router.add_routes(create_open_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server until interrupted."""
    app = create_app(config)
    web.run_app(
        app,
        host=config.server.host,
        port=config.server.port,
        print=None,
    )
