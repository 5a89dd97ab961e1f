"""Open URL API endpoint.

Accepts `{"url": "..."}` and points the browser at it.
"""

import asyncio
import json
import logging
from functools import partial

from aiohttp import web

from tabrelay.app_keys import browser_key, navigator_key
from tabrelay.core.types import NavigationRequest

logger = logging.getLogger(__name__)


def create_open_routes() -> list[web.RouteDef]:
    # Every method is routed here so the handler owns the 405 response body.
    return [web.route("*", "/open", handle_open)]


def _reject_constant(token: str) -> float:
    """Refuse NaN and Infinity, which json.loads accepts but JSON does not."""
    raise ValueError(f"invalid JSON token: {token}")


_strict_loads = partial(json.loads, parse_constant=_reject_constant)


def _reply(success: bool, message: str, status: int) -> web.Response:
    return web.json_response({"success": success, "message": message}, status=status)


async def _parse_request(request: web.Request) -> NavigationRequest | None:
    """Decode the request body.

    Returns:
        Parsed request, or None if the body is not a JSON object with a
        string (or null) url
    """
    try:
        data = await request.json(loads=_strict_loads)
    except ValueError:
        return None

    # A bare null decodes to an empty request, like a missing url
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return None

    url = data.get("url")
    if url is None:
        url = ""
    if not isinstance(url, str):
        return None
    return NavigationRequest(url=url)


async def handle_open(request: web.Request) -> web.Response:
    if request.method != "POST":
        return _reply(False, "Only POST method is allowed", 405)

    nav_request = await _parse_request(request)
    if nav_request is None:
        return _reply(False, "Invalid JSON payload", 400)
    if not nav_request.url:
        return _reply(False, "URL cannot be empty", 400)

    navigator = request.app[navigator_key]
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, navigator.navigate, nav_request.url)

    if not result.success:
        logger.warning(f"Failed to change URL to {nav_request.url}: {result.message}")
        return _reply(False, f"Failed to change URL: {result.message}", 500)

    browser = request.app[browser_key]
    return _reply(
        True,
        f"Successfully changed {browser.name} tab to {nav_request.url}",
        200,
    )
