"""Application keys for type-safe app configuration access."""

from aiohttp import web

from tabrelay.config import BrowserConfig
from tabrelay.core.navigator import Navigator

navigator_key = web.AppKey("navigator", Navigator)
browser_key = web.AppKey("browser", BrowserConfig)
