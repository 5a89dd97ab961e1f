"""Shared test fixtures."""

import pytest
from tabrelay.config import BrowserConfig, Config, ServerConfig
from tabrelay.core.process import ProcessError
from tabrelay.core.types import NavigationResult


class FakeRunner:
    """ProcessRunner that records commands instead of executing them.

    Commands fail when their argument list starts with a registered prefix.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.outputs: dict[str, str] = {}
        self._failures: list[tuple[list[str], str]] = []

    def fail_on(self, *prefix: str, error: str = "exit status 1") -> None:
        self._failures.append((list(prefix), error))

    def run(self, args: list[str]) -> None:
        self._record(args)

    def output(self, args: list[str]) -> str:
        self._record(args)
        return self.outputs.get(args[0], "")

    def _record(self, args: list[str]) -> None:
        self.calls.append(list(args))
        for prefix, error in self._failures:
            if args[: len(prefix)] == prefix:
                raise ProcessError(error, output=self.outputs.get(args[0], ""))


class StubNavigator:
    """Navigator returning a fixed result and remembering requested URLs."""

    def __init__(self, result: NavigationResult) -> None:
        self.result = result
        self.urls: list[str] = []

    def navigate(self, url: str) -> NavigationResult:
        self.urls.append(url)
        return self.result


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def browser() -> BrowserConfig:
    return BrowserConfig()


@pytest.fixture
def test_config() -> Config:
    """Create a configuration with defaults and no config file."""
    return Config(server=ServerConfig(), browser=BrowserConfig())
