"""Core type definitions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NavigationRequest:
    """A request to point the browser at a URL."""

    url: str


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of one navigation attempt."""

    success: bool
    message: str

    @classmethod
    def ok(cls, message: str = "") -> "NavigationResult":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str) -> "NavigationResult":
        return cls(success=False, message=message)
