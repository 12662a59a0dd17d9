from __future__ import annotations

from typing import Iterable


class LocatorError(Exception):
    pass


class InvalidDescriptorError(LocatorError, ValueError):
    """Raised when the caller hands over something that is not an element."""


class UnsupportedDialectError(LocatorError, LookupError):
    def __init__(self, dialect: str, supported: Iterable[str]) -> None:
        self.dialect = dialect
        self.supported = tuple(supported)
        super().__init__(f"Unsupported dialect {dialect!r}. Supported: {', '.join(self.supported)}")


class CaptureError(LocatorError):
    pass
