from __future__ import annotations

from pathlib import Path


class BinsError(Exception):
    pass


class ConfigurationError(BinsError, ValueError):
    pass


class ThresholdParseError(ConfigurationError):
    pass


class CountDecodeError(BinsError, ValueError):
    pass


class NoMatchingBinError(CountDecodeError):
    def __init__(self, value: int) -> None:
        super().__init__(f"value {value} does not match any bin")
        self.value = value


class CountsFormatError(BinsError, ValueError):
    pass


class BinsIOError(BinsError, OSError):
    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
