from __future__ import annotations


class GhproxyError(Exception):
    """Base class for fatal run failures."""


class InputReadError(GhproxyError):
    def __init__(self, path: str, reason: object) -> None:
        super().__init__(f"failed reading {path}: {reason}")
        self.path = path


class OutputWriteError(GhproxyError):
    def __init__(self, path: str, reason: object) -> None:
        super().__init__(f"failed writing {path}: {reason}")
        self.path = path


class FetchError(GhproxyError):
    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"failed fetching {url}: {reason}")
        self.url = url


class CategoryError(GhproxyError):
    def __init__(self, name: str, reason: object) -> None:
        super().__init__(f"invalid category {name!r}: {reason}")
        self.name = name
