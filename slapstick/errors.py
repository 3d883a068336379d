"""Exceptions raised while preparing and resolving entity assets."""

from typing import Optional


class ConfigurationError(Exception):
    """An entity type cannot be used as configured.

    Raised when a concrete entity type declares no asset source, or names
    one that is not defined in the asset tables.
    """


class AssetResolutionError(Exception):
    """Fetching or decoding an asset failed.

    Attributes:
        name: Asset (or entity type) being resolved
        source: Locator that was tried (URL, file path, or 'data URI')
    """

    def __init__(self, name: str, source: Optional[str], reason: str):
        self.name = name
        self.source = source
        self.reason = reason
        where = f" from {source}" if source else ""
        super().__init__(f"Failed to resolve asset '{name}'{where}: {reason}")


class AssetNotResolvedError(LookupError):
    """An entity type was rendered before its asset was resolved."""
