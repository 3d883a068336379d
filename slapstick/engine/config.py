"""Asset source dataclasses shared by the manifest loader and the resolver."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass
class SpriteConfig:
    """Where a sprite comes from - URL, file path, or data URI.

    Supports:
    - URL: url: https://example.com/hand.png
    - File path: file: sprites/hand.png (relative to the assets directory)
    - Data URI: data: "data:image/png;base64,iVBORw0KGgo..."
    - Any of them can have region extraction (x, y, width, height)
    - Flip horizontally/vertically (flip_x, flip_y)
    """
    url: str = ""  # http(s) locator, fetched with aiohttp
    file: str = ""  # Path to image file
    data: Optional[str] = None  # Data URI (data:image/png;base64,...)
    transparent: Optional[Tuple[int, int, int]] = None  # RGB color key
    # For sprite sheets:
    x: Optional[int] = None  # Region x offset
    y: Optional[int] = None  # Region y offset
    width: Optional[int] = None  # Region width (None = rest of image)
    height: Optional[int] = None  # Region height (None = rest of image)
    # Flip options:
    flip_x: bool = False
    flip_y: bool = False

    @property
    def locator(self) -> str:
        """Human-readable source, for log and error messages."""
        if self.data:
            return "data URI"
        return self.url or self.file

    def is_defined(self) -> bool:
        """True if any source is set."""
        return bool(self.url or self.file or self.data)


@dataclass
class SoundConfig:
    """Where a sound comes from - URL, file path, or data URI."""
    url: str = ""
    file: str = ""
    data: Optional[str] = None  # Data URI (data:audio/wav;base64,...)
    volume: float = 1.0

    @property
    def locator(self) -> str:
        if self.data:
            return "data URI"
        return self.url or self.file

    def is_defined(self) -> bool:
        return bool(self.url or self.file or self.data)


@dataclass
class AssetsConfig:
    """Sprite and sound tables, keyed by asset name."""
    sprites: Dict[str, SpriteConfig] = field(default_factory=dict)
    sounds: Dict[str, SoundConfig] = field(default_factory=dict)
