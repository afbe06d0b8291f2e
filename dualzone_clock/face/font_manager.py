"""Font manager singleton for centralized font caching."""

import logging
from typing import Union

from PIL import ImageFont

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Font paths (in order of preference)
FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",  # Debian/Ubuntu/Raspbian
    "/usr/share/fonts/TTF/DejaVuSans.ttf",  # Arch Linux
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",  # Fedora
    "/System/Library/Fonts/Helvetica.ttc",  # macOS
]

# Hour labels, small clocks, center clock
FACE_FONT_SIZES = (18, 42, 72)


class FontManager:
    """Caches one font object per point size."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._fonts = {}
        return cls._instance

    def get_font(self, size: int) -> Font:
        """
        Get a font at the specified size.

        Tries the system font paths in order and falls back to Pillow's
        bundled default font.

        Args:
            size: Font size in pixels

        Returns:
            PIL ImageFont
        """
        if size not in self._fonts:
            for path in FONT_PATHS:
                try:
                    self._fonts[size] = ImageFont.truetype(path, size)
                    break
                except OSError:
                    continue
            else:
                self._fonts[size] = ImageFont.load_default(size)
                logger.debug(f"No system font found for size {size}, using default")
        return self._fonts[size]

    def preload(self, sizes=FACE_FONT_SIZES) -> None:
        for size in sizes:
            self.get_font(size)
        logger.debug(f"Preloaded {len(sizes)} font sizes")

    def clear_cache(self) -> None:
        """Clear the font cache (useful for testing)."""
        self._fonts.clear()


def get_font_manager() -> FontManager:
    """Get the global FontManager instance."""
    return FontManager()
