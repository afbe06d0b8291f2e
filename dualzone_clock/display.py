"""Framebuffer output for Dual-Zone Clock."""

import logging
from typing import TYPE_CHECKING, BinaryIO, Optional

import numpy as np
from PIL import Image

if TYPE_CHECKING:
    from .config import DisplayConfig

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = {"rgb565": 2, "rgb888": 3, "bgra8888": 4}


def pack_rgb565(arr: np.ndarray) -> bytes:
    """
    Pack an (H, W, 3) RGB array as little-endian RGB565.

    Red: 5 bits (11-15), green: 6 bits (5-10), blue: 5 bits (0-4).
    """
    arr = arr.astype(np.uint16)
    r = arr[:, :, 0]
    g = arr[:, :, 1]
    b = arr[:, :, 2]
    rgb565 = ((r >> 3) << 11) | ((g >> 2) << 5) | (b >> 3)
    return rgb565.astype("<u2").tobytes()


def pack_rgb888(arr: np.ndarray) -> bytes:
    return np.ascontiguousarray(arr, dtype=np.uint8).tobytes()


def pack_bgra8888(arr: np.ndarray) -> bytes:
    """Pack as B, G, R, A bytes with opaque alpha (common 32bpp layout)."""
    height, width, _ = arr.shape
    out = np.empty((height, width, 4), dtype=np.uint8)
    out[:, :, 0] = arr[:, :, 2]
    out[:, :, 1] = arr[:, :, 1]
    out[:, :, 2] = arr[:, :, 0]
    out[:, :, 3] = 255
    return out.tobytes()


_PACKERS = {
    "rgb565": pack_rgb565,
    "rgb888": pack_rgb888,
    "bgra8888": pack_bgra8888,
}


class Display:
    """Writes rendered faces to a Linux framebuffer device."""

    def __init__(self, config: "DisplayConfig"):
        """
        Initialize display handler.

        Args:
            config: Display configuration
        """
        self.config = config
        self.width = config.width
        self.height = config.height
        self.framebuffer = config.framebuffer
        self.pixel_format = config.pixel_format
        if self.pixel_format not in _PACKERS:
            raise ValueError(f"Unsupported pixel format: {self.pixel_format}")
        self._fb_handle: Optional[BinaryIO] = None

    @property
    def frame_size(self) -> int:
        """Bytes written per frame."""
        return self.width * self.height * BYTES_PER_PIXEL[self.pixel_format]

    def open(self) -> bool:
        """
        Open the framebuffer device.

        Returns:
            True if successful, False otherwise
        """
        try:
            self._fb_handle = open(self.framebuffer, "wb")
            logger.info(f"Opened framebuffer: {self.framebuffer} ({self.pixel_format})")
            return True
        except PermissionError:
            logger.error(
                f"Permission denied opening {self.framebuffer}. "
                "Run as root or add user to 'video' group."
            )
            return False
        except FileNotFoundError:
            logger.error(f"Framebuffer not found: {self.framebuffer}")
            return False
        except OSError as e:
            logger.error(f"Failed to open framebuffer: {e}")
            return False

    def close(self) -> None:
        """Close the framebuffer device."""
        if self._fb_handle:
            try:
                self._fb_handle.close()
            except OSError as e:
                logger.warning(f"Error closing framebuffer: {e}")
            finally:
                self._fb_handle = None

    def encode(self, image: Image.Image) -> bytes:
        """Convert an image to raw framebuffer bytes at the display size."""
        if image.size != (self.width, self.height):
            image = image.resize((self.width, self.height), Image.Resampling.LANCZOS)
        if image.mode != "RGB":
            image = image.convert("RGB")
        return _PACKERS[self.pixel_format](np.asarray(image))

    def write_frame(self, image: Image.Image) -> bool:
        """
        Write a PIL Image to the framebuffer.

        Args:
            image: Rendered face (resized/converted if needed)

        Returns:
            True if successful, False otherwise
        """
        if self._fb_handle is None:
            logger.error("Framebuffer not open")
            return False

        try:
            data = self.encode(image)
            self._fb_handle.seek(0)
            self._fb_handle.write(data)
            self._fb_handle.flush()
            return True
        except OSError as e:
            logger.error(f"Failed to write to framebuffer: {e}")
            return False

    def clear(self, color: tuple[int, int, int] = (0, 0, 0)) -> bool:
        """Fill the display with a solid color."""
        image = Image.new("RGB", (self.width, self.height), color)
        return self.write_frame(image)
