"""Watch face core: dial geometry, drawing surface and renderer."""

from .geometry import DialBounds, Point, Rect, layout_dial
from .pillow_surface import PillowSurface
from .renderer import DialRenderer
from .surface import DrawingSurface, StrokeStyle, TextStyle
from .zones import FrameContext, TimeInterval, TimezoneConfig

__all__ = [
    "DialBounds",
    "DialRenderer",
    "DrawingSurface",
    "FrameContext",
    "PillowSurface",
    "Point",
    "Rect",
    "StrokeStyle",
    "TextStyle",
    "TimeInterval",
    "TimezoneConfig",
    "layout_dial",
]
