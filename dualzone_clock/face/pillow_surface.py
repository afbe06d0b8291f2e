"""Drawing surface backed by a Pillow image."""

import math

from PIL import Image, ImageDraw

from .font_manager import get_font_manager
from .geometry import Point, Rect
from .surface import RGB, DrawingSurface, StrokeStyle, TextStyle


class PillowSurface(DrawingSurface):
    """
    Draws onto a PIL Image.

    The image is drawn in RGBA blend mode so text alpha fades labels
    against whatever is already underneath.
    """

    def __init__(self, image: Image.Image):
        self.image = image
        self.draw = ImageDraw.Draw(image, "RGBA")
        self.fonts = get_font_manager()

    @property
    def bounds(self) -> Rect:
        width, height = self.image.size
        return Rect(0, 0, width, height)

    def clear(self, color: RGB) -> None:
        width, height = self.image.size
        self.draw.rectangle(((0, 0), (width, height)), fill=color)

    def draw_arc(
        self, rect: Rect, start_angle: float, sweep_angle: float, stroke: StrokeStyle
    ) -> None:
        # Pillow strokes inward from the box; grow it so the stroke is
        # centered on the oval like a canvas arc.
        half = stroke.width / 2
        outer = rect.inset(-half)
        if outer.width <= 0 or outer.height <= 0 or sweep_angle <= 0:
            return

        self.draw.arc(
            (outer.left, outer.top, outer.right, outer.bottom),
            start=start_angle,
            end=start_angle + sweep_angle,
            fill=stroke.color,
            width=max(1, round(stroke.width)),
        )

        if stroke.round_cap and sweep_angle < 360:
            for angle in (start_angle, start_angle + sweep_angle):
                self._draw_cap(self._point_on_oval(rect, angle), half, stroke.color)

    def draw_line(self, start: Point, end: Point, stroke: StrokeStyle) -> None:
        self.draw.line(
            (tuple(start), tuple(end)),
            fill=stroke.color,
            width=max(1, round(stroke.width)),
        )
        if stroke.round_cap:
            half = stroke.width / 2
            self._draw_cap(start, half, stroke.color)
            self._draw_cap(end, half, stroke.color)

    def draw_text(self, text: str, position: Point, style: TextStyle) -> None:
        font = self.fonts.get_font(style.size)
        self.draw.text(
            tuple(position), text, fill=(*style.color, style.alpha), font=font
        )

    def measure_text(self, text: str, style: TextStyle) -> Rect:
        font = self.fonts.get_font(style.size)
        left, top, right, bottom = self.draw.textbbox((0, 0), text, font=font)
        return Rect(left, top, right, bottom)

    @staticmethod
    def _point_on_oval(rect: Rect, angle: float) -> Point:
        radians = math.radians(angle)
        center = rect.center
        return Point(
            center.x + math.cos(radians) * rect.width / 2,
            center.y + math.sin(radians) * rect.height / 2,
        )

    def _draw_cap(self, point: Point, radius: float, color: RGB) -> None:
        if radius < 1:
            return
        self.draw.ellipse(
            (point.x - radius, point.y - radius, point.x + radius, point.y + radius),
            fill=color,
        )
