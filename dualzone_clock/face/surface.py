"""Abstract drawing surface the dial renderer draws on."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .geometry import Point, Rect

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class StrokeStyle:
    """Outline style for arcs and lines."""

    color: RGB
    width: float = 1.0
    round_cap: bool = False


@dataclass(frozen=True)
class TextStyle:
    """Fill style for text. ``alpha`` is 0-255."""

    color: RGB
    size: int = 18
    alpha: int = 255


class DrawingSurface(ABC):
    """
    Drawing primitives consumed by the dial renderer.

    Arc angles follow the canvas convention: degrees clockwise from
    3 o'clock. Text is positioned by its left/ascender origin, and
    ``measure_text`` returns the text's bounding box relative to that
    origin so callers can center it.
    """

    @abstractmethod
    def clear(self, color: RGB) -> None:
        """Fill the whole surface with ``color``."""

    @abstractmethod
    def draw_arc(
        self, rect: Rect, start_angle: float, sweep_angle: float, stroke: StrokeStyle
    ) -> None:
        """Stroke the arc of the oval inscribed in ``rect``."""

    @abstractmethod
    def draw_line(self, start: Point, end: Point, stroke: StrokeStyle) -> None:
        """Stroke a straight line."""

    @abstractmethod
    def draw_text(self, text: str, position: Point, style: TextStyle) -> None:
        """Draw ``text`` with its origin at ``position``."""

    @abstractmethod
    def measure_text(self, text: str, style: TextStyle) -> Rect:
        """Bounding box of ``text`` drawn at the origin."""
