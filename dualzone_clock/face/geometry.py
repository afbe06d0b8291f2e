"""Dial geometry - maps time of day and zone offsets onto angles and points.

Every dial element (arcs, hour labels, needle) goes through the same linear
mapping of 240 seconds per degree, so they stay consistent when a ring is
rotated for its timezone. Angles are in degrees; trig is done in radians.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .zones import TimeInterval

SECONDS_PER_DAY = 86400
SECONDS_PER_DEGREE = SECONDS_PER_DAY / 360.0  # 240.0
HOURS_PER_DAY = 24
DEGREES_PER_HOUR = 360.0 / HOURS_PER_DAY

# Canvas arcs start at 3 o'clock, the dial starts at 12 o'clock
QUARTER_TURN = 90.0

# Label fade
FADE_DISTANCE = 120.0
OPACITY_FLOOR = 50
OPACITY_CEILING = 255


class Point(NamedTuple):
    """A point on the drawing surface, in pixels."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


class Rect(NamedTuple):
    """An axis-aligned rectangle given by its edges."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def inset(self, amount: float) -> "Rect":
        """Shrink the rectangle by ``amount`` on every side (negative grows it)."""
        return Rect(
            self.left + amount,
            self.top + amount,
            self.right - amount,
            self.bottom - amount,
        )


@dataclass(frozen=True)
class DialBounds:
    """Cached layout of the two rings for one surface size."""

    bounds: Rect
    face: Rect
    center: Point
    primary_rect: Rect
    secondary_rect: Rect
    primary_inset: float
    secondary_inset: float

    @property
    def half_width(self) -> float:
        return self.face.width / 2

    @property
    def primary_radius(self) -> float:
        return self.half_width - self.primary_inset

    @property
    def secondary_radius(self) -> float:
        return self.half_width - self.secondary_inset

    def radius_for_inset(self, inset: float) -> float:
        """Radius of a circle ``inset`` pixels inside the dial edge."""
        return self.half_width - inset


def layout_dial(
    bounds: Rect, base_inset: float = 35.0, ring_spacing: float = 15.0
) -> DialBounds:
    """
    Compute ring rectangles for the given surface bounds.

    The dial occupies the largest square centered in the bounds. The
    primary ring sits ``base_inset`` pixels inside that square, the
    secondary ring ``ring_spacing`` pixels further in.

    Args:
        bounds: Pixel bounds of the drawing surface
        base_inset: Inset of the primary (outer) ring
        ring_spacing: Extra inset of the secondary (inner) ring

    Returns:
        DialBounds for these bounds
    """
    center = bounds.center
    half_side = min(bounds.width, bounds.height) / 2
    face = Rect(
        center.x - half_side,
        center.y - half_side,
        center.x + half_side,
        center.y + half_side,
    )
    secondary_inset = base_inset + ring_spacing
    return DialBounds(
        bounds=bounds,
        face=face,
        center=center,
        primary_rect=face.inset(base_inset),
        secondary_rect=face.inset(secondary_inset),
        primary_inset=base_inset,
        secondary_inset=secondary_inset,
    )


def offset_delta(device_offset_seconds: int, zone_offset_seconds: int) -> int:
    """Seconds a zone's ring is rotated relative to the device's own day."""
    return device_offset_seconds - zone_offset_seconds


def angle_for_second_of_day(
    second_of_day: float, rotation_offset_seconds: float = 0
) -> float:
    """Dial angle (clockwise from 12 o'clock) of a second of the day."""
    return (second_of_day + rotation_offset_seconds) / SECONDS_PER_DEGREE


def arc_span(
    interval: "TimeInterval", rotation_offset_seconds: float = 0
) -> tuple[float, float]:
    """
    Start and sweep angles of an interval's arc in canvas convention.

    Canvas arcs are measured from 3 o'clock, so a quarter turn is
    subtracted from the dial angle. The interval must satisfy
    ``end > start``; ``TimeInterval`` enforces that on construction.

    Args:
        interval: Same-day time interval
        rotation_offset_seconds: Ring rotation from ``offset_delta``

    Returns:
        Tuple of (start_angle, sweep_angle) in degrees
    """
    start_angle = (
        angle_for_second_of_day(interval.start_seconds, rotation_offset_seconds)
        - QUARTER_TURN
    )
    sweep_angle = interval.duration_seconds / SECONDS_PER_DEGREE
    return start_angle, sweep_angle


def interval_seconds_from_arc(
    start_angle: float, sweep_angle: float, rotation_offset_seconds: float = 0
) -> tuple[float, float]:
    """Inverse of ``arc_span``: (start_seconds, end_seconds) of an arc."""
    start_seconds = (
        start_angle + QUARTER_TURN
    ) * SECONDS_PER_DEGREE - rotation_offset_seconds
    end_seconds = start_seconds + sweep_angle * SECONDS_PER_DEGREE
    return start_seconds, end_seconds


def point_on_dial(center: Point, radius: float, angle: float) -> Point:
    """Point at ``radius`` from ``center``, ``angle`` degrees clockwise from up."""
    radians = math.radians(angle)
    return Point(
        center.x + math.sin(radians) * radius,
        center.y - math.cos(radians) * radius,
    )


def tick_positions(
    center: Point, radius: float, rotation_offset_seconds: float = 0
) -> list[tuple[float, Point]]:
    """
    Angles and positions of the 24 hour ticks of a ring.

    Args:
        center: Dial center
        radius: Distance of the ticks from the center
        rotation_offset_seconds: Ring rotation from ``offset_delta``

    Returns:
        List of (angle_degrees, point), indexed by hour
    """
    angle_offset = rotation_offset_seconds / SECONDS_PER_DEGREE
    ticks = []
    for tick in range(HOURS_PER_DAY):
        angle = tick * DEGREES_PER_HOUR + angle_offset
        ticks.append((angle, point_on_dial(center, radius, angle)))
    return ticks


def angular_distance(a: float, b: float) -> float:
    """Circular distance between two angles, in [0, 180]."""
    distance = abs(a - b) % 360
    if distance > 180:
        distance = 360 - distance
    return distance


def label_opacity(
    distance: float,
    floor: int = OPACITY_FLOOR,
    ceiling: int = OPACITY_CEILING,
) -> int:
    """
    Alpha for an hour label ``distance`` degrees away from "now".

    Fully opaque at the current time, fading linearly to ``floor`` at
    120 degrees and beyond.
    """
    clamped = min(max(distance, 0.0), FADE_DISTANCE)
    fraction = clamped / FADE_DISTANCE
    return round(ceiling + fraction * (floor - ceiling))
