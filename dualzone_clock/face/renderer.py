"""Dial renderer - draws one full frame of the dual-zone face."""

import datetime
import logging
from typing import Optional

from ..errors import GeometryNotReadyError
from .colors import BLACK, TRACK_GRAY, Colors
from .geometry import (
    DialBounds,
    Point,
    Rect,
    angle_for_second_of_day,
    angular_distance,
    arc_span,
    label_opacity,
    layout_dial,
    offset_delta,
    point_on_dial,
    tick_positions,
)
from .surface import DrawingSurface, StrokeStyle, TextStyle
from .zones import FrameContext, TimeInterval, TimezoneConfig

logger = logging.getLogger(__name__)

ARC_WIDTH = 10.0
NEEDLE_WIDTH = 5.0

# Label rings sit outside the primary ring and inside the secondary ring
LABEL_GAP = 20.0
# Needle overshoot past each ring
NEEDLE_OVERSHOOT = 5.0

HOUR_LABEL_SIZE = 18
ZONE_CLOCK_SIZE = 42
DEVICE_CLOCK_SIZE = 72
ZONE_CLOCK_SPACING = 60.0

CLOCK_FORMAT = "%H:%M"


class DialRenderer:
    """
    Renders the two timezone rings, hour labels, needle and digital clocks.

    The renderer starts without geometry; ``bounds_changed`` must be
    called with the surface bounds before the first ``render``. The only
    state kept between frames is the cached dial layout.
    """

    def __init__(
        self,
        primary: TimezoneConfig,
        secondary: TimezoneConfig,
        base_inset: float = 35.0,
        ring_spacing: float = 15.0,
    ):
        """
        Initialize renderer.

        Args:
            primary: Outer ring configuration
            secondary: Inner ring configuration
            base_inset: Inset of the outer ring from the surface edge
            ring_spacing: Distance between the two rings
        """
        self.primary = primary
        self.secondary = secondary
        self.base_inset = base_inset
        self.ring_spacing = ring_spacing
        self._dial: Optional[DialBounds] = None

    @property
    def dial(self) -> Optional[DialBounds]:
        """Current layout, or None before the first bounds update."""
        return self._dial

    @property
    def is_ready(self) -> bool:
        return self._dial is not None

    def bounds_changed(self, bounds: Rect) -> DialBounds:
        """
        Recompute the dial layout for new surface bounds.

        Args:
            bounds: Pixel bounds of the drawing surface

        Returns:
            The (possibly cached) DialBounds
        """
        bounds = Rect(*bounds)
        if self._dial is not None and self._dial.bounds == bounds:
            return self._dial

        self._dial = layout_dial(bounds, self.base_inset, self.ring_spacing)
        logger.debug(
            f"Dial layout for {bounds.width:g}x{bounds.height:g}: "
            f"center={tuple(self._dial.center)}, "
            f"radii={self._dial.primary_radius:g}/{self._dial.secondary_radius:g}"
        )
        return self._dial

    def render(self, frame: FrameContext, surface: DrawingSurface) -> None:
        """
        Draw one complete frame.

        Args:
            frame: Times and offsets for this frame
            surface: Surface to draw on

        Raises:
            GeometryNotReadyError: If no bounds have been supplied yet.
        """
        dial = self._dial
        if dial is None:
            raise GeometryNotReadyError(
                "render() called before bounds_changed(); dial geometry unknown"
            )

        surface.clear(BLACK)

        primary_offset = offset_delta(
            frame.device_offset_seconds, frame.primary_offset_seconds
        )
        secondary_offset = offset_delta(
            frame.device_offset_seconds, frame.secondary_offset_seconds
        )

        self._draw_ring(surface, dial.primary_rect, self.primary, primary_offset)
        self._draw_ring(surface, dial.secondary_rect, self.secondary, secondary_offset)

        now_seconds = frame.device_second_of_day
        self._draw_hour_labels(
            surface,
            dial.center,
            dial.radius_for_inset(dial.primary_inset - LABEL_GAP),
            primary_offset,
            now_seconds,
        )
        self._draw_hour_labels(
            surface,
            dial.center,
            dial.radius_for_inset(dial.secondary_inset + LABEL_GAP),
            secondary_offset,
            now_seconds,
        )

        self._draw_needle(
            surface,
            dial.center,
            dial.radius_for_inset(dial.secondary_inset + NEEDLE_OVERSHOOT),
            dial.radius_for_inset(dial.primary_inset - NEEDLE_OVERSHOOT),
            now_seconds,
        )

        self._draw_digital_clocks(
            surface, dial.center, frame, primary_offset, secondary_offset
        )

    def _draw_ring(
        self,
        surface: DrawingSurface,
        rect: Rect,
        zone: TimezoneConfig,
        rotation_offset: int,
    ) -> None:
        """Base track, then day arc, then work arc on top."""
        surface.draw_arc(rect, 0.0, 360.0, _arc_stroke(TRACK_GRAY))
        self._draw_interval(
            surface, rect, zone.day_interval, rotation_offset, zone.muted_color
        )
        self._draw_interval(
            surface, rect, zone.work_interval, rotation_offset, zone.color
        )

    @staticmethod
    def _draw_interval(
        surface: DrawingSurface,
        rect: Rect,
        interval: TimeInterval,
        rotation_offset: int,
        color,
    ) -> None:
        start_angle, sweep_angle = arc_span(interval, rotation_offset)
        surface.draw_arc(rect, start_angle, sweep_angle, _arc_stroke(color))

    def _draw_hour_labels(
        self,
        surface: DrawingSurface,
        center: Point,
        radius: float,
        rotation_offset: int,
        now_seconds: int,
    ) -> None:
        # "now" is not rotated per ring: the needle stays at device time
        # and each ring's labels are compared against it at their own
        # rotated angles.
        current_angle = angle_for_second_of_day(now_seconds)

        for hour, (angle, position) in enumerate(
            tick_positions(center, radius, rotation_offset)
        ):
            alpha = label_opacity(angular_distance(current_angle, angle))
            style = TextStyle(
                color=Colors.Face.HOUR_LABEL, size=HOUR_LABEL_SIZE, alpha=alpha
            )
            _draw_centered_text(surface, str(hour), position, style)

    @staticmethod
    def _draw_needle(
        surface: DrawingSurface,
        center: Point,
        inner_radius: float,
        outer_radius: float,
        now_seconds: int,
    ) -> None:
        angle = angle_for_second_of_day(now_seconds)
        surface.draw_line(
            point_on_dial(center, inner_radius, angle),
            point_on_dial(center, outer_radius, angle),
            StrokeStyle(color=Colors.Face.NEEDLE, width=NEEDLE_WIDTH, round_cap=True),
        )

    def _draw_digital_clocks(
        self,
        surface: DrawingSurface,
        center: Point,
        frame: FrameContext,
        primary_offset: int,
        secondary_offset: int,
    ) -> None:
        # A zone showing the same wall-clock time as the device gets no
        # readout of its own; the center clock takes its color instead.
        if primary_offset != 0:
            _draw_clock(
                surface,
                center.offset(0, -ZONE_CLOCK_SPACING),
                frame.primary_time,
                TextStyle(color=self.primary.color, size=ZONE_CLOCK_SIZE),
            )

        if primary_offset == 0:
            device_color = self.primary.color
        elif secondary_offset == 0:
            device_color = self.secondary.color
        else:
            device_color = Colors.Face.NEUTRAL_CLOCK

        _draw_clock(
            surface,
            center,
            frame.device_time,
            TextStyle(color=device_color, size=DEVICE_CLOCK_SIZE),
        )

        if secondary_offset != 0:
            _draw_clock(
                surface,
                center.offset(0, ZONE_CLOCK_SPACING),
                frame.secondary_time,
                TextStyle(color=self.secondary.color, size=ZONE_CLOCK_SIZE),
            )


def _arc_stroke(color) -> StrokeStyle:
    return StrokeStyle(color=color, width=ARC_WIDTH, round_cap=True)


def _draw_centered_text(
    surface: DrawingSurface, text: str, center: Point, style: TextStyle
) -> None:
    box = surface.measure_text(text, style)
    box_center = box.center
    surface.draw_text(
        text, Point(center.x - box_center.x, center.y - box_center.y), style
    )


def _draw_clock(
    surface: DrawingSurface, center: Point, time: datetime.time, style: TextStyle
) -> None:
    _draw_centered_text(surface, time.strftime(CLOCK_FORMAT), center, style)
