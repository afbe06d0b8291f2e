"""Tests for the dial renderer."""

import datetime
from zoneinfo import ZoneInfo

import pytest

from dualzone_clock.errors import GeometryNotReadyError
from dualzone_clock.face.geometry import Point, Rect
from dualzone_clock.face.renderer import (
    DEVICE_CLOCK_SIZE,
    HOUR_LABEL_SIZE,
    ZONE_CLOCK_SIZE,
    DialRenderer,
)
from dualzone_clock.face.zones import FrameContext

from conftest import (
    PRIMARY_COLOR,
    PRIMARY_MUTED,
    SECONDARY_COLOR,
    SECONDARY_MUTED,
    RecordingSurface,
)

UTC = ZoneInfo("UTC")
BOUNDS = Rect(0, 0, 400, 400)
WHITE = (255, 255, 255)


def render(primary, secondary, instant, bounds=BOUNDS, device_zone=UTC):
    renderer = DialRenderer(primary, secondary)
    renderer.bounds_changed(bounds)
    surface = RecordingSurface()
    frame = FrameContext.capture(
        primary, secondary, instant=instant, device_zone=device_zone
    )
    renderer.render(frame, surface)
    return surface


def labels(surface):
    return surface.texts(size=HOUR_LABEL_SIZE)


class TestRendererState:
    """Tests for the bounds/ready state machine."""

    def test_render_before_bounds_raises(
        self, plus_two_zone, utc_secondary_zone, noon_utc, surface
    ):
        renderer = DialRenderer(plus_two_zone, utc_secondary_zone)
        frame = FrameContext.capture(
            plus_two_zone, utc_secondary_zone, instant=noon_utc, device_zone=UTC
        )
        assert not renderer.is_ready
        with pytest.raises(GeometryNotReadyError):
            renderer.render(frame, surface)
        assert surface.calls == []

    def test_bounds_changed_makes_ready(self, plus_two_zone, utc_secondary_zone):
        renderer = DialRenderer(plus_two_zone, utc_secondary_zone)
        dial = renderer.bounds_changed(Rect(0, 0, 100, 100))
        assert renderer.is_ready
        assert renderer.dial is dial
        assert dial.center == Point(50, 50)

    def test_relayout_on_new_bounds(self, plus_two_zone, utc_secondary_zone):
        renderer = DialRenderer(plus_two_zone, utc_secondary_zone)
        small = renderer.bounds_changed(Rect(0, 0, 100, 100))
        large = renderer.bounds_changed(Rect(0, 0, 200, 200))
        assert small.center == Point(50, 50)
        assert large.center == Point(100, 100)
        assert large.primary_radius == 65
        assert large.secondary_radius == 50
        assert renderer.dial is large

    def test_same_bounds_keep_cached_layout(self, plus_two_zone, utc_secondary_zone):
        renderer = DialRenderer(plus_two_zone, utc_secondary_zone)
        first = renderer.bounds_changed((0, 0, 300, 300))
        second = renderer.bounds_changed(Rect(0, 0, 300, 300))
        assert first is second

    def test_failed_frame_does_not_break_next(
        self, plus_two_zone, utc_secondary_zone, noon_utc
    ):
        class BrokenSurface(RecordingSurface):
            def draw_text(self, text, position, style):
                raise RuntimeError("surface lost")

        renderer = DialRenderer(plus_two_zone, utc_secondary_zone)
        dial = renderer.bounds_changed(BOUNDS)
        frame = FrameContext.capture(
            plus_two_zone, utc_secondary_zone, instant=noon_utc, device_zone=UTC
        )

        with pytest.raises(RuntimeError):
            renderer.render(frame, BrokenSurface())

        surface = RecordingSurface()
        renderer.render(frame, surface)
        assert renderer.dial is dial
        assert len(labels(surface)) == 48


class TestRings:
    """Tests for tracks and interval arcs."""

    def test_clears_to_black_first(self, plus_two_zone, utc_secondary_zone, noon_utc):
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        assert surface.calls[0] == ("clear", (0, 0, 0))

    def test_arc_draw_order(self, plus_two_zone, utc_secondary_zone, noon_utc):
        """Track, then muted day arc, then full work arc, per ring."""
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        arcs = surface.of_kind("arc")
        assert len(arcs) == 6

        colors = [arc[4].color for arc in arcs]
        assert colors == [
            (40, 40, 40),
            PRIMARY_MUTED,
            PRIMARY_COLOR,
            (40, 40, 40),
            SECONDARY_MUTED,
            SECONDARY_COLOR,
        ]

    def test_track_is_full_circle(self, plus_two_zone, utc_secondary_zone, noon_utc):
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        track = surface.of_kind("arc")[0]
        assert track[2:4] == (0.0, 360.0)
        assert track[4].width == 10

    def test_ring_rects(self, plus_two_zone, utc_secondary_zone, noon_utc):
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        arcs = surface.of_kind("arc")
        assert arcs[0][1] == Rect(35, 35, 365, 365)
        assert arcs[3][1] == Rect(50, 50, 350, 350)

    def test_primary_arcs_rotated(self, plus_two_zone, utc_secondary_zone, noon_utc):
        """A ring two hours ahead moves its arcs 30 degrees back."""
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        arcs = surface.of_kind("arc")
        primary_day, primary_work = arcs[1], arcs[2]
        secondary_day = arcs[4]

        assert primary_day[2:4] == (0.0, 195.0)
        assert primary_work[2:4] == (15.0, 135.0)
        assert secondary_day[2:4] == (30.0, 195.0)


class TestHourLabels:
    """Tests for the 24-hour labels."""

    def test_two_rings_of_labels(self, plus_two_zone, utc_secondary_zone, noon_utc):
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        texts = [call[1] for call in labels(surface)]
        hours = [str(h) for h in range(24)]
        assert texts == hours + hours

    def test_label_alpha_fades_from_now(
        self, plus_two_zone, utc_secondary_zone, noon_utc
    ):
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        primary = {call[1]: call[3].alpha for call in labels(surface)[:24]}
        secondary = {call[1]: call[3].alpha for call in labels(surface)[24:]}

        # Unrotated ring: the noon label sits under the needle
        assert secondary["12"] == 255
        assert secondary["0"] == 50

        # Ring two hours ahead: its 14:00 label is under the needle
        assert primary["14"] == 255
        assert primary["12"] == 204
        assert primary["2"] == 50

    def test_label_radii(self, plus_two_zone, utc_secondary_zone, noon_utc):
        """Primary labels sit outside the outer ring, secondary inside the inner."""
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        all_labels = labels(surface)
        primary_midnight = all_labels[0]
        secondary_midnight = all_labels[24]

        # Label "0" is one glyph: measured box is 9 wide, 18 tall
        assert primary_midnight[2].x == pytest.approx(200 - 4.5 + 185 * -0.5)
        assert secondary_midnight[2].x == pytest.approx(200 - 4.5)
        assert secondary_midnight[2].y == pytest.approx(200 - 130 + 9)


class TestNeedle:
    """Tests for the current-time needle."""

    def test_single_needle_at_device_time(
        self, plus_two_zone, utc_secondary_zone, noon_utc
    ):
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        lines = surface.of_kind("line")
        assert len(lines) == 1

        _, start, end, stroke = lines[0]
        assert stroke.color == WHITE
        assert stroke.width == 5
        # 12:00 points straight down; inner radius 145, outer 170
        assert start.x == pytest.approx(200)
        assert start.y == pytest.approx(345)
        assert end.x == pytest.approx(200)
        assert end.y == pytest.approx(370)

    def test_landscape_surface_keeps_face_on_screen(
        self, plus_two_zone, utc_secondary_zone, noon_utc
    ):
        """480x320 panels get a circular dial fitted to the short side."""
        surface = render(
            plus_two_zone, utc_secondary_zone, noon_utc, bounds=Rect(0, 0, 480, 320)
        )

        for _, rect, _, _, _ in surface.of_kind("arc"):
            assert rect.width == rect.height

        for call in labels(surface):
            position = call[2]
            assert 0 <= position.x <= 480
            assert 0 <= position.y <= 320

        _, start, end, _ = surface.of_kind("line")[0]
        assert start.x == pytest.approx(240)
        assert start.y == pytest.approx(265)
        assert end.x == pytest.approx(240)
        assert end.y == pytest.approx(290)

    def test_needle_not_rotated_by_zones(
        self, plus_two_zone, minus_five_secondary_zone, noon_utc
    ):
        surface = render(plus_two_zone, minus_five_secondary_zone, noon_utc)
        _, start, _, _ = surface.of_kind("line")[0]
        assert start.x == pytest.approx(200)
        assert start.y == pytest.approx(345)


class TestDigitalClocks:
    """Tests for the digital readouts."""

    def test_secondary_matches_device(
        self, plus_two_zone, utc_secondary_zone, noon_utc
    ):
        surface = render(plus_two_zone, utc_secondary_zone, noon_utc)
        zone_clocks = surface.texts(size=ZONE_CLOCK_SIZE)
        device_clocks = surface.texts(size=DEVICE_CLOCK_SIZE)

        assert [call[1] for call in zone_clocks] == ["14:00"]
        assert zone_clocks[0][3].color == PRIMARY_COLOR
        assert len(device_clocks) == 1
        assert device_clocks[0][1] == "12:00"
        assert device_clocks[0][3].color == SECONDARY_COLOR

    def test_primary_matches_device(
        self, zone_factory, minus_five_secondary_zone, noon_utc
    ):
        """Same offset suppresses the primary clock and colors the center."""
        primary = zone_factory("UTC")
        surface = render(primary, minus_five_secondary_zone, noon_utc)
        zone_clocks = surface.texts(size=ZONE_CLOCK_SIZE)
        device_clocks = surface.texts(size=DEVICE_CLOCK_SIZE)

        assert [call[1] for call in zone_clocks] == ["07:00"]
        assert zone_clocks[0][3].color == SECONDARY_COLOR
        assert device_clocks[0][3].color == PRIMARY_COLOR

    def test_both_match_device_uses_primary_color(self, zone_factory, noon_utc):
        primary = zone_factory("UTC")
        secondary = zone_factory("Etc/UTC", SECONDARY_COLOR, SECONDARY_MUTED)
        surface = render(primary, secondary, noon_utc)
        assert surface.texts(size=ZONE_CLOCK_SIZE) == []
        assert surface.texts(size=DEVICE_CLOCK_SIZE)[0][3].color == PRIMARY_COLOR

    def test_neither_matches_device(
        self, plus_two_zone, minus_five_secondary_zone, noon_utc
    ):
        surface = render(plus_two_zone, minus_five_secondary_zone, noon_utc)
        zone_clocks = surface.texts(size=ZONE_CLOCK_SIZE)
        device_clocks = surface.texts(size=DEVICE_CLOCK_SIZE)

        assert [call[1] for call in zone_clocks] == ["14:00", "07:00"]
        assert device_clocks[0][3].color == WHITE

    def test_clock_positions(self, plus_two_zone, minus_five_secondary_zone, noon_utc):
        """Primary above, device centered, secondary below."""
        surface = render(plus_two_zone, minus_five_secondary_zone, noon_utc)
        primary_clock, secondary_clock = surface.texts(size=ZONE_CLOCK_SIZE)
        device_clock = surface.texts(size=DEVICE_CLOCK_SIZE)[0]

        # "12:00" at 72px measures 180x72, centered on (200, 200)
        assert device_clock[2] == Point(110, 236)
        # "14:00" at 42px measures 105x42, centered on (200, 140)
        assert primary_clock[2] == Point(147.5, 161)
        assert secondary_clock[2] == Point(147.5, 281)

    def test_zone_clock_shows_minutes(self, plus_two_zone, utc_secondary_zone):
        instant = datetime.datetime(2024, 1, 15, 9, 5, 59, tzinfo=datetime.timezone.utc)
        surface = render(plus_two_zone, utc_secondary_zone, instant)
        assert surface.texts(size=ZONE_CLOCK_SIZE)[0][1] == "11:05"
        assert surface.texts(size=DEVICE_CLOCK_SIZE)[0][1] == "09:05"
