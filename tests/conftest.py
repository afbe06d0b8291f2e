"""Pytest fixtures for Dual-Zone Clock tests."""

import datetime
import json
import sys
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dualzone_clock.face.geometry import Rect  # noqa: E402
from dualzone_clock.face.surface import DrawingSurface  # noqa: E402
from dualzone_clock.face.zones import TimeInterval, TimezoneConfig  # noqa: E402

UTC = ZoneInfo("UTC")

PRIMARY_COLOR = (250, 194, 97)
PRIMARY_MUTED = (178, 115, 6)
SECONDARY_COLOR = (176, 144, 223)
SECONDARY_MUTED = (119, 65, 200)


class RecordingSurface(DrawingSurface):
    """Drawing surface that records every call for inspection."""

    def __init__(self):
        self.calls = []

    def clear(self, color):
        self.calls.append(("clear", color))

    def draw_arc(self, rect, start_angle, sweep_angle, stroke):
        self.calls.append(("arc", rect, start_angle, sweep_angle, stroke))

    def draw_line(self, start, end, stroke):
        self.calls.append(("line", start, end, stroke))

    def draw_text(self, text, position, style):
        self.calls.append(("text", text, position, style))

    def measure_text(self, text, style):
        # Glyphs half as wide as they are tall, baseline at the origin
        return Rect(0, -style.size, len(text) * style.size * 0.5, 0)

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]

    def texts(self, size=None):
        return [
            call
            for call in self.of_kind("text")
            if size is None or call[3].size == size
        ]


def make_zone(timezone, color=PRIMARY_COLOR, muted_color=PRIMARY_MUTED):
    return TimezoneConfig(
        timezone=timezone,
        color=color,
        muted_color=muted_color,
        day_interval=TimeInterval(datetime.time(8, 0), datetime.time(21, 0)),
        work_interval=TimeInterval(datetime.time(9, 0), datetime.time(18, 0)),
    )


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def noon_utc():
    """12:00:00 UTC on a winter day (no DST anywhere relevant)."""
    return datetime.datetime(2024, 1, 15, 12, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def plus_two_zone():
    """Primary ring two hours ahead of UTC ("Etc/GMT-2" is UTC+2)."""
    return make_zone("Etc/GMT-2")


@pytest.fixture
def utc_secondary_zone():
    return make_zone("UTC", SECONDARY_COLOR, SECONDARY_MUTED)


@pytest.fixture
def minus_five_secondary_zone():
    """Secondary ring five hours behind UTC ("Etc/GMT+5" is UTC-5)."""
    return make_zone("Etc/GMT+5", SECONDARY_COLOR, SECONDARY_MUTED)


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary."""
    return {
        "primary": {
            "timezone": "Europe/Sofia",
            "color": "#fac261",
            "muted_color": [178, 115, 6],
            "day_start": "08:00",
            "day_end": "21:00",
            "work_start": "09:00",
            "work_end": "18:00",
        },
        "secondary": {
            "timezone": "America/New_York",
            "color": [176, 144, 223],
            "muted_color": [119, 65, 200],
        },
        "device": {"timezone": "UTC"},
        "display": {
            "width": 400,
            "height": 400,
            "framebuffer": "/dev/fb1",
            "pixel_format": "rgb565",
        },
        "face": {"base_inset": 35, "ring_spacing": 15, "update_interval_seconds": 60},
        "http_server": {"enabled": True, "port": 8080, "bind_address": "127.0.0.1"},
    }


@pytest.fixture
def temp_config_file(tmp_path, sample_config_dict):
    """Create a temporary config file."""
    config_path = tmp_path / "config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def sample_config(sample_config_dict):
    """Create a Config object from sample data."""
    from dualzone_clock.config import _dict_to_config

    return _dict_to_config(sample_config_dict)


@pytest.fixture
def zone_factory():
    """Build a TimezoneConfig with the default day/work intervals."""
    return make_zone
