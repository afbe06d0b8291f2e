"""Timezone configuration and per-frame time snapshots."""

import datetime
from dataclasses import dataclass, field
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import ConfigurationError
from .geometry import offset_delta


RGB = tuple[int, int, int]


def second_of_day(value: datetime.time) -> int:
    """Whole seconds since midnight."""
    return value.hour * 3600 + value.minute * 60 + value.second


def resolve_zone(name: str) -> ZoneInfo:
    """
    Resolve an IANA timezone identifier.

    Raises:
        ConfigurationError: If the identifier is empty, not a string or unknown.
    """
    if not isinstance(name, str):
        raise ConfigurationError(f"Timezone must be a string, got {name!r}")
    if not name:
        raise ConfigurationError("Timezone must not be empty")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone '{name}': {e}") from e


def _check_color(label: str, color: RGB) -> None:
    if len(color) != 3 or not all(
        isinstance(c, int) and 0 <= c <= 255 for c in color
    ):
        raise ConfigurationError(f"Invalid {label} {color!r}: must be three 0-255 ints")


@dataclass(frozen=True)
class TimeInterval:
    """
    A same-day interval between two wall-clock times.

    Intervals crossing midnight are not supported: ``end`` must be
    strictly after ``start``.
    """

    start: datetime.time
    end: datetime.time

    def __post_init__(self) -> None:
        if self.end_seconds <= self.start_seconds:
            raise ConfigurationError(
                f"Invalid interval {self.start:%H:%M}-{self.end:%H:%M}: "
                "end must be after start"
            )

    @classmethod
    def parse(cls, start: str, end: str) -> "TimeInterval":
        """Build an interval from ISO time strings such as ``"09:00"``."""
        try:
            start_time = datetime.time.fromisoformat(start)
            end_time = datetime.time.fromisoformat(end)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid interval times '{start}'-'{end}': {e}"
            ) from e
        return cls(start_time, end_time)

    @property
    def start_seconds(self) -> int:
        return second_of_day(self.start)

    @property
    def end_seconds(self) -> int:
        return second_of_day(self.end)

    @property
    def duration_seconds(self) -> int:
        return self.end_seconds - self.start_seconds


@dataclass(frozen=True)
class TimezoneConfig:
    """Settings for one ring: its zone, colors and highlighted intervals."""

    timezone: str
    color: RGB
    muted_color: RGB
    day_interval: TimeInterval
    work_interval: TimeInterval
    zone: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_color("color", self.color)
        _check_color("muted_color", self.muted_color)
        object.__setattr__(self, "zone", resolve_zone(self.timezone))

    def offset_seconds(self, instant: datetime.datetime) -> int:
        """UTC offset of this zone at ``instant``, in seconds."""
        return _offset_seconds(instant.astimezone(self.zone))


def _offset_seconds(local: datetime.datetime) -> int:
    offset = local.utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


@dataclass(frozen=True)
class FrameContext:
    """Wall-clock times and UTC offsets for a single redraw."""

    instant: datetime.datetime
    device_time: datetime.time
    device_offset_seconds: int
    primary_time: datetime.time
    primary_offset_seconds: int
    secondary_time: datetime.time
    secondary_offset_seconds: int

    @classmethod
    def capture(
        cls,
        primary: TimezoneConfig,
        secondary: TimezoneConfig,
        instant: Optional[datetime.datetime] = None,
        device_zone: Optional[datetime.tzinfo] = None,
    ) -> "FrameContext":
        """
        Snapshot the device and ring times at one instant.

        Args:
            primary: Outer ring configuration
            secondary: Inner ring configuration
            instant: Moment to capture (default: now). Naive values are UTC.
            device_zone: Device timezone (default: the host's local zone)

        Returns:
            FrameContext for this instant
        """
        if instant is None:
            instant = datetime.datetime.now(datetime.timezone.utc)
        elif instant.tzinfo is None:
            instant = instant.replace(tzinfo=datetime.timezone.utc)

        if device_zone is None:
            device_local = instant.astimezone()
        else:
            device_local = instant.astimezone(device_zone)
        primary_local = instant.astimezone(primary.zone)
        secondary_local = instant.astimezone(secondary.zone)

        return cls(
            instant=instant,
            device_time=device_local.time(),
            device_offset_seconds=_offset_seconds(device_local),
            primary_time=primary_local.time(),
            primary_offset_seconds=_offset_seconds(primary_local),
            secondary_time=secondary_local.time(),
            secondary_offset_seconds=_offset_seconds(secondary_local),
        )

    @property
    def device_second_of_day(self) -> int:
        return second_of_day(self.device_time)

    @property
    def primary_rotation(self) -> int:
        return offset_delta(self.device_offset_seconds, self.primary_offset_seconds)

    @property
    def secondary_rotation(self) -> int:
        return offset_delta(
            self.device_offset_seconds, self.secondary_offset_seconds
        )
