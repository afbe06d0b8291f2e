"""Configuration loading and validation for Dual-Zone Clock."""

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError
from .face.colors import Colors, parse_color
from .face.zones import TimeInterval, TimezoneConfig, resolve_zone

logger = logging.getLogger(__name__)

# Default paths to search for config
CONFIG_PATHS = [
    Path("config.json"),
    Path.home() / ".config" / "dualzone-clock" / "config.json",
    Path("/etc/dualzone-clock/config.json"),
]

PIXEL_FORMATS = ("rgb565", "rgb888", "bgra8888")

ColorValue = Union[str, list, tuple]


def _is_number(value, types=(int, float)) -> bool:
    return isinstance(value, types) and not isinstance(value, bool)


@dataclass
class ZoneSettings:
    """One ring's timezone, palette and highlighted hours."""

    timezone: str = "UTC"
    color: ColorValue = Colors.Amber.FULL
    muted_color: ColorValue = Colors.Amber.MUTED
    day_start: str = "08:00"
    day_end: str = "21:00"
    work_start: str = "09:00"
    work_end: str = "18:00"

    def validate(self, section: str = "zone") -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors = []
        try:
            resolve_zone(self.timezone)
        except ConfigurationError as e:
            errors.append(f"{section}: {e}")
        for name in ("color", "muted_color"):
            try:
                parse_color(getattr(self, name))
            except (TypeError, ValueError) as e:
                errors.append(f"{section}.{name}: {e}")
        for name, start, end in (
            ("day", self.day_start, self.day_end),
            ("work", self.work_start, self.work_end),
        ):
            try:
                TimeInterval.parse(start, end)
            except ConfigurationError as e:
                errors.append(f"{section}.{name}: {e}")
        return errors

    def to_timezone_config(self) -> TimezoneConfig:
        """
        Build the immutable ring configuration.

        Raises:
            ConfigurationError: If any value is invalid.
        """
        try:
            color = parse_color(self.color)
            muted_color = parse_color(self.muted_color)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e)) from e
        return TimezoneConfig(
            timezone=self.timezone,
            color=color,
            muted_color=muted_color,
            day_interval=TimeInterval.parse(self.day_start, self.day_end),
            work_interval=TimeInterval.parse(self.work_start, self.work_end),
        )


def _default_primary() -> ZoneSettings:
    return ZoneSettings(
        timezone="Europe/Sofia",
        color=Colors.Amber.FULL,
        muted_color=Colors.Amber.MUTED,
    )


def _default_secondary() -> ZoneSettings:
    return ZoneSettings(
        timezone="America/New_York",
        color=Colors.Violet.FULL,
        muted_color=Colors.Violet.MUTED,
    )


@dataclass
class DeviceConfig:
    """Device clock settings. A null timezone means the system's local zone."""

    timezone: Optional[str] = None

    def validate(self) -> list[str]:
        if self.timezone is None:
            return []
        try:
            resolve_zone(self.timezone)
        except ConfigurationError as e:
            return [f"device: {e}"]
        return []


@dataclass
class DisplayConfig:
    """Display settings."""

    width: int = 400
    height: int = 400
    framebuffer: str = "/dev/fb1"
    pixel_format: str = "rgb565"

    def validate(self) -> list[str]:
        errors = []
        if not (_is_number(self.width, int) and _is_number(self.height, int)):
            errors.append(
                f"Display dimensions must be integers: {self.width!r}x{self.height!r}"
            )
        elif self.width <= 0 or self.height <= 0:
            errors.append(f"Invalid display dimensions: {self.width}x{self.height}")
        if self.pixel_format not in PIXEL_FORMATS:
            errors.append(
                f"Invalid pixel_format '{self.pixel_format}': "
                f"must be one of {', '.join(PIXEL_FORMATS)}"
            )
        return errors


@dataclass
class FaceConfig:
    """Dial layout and redraw cadence."""

    base_inset: float = 35.0
    ring_spacing: float = 15.0
    update_interval_seconds: float = 60.0  # minute tick

    def validate(self) -> list[str]:
        errors = []
        values = (self.base_inset, self.ring_spacing, self.update_interval_seconds)
        if not all(_is_number(v) for v in values):
            return ["Face insets and update interval must be numbers"]
        if self.base_inset < 0:
            errors.append("Face base_inset must not be negative")
        if self.ring_spacing <= 0:
            errors.append("Face ring_spacing must be positive")
        if self.update_interval_seconds <= 0:
            errors.append("Face update interval must be positive")
        return errors


@dataclass
class HttpServerConfig:
    """HTTP screenshot server settings."""

    enabled: bool = True
    port: int = 8080
    bind_address: str = "127.0.0.1"  # Secure default: localhost only

    def validate(self) -> list[str]:
        errors = []
        if not _is_number(self.port, int):
            return [f"Invalid port {self.port!r}: must be an integer"]
        if not 1 <= self.port <= 65535:
            errors.append(f"Invalid port {self.port}: must be 1-65535")
        return errors


@dataclass
class Config:
    """Main configuration container."""

    primary: ZoneSettings = field(default_factory=_default_primary)
    secondary: ZoneSettings = field(default_factory=_default_secondary)
    device: DeviceConfig = field(default_factory=DeviceConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    face: FaceConfig = field(default_factory=FaceConfig)
    http_server: HttpServerConfig = field(default_factory=HttpServerConfig)

    def validate(self) -> list[str]:
        """Validate all configuration sections. Returns list of errors."""
        errors = []
        errors.extend(self.primary.validate("primary"))
        errors.extend(self.secondary.validate("secondary"))
        errors.extend(self.device.validate())
        errors.extend(self.display.validate())
        errors.extend(self.face.validate())
        errors.extend(self.http_server.validate())
        return errors


def _dataclass_from_dict(cls, data: dict, base=None):
    """
    Create a dataclass instance from a dict.

    Missing keys come from ``base`` when given, else from field defaults.
    """
    kwargs = {}
    for f in dataclasses.fields(cls):
        if f.name in data:
            kwargs[f.name] = data[f.name]
        elif base is not None:
            kwargs[f.name] = getattr(base, f.name)
        elif f.default is not dataclasses.MISSING:
            kwargs[f.name] = f.default
        elif f.default_factory is not dataclasses.MISSING:
            kwargs[f.name] = f.default_factory()
    return cls(**kwargs)


_CONFIG_SECTIONS = {
    "primary": ZoneSettings,
    "secondary": ZoneSettings,
    "device": DeviceConfig,
    "display": DisplayConfig,
    "face": FaceConfig,
    "http_server": HttpServerConfig,
}


def _dict_to_config(data: dict) -> Config:
    """Convert a dictionary to a Config object."""
    config = Config()
    for key, cls in _CONFIG_SECTIONS.items():
        if key in data:
            # Zone sections inherit the default ring's palette and zone
            section = _dataclass_from_dict(cls, data[key], getattr(config, key))
            setattr(config, key, section)
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from JSON file.

    Args:
        config_path: Explicit path to config file. If None, searches default paths.

    Returns:
        Config object with loaded settings.

    Raises:
        FileNotFoundError: If no config file found and config_path was explicit.
        ConfigurationError: If the file is not valid JSON or fails validation.
    """
    paths_to_try = [config_path] if config_path is not None else CONFIG_PATHS

    found_path = None
    for path in paths_to_try:
        if path.exists():
            found_path = path
            break

    if found_path is None:
        if config_path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        logger.warning("No config file found, using defaults")
        return Config()

    logger.info(f"Loading config from {found_path}")
    try:
        with open(found_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {found_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {found_path} must contain an object")

    try:
        config = _dict_to_config(data)
    except TypeError as e:
        raise ConfigurationError(f"Unknown or malformed config section: {e}")

    errors = config.validate()
    if errors:
        error_msg = "Config validation errors:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        raise ConfigurationError(error_msg)

    return config
