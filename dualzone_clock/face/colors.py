"""Color definitions for the dual-zone face."""


class Colors:
    """Semantic color organization for the watch face."""

    class Face:
        """Dial colors shared by both rings."""

        BACKGROUND = (0, 0, 0)
        TRACK = (40, 40, 40)
        NEEDLE = (255, 255, 255)
        HOUR_LABEL = (255, 255, 255)
        NEUTRAL_CLOCK = (255, 255, 255)

    class Amber:
        """Default primary ring palette."""

        FULL = (250, 194, 97)
        MUTED = (178, 115, 6)

    class Violet:
        """Default secondary ring palette."""

        FULL = (176, 144, 223)
        MUTED = (119, 65, 200)


BLACK = Colors.Face.BACKGROUND
TRACK_GRAY = Colors.Face.TRACK


def parse_color(value) -> tuple[int, int, int]:
    """
    Parse a color from config.

    Accepts ``"#rrggbb"`` strings or ``[r, g, b]`` sequences.

    Raises:
        ValueError: If the value is not a valid color.
    """
    if isinstance(value, str):
        text = value.lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Invalid color '{value}': expected #rrggbb")
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))

    color = tuple(int(c) for c in value)
    if len(color) != 3 or not all(0 <= c <= 255 for c in color):
        raise ValueError(f"Invalid color {value!r}: expected three 0-255 values")
    return color
