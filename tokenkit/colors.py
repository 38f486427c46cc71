"""Color-space conversion and color formatting.

All conversion functions take RGBA components in the 0-1 range, the way
the host document stores paint and variable colors.
"""

import math
import re

from .errors import InvalidColorError
from .models import ColorFormat, is_reference_value
from .tokens_logging import LogCategory, get_category_logger
from .units import format_number

logger = get_category_logger(LogCategory.EXPORT)

_NUMBER_PATTERN = re.compile(r"[\d.]+")


def _round(n: float) -> int:
    """Round half up, matching the design tool's channel rounding."""
    return math.floor(n + 0.5)


def _trim(n: float, digits: int = 3) -> str:
    """Fix to ``digits`` decimals, then drop trailing zeros."""
    return format_number(float(f"{n:.{digits}f}"))


def rgba_to_hex(r: float, g: float, b: float, a: float | None = 1.0) -> str:
    """Convert RGBA components to a color string.

    Opaque colors render as 6-digit lowercase hex. Translucent colors
    render as ``rgba(R, G, B, A)`` with alpha fixed to 3 decimals; there is
    no 8-digit hex output.
    """
    if a is None:
        a = 1.0

    if a < 1:
        return (
            f"rgba({_round(r * 255)}, {_round(g * 255)}, {_round(b * 255)}, {a:.3f})"
        )
    return "#" + "".join(format(_round(c * 255), "02x") for c in (r, g, b))


def hex_to_rgba(hex_value: str) -> tuple[float, float, float, float]:
    """Convert a 6- or 8-digit hex string (``#`` optional) to RGBA.

    Raises:
        InvalidColorError: If the string is not 6 or 8 hex digits.
    """
    digits = hex_value[1:] if hex_value.startswith("#") else hex_value

    if len(digits) not in (6, 8):
        raise InvalidColorError(hex_value)

    try:
        channels = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    except ValueError as e:
        raise InvalidColorError(hex_value) from e

    if len(channels) == 3:
        channels.append(1.0)
    r, g, b, a = channels
    return r, g, b, a


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB to HSL.

    Returns:
        Tuple of (hue in degrees, saturation 0-1, lightness 0-1). Achromatic
        colors have hue 0 and saturation 0.
    """
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    h = 0.0
    s = 0.0
    light = (max_c + min_c) / 2

    if max_c != min_c:
        d = max_c - min_c
        s = d / (2 - max_c - min_c) if light > 0.5 else d / (max_c + min_c)
        if max_c == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif max_c == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return h * 360, s, light


def _srgb_to_linear(c: float) -> float:
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def rgba_to_oklch(r: float, g: float, b: float, a: float = 1.0) -> str:
    """Convert RGBA to a CSS ``oklch()`` string.

    sRGB is gamma-expanded to linear RGB, converted to CIE XYZ (D65), then
    to OKLab and finally to polar OKLCH. Falls back to ``rgba(...)`` if the
    conversion produces a non-finite result.
    """
    try:
        r_lin = _srgb_to_linear(r)
        g_lin = _srgb_to_linear(g)
        b_lin = _srgb_to_linear(b)

        # Linear RGB -> XYZ (D65)
        x = 0.4124564 * r_lin + 0.3575761 * g_lin + 0.1804375 * b_lin
        y = 0.2126729 * r_lin + 0.7151522 * g_lin + 0.0721750 * b_lin
        z = 0.0193339 * r_lin + 0.1191920 * g_lin + 0.9503041 * b_lin

        # XYZ -> LMS
        l_ = 0.8189330101 * x + 0.3618667424 * y - 0.1288597137 * z
        m_ = 0.0329845436 * x + 0.9293118715 * y + 0.0361456387 * z
        s_ = 0.0482003018 * x + 0.2643662691 * y + 0.6338517070 * z

        l_root = math.cbrt(l_)
        m_root = math.cbrt(m_)
        s_root = math.cbrt(s_)

        # LMS' -> OKLab
        lightness = 0.2104542553 * l_root + 0.7936177850 * m_root - 0.0040720468 * s_root
        lab_a = 1.9779984951 * l_root - 2.4285922050 * m_root + 0.4505937099 * s_root
        lab_b = 0.0259040371 * l_root + 0.7827717662 * m_root - 0.8086757660 * s_root

        chroma = math.hypot(lab_a, lab_b)
        hue = math.degrees(math.atan2(lab_b, lab_a))
        if hue < 0:
            hue += 360

        if not all(math.isfinite(v) for v in (lightness, chroma, hue, a)):
            raise ValueError("non-finite OKLCH component")

        body = f"{lightness * 100:.2f}% {chroma:.4f} {hue:.2f}"
        if a < 1:
            return f"oklch({body} / {a:.3f})"
        return f"oklch({body})"

    except (ValueError, TypeError, OverflowError, ZeroDivisionError) as e:
        logger.warning(f"OKLCH conversion failed, falling back to rgba: {e}")
        return f"rgba({_round(r * 255)}, {_round(g * 255)}, {_round(b * 255)}, {_trim(a)})"


def parse_color(value: str) -> tuple[float, float, float, float] | None:
    """Parse hex, ``rgb(...)`` or ``rgba(...)`` text into 0-1 RGBA.

    Returns None for anything else.
    """
    if value.startswith("#"):
        try:
            return hex_to_rgba(value)
        except InvalidColorError:
            return None

    if value.startswith("rgb"):
        numbers = _NUMBER_PATTERN.findall(value)
        if len(numbers) >= 3:
            try:
                r, g, b = (float(n) / 255 for n in numbers[:3])
                a = float(numbers[3]) if len(numbers) > 3 else 1.0
            except ValueError:
                return None
            return r, g, b, a

    return None


def format_color(value: str, color_format: str | ColorFormat) -> str:
    """Re-render a color string in the requested format.

    Alias pointers (``{...}``) and unparseable values are returned
    unchanged, as is the value when the format is not recognized.
    """
    if not value or is_reference_value(value):
        return value

    parsed = parse_color(value)
    if parsed is None:
        return value
    r, g, b, a = parsed

    format_name = (
        color_format.value if isinstance(color_format, ColorFormat) else color_format
    )

    if format_name == ColorFormat.HEX.value:
        return rgba_to_hex(r, g, b, 1.0)
    if format_name == ColorFormat.RGB.value:
        return f"rgb({_round(r * 255)}, {_round(g * 255)}, {_round(b * 255)})"
    if format_name == ColorFormat.RGBA.value:
        return f"rgba({_round(r * 255)}, {_round(g * 255)}, {_round(b * 255)}, {_trim(a)})"
    if format_name in (ColorFormat.HSL.value, ColorFormat.HSLA.value):
        h, s, light = rgb_to_hsl(r, g, b)
        if format_name == ColorFormat.HSL.value:
            return f"hsl({_round(h)}, {_round(s * 100)}%, {_round(light * 100)}%)"
        return f"hsla({_round(h)}, {_round(s * 100)}%, {_round(light * 100)}%, {_trim(a)})"
    if format_name == ColorFormat.OKLCH.value:
        return rgba_to_oklch(r, g, b, a)
    return value
