"""Unit conversion for numeric token values."""

import math

from .models import UnitFormat

DEFAULT_BASE_FONT_SIZE = 16.0

# Units rendered as the bare number
_BARE_UNITS = frozenset(["none", "curr"])


def format_number(value: int | float) -> str:
    """Render a number the way the design tool displays it.

    Integral floats drop their trailing ``.0`` so ``8.0`` renders as ``8``.
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_number(value: object) -> float | None:
    """Parse a token value as a number, or return None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def format_unit(
    value: int | float | str,
    unit: str | UnitFormat,
    base_font_size: float | None = DEFAULT_BASE_FONT_SIZE,
) -> str:
    """Render a numeric value with a unit.

    - ``px`` appends the suffix.
    - ``rem``/``em`` divide by ``base_font_size`` and keep up to 4 decimals.
    - ``none`` renders the bare number.
    - Any other unit string (``%``, ``vw``, ``pt``) is appended verbatim.

    Non-numeric input is returned stringified and unchanged.
    """
    unit_name = unit.value if isinstance(unit, UnitFormat) else str(unit)
    number = to_number(value)
    if number is None:
        return str(value)

    if not base_font_size:
        base_font_size = DEFAULT_BASE_FONT_SIZE

    if unit_name == UnitFormat.PX.value:
        return f"{format_number(number)}px"
    if unit_name in (UnitFormat.REM.value, UnitFormat.EM.value):
        scaled = float(f"{number / base_font_size:.4f}")
        return f"{format_number(scaled)}{unit_name}"
    if unit_name in _BARE_UNITS:
        return format_number(number)
    return f"{format_number(number)}{unit_name}"
