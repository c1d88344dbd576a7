"""
Text rendering of resolved values with fixed or natural precision and digit grouping.

Grouping runs outward from the decimal point in both directions: integer digits are
grouped right-to-left (1_234_567) and fractional digits left-to-right (0.123_456_7).
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from decimal import Decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .scale import Value

_DIGITS = frozenset("0123456789")

# Characters that would make a grouped number ambiguous
_RESERVED = frozenset(".+-")


# Classes --------------------------------------------------------------------------------------------------------------

class InvalidFormatSpec(ValueError):
    """Raised on a malformed precision, grouping character or separator."""


@dataclass(frozen=True)
class FormatSpec:
    """
    Rendering parameters of a Value.

    Attributes:
        precision: Number of fractional digits, or None for the natural (shortest round-trip)
            representation where integral mantissas render without a decimal point.
        grouping: Single character inserted every 3 digits outward from the decimal point,
            or None for no grouping.
        separator: Text between the mantissa and the prefix symbol.
    """
    precision: int | None = None
    grouping: str | None = None
    separator: str = ""

    def __post_init__(self):
        self._validate_precision()
        self._validate_grouping()
        if not isinstance(self.separator, str):
            raise InvalidFormatSpec(f"separator must be a str, but got {type(self.separator).__name__}")

    def _validate_precision(self):
        precision = self.precision
        if precision is None:
            return
        if isinstance(precision, bool) or not isinstance(precision, int):
            raise InvalidFormatSpec(f"precision must be int or None, but got: {type(precision).__name__}")
        if precision < 0:
            raise InvalidFormatSpec(f"precision must be int >= 0 or None, but got {precision!r}")

    def _validate_grouping(self):
        grouping = self.grouping
        if grouping is None:
            return
        if not isinstance(grouping, str) or len(grouping) != 1:
            raise InvalidFormatSpec(f"grouping must be a single character or None, but got {grouping!r}")
        if grouping.isdigit() or grouping in _RESERVED:
            raise InvalidFormatSpec(f"grouping character {grouping!r} collides with number characters")


# Methods --------------------------------------------------------------------------------------------------------------

def render(value: Value, spec: FormatSpec | None = None) -> str:
    """
    Render the mantissa and prefix symbol of a Value; unit suffixes are appended by the caller.

    Args:
        value: Resolved value.
        spec: Precision, grouping and mantissa-prefix separator; natural precision,
            no grouping and no separator by default.

    Returns:
        Mantissa text, separator and prefix symbol.

    Raises:
        TypeError: If value is not a Value or spec is not a FormatSpec.

    Examples:
        >>> from siscale.prefixes import Base, PrefixStep
        >>> from siscale.scale import resolve
        >>> render(Value(1234567.0), FormatSpec(grouping="_"))
        '1_234_567'
        >>> render(Value(1.234567, PrefixStep.KILO), FormatSpec(grouping="_"))
        '1.234_567k'
        >>> render(resolve(12_345_678, Base.BINARY), FormatSpec(precision=1, separator=" ")) + "B"
        '11.8 MiB'
    """
    if not isinstance(value, Value):
        raise TypeError(f"value must be a Value, but got {type(value).__name__}")
    if spec is None:
        spec = FormatSpec()
    elif not isinstance(spec, FormatSpec):
        raise TypeError(f"spec must be a FormatSpec, but got {type(spec).__name__}")

    number = fmt_mantissa(value.mantissa, spec.precision)
    if spec.grouping is not None:
        number = group_digits(number, spec.grouping)
    return f"{number}{spec.separator}{value.symbol}"


def fmt_mantissa(mantissa: float, precision: int | None = None) -> str:
    """
    Mantissa as positional decimal text, never in e-notation.

    Examples:
        >>> fmt_mantissa(13.0)
        '13'
        >>> fmt_mantissa(1e-05)
        '0.00001'
        >>> fmt_mantissa(11.7737, precision=1)
        '11.8'
    """
    if precision is not None:
        return f"{mantissa:.{precision}f}"

    # repr() gives the shortest round-trip digits, Decimal lays them out without exponent
    number = format(Decimal(repr(mantissa)), "f")
    if mantissa.is_integer():
        number = number.partition(".")[0]
    return number


def group_digits(number: str, grouping: str) -> str:
    """
    Insert the grouping character every 3 digits outward from the decimal point.

    Examples:
        >>> group_digits("1234567.1234567", "_")
        '1_234_567.123_456_7'
        >>> group_digits("-1234", " ")
        '-1 234'
    """
    point = number.find(".")
    if point < 0:
        point = len(number)
    return separate_thousands_backward(number[:point], grouping) + separate_thousands_forward(number[point:], grouping)


def separate_thousands_backward(text: str, grouping: str) -> str:
    """Group digits right-to-left, other characters are copied and not counted."""
    chars = []
    pos = 0
    for ch in reversed(text):
        if ch in _DIGITS:
            if pos and pos % 3 == 0:
                chars.append(grouping)
            pos += 1
        chars.append(ch)
    return "".join(reversed(chars))


def separate_thousands_forward(text: str, grouping: str) -> str:
    """Group digits left-to-right, other characters are copied and not counted."""
    chars = []
    pos = 0
    for ch in text:
        if ch in _DIGITS:
            if pos and pos % 3 == 0:
                chars.append(grouping)
            pos += 1
        chars.append(ch)
    return "".join(chars)
