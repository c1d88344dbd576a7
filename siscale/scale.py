"""
Scale resolution of real numbers into a mantissa and an SI magnitude prefix.

A number x resolves to a Value such that

    x == mantissa * base.magnitude ** prefix.exponent

where prefix is the largest table step whose power does not exceed |x| and which the
constraint admits. Powers are the floats nearest to base ** exponent, the same floats
literals such as 1e3 or 1e-6 produce, so these resolve to mantissa exactly 1.0 at their
own step, never to 1000 or 0.999... one step off. Just below a power whose quotient
rounds to base, x resolves to mantissa ±1.0 at the step of that power.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import math
from dataclasses import dataclass
from fractions import Fraction

# Local ----------------------------------------------------------------------------------------------------------------
from .prefixes import Base, Constraint, PrefixStep, ScaleConf, symbol

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class InvalidInput(ValueError):
    """Raised when a number can not be resolved to a scale, i.e. NaN or ±infinity."""


@dataclass(frozen=True)
class Value:
    """
    Resolved representation of a number: mantissa, SI prefix step and base.

    Attributes:
        mantissa: Numeric coefficient paired with the prefix, 1 <= |mantissa| < base.magnitude
            unless the step was clamped at table extremes or by a constraint.
        prefix: Magnitude step of the SI prefix.
        base: Decimal (1 k == 1000) or binary (1 ki == 1024) base.

    Examples:
        >>> resolve(0.123)
        Value(mantissa=123.0, prefix=<PrefixStep.MILLI: -3>, base=<Base.DECIMAL: 'decimal'>)
        >>> str(resolve(1300))
        '1.3 k'
    """
    mantissa: float
    prefix: PrefixStep = PrefixStep.UNIT
    base: Base = Base.DECIMAL

    def __post_init__(self):
        if isinstance(self.mantissa, bool) or not isinstance(self.mantissa, (int, float)):
            raise TypeError(f"mantissa must be int | float, but got {type(self.mantissa).__name__}")
        if not isinstance(self.base, Base):
            raise TypeError(f"base must be a Base, but got {type(self.base).__name__}")
        object.__setattr__(self, "mantissa", float(self.mantissa))
        object.__setattr__(self, "prefix", PrefixStep(self.prefix))

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        from .formatters import FormatSpec, render

        return render(self, FormatSpec(separator=" ")).rstrip(" ")

    @property
    def symbol(self) -> str:
        """Display symbol of the prefix in the symbol family of the base, e.g. 'k' or 'ki'."""
        return symbol(self.prefix, self.base)

    def signum(self) -> float:
        """Sign of the mantissa as 1.0 or -1.0, zeros keep their sign bit."""
        return math.copysign(1.0, self.mantissa)

    def to_float(self) -> float:
        """The number this value represents, mantissa * base ** exponent."""
        return self.mantissa * _power(self.base.magnitude, self.prefix.exponent)


# Methods --------------------------------------------------------------------------------------------------------------

def resolve(
        x: int | float,
        base: Base = Base.DECIMAL,
        constraint: Constraint = Constraint.UNCONSTRAINED,
) -> Value:
    """
    Resolve a number into a mantissa and an SI magnitude prefix.

    Args:
        x: Finite number to resolve. Ints and objects implementing __float__ are accepted.
        base: Base of the magnitude steps.
        constraint: Restriction on admissible steps. It only ever restricts scaling,
            a clamped step leaves the mantissa outside [1, base.magnitude).

    Returns:
        The resolved Value. Zero always resolves to mantissa 0 at step 0.

    Raises:
        TypeError: If x is not numeric, or base/constraint have wrong types.
        InvalidInput: If x is NaN or infinite.

    Examples:
        >>> resolve(1000)
        Value(mantissa=1.0, prefix=<PrefixStep.KILO: 3>, base=<Base.DECIMAL: 'decimal'>)
        >>> resolve(1.3e-5, constraint=Constraint.UNIT_AND_ABOVE).prefix
        <PrefixStep.UNIT: 0>
        >>> resolve(12_345_678, Base.BINARY, Constraint.UNIT_AND_ABOVE).symbol
        'Mi'
    """
    if not isinstance(base, Base):
        raise TypeError(f"base must be a Base, but got {type(base).__name__}")
    if not isinstance(constraint, Constraint):
        raise TypeError(f"constraint must be a Constraint, but got {type(constraint).__name__}")

    x = _std_float(x)

    if x == 0:
        return Value(0.0, PrefixStep.UNIT, base)

    natural_step = ScaleConf.STEP * _natural_exponent(abs(x), base.magnitude)

    step = min(max(natural_step, ScaleConf.MIN_STEP), ScaleConf.MAX_STEP)
    if step != natural_step:
        logger.debug("Value %r is outside the prefix table, clamped to step %d", x, step)

    constrained_step = constraint.clamp(step)
    if constrained_step != step:
        logger.debug("Constraint %s restricted step %d of %r to step %d", constraint, step, x, constrained_step)

    prefix = PrefixStep(constrained_step)
    mantissa = x / _power(base.magnitude, prefix.exponent)
    if constrained_step == natural_step and abs(mantissa) < 1:
        # |x| is within rounding of the power, the quotient fell just below 1
        mantissa = math.copysign(1.0, x)
    return Value(mantissa, prefix, base)


def _natural_exponent(magnitude: float, base: int) -> int:
    """
    Largest integer e such that magnitude >= _power(base, e), moved one up where the quotient
    magnitude / _power(base, e) rounds to base.

    The quotient is the mantissa resolve() stores, just below a power that is not an exact
    float it can round up to base. Magnitudes beyond the table return one exponent past the
    table edge. The log estimate is corrected by comparison.
    """
    lowest = ScaleConf.MIN_STEP // ScaleConf.STEP
    highest = ScaleConf.MAX_STEP // ScaleConf.STEP

    exponent = min(max(math.floor(math.log(magnitude, base)), lowest - 1), highest + 1)
    while exponent >= lowest and magnitude < _power(base, exponent):
        exponent -= 1
    while exponent <= highest and (
            magnitude >= _power(base, exponent + 1) or magnitude / _power(base, exponent) >= base):
        exponent += 1
    return exponent


def _power(base: int, exponent: int) -> float:
    """The float nearest to base ** exponent, also for negative exponents."""
    return float(Fraction(base) ** exponent)


def _std_float(x) -> float:
    """Convert x to a finite float; bool and non-numeric types are rejected."""
    if isinstance(x, bool) or not isinstance(x, (int, float)) and not hasattr(x, "__float__"):
        raise TypeError(f"value must be int | float, but got {type(x).__name__}")

    try:
        x = float(x)
    except OverflowError as exc:
        raise InvalidInput(f"value is too large for a float: {exc}") from exc

    if math.isnan(x):
        raise InvalidInput("NaN values are not supported")
    if math.isinf(x):
        raise InvalidInput("Infinite values are not supported")
    return x
