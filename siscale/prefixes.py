#
# SIScale Prefix Table
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import IntEnum, StrEnum, unique
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import BiDirectionalMap


# @formatter:off

class ScaleConf:
    """
    Table bounds and symbol aliases for SI magnitude prefixes.

    Attributes:
        MIN_STEP: Smallest magnitude step in the table (yocto, 10⁻²⁴).
        MAX_STEP: Largest magnitude step in the table (Yotta, 10²⁴).
        STEP: Distance between two consecutive magnitude steps.
        BINARY_SUFFIX: Appended to positive-step symbols in the binary family, "k" → "ki".
        SYMBOL_ALIASES: Extra spellings accepted by PrefixStep.parse().
    """
    MIN_STEP = -24
    MAX_STEP = 24
    STEP = 3

    BINARY_SUFFIX = "i"

    # Greek small letter mu and ASCII "u" for the micro sign
    SYMBOL_ALIASES = {"μ": -6, "u": -6}


decimal_symbols = BiDirectionalMap({
    -24: "y",   # yocto
    -21: "z",   # zepto
    -18: "a",   # atto
    -15: "f",   # femto
    -12: "p",   # pico  = 10⁻¹²
    -9: "n",    # nano  = 10⁻⁹
    -6: "µ",    # micro = 10⁻⁶
    -3: "m",    # milli = 10⁻³
    0: "",      # (no prefix) = 10⁰
    3: "k",     # kilo  = 10³
    6: "M",     # mega  = 10⁶
    9: "G",     # giga  = 10⁹
    12: "T",    # tera  = 10¹²
    15: "P",    # peta
    18: "E",    # exa
    21: "Z",    # zetta
    24: "Y",    # yotta
})

binary_symbols = BiDirectionalMap({
    step: f"{symbol}{ScaleConf.BINARY_SUFFIX}" if step > 0 else symbol
    for step, symbol in decimal_symbols.items()
})

prefix_names = BiDirectionalMap({
    -24: "yocto", -21: "zepto", -18: "atto", -15: "femto", -12: "pico", -9: "nano", -6: "micro", -3: "milli",
    0: "unit",
    3: "kilo", 6: "mega", 9: "giga", 12: "tera", 15: "peta", 18: "exa", 21: "zetta", 24: "yotta",
})

valid_steps = tuple(decimal_symbols.keys())

# @formatter:on

# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Base(StrEnum):
    """
    Scaling base of a magnitude step.

    Attributes:
        DECIMAL (str) : 1 k == 1000, SI usage - 1.5 kB, 12 µs
        BINARY (str)  : 1 ki == 1024, IEC style usage - 1.5 kiB, 11.8 MiB
    """
    DECIMAL = "decimal"
    BINARY = "binary"

    @property
    def magnitude(self) -> int:
        """Multiplication factor between two consecutive steps, 1000 or 1024."""
        if self is Base.DECIMAL:
            return 1000
        else:
            return 1024

    @property
    def symbols(self) -> BiDirectionalMap[int, str]:
        """Symbol family of the base, step → symbol."""
        if self is Base.DECIMAL:
            return decimal_symbols
        else:
            return binary_symbols


@unique
class Constraint(StrEnum):
    """
    Restriction on the magnitude steps admissible during scale resolution.

    Attributes:
        UNIT_ONLY (str)      : Step 0 only, no scaling - 1_234_567 B
        UNIT_AND_BELOW (str) : Steps <= 0, no kilo and above - 1234 s, 12 ms
        UNIT_AND_ABOVE (str) : Steps >= 0, no milli and below - 0.12 B, 1.5 MB
        UNCONSTRAINED (str)  : Full table range, yocto to Yotta
    """
    UNIT_ONLY = "unit_only"
    UNIT_AND_BELOW = "unit_and_below"
    UNIT_AND_ABOVE = "unit_and_above"
    UNCONSTRAINED = "unconstrained"

    @property
    def step_range(self) -> tuple[int, int]:
        """Closed range (lowest, highest) of admissible steps."""
        if self is Constraint.UNIT_ONLY:
            return 0, 0
        elif self is Constraint.UNIT_AND_BELOW:
            return ScaleConf.MIN_STEP, 0
        elif self is Constraint.UNIT_AND_ABOVE:
            return 0, ScaleConf.MAX_STEP
        else:
            return ScaleConf.MIN_STEP, ScaleConf.MAX_STEP

    def admits(self, step: int) -> bool:
        lowest, highest = self.step_range
        return lowest <= step <= highest

    def clamp(self, step: int) -> int:
        """Nearest admissible step; admissible steps are returned unchanged."""
        lowest, highest = self.step_range
        return min(max(step, lowest), highest)


class PrefixStep(IntEnum):
    """
    Magnitude step of an SI prefix, the power of 10 it stands for in decimal base.

    In binary base the same step stands for 1024 ** (step // 3), e.g. MEGA is 1024² there.
    """
    YOCTO = -24
    ZEPTO = -21
    ATTO = -18
    FEMTO = -15
    PICO = -12
    NANO = -9
    MICRO = -6
    MILLI = -3
    UNIT = 0
    KILO = 3
    MEGA = 6
    GIGA = 9
    TERA = 12
    PETA = 15
    EXA = 18
    ZETTA = 21
    YOTTA = 24

    @property
    def exponent(self) -> int:
        """
        Exponent `e` for `base ** e` to give the multiplication factor of the step.

        Example:
            PICO is -12, its exponent is -4 as 1000 ** -4 == 1e-12.
        """
        return self.value // ScaleConf.STEP

    @property
    def prefix_name(self) -> str:
        """Lowercase prefix name, 'unit' for step 0."""
        return prefix_names[self.value]

    def symbol(self, base: Base = Base.DECIMAL) -> str:
        return symbol(self, base)

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Parse a prefix symbol or prefix name into its step.

        Symbols are case-sensitive ("m" is milli, "M" is mega), names are not.
        Binary symbols ("ki", "Mi") are accepted as well.

        Raises:
            TypeError: If text is not a str.
            ValueError: If text is not a known symbol or name.

        Examples:
            >>> PrefixStep.parse("k")
            <PrefixStep.KILO: 3>
            >>> PrefixStep.parse("Micro")
            <PrefixStep.MICRO: -6>
            >>> PrefixStep.parse("Gi")
            <PrefixStep.GIGA: 9>
        """
        if not isinstance(text, str):
            raise TypeError(f"prefix must be a str, but got {type(text).__name__}")

        if decimal_symbols.has_value(text):
            return cls(decimal_symbols.get_key(text))
        if binary_symbols.has_value(text):
            return cls(binary_symbols.get_key(text))
        if text in ScaleConf.SYMBOL_ALIASES:
            return cls(ScaleConf.SYMBOL_ALIASES[text])
        if prefix_names.has_value(text.lower()):
            return cls(prefix_names.get_key(text.lower()))

        raise ValueError(f"unknown SI prefix {text!r}, expected one of {sorted(prefix_names.values())} "
                         f"or their symbols")


# Methods --------------------------------------------------------------------------------------------------------------

def symbol(step: int, base: Base = Base.DECIMAL) -> str:
    """
    Display symbol of a magnitude step under the symbol family of base.

    Args:
        step: Magnitude step, a PrefixStep or an int multiple of 3 in [-24, 24].
        base: Base whose symbol family is used.

    Returns:
        The symbol, "" for step 0.

    Raises:
        TypeError: If step is not an int or base is not a Base.
        ValueError: If step is not in the table.

    Examples:
        >>> symbol(-6)
        'µ'
        >>> symbol(PrefixStep.MEGA, Base.BINARY)
        'Mi'
    """
    if isinstance(step, bool) or not isinstance(step, int):
        raise TypeError(f"step must be an int, but got {type(step).__name__}")
    if not isinstance(base, Base):
        raise TypeError(f"base must be a Base, but got {type(base).__name__}")
    if step not in base.symbols:
        raise ValueError(f"invalid magnitude step {int(step)}, expected one of {valid_steps}")
    return base.symbols[step]


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Ensure the step keys are synchronized across tables and enum.
if not (set(decimal_symbols.keys()) == set(binary_symbols.keys()) == set(prefix_names.keys())
        == {member.value for member in PrefixStep}):
    raise AssertionError(
        "Configuration Error: The step keys for symbol tables, prefix names and PrefixStep must be identical."
    )
