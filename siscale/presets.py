"""
Unit presets: configuration records binding a base, a constraint, a precision, a grouping
character and a unit suffix, and the single function formatting numbers with them.

Presets are plain data. Stock presets live in PRESETS, more can be read from TOML:

    [formats.bits_per_sec]
    base = "binary"
    constraint = "unit_and_above"
    precision = 2
    grouping = "_"
    unit = "bit/s"

Omitting precision selects the natural representation.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Self

# Third-party ----------------------------------------------------------------------------------------------------------
import toml
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import FormatSpec, render
from .prefixes import Base, Constraint
from .scale import resolve

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class UnitFormat:
    """
    Formatting preset of a unit.

    Attributes:
        base: Base of magnitude steps.
        constraint: Admissible magnitude steps, e.g. UNIT_AND_BELOW for seconds.
        precision: Fractional digits of the mantissa, None for natural representation.
        grouping: Digit grouping character or None.
        unit: Unit suffix appended after the prefix symbol, e.g. "s" or "B".
        separator: Text between the mantissa and the prefixed unit.
    """
    base: Base = Base.DECIMAL
    constraint: Constraint = Constraint.UNCONSTRAINED
    precision: int | None = None
    grouping: str | None = None
    unit: str = ""
    separator: str = " "

    def __post_init__(self):
        # Accept config text values such as "binary" or "unit_and_above"
        object.__setattr__(self, "base", Base(self.base))
        object.__setattr__(self, "constraint", Constraint(self.constraint))
        if not isinstance(self.unit, str):
            raise TypeError(f"unit must be a str, but got {type(self.unit).__name__}")
        # FormatSpec validates precision, grouping and separator
        FormatSpec(precision=self.precision, grouping=self.grouping, separator=self.separator)

    @property
    def spec(self) -> FormatSpec:
        """Rendering parameters of the preset."""
        return FormatSpec(precision=self.precision, grouping=self.grouping, separator=self.separator)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """
        Create a preset from a config mapping.

        Raises:
            TypeError: If data is not a mapping.
            ValueError: On unknown keys or unknown base/constraint values.
            InvalidFormatSpec: On malformed precision, grouping or separator.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"format config must be a mapping, but got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown format config keys {sorted(unknown)}, expected some of {sorted(known)}")

        return cls(**data)


# @formatter:off

PRESETS: frozendict[str, UnitFormat] = frozendict({
    "number_":  UnitFormat(Base.DECIMAL, Constraint.UNIT_ONLY,      None, "_",  "",  separator=""),
    "seconds":  UnitFormat(Base.DECIMAL, Constraint.UNIT_AND_BELOW, None, None, "s"),
    "seconds3": UnitFormat(Base.DECIMAL, Constraint.UNIT_AND_BELOW, 3,    None, "s"),
    "bytes":    UnitFormat(Base.DECIMAL, Constraint.UNIT_AND_ABOVE, None, "_",  "B"),
    "bytes_":   UnitFormat(Base.DECIMAL, Constraint.UNIT_ONLY,      None, "_",  "B"),
    "bytes1":   UnitFormat(Base.DECIMAL, Constraint.UNIT_AND_ABOVE, 1,    "_",  "B"),
    "bytes2":   UnitFormat(Base.DECIMAL, Constraint.UNIT_AND_ABOVE, 2,    None, "B"),
    "bibytes":  UnitFormat(Base.BINARY,  Constraint.UNIT_AND_ABOVE, None, "_",  "B"),
    "bibytes1": UnitFormat(Base.BINARY,  Constraint.UNIT_AND_ABOVE, 1,    "_",  "B"),
    "bibytes2": UnitFormat(Base.BINARY,  Constraint.UNIT_AND_ABOVE, 2,    None, "B"),
})

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def format_with_config(x: int | float, config: UnitFormat) -> str:
    """
    Format a number with a unit preset: resolve, render, then append the unit.

    Examples:
        >>> format_with_config(1.3e-5, PRESETS["seconds"])
        '13 µs'
        >>> format_with_config(12_345_678, PRESETS["bibytes1"])
        '11.8 MiB'
    """
    if not isinstance(config, UnitFormat):
        raise TypeError(f"config must be a UnitFormat, but got {type(config).__name__}")

    value = resolve(x, config.base, config.constraint)
    return render(value, config.spec) + config.unit


def format_as(x: int | float, name: str, presets: Mapping[str, UnitFormat] = PRESETS) -> str:
    """
    Format a number with a named preset.

    Raises:
        KeyError: If no preset is registered under name.

    Examples:
        >>> format_as(1234567, "bytes_")
        '1_234_567 B'
    """
    try:
        config = presets[name]
    except KeyError:
        raise KeyError(f"unknown format preset {name!r}, expected one of {sorted(presets)}") from None
    return format_with_config(x, config)


def loads_formats(text: str) -> frozendict[str, UnitFormat]:
    """
    Parse unit presets from TOML text with one [formats.<name>] table per preset.

    Raises:
        ValueError: If the TOML is malformed, has no [formats] table or a preset is invalid.
    """
    try:
        data = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise ValueError(f"malformed format config: {exc}") from exc

    formats = data.get("formats")
    if not isinstance(formats, Mapping):
        raise ValueError("format config requires a [formats] table")

    presets = {}
    for name, table in formats.items():
        try:
            presets[name] = UnitFormat.from_dict(table)
        except ValueError as exc:
            raise type(exc)(f"invalid format preset {name!r}: {exc}") from exc
        except TypeError as exc:
            # Config values of the wrong type are malformed config
            raise ValueError(f"invalid format preset {name!r}: {exc}") from exc
    return frozendict(presets)


def load_formats(path: str | Path) -> frozendict[str, UnitFormat]:
    """Read unit presets from a TOML file, see loads_formats()."""
    path = Path(path)
    presets = loads_formats(path.read_text(encoding="utf-8"))
    logger.debug("Loaded format presets %s from %s", sorted(presets), path)
    return presets


def with_presets(formats: Mapping[str, UnitFormat], presets: Mapping[str, UnitFormat] = PRESETS
                 ) -> frozendict[str, UnitFormat]:
    """
    New immutable registry with formats merged over presets; same names replace stock presets.
    """
    for name, config in formats.items():
        if not isinstance(config, UnitFormat):
            raise TypeError(f"preset {name!r} must be a UnitFormat, but got {type(config).__name__}")
    return frozendict({**presets, **formats})
