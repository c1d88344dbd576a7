#
# SIScale - Prefix Table Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from siscale.prefixes import Base, Constraint, PrefixStep, ScaleConf, symbol, valid_steps


# Tests ----------------------------------------------------------------------------------------------------------------

class TestSymbol:

    @pytest.mark.parametrize(
        "step, expected",
        [
            pytest.param(-24, "y", id="yocto"),
            pytest.param(-6, "µ", id="micro"),
            pytest.param(-3, "m", id="milli"),
            pytest.param(0, "", id="unit"),
            pytest.param(3, "k", id="kilo"),
            pytest.param(6, "M", id="mega"),
            pytest.param(24, "Y", id="yotta"),
        ],
    )
    def test_decimal(self, step, expected):
        assert symbol(step, Base.DECIMAL) == expected

    @pytest.mark.parametrize(
        "step, expected",
        [
            pytest.param(PrefixStep.MILLI, "m", id="milli-unchanged"),
            pytest.param(PrefixStep.UNIT, "", id="unit"),
            pytest.param(PrefixStep.KILO, "ki", id="kibi"),
            pytest.param(PrefixStep.MEGA, "Mi", id="mebi"),
            pytest.param(PrefixStep.YOTTA, "Yi", id="yobi"),
        ],
    )
    def test_binary(self, step, expected):
        assert symbol(step, Base.BINARY) == expected

    def test_default_base_is_decimal(self):
        assert symbol(PrefixStep.GIGA) == "G"

    def test_deterministic(self):
        """Same inputs always yield the same text."""
        for base in Base:
            for step in valid_steps:
                assert symbol(step, base) == symbol(step, base) == PrefixStep(step).symbol(base)

    @pytest.mark.parametrize(
        "step",
        [
            pytest.param(1, id="not-multiple-of-3"),
            pytest.param(27, id="above-table"),
            pytest.param(-27, id="below-table"),
        ],
    )
    def test_invalid_step(self, step):
        with pytest.raises(ValueError, match="invalid magnitude step"):
            symbol(step, Base.DECIMAL)

    @pytest.mark.parametrize(
        "step, base",
        [
            pytest.param(3.0, Base.DECIMAL, id="float-step"),
            pytest.param(True, Base.DECIMAL, id="bool-step"),
            pytest.param(3, 1000, id="int-base"),
            pytest.param(3, "decimal", id="str-base"),
        ],
    )
    def test_invalid_types(self, step, base):
        with pytest.raises(TypeError):
            symbol(step, base)


class TestBase:

    def test_magnitude(self):
        assert Base.DECIMAL.magnitude == 1000
        assert Base.BINARY.magnitude == 1024

    def test_from_config_text(self):
        assert Base("binary") is Base.BINARY
        with pytest.raises(ValueError):
            Base("octal")


class TestConstraint:

    @pytest.mark.parametrize(
        "constraint, expected",
        [
            pytest.param(Constraint.UNIT_ONLY, (0, 0), id="unit-only"),
            pytest.param(Constraint.UNIT_AND_BELOW, (-24, 0), id="unit-and-below"),
            pytest.param(Constraint.UNIT_AND_ABOVE, (0, 24), id="unit-and-above"),
            pytest.param(Constraint.UNCONSTRAINED, (-24, 24), id="unconstrained"),
        ],
    )
    def test_step_range(self, constraint, expected):
        assert constraint.step_range == expected

    @pytest.mark.parametrize(
        "constraint, step, expected",
        [
            pytest.param(Constraint.UNIT_ONLY, 6, 0, id="unit-only-above"),
            pytest.param(Constraint.UNIT_ONLY, -6, 0, id="unit-only-below"),
            pytest.param(Constraint.UNIT_AND_BELOW, 6, 0, id="below-restricts-kilo"),
            pytest.param(Constraint.UNIT_AND_BELOW, -6, -6, id="below-keeps-micro"),
            pytest.param(Constraint.UNIT_AND_ABOVE, -6, 0, id="above-restricts-micro"),
            pytest.param(Constraint.UNIT_AND_ABOVE, 6, 6, id="above-keeps-mega"),
            pytest.param(Constraint.UNCONSTRAINED, -24, -24, id="unconstrained-keeps"),
        ],
    )
    def test_clamp(self, constraint, step, expected):
        assert constraint.clamp(step) == expected
        assert constraint.admits(expected)

    def test_never_expands(self):
        """Clamped steps are never farther from unit than the input step."""
        for constraint in Constraint:
            for step in valid_steps:
                assert abs(constraint.clamp(step)) <= abs(step)


class TestPrefixStep:

    def test_exponent(self):
        assert PrefixStep.PICO.exponent == -4
        assert PrefixStep.UNIT.exponent == 0
        assert PrefixStep.YOTTA.exponent == 8

    def test_table_bounds(self):
        assert min(PrefixStep) == ScaleConf.MIN_STEP
        assert max(PrefixStep) == ScaleConf.MAX_STEP
        assert len(PrefixStep) == len(valid_steps) == 17

    def test_from_step(self):
        assert PrefixStep(-9) is PrefixStep.NANO
        with pytest.raises(ValueError):
            PrefixStep(4)

    @pytest.mark.parametrize(
        "text, expected",
        [
            pytest.param("k", PrefixStep.KILO, id="symbol"),
            pytest.param("m", PrefixStep.MILLI, id="symbol-milli"),
            pytest.param("M", PrefixStep.MEGA, id="symbol-mega"),
            pytest.param("µ", PrefixStep.MICRO, id="micro-sign"),
            pytest.param("μ", PrefixStep.MICRO, id="greek-mu"),
            pytest.param("u", PrefixStep.MICRO, id="ascii-u"),
            pytest.param("Gi", PrefixStep.GIGA, id="binary-symbol"),
            pytest.param("kilo", PrefixStep.KILO, id="name"),
            pytest.param("Yotta", PrefixStep.YOTTA, id="capitalized-name"),
            pytest.param("", PrefixStep.UNIT, id="empty"),
        ],
    )
    def test_parse(self, text, expected):
        assert PrefixStep.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="unknown SI prefix 'x'"):
            PrefixStep.parse("x")
        with pytest.raises(TypeError):
            PrefixStep.parse(3)

    def test_prefix_name(self):
        assert PrefixStep.MICRO.prefix_name == "micro"
        assert PrefixStep.UNIT.prefix_name == "unit"
