#
# unitfmt - Precision Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from fractions import Fraction

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from unitfmt.precision import Precision, scaled_digits


# Tests ----------------------------------------------------------------------------------------------------------------

class TestPrecisionResolve:

    @pytest.mark.parametrize("decimals, scaled_decimals, default, expected", [
        pytest.param(None, None, 2, Precision(2, None), id="defaults"),
        pytest.param(None, None, 1, Precision(1, None), id="family_default"),
        pytest.param(-3, None, 2, Precision(0, None), id="negative_clamped"),
        pytest.param(4, None, 2, Precision(4, None), id="explicit"),
        pytest.param(4, 0, 2, Precision(4, 0), id="scaled_zero"),
        pytest.param(None, 2, 3, Precision(3, 2), id="scaled_with_default"),
    ])
    def test_resolve(self, decimals, scaled_decimals, default, expected):
        assert Precision.resolve(decimals, scaled_decimals, default=default) == expected

    @pytest.mark.parametrize("decimals, scaled_decimals", [
        pytest.param("3", "1", id="str"),
        pytest.param(float("nan"), float("inf"), id="non_finite"),
        pytest.param([2], {}, id="containers"),
    ])
    def test_junk_arguments_fall_back(self, decimals, scaled_decimals):
        assert Precision.resolve(decimals, scaled_decimals) == Precision(2, None)

    def test_scaled_zero_is_not_none(self):
        assert Precision.resolve(1, 0).is_scaled
        assert not Precision.resolve(1, None).is_scaled


class TestPrecisionEffective:

    @pytest.mark.parametrize("precision, magnitude, expected", [
        pytest.param(Precision(1, None), 1000 ** 3, 1, id="plain_ignores_tier"),
        pytest.param(Precision(0, 0), 1, 0, id="scaled_pivot"),
        pytest.param(Precision(0, 0), 1000, 3, id="scaled_tier_1"),
        pytest.param(Precision(5, 1), 1000 ** 2, 7, id="scaled_overrides_decimals"),
        pytest.param(Precision(0, 2), 1024 ** 2, 8, id="binary_tier_2"),
        pytest.param(Precision(0, 0), 60_000, 5, id="minutes_on_ms_ladder"),
        pytest.param(Precision(0, 0), 3_600_000, 7, id="hours_on_ms_ladder"),
        pytest.param(Precision(0, 0), 31_536_000_000, 10, id="years_on_ms_ladder"),
        pytest.param(Precision(0, 5), Fraction(1, 1000), 2, id="sub_unit_tier"),
        pytest.param(Precision(0, 1), Fraction(1, 10 ** 6), 0, id="sub_unit_clamped"),
    ])
    def test_effective(self, precision, magnitude, expected):
        assert precision.effective(magnitude) == expected


class TestScaledDigits:

    @pytest.mark.parametrize("magnitude, expected", [
        pytest.param(1, 0, id="pivot"),
        pytest.param(1000, 3, id="kilo"),
        pytest.param(1024 ** 3, 9, id="gibi"),
        pytest.param(1024 ** 8, 24, id="yobi"),
        pytest.param(86_400_000, 8, id="day_in_ms"),
        pytest.param(Fraction(1, 1000), -3, id="milli"),
    ])
    def test_digits(self, magnitude, expected):
        assert scaled_digits(magnitude) == expected

    @pytest.mark.parametrize("magnitude", [0, -1000])
    def test_non_positive(self, magnitude):
        with pytest.raises(ValueError, match="magnitude must be positive"):
            scaled_digits(magnitude)
