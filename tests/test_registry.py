#
# unitfmt - Value Format Registry Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import math
from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from unitfmt.numeric import FormatSymbols, to_fixed
from unitfmt.registry import (
    Fallback, FormatSpec, Known, format_ids, get_value_format, is_known_format, lookup, value_format_categories,
)
from unitfmt.scaled import UnitFamily

# Identifiers persisted by dashboards, must stay registered
STABLE_IDS = (
    "none", "short", "percent", "percentunit", "hex", "hex0x", "sci", "locale",
    "ns", "µs", "ms", "s", "m", "h", "d", "hertz",
    "bits", "bytes", "kbytes", "mbytes", "gbytes", "tbytes", "pbytes",
    "decbits", "decbytes", "deckbytes", "decmbytes", "decgbytes", "dectbytes", "decpbytes",
    "watt", "kwatt", "megwatt", "mwatt", "kohm", "Mohm", "ohm",
    "farad", "µfarad", "nfarad", "pfarad", "ffarad", "henry", "mhenry", "µhenry",
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestValueFormats:
    """Reference scenarios of the unit families."""

    @pytest.mark.parametrize("format_id, value, decimals, scaled_decimals, expected", [
        pytest.param("ms", 10000086.123, 1, None, "2.8 hour", id="ms_hours"),
        pytest.param("kbytes", 10000000, 3, None, "9.537 GiB", id="kbytes"),
        pytest.param("deckbytes", 10000000, 3, None, "10.000 GB", id="deckbytes"),
        pytest.param("ms", 1200, 0, 0, "1.200 s", id="ms_scaled_decimals"),
        pytest.param("megwatt", 1000, 3, None, "1.000 GW", id="megwatt"),
        pytest.param("kohm", 1000, 3, None, "1.000 MΩ", id="kohm"),
        pytest.param("Mohm", 1000, 3, None, "1.000 GΩ", id="Mohm"),
        pytest.param("farad", 1000, 3, None, "1.000 kF", id="farad"),
        pytest.param("µfarad", 1000, 3, None, "1.000 mF", id="microfarad"),
        pytest.param("nfarad", 1000, 3, None, "1.000 µF", id="nanofarad"),
        pytest.param("pfarad", 1000, 3, None, "1.000 nF", id="picofarad"),
        pytest.param("ffarad", 1000, 3, None, "1.000 pF", id="femtofarad"),
        pytest.param("henry", 1000, 3, None, "1.000 kH", id="henry"),
        pytest.param("mhenry", 1000, 3, None, "1.000 H", id="millihenry"),
        pytest.param("µhenry", 1000, 3, None, "1.000 mH", id="microhenry"),
    ])
    def test_reference(self, format_id, value, decimals, scaled_decimals, expected):
        assert get_value_format(format_id)(value, decimals, scaled_decimals) == expected

    @pytest.mark.parametrize("format_id, value, decimals, expected", [
        pytest.param("ms", 0.5, 1, "0.5 ms", id="ms_no_descend"),
        pytest.param("ms", 999, 0, "999 ms", id="ms_pivot"),
        pytest.param("s", 90, 1, "1.5 min", id="s_minutes"),
        pytest.param("s", 0.0005, 1, "500.0 µs", id="s_descends"),
        pytest.param("s", 2 * 31536000, 0, "2 year", id="s_years"),
        pytest.param("h", 36, 1, "1.5 day", id="h_days"),
        pytest.param("µs", 1500, 1, "1.5 ms", id="us_ms"),
        pytest.param("bytes", 1023, 0, "1023 B", id="bytes_pivot"),
        pytest.param("bytes", 1024, 0, "1 KiB", id="bytes_kib"),
        pytest.param("decbytes", 1000, 0, "1 kB", id="decbytes_kb"),
        pytest.param("Mbits", 2500, 1, "2.5 Gbps", id="mbits"),
        pytest.param("farad", 0.0047, 1, "4.7 mF", id="farad_descends"),
        pytest.param("µfarad", 0.5, 0, "500 nF", id="microfarad_descends"),
        pytest.param("ohm", 0, 2, "0.00 Ω", id="zero_at_pivot"),
        pytest.param("kohm", -2200, 1, "-2.2 MΩ", id="negative"),
        pytest.param("short", 1_500_000, 1, "1.5 Mil", id="short"),
        pytest.param("hertz", 2.4e9, 1, "2.4 GHz", id="hertz"),
        pytest.param("lengthmm", 1500, 1, "1.5 m", id="lengthmm"),
    ])
    def test_families(self, format_id, value, decimals, expected):
        assert get_value_format(format_id)(value, decimals) == expected

    def test_binary_and_decimal_bytes_differ(self):
        binary = get_value_format("bytes")(2 ** 20, 2)
        decimal = get_value_format("decbytes")(2 ** 20, 2)
        assert binary == "1.00 MiB"
        assert decimal == "1.05 MB"

    def test_overflow_clamps_to_last_tier(self):
        assert get_value_format("kbytes")(1024 ** 8, 0) == "1024 YiB"

    def test_default_decimals(self):
        assert get_value_format("kbytes")(1536) == "1.50 MiB"
        assert get_value_format("hex")(255.4) == "FF"

    @pytest.mark.parametrize("format_id, value, decimals, expected", [
        pytest.param("none", 1.234, 1, "1.2", id="none"),
        pytest.param("percent", 45.678, 1, "45.7%", id="percent"),
        pytest.param("percentunit", 0.1234, 2, "12.34%", id="percentunit"),
        pytest.param("humidity", 50, 0, "50 %H", id="humidity"),
        pytest.param("dB", -3.5, 1, "-3.5 dB", id="decibel"),
        pytest.param("hex", 255, None, "FF", id="hex"),
        pytest.param("hex0x", 255, None, "0xFF", id="hex0x"),
        pytest.param("hex0x", -31, None, "-0x1F", id="hex0x_negative"),
        pytest.param("sci", 12345, 2, "1.23e+4", id="sci"),
        pytest.param("sci", 0.00012, 1, "1.2e-4", id="sci_small"),
        pytest.param("sci", 0, 1, "0.0e+0", id="sci_zero"),
    ])
    def test_misc(self, format_id, value, decimals, expected):
        assert get_value_format(format_id)(value, decimals) == expected

    @pytest.mark.parametrize("value, decimals, expected", [
        pytest.param(1234.5, 2, "1234.5", id="trailing_zero_trimmed"),
        pytest.param(10, 2, "10", id="integer"),
        pytest.param(2.345, 2, "2.35", id="rounded"),
        pytest.param(1234.5, 0, "1235", id="no_decimals"),
    ])
    def test_locale(self, c_numeric_locale, value, decimals, expected):
        assert get_value_format("locale")(value, decimals) == expected


class TestValueFormatEdgeCases:

    @pytest.mark.parametrize("format_id", format_ids())
    @pytest.mark.parametrize("value", [
        pytest.param(math.nan, id="nan"),
        pytest.param(math.inf, id="inf"),
        pytest.param(-math.inf, id="-inf"),
        pytest.param(None, id="none"),
        pytest.param("x", id="str"),
        pytest.param(0, id="zero"),
        pytest.param(-1e-30, id="tiny"),
        pytest.param(1e300, id="huge"),
        pytest.param(10 ** 400, id="huge-int"),
        pytest.param(Decimal("1.5"), id="decimal"),
    ])
    @pytest.mark.parametrize("decimals, scaled_decimals", [(None, None), (-3, None), (2, 0), (0, -7)])
    def test_never_raises(self, format_id, value, decimals, scaled_decimals):
        assert isinstance(get_value_format(format_id)(value, decimals, scaled_decimals), str)

    @pytest.mark.parametrize("format_id", ["ms", "kbytes", "farad", "s", "short", "kohm"])
    def test_non_finite_passthrough(self, format_id, non_finite_values):
        fmt = get_value_format(format_id)
        for value, expected in non_finite_values:
            assert fmt(value, 3, 0) == expected

    @pytest.mark.parametrize("format_id", ["ms", "s", "kbytes", "deckbytes", "µfarad", "henry", "short"])
    def test_tier_index_monotonic(self, format_id):
        family = lookup(format_id).spec.family
        sizes = [10.0 ** e for e in range(-20, 30)]
        indexes = [family.select(size)[0] for size in sizes]
        assert indexes == sorted(indexes)

    @pytest.mark.parametrize("format_id", ["ms", "kbytes", "µfarad", "s"])
    @pytest.mark.parametrize("value", [0.0123456, 1.5, 1234.5678, 98765432.1])
    def test_idempotent_rounding(self, format_id, value):
        number, _, suffix = get_value_format(format_id)(value, 3).partition(" ")
        assert to_fixed(float(number), 3) == number


class TestLookup:

    def test_known(self):
        result = lookup("ms")
        assert isinstance(result, Known)
        assert result.id == "ms"
        assert isinstance(result.spec.family, UnitFamily)
        assert result.formatter(1200, 1) == "1.2 s"

    @pytest.mark.parametrize("format_id", ["nope", "", "KBYTES", None, 42])
    def test_fallback(self, format_id):
        result = lookup(format_id)
        assert isinstance(result, Fallback)
        assert result.id == format_id
        assert result.formatter(1.25, 1) == "1.3"

    def test_fallback_formatter(self):
        fmt = get_value_format("no-such-unit")
        assert fmt(1234.5678, 2) == "1234.57"
        assert fmt(1234.5678, 2, 0) == "1234.57"
        assert fmt(math.nan) == "NaN"

    def test_fallback_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="unitfmt.registry")
        get_value_format("furlongs")
        assert "furlongs" in caplog.text

    def test_is_known_format(self):
        assert is_known_format("kbytes")
        assert not is_known_format("kibibytes")
        assert not is_known_format(None)


class TestSymbols:

    def test_custom_symbols(self):
        fmt = get_value_format("kbytes", symbols=FormatSymbols(decimal_point=","))
        assert fmt(10000000, 3) == "9,537 GiB"

    def test_custom_symbols_fallback(self):
        fmt = get_value_format("unknown", symbols=FormatSymbols.ascii())
        assert fmt(math.inf) == "inf"

    def test_custom_symbols_builder(self):
        fmt = get_value_format("percent", symbols=FormatSymbols.ascii())
        assert fmt(-math.inf) == "-inf"


class TestCategories:

    def test_stable_ids_registered(self):
        missing = [format_id for format_id in STABLE_IDS if not is_known_format(format_id)]
        assert missing == []

    def test_ids_unique(self):
        ids = [spec.id for category in value_format_categories() for spec in category.formats]
        assert len(ids) == len(set(ids))
        assert tuple(ids) == format_ids()

    def test_category_names(self):
        names = [category.name for category in value_format_categories()]
        assert names[0] == "Misc"
        assert {"Data (IEC)", "Data (Metric)", "Time", "Energy"} <= set(names)

    def test_specs_are_immutable(self):
        spec = lookup("kohm").spec
        assert isinstance(spec, FormatSpec)
        with pytest.raises(AttributeError):
            spec.id = "ohm"
