#
# unitfmt Units of Measurement Tables
#

# Standard library -----------------------------------------------------------------------------------------------------
from fractions import Fraction

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import BiDirectionalMap
from .scaled import Tier, UnitFamily


# @formatter:off

class UnitsConf:
    """
    Prefix and suffix tables of the built-in unit families.

    Attributes:
        SI_PREFIXES_3N: SI decimal prefixes with 10^(3N) exponents, femto to yotta.
            Excludes deci/deca/centi/hecto for cleaner display.

        BIN_PREFIXES: IEC binary prefixes, maps powers of 2 to prefixes: 10→"Ki", 20→"Mi", etc.

        COUNT_SUFFIXES: Short-scale count suffixes of plain numbers, one tier per 10³.

        DURATION_UNITS: Duration suffixes keyed by their length in seconds. The ladder is
            non-uniform: 1000 between sub-second units, then 60, 60, 24 and 365.
    """

    SI_PREFIXES_3N = BiDirectionalMap({
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

    BIN_PREFIXES = BiDirectionalMap({
        0: "",      # no prefix = 2⁰ = 1
        10: "Ki",   # kibi = 2¹⁰ = 1,024
        20: "Mi",   # mebi = 2²⁰ = 1,048,576
        30: "Gi",   # gibi = 2³⁰ = 1,073,741,824
        40: "Ti",   # tebi = 2⁴⁰
        50: "Pi",   # pebi = 2⁵⁰
        60: "Ei",   # exbi = 2⁶⁰
        70: "Zi",   # zebi = 2⁷⁰
        80: "Yi",   # yobi = 2⁸⁰
    })

    COUNT_SUFFIXES = ("", "K", "Mil", "Bil", "Tri", "Quadr", "Quint", "Sext", "Sept")

    DURATION_UNITS = BiDirectionalMap({
        Fraction(1, 10**9): "ns",
        Fraction(1, 10**6): "µs",
        Fraction(1, 10**3): "ms",
        Fraction(1): "s",
        Fraction(60): "min",
        Fraction(3600): "hour",
        Fraction(86400): "day",
        Fraction(31536000): "year",
    })

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def decimal_si(unit: str, prefix: str = "", *, descend: bool = True) -> UnitFamily:
    """
    Family of a physical unit with SI prefixes, base 1000.

    The input unit is the SI-prefixed unit, e.g. decimal_si("Ω", "k") takes kiloohms.
    Values >= 1 ascend to larger prefixes; with descend=True values below 1 walk down
    through smaller prefixes to femto, multiplying the displayed value up.

    Raises:
        ValueError: If prefix is not an SI 10^(3N) prefix.

    Examples:
        decimal_si("F", "µ").select(1000)   → tier "mF"
        decimal_si("F").select(0.0047)      → tier "mF", displayed as 4.7
    """
    pivot_exp = _prefix_exponent(UnitsConf.SI_PREFIXES_3N, prefix)
    exponents = UnitsConf.SI_PREFIXES_3N.sorted_keys()

    ascending = tuple(
        Tier(UnitsConf.SI_PREFIXES_3N[exp] + unit, Fraction(10) ** (exp - pivot_exp))
        for exp in exponents if exp >= pivot_exp
    )
    descending = tuple(
        Tier(UnitsConf.SI_PREFIXES_3N[exp] + unit, Fraction(10) ** (exp - pivot_exp))
        for exp in reversed(exponents) if exp < pivot_exp
    ) if descend else ()

    return UnitFamily(ascending=ascending, descending=descending)


def binary_si(unit: str, prefix: str = "") -> UnitFamily:
    """
    Family of a binary unit with IEC prefixes, base 1024, ascending only.

    Examples:
        binary_si("B", "Ki").select(10_000_000)   → tier "GiB"
    """
    pivot_exp = _prefix_exponent(UnitsConf.BIN_PREFIXES, prefix)
    return UnitFamily(ascending=tuple(
        Tier(UnitsConf.BIN_PREFIXES[exp] + unit, Fraction(2) ** (exp - pivot_exp))
        for exp in UnitsConf.BIN_PREFIXES.sorted_keys() if exp >= pivot_exp
    ))


def duration(unit: str, *, descend: bool = False) -> UnitFamily:
    """
    Family of time durations taking values in the given unit: "ns", "µs", "ms", "s", "min", "hour" or "day".

    Ascends through the calendar units up to years. With descend=True sub-unit values walk
    down the sub-second units.

    Raises:
        ValueError: If unit is not a duration unit.
    """
    if not UnitsConf.DURATION_UNITS.has_value(unit):
        raise ValueError(
            f"Invalid duration unit: {unit!r}, expected one of {tuple(UnitsConf.DURATION_UNITS.values())}"
        )
    pivot = UnitsConf.DURATION_UNITS.get_key(unit)
    lengths = UnitsConf.DURATION_UNITS.sorted_keys()

    ascending = tuple(
        Tier(UnitsConf.DURATION_UNITS[length], length / pivot) for length in lengths if length >= pivot
    )
    descending = tuple(
        Tier(UnitsConf.DURATION_UNITS[length], length / pivot) for length in reversed(lengths) if length < pivot
    ) if descend else ()

    return UnitFamily(ascending=ascending, descending=descending)


def count() -> UnitFamily:
    """Plain counts with short-scale suffixes: 1.5 K, 2.3 Mil, 4 Bil."""
    return UnitFamily.uniform(1000, UnitsConf.COUNT_SUFFIXES)


def _prefix_exponent(prefixes: BiDirectionalMap, prefix: str) -> int:
    if not isinstance(prefix, str):
        raise TypeError(f"prefix must be str, got {type(prefix).__name__}")
    if not prefixes.has_value(prefix):
        raise ValueError(f"Invalid prefix: {prefix!r}, expected one of {tuple(prefixes.values())}")
    return prefixes.get_key(prefix)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Every SI exponent is a multiple of 3, every binary exponent a multiple of 10.
if any(exp % 3 for exp in UnitsConf.SI_PREFIXES_3N) or any(exp % 10 for exp in UnitsConf.BIN_PREFIXES):
    raise AssertionError(
        "Configuration Error: SI_PREFIXES_3N exponents must be multiples of 3 and BIN_PREFIXES multiples of 10."
    )
