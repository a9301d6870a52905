"""
Registry of value formats keyed by stable unit-format identifiers.

Identifiers such as "ms", "kbytes" or "µfarad" are persisted by dashboards and configuration
files, they are a public contract and must never be renamed or removed.

lookup() is total over strings: unknown identifiers resolve to a Fallback that formats the
plain number, so a misconfigured unit never breaks rendering.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import locale
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP, localcontext
from types import MappingProxyType
from typing import Any, Callable, Mapping, TypeAlias

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import FormatConf, FormatSymbols, clamp_decimals, non_finite_str, std_numeric, to_fixed, to_float
from .scaled import UnitFamily, ValueFormatter, family_formatter, join_suffix
from .units import binary_si, count, decimal_si, duration

logger = logging.getLogger(__name__)

# Builds a formatter from (default_decimals, symbols), used by formats without a tier ladder
FormatterBuilder: TypeAlias = Callable[[int, FormatSymbols], ValueFormatter]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FormatSpec:
    """
    Declaration of a registered value format.

    Attributes:
        id: Stable identifier, e.g. "kbytes".
        name: Human-readable name for unit pickers, e.g. "kibibytes".
        family: UnitFamily scaled by the generic tier selection, or a FormatterBuilder
            for formats without a ladder (percent, hex, ...).
        default_decimals: Decimal places used when a formatter is called with decimals=None.
    """
    id: str
    name: str
    family: UnitFamily | FormatterBuilder
    default_decimals: int = FormatConf.DEFAULT_DECIMALS

    def formatter(self, symbols: FormatSymbols | None = None) -> ValueFormatter:
        """Build the formatter callable (value, decimals=None, scaled_decimals=None) -> str."""
        symbols = symbols or FormatConf.DEFAULT_SYMBOLS
        if isinstance(self.family, UnitFamily):
            return family_formatter(self.family, default_decimals=self.default_decimals, symbols=symbols)
        return self.family(self.default_decimals, symbols)


@dataclass(frozen=True)
class Category:
    """Named group of value formats, in display order."""
    name: str
    formats: tuple[FormatSpec, ...]


@dataclass(frozen=True)
class Known:
    """Lookup result of a registered identifier."""
    spec: FormatSpec
    formatter: ValueFormatter = field(repr=False, compare=False)

    @property
    def id(self) -> str:
        return self.spec.id


@dataclass(frozen=True)
class Fallback:
    """Lookup result of an unknown identifier, formats the plain number without suffix."""
    id: str
    formatter: ValueFormatter = field(repr=False, compare=False)


Lookup: TypeAlias = Known | Fallback


# Formatter Builders ---------------------------------------------------------------------------------------------------

def fixed_unit(suffix: str, *, spaced: bool = True) -> FormatterBuilder:
    """
    Builder of a fixed-suffix format: fixed_unit("dB") renders "3.50 dB", fixed_unit("%", spaced=False) "3.50%".
    """

    def build(default_decimals: int, symbols: FormatSymbols) -> ValueFormatter:
        def format_value(value: Any, decimals: int | None = None, scaled_decimals: int | None = None) -> str:
            number = std_numeric(value, on_error="nan")
            special = non_finite_str(number, symbols)
            if special is not None:
                return special
            text = to_fixed(number, clamp_decimals(decimals, default_decimals), symbols=symbols)
            if spaced:
                return join_suffix(text, suffix, symbols)
            return f"{text}{suffix}"

        return format_value

    return build


def percent_unit(default_decimals: int, symbols: FormatSymbols) -> ValueFormatter:
    """Ratio 0.0-1.0 rendered as percent: 0.1234 → "12.34%"."""

    def format_value(value: Any, decimals: int | None = None, scaled_decimals: int | None = None) -> str:
        number = std_numeric(value, on_error="nan")
        special = non_finite_str(number, symbols)
        if special is not None:
            return special
        ratio = number * 100 if isinstance(number, int) else to_float(number) * 100
        return f"{to_fixed(ratio, clamp_decimals(decimals, default_decimals), symbols=symbols)}%"

    return format_value


def hexadecimal(prefix: str = "") -> FormatterBuilder:
    """
    Builder of upper-case hexadecimal formats; the value is rounded half away from zero to an integer.

    Examples:
        hexadecimal()(0, symbols)(255.4)        → "FF"
        hexadecimal("0x")(0, symbols)(-31)      → "-0x1F"
    """

    def build(default_decimals: int, symbols: FormatSymbols) -> ValueFormatter:
        def format_value(value: Any, decimals: int | None = None, scaled_decimals: int | None = None) -> str:
            number = std_numeric(value, on_error="nan")
            special = non_finite_str(number, symbols)
            if special is not None:
                return special
            integer = int(_half_up(number, 0))
            sign = "-" if integer < 0 else ""
            return f"{sign}{prefix}{abs(integer):X}"

        return format_value

    return build


def scientific(default_decimals: int, symbols: FormatSymbols) -> ValueFormatter:
    """Scientific notation with a compact exponent: 12345 → "1.23e+4"."""

    def format_value(value: Any, decimals: int | None = None, scaled_decimals: int | None = None) -> str:
        number = std_numeric(value, on_error="nan")
        special = non_finite_str(number, symbols)
        if special is not None:
            return special
        decimals = clamp_decimals(decimals, default_decimals)
        if number == 0:
            # Decimal zero carries its own exponent into "e" formatting
            text = f"{0:.{decimals}f}e+0"
        else:
            with localcontext() as ctx:
                ctx.rounding = ROUND_HALF_UP
                text = format(_exact(number), f".{decimals}e")
        if symbols.decimal_point != ".":
            text = text.replace(".", symbols.decimal_point)
        return text

    return format_value


def locale_grouped(default_decimals: int, symbols: FormatSymbols) -> ValueFormatter:
    """
    Number with thousands grouping of the host locale and at most `decimals` fractional digits.

    Follows locale.setlocale() of the application; the default "C" locale has no grouping.
    """

    def format_value(value: Any, decimals: int | None = None, scaled_decimals: int | None = None) -> str:
        number = std_numeric(value, on_error="nan")
        special = non_finite_str(number, symbols)
        if special is not None:
            return special
        decimals = clamp_decimals(decimals, default_decimals)
        text = locale.format_string(f"%.{decimals}f", _half_up(number, decimals), grouping=True)
        decimal_point = locale.localeconv().get("decimal_point") or "."
        if decimals and decimal_point in text:
            text = text.rstrip("0").rstrip(decimal_point)
        return text

    return format_value


def _exact(number: int | float) -> Decimal:
    return Decimal(number) if isinstance(number, int) else Decimal(repr(number))


def _half_up(number: int | float, decimals: int) -> Decimal:
    exact = _exact(number)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


# Registry Tables ------------------------------------------------------------------------------------------------------

# @formatter:off
CATEGORIES: tuple[Category, ...] = (
    Category("Misc", (
        FormatSpec("none",        "none",                   fixed_unit("")),
        FormatSpec("short",       "short",                  count()),
        FormatSpec("percent",     "percent (0-100)",        fixed_unit("%", spaced=False)),
        FormatSpec("percentunit", "percent (0.0-1.0)",      percent_unit),
        FormatSpec("humidity",    "Humidity (%H)",          fixed_unit("%H")),
        FormatSpec("dB",          "decibel",                fixed_unit("dB")),
        FormatSpec("hex0x",       "hexadecimal (0x)",       hexadecimal("0x"),     default_decimals=0),
        FormatSpec("hex",         "hexadecimal",            hexadecimal(),         default_decimals=0),
        FormatSpec("sci",         "scientific notation",    scientific),
        FormatSpec("locale",      "locale format",          locale_grouped),
    )),
    Category("Data (IEC)", (
        FormatSpec("bits",        "bits",                   binary_si("b")),
        FormatSpec("bytes",       "bytes",                  binary_si("B")),
        FormatSpec("kbytes",      "kibibytes",              binary_si("B", "Ki")),
        FormatSpec("mbytes",      "mebibytes",              binary_si("B", "Mi")),
        FormatSpec("gbytes",      "gibibytes",              binary_si("B", "Gi")),
        FormatSpec("tbytes",      "tebibytes",              binary_si("B", "Ti")),
        FormatSpec("pbytes",      "pebibytes",              binary_si("B", "Pi")),
    )),
    Category("Data (Metric)", (
        FormatSpec("decbits",     "bits",                   decimal_si("b", descend=False)),
        FormatSpec("decbytes",    "bytes",                  decimal_si("B", descend=False)),
        FormatSpec("deckbytes",   "kilobytes",              decimal_si("B", "k", descend=False)),
        FormatSpec("decmbytes",   "megabytes",              decimal_si("B", "M", descend=False)),
        FormatSpec("decgbytes",   "gigabytes",              decimal_si("B", "G", descend=False)),
        FormatSpec("dectbytes",   "terabytes",              decimal_si("B", "T", descend=False)),
        FormatSpec("decpbytes",   "petabytes",              decimal_si("B", "P", descend=False)),
    )),
    Category("Data Rate", (
        FormatSpec("pps",         "packets/sec",            decimal_si("pps", descend=False)),
        FormatSpec("bps",         "bits/sec",               decimal_si("bps", descend=False)),
        FormatSpec("Bps",         "bytes/sec",              decimal_si("B/s", descend=False)),
        FormatSpec("KBs",         "kilobytes/sec",          decimal_si("B/s", "k", descend=False)),
        FormatSpec("Kbits",       "kilobits/sec",           decimal_si("bps", "k", descend=False)),
        FormatSpec("MBs",         "megabytes/sec",          decimal_si("B/s", "M", descend=False)),
        FormatSpec("Mbits",       "megabits/sec",           decimal_si("bps", "M", descend=False)),
        FormatSpec("GBs",         "gigabytes/sec",          decimal_si("B/s", "G", descend=False)),
        FormatSpec("Gbits",       "gigabits/sec",           decimal_si("bps", "G", descend=False)),
        FormatSpec("TBs",         "terabytes/sec",          decimal_si("B/s", "T", descend=False)),
        FormatSpec("Tbits",       "terabits/sec",           decimal_si("bps", "T", descend=False)),
    )),
    Category("Time", (
        FormatSpec("hertz",       "Hertz (1/s)",            decimal_si("Hz")),
        FormatSpec("ns",          "nanoseconds (ns)",       duration("ns")),
        FormatSpec("µs",          "microseconds (µs)",      duration("µs")),
        FormatSpec("ms",          "milliseconds (ms)",      duration("ms")),
        FormatSpec("s",           "seconds (s)",            duration("s", descend=True)),
        FormatSpec("m",           "minutes (m)",            duration("min")),
        FormatSpec("h",           "hours (h)",              duration("hour")),
        FormatSpec("d",           "days (d)",               duration("day")),
    )),
    Category("Energy", (
        FormatSpec("watt",          "Watt (W)",                         decimal_si("W")),
        FormatSpec("kwatt",         "Kilowatt (kW)",                    decimal_si("W", "k")),
        FormatSpec("megwatt",       "Megawatt (MW)",                    decimal_si("W", "M")),
        FormatSpec("mwatt",         "Milliwatt (mW)",                   decimal_si("W", "m")),
        FormatSpec("voltamp",       "Volt-ampere (VA)",                 decimal_si("VA")),
        FormatSpec("kvoltamp",      "Kilovolt-ampere (kVA)",            decimal_si("VA", "k")),
        FormatSpec("voltampreact",  "Volt-ampere reactive (var)",       decimal_si("var")),
        FormatSpec("kvoltampreact", "Kilovolt-ampere reactive (kvar)",  decimal_si("var", "k")),
        FormatSpec("watth",         "Watt-hour (Wh)",                   decimal_si("Wh")),
        FormatSpec("kwatth",        "Kilowatt-hour (kWh)",              decimal_si("Wh", "k")),
        FormatSpec("joule",         "Joule (J)",                        decimal_si("J")),
        FormatSpec("ev",            "Electron volt (eV)",               decimal_si("eV")),
        FormatSpec("amp",           "Ampere (A)",                       decimal_si("A")),
        FormatSpec("kamp",          "Kiloampere (kA)",                  decimal_si("A", "k")),
        FormatSpec("mamp",          "Milliampere (mA)",                 decimal_si("A", "m")),
        FormatSpec("volt",          "Volt (V)",                         decimal_si("V")),
        FormatSpec("kvolt",         "Kilovolt (kV)",                    decimal_si("V", "k")),
        FormatSpec("mvolt",         "Millivolt (mV)",                   decimal_si("V", "m")),
        FormatSpec("ohm",           "Ohm (Ω)",                          decimal_si("Ω")),
        FormatSpec("kohm",          "Kiloohm (kΩ)",                     decimal_si("Ω", "k")),
        FormatSpec("Mohm",          "Megaohm (MΩ)",                     decimal_si("Ω", "M")),
        FormatSpec("farad",         "Farad (F)",                        decimal_si("F")),
        FormatSpec("µfarad",        "Microfarad (µF)",                  decimal_si("F", "µ")),
        FormatSpec("nfarad",        "Nanofarad (nF)",                   decimal_si("F", "n")),
        FormatSpec("pfarad",        "Picofarad (pF)",                   decimal_si("F", "p")),
        FormatSpec("ffarad",        "Femtofarad (fF)",                  decimal_si("F", "f")),
        FormatSpec("henry",         "Henry (H)",                        decimal_si("H")),
        FormatSpec("mhenry",        "Millihenry (mH)",                  decimal_si("H", "m")),
        FormatSpec("µhenry",        "Microhenry (µH)",                  decimal_si("H", "µ")),
        FormatSpec("lumens",        "Lumens (Lm)",                      decimal_si("Lm")),
    )),
    Category("Length", (
        FormatSpec("lengthmm",    "millimeter (mm)",        decimal_si("m", "m")),
        FormatSpec("lengthm",     "meter (m)",              decimal_si("m")),
        FormatSpec("lengthkm",    "kilometer (km)",         decimal_si("m", "k")),
    )),
    Category("Mass", (
        FormatSpec("massmg",      "milligram (mg)",         decimal_si("g", "m")),
        FormatSpec("massg",       "gram (g)",               decimal_si("g")),
        FormatSpec("masskg",      "kilogram (kg)",          decimal_si("g", "k")),
    )),
    Category("Pressure", (
        FormatSpec("pressurembar", "Millibars",             decimal_si("bar", "m")),
        FormatSpec("pressurebar",  "Bars",                  decimal_si("bar")),
        FormatSpec("pressurekbar", "Kilobars",              decimal_si("bar", "k")),
        FormatSpec("pressurekpa",  "Kilopascals",           decimal_si("Pa", "k")),
    )),
)
# @formatter:on

_REGISTRY: Mapping[str, Known] = MappingProxyType({
    spec.id: Known(spec, spec.formatter())
    for category in CATEGORIES
    for spec in category.formats
})

_FALLBACK_SPEC = FormatSpec("none", "none", fixed_unit(""))
_FALLBACK_FORMATTER = _FALLBACK_SPEC.formatter()


# Methods --------------------------------------------------------------------------------------------------------------

def lookup(format_id: str) -> Lookup:
    """
    Resolve a unit-format identifier, never raises.

    Returns:
        Known for registered identifiers, Fallback for anything else (including non-str input).

    Examples:
        >>> lookup("kbytes").formatter(10_000_000, 3)
        '9.537 GiB'
        >>> isinstance(lookup("no-such-unit"), Fallback)
        True
    """
    known = _REGISTRY.get(format_id) if isinstance(format_id, str) else None
    if known is not None:
        return known

    logger.debug("Unknown value format %r, using fallback formatter", format_id)
    return Fallback(format_id, _FALLBACK_FORMATTER)


def get_value_format(format_id: str, *, symbols: FormatSymbols | None = None) -> ValueFormatter:
    """
    Formatter callable (value, decimals=None, scaled_decimals=None) -> str for a unit-format identifier.

    Args:
        format_id: Identifier such as "ms", "kbytes", "deckbytes" or "kohm". Unknown identifiers
            yield a formatter of the plain number without suffix.
        symbols: Custom sentinel symbols and separators; the default formatters are prebuilt,
            custom symbols build a new formatter.

    Examples:
        >>> get_value_format("ms")(10000086.123, 1, None)
        '2.8 hour'
        >>> get_value_format("ms")(1200, 0, 0)
        '1.200 s'
    """
    result = lookup(format_id)
    if symbols is None:
        return result.formatter
    if isinstance(result, Known):
        return result.spec.formatter(symbols)
    return _FALLBACK_SPEC.formatter(symbols)


def is_known_format(format_id: str) -> bool:
    return isinstance(format_id, str) and format_id in _REGISTRY


def format_ids() -> tuple[str, ...]:
    """All registered identifiers in category order."""
    return tuple(_REGISTRY)


def value_format_categories() -> tuple[Category, ...]:
    """Registered formats grouped by category, in display order for unit pickers."""
    return CATEGORIES


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Ensure identifiers are unique across categories.
if len(_REGISTRY) != sum(len(category.formats) for category in CATEGORIES):
    raise AssertionError("Configuration Error: value format identifiers must be unique across categories.")

# Ensure every family renders each tier with a distinct suffix.
for _known in _REGISTRY.values():
    _family = _known.spec.family
    if isinstance(_family, UnitFamily) and len(set(_family.suffixes)) != len(_family.suffixes):
        raise AssertionError(f"Configuration Error: duplicate tier suffixes in value format {_known.id!r}.")
