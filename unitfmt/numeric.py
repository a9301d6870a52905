"""
Fixed-point number formatting and numeric input normalization.

to_fixed() renders a number with an exact count of decimal places and never raises:
non-finite values, None and unsupported types fall back to configurable sentinel strings.
std_numeric() normalizes numeric values from Python stdlib and third-party libraries
(NumPy, Pandas, Decimal, etc.) into standard Python types before formatting.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import locale
import math
import operator
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Literal, Self


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FormatSymbols:
    """
    Symbols for formatting output of non-finite values and number-unit pairs.

    Attributes:
        nan: Symbol for Not-a-Number values.
        none: Symbol for None/null values.
        pos_infinity: Symbol for positive infinity.
        neg_infinity: Symbol for negative infinity.
        decimal_point: Decimal separator of the fractional part.
        separator: String between numeric value and unit suffix (default: single space).

    Examples:
        >>> to_fixed(float('inf'))
        '∞'
        >>> to_fixed(float('inf'), symbols=FormatSymbols.ascii())
        'inf'
        >>> to_fixed(1.5, symbols=FormatSymbols(decimal_point=","))
        '1,50'
    """
    nan: str = "NaN"
    none: str = ""

    pos_infinity: str = "∞"
    neg_infinity: str = "-∞"

    decimal_point: str = "."
    separator: str = " "

    @classmethod
    def ascii(cls) -> Self:
        """
        ASCII-safe symbols for plain text logs, legacy terminals or piping output.
        """
        return cls(pos_infinity="inf", neg_infinity="-inf")

    @classmethod
    def unicode(cls) -> Self:
        """
        Unicode symbols, the same strings a browser renders for localized infinities.
        """
        return cls(pos_infinity="∞", neg_infinity="-∞")

    @classmethod
    def from_locale(cls) -> Self:
        """
        Unicode symbols with the decimal separator of the current host locale.

        Reads locale.localeconv() so the result follows locale.setlocale() calls made by the application.
        """
        decimal_point = locale.localeconv().get("decimal_point") or "."
        return cls(decimal_point=decimal_point)


class FormatConf:
    """
    Default configuration constants for number formatting.

    Attributes:
        DEFAULT_DECIMALS: Decimal places used when the caller passes decimals=None.
        MAX_DECIMALS: Upper bound of decimal places, larger requests are clamped.
        DEFAULT_SYMBOLS: Sentinel symbols used when no symbols are passed explicitly.
    """
    DEFAULT_DECIMALS = 2
    MAX_DECIMALS = 100
    DEFAULT_SYMBOLS = FormatSymbols()


# Methods --------------------------------------------------------------------------------------------------------------

def to_fixed(
        value: Any,
        decimals: int | None = FormatConf.DEFAULT_DECIMALS,
        *,
        symbols: FormatSymbols | None = None
) -> str:
    """
    Format a number to a fixed count of decimal places.

    Rounds half away from zero on the shortest decimal representation of the value, so that
    to_fixed(2.675, 2) == "2.68". The output never uses thousands grouping or E-notation.

    Args:
        value: Number to format; any type accepted by std_numeric().
        decimals: Decimal places; None means FormatConf.DEFAULT_DECIMALS, negative values are treated as 0.
        symbols: Sentinel symbols and decimal separator, FormatConf.DEFAULT_SYMBOLS if None.

    Returns:
        Formatted string; never raises for numeric input.

    Examples:
        >>> to_fixed(186.123, -2)
        '186'
        >>> to_fixed(3, 2)
        '3.00'
        >>> to_fixed(float('nan'))
        'NaN'
    """
    symbols = symbols or FormatConf.DEFAULT_SYMBOLS
    number = std_numeric(value, on_error="nan")

    special = non_finite_str(number, symbols)
    if special is not None:
        return special

    return _fixed_str(number, clamp_decimals(decimals), symbols.decimal_point)


def clamp_decimals(decimals: int | None, default: int = FormatConf.DEFAULT_DECIMALS) -> int:
    """
    Decimal places as a non-negative int: None → default, negative → 0, capped at FormatConf.MAX_DECIMALS.

    Values that are not integral numbers (str, NaN, ...) are treated as None.
    """
    decimals = as_int_or_none(decimals)
    if decimals is None:
        decimals = default
    return min(max(decimals, 0), FormatConf.MAX_DECIMALS)


def as_int_or_none(number: Any) -> int | None:
    """int(number), or None for None and anything int() rejects."""
    if number is None or isinstance(number, (str, bytes)):
        return None
    try:
        return int(number)
    except (TypeError, ValueError, OverflowError):
        return None


def non_finite_str(number: int | float | None, symbols: FormatSymbols) -> str | None:
    """
    Sentinel string for None, NaN and infinities; None for finite numbers.
    """
    if number is None:
        return symbols.none
    if isinstance(number, float) and not math.isfinite(number):
        if math.isnan(number):
            return symbols.nan
        return symbols.pos_infinity if number > 0 else symbols.neg_infinity
    return None


def _fixed_str(number: int | float, decimals: int, decimal_point: str) -> str:
    """Round half away from zero and render in plain fixed-point notation."""
    exact = Decimal(number) if isinstance(number, int) else Decimal(repr(number))
    quantum = Decimal(1).scaleb(-decimals)

    with localcontext() as ctx:
        # Quantize fails if the coefficient exceeds context precision
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)

    if rounded.is_zero():
        rounded = rounded.copy_abs()

    text = f"{rounded:f}"
    if decimal_point != ".":
        text = text.replace(".", decimal_point)
    return text


def std_numeric(
        value,
        *,
        on_error: Literal["raise", "nan", "none"] = "raise",
        allow_bool: bool = False
) -> int | float | None:
    """
    Convert numeric types to standard Python int, float, or None.

    Parameters
    ----------
    value : various
        Numeric value to convert. Supports Python int/float/None, Decimal,
        Fraction, and third-party types via __index__, .item(), __int__ or __float__.

    on_error : {"raise", "nan", "none"}, default "raise"
        How to handle TYPE ERRORS (unsupported types like str, list, dict):

        - "raise": Raise TypeError
        - "nan": Return float('nan') (formatters use this, they never raise)
        - "none": Return None

        Numeric edge cases (inf, nan, overflow, underflow) are ALWAYS preserved
        as valid IEEE 754 values, regardless of this setting.

    allow_bool : bool, default False
        If True, convert bool to int (True→1, False→0). If False, treat
        bool as type error (respects on_error setting).

    Returns
    -------
    int
        For Python int, types implementing __index__ (NumPy integers),
        integer-valued Decimal/Fraction, or types implementing only __int__.

    float
        For float values and float-like types, including inf/-inf and nan.

    None
        For None input, pandas.NA, numpy.ma.masked, or type errors
        when on_error="none".

    Examples
    --------
    >>> std_numeric(Decimal('42.0'))
    42
    >>> std_numeric(Fraction(1, 4))
    0.25
    >>> std_numeric("invalid", on_error="nan")
    nan
    """

    # None passthrough
    if value is None:
        return None

    if isinstance(value, bool):
        if allow_bool:
            return int(value)
        return _on_type_error(
            on_error,
            f"boolean values not supported, got {value}. "
            f"Set allow_bool=True to convert booleans to int (True→1, False→0)"
        )

    # Fast path, Python int has arbitrary precision and never overflows
    if isinstance(value, (int, float)):
        return value

    cls = type(value)
    cls_name = getattr(cls, "__name__", "")
    cls_module = getattr(cls, "__module__", "")

    # pandas.NA has __float__ but raises TypeError, numpy.ma.masked is a sentinel
    if cls_name == "NAType" and "pandas" in cls_module:
        return None
    if cls_name == "MaskedConstant" and cls_module.startswith("numpy.ma"):
        return None

    # Priority 1: __index__() marks "true integers" (NumPy integer types)
    if hasattr(value, "__index__"):
        try:
            return operator.index(value)
        except (TypeError, ValueError) as e:
            return _on_type_error(on_error, f"cannot convert {cls_name} to int via __index__: {e}")

    # Priority 2: array/tensor scalars with .item() (NumPy, PyTorch, JAX)
    if hasattr(value, "item") and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, bool):
            return int(result) if allow_bool else _on_type_error(
                on_error, f"boolean values not supported (from .item()), got {value}"
            )
        if isinstance(result, (int, float)):
            return result

    # Priority 3: integer-valued Decimal/Fraction stay exact
    if cls_name in ("Decimal", "Fraction") and hasattr(value, "__int__"):
        try:
            as_int = int(value)
            if value == cls(as_int):
                return as_int
        except (TypeError, ValueError, OverflowError):
            pass

    # Priority 4: __int__ only, without __float__
    if hasattr(value, "__int__") and not hasattr(value, "__float__"):
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError) as e:
            return _on_type_error(on_error, f"cannot convert {cls_name} to int via __int__: {e}")

    # Priority 5: duck typing via __float__, may overflow to inf or underflow to 0.0
    if hasattr(value, "__float__"):
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            return _on_type_error(on_error, f"cannot convert {cls_name} to float: {e}")

    return _on_type_error(
        on_error,
        f"unsupported numeric type: {cls_name}. "
        f"Expected int, float, None, or types implementing __index__, __int__, "
        f"__float__ or .item() (e.g., numpy scalars, Decimal, Fraction)"
    )


def to_float(number: int | float) -> float:
    """
    Convert std_numeric() output to float; ints beyond float range become signed infinity.
    """
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


def _on_type_error(on_error: str, message: str) -> float | None:
    if on_error == "raise":
        raise TypeError(message)
    elif on_error == "nan":
        return float("nan")
    else:  # on_error == "none"
        return None
