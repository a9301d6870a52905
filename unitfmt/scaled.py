"""
Scale a number onto a ladder of magnitude tiers and render it with the tier's unit suffix.
"""

# Scope
#
# A UnitFamily rescales values within one dimension only (bytes → KiB → MiB, F → mF → µF).
# Conversion between dimensions or between unit systems is out of scope.

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Callable, Iterable, Self, TypeAlias

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import FormatConf, FormatSymbols, non_finite_str, std_numeric, to_fixed, to_float
from .precision import Precision

# Formatter signature: (value, decimals=None, scaled_decimals=None) -> str
ValueFormatter: TypeAlias = Callable[..., str]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Tier:
    """
    One step of a magnitude ladder.

    Attributes:
        suffix: Unit suffix displayed for this tier, e.g. "KiB" or "mF". May be empty.
        magnitude: Size of one displayed unit measured in the family's input unit, exact.
            Ascending tiers have magnitude >= 1, descending (sub-unit) tiers have magnitude < 1.

    Examples:
        >>> Tier("KiB", 1024).scale(2048)
        2.0
        >>> Tier("mF", Fraction(1, 1000)).scale(0.5)
        500.0
    """
    suffix: str
    magnitude: Fraction = Fraction(1)
    threshold: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.suffix, str):
            raise TypeError(f"Tier suffix must be str, got {type(self.suffix).__name__}")
        magnitude = Fraction(self.magnitude)
        if magnitude <= 0:
            raise ValueError(f"Tier magnitude must be positive, got {self.magnitude}")
        object.__setattr__(self, "magnitude", magnitude)
        # Float twin of magnitude, compared against float input so 1e-6 lands on the micro tier
        object.__setattr__(self, "threshold", float(magnitude))

    def scale(self, value: float) -> float:
        """
        Value expressed in units of this tier; sub-unit tiers multiply the value up.
        """
        if self.magnitude.denominator == 1:
            return value / self.magnitude.numerator
        return value * self.magnitude.denominator / self.magnitude.numerator


@dataclass(frozen=True)
class UnitFamily:
    """
    Two ordered ladders of magnitude tiers pivoting at the family's input unit.

    Attributes:
        ascending: Tiers from the pivot upward; ascending[0] is the pivot with magnitude 1,
            the following tiers have strictly increasing magnitudes.
        descending: Optional sub-unit tiers below the pivot, nearest first, with strictly
            decreasing magnitudes below 1. Selected only when 0 < |value| < 1.

    Examples:
        >>> family = UnitFamily.uniform(1024, ["B", "KiB", "MiB"])
        >>> family.select(3 * 1024 ** 2)
        (2, Tier(suffix='MiB', magnitude=Fraction(1048576, 1)))
    """
    ascending: tuple[Tier, ...]
    descending: tuple[Tier, ...] = ()

    def __post_init__(self):
        ascending = tuple(self.ascending)
        descending = tuple(self.descending)

        if not ascending:
            raise ValueError("UnitFamily requires at least one ascending tier.")
        if ascending[0].magnitude != 1:
            raise ValueError(f"The pivot tier must have magnitude 1, got {ascending[0].magnitude}")
        if any(hi.magnitude <= lo.magnitude for lo, hi in zip(ascending, ascending[1:])):
            raise ValueError("Ascending tier magnitudes must strictly increase.")
        if descending:
            if descending[0].magnitude >= 1:
                raise ValueError(f"Descending tiers must be below 1, got {descending[0].magnitude}")
            if any(lo.magnitude >= hi.magnitude for hi, lo in zip(descending, descending[1:])):
                raise ValueError("Descending tier magnitudes must strictly decrease.")

        object.__setattr__(self, "ascending", ascending)
        object.__setattr__(self, "descending", descending)

    @classmethod
    def uniform(cls, factor: int | float | Fraction, suffixes: Iterable[str]) -> Self:
        """
        Ascending family whose tier i has magnitude factor**i.

        Raises:
            ValueError: If suffixes is empty or factor <= 1.
        """
        factor = Fraction(factor)
        if factor <= 1:
            raise ValueError(f"Scale factor must be greater than 1, got {factor}")
        return cls(ascending=tuple(Tier(suffix, factor ** i) for i, suffix in enumerate(suffixes)))

    @property
    def pivot(self) -> Tier:
        return self.ascending[0]

    @property
    def tiers(self) -> tuple[Tier, ...]:
        """All tiers from the smallest magnitude to the largest."""
        return tuple(reversed(self.descending)) + self.ascending

    @property
    def suffixes(self) -> tuple[str, ...]:
        return tuple(tier.suffix for tier in self.tiers)

    def select(self, value: float) -> tuple[int, Tier]:
        """
        Select the tier for a finite value.

        Returns a signed index relative to the pivot (negative for sub-unit tiers) and the tier.
        The index never decreases as |value| grows. The last tier of either ladder absorbs values
        beyond its range, zero stays at the pivot.
        """
        size = abs(value)

        if self.descending and 0 < size < self.pivot.threshold:
            for index, tier in enumerate(self.descending, start=1):
                if size >= tier.threshold:
                    return -index, tier
            return -len(self.descending), self.descending[-1]

        index = 0
        while index + 1 < len(self.ascending) and size >= self.ascending[index + 1].threshold:
            index += 1
        return index, self.ascending[index]


# Methods --------------------------------------------------------------------------------------------------------------

def family_formatter(
        family: UnitFamily,
        *,
        default_decimals: int = FormatConf.DEFAULT_DECIMALS,
        symbols: FormatSymbols | None = None
) -> ValueFormatter:
    """
    Build the formatter of a unit family.

    The returned callable has the signature (value, decimals=None, scaled_decimals=None) -> str
    and never raises: None and non-finite values render as sentinels, bypassing tier selection.
    """
    symbols = symbols or FormatConf.DEFAULT_SYMBOLS

    def format_value(value: Any, decimals: int | None = None, scaled_decimals: int | None = None) -> str:
        number = std_numeric(value, on_error="nan")
        special = non_finite_str(number, symbols)
        if special is not None:
            return special

        number = to_float(number)
        if not math.isfinite(number):
            return non_finite_str(number, symbols)

        precision = Precision.resolve(decimals, scaled_decimals, default=default_decimals)
        _, tier = family.select(number)
        text = to_fixed(tier.scale(number), precision.effective(tier.magnitude), symbols=symbols)
        return join_suffix(text, tier.suffix, symbols)

    return format_value


def scaled_units(
        factor: int | float | Fraction,
        suffixes: Iterable[str],
        *,
        default_decimals: int = FormatConf.DEFAULT_DECIMALS,
        symbols: FormatSymbols | None = None
) -> ValueFormatter:
    """
    Formatter for an ad-hoc ascending family with a constant scale factor.

    Args:
        factor: Multiplier between adjacent tiers, e.g. 1000 or 1024.
        suffixes: Ordered tier suffixes starting at the input unit, e.g. ["B", "KiB", "MiB"].
        default_decimals: Decimal places used when the formatter is called with decimals=None.
        symbols: Sentinel symbols and separators.

    Examples:
        >>> fmt = scaled_units(1000, ["", "K", "M"])
        >>> fmt(1500, 1)
        '1.5 K'
        >>> fmt(12, 0)
        '12'
        >>> fmt(5e9, 0)
        '5000 M'
    """
    return family_formatter(
        UnitFamily.uniform(factor, suffixes),
        default_decimals=default_decimals,
        symbols=symbols,
    )


def join_suffix(text: str, suffix: str, symbols: FormatSymbols) -> str:
    """Append a unit suffix with the separator; an empty suffix adds nothing."""
    if not suffix:
        return text
    return f"{text}{symbols.separator}{suffix}"
