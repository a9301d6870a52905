"""
Reconcile the two precision knobs of a formatting call: decimals and scaled decimals.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import FormatConf, as_int_or_none, clamp_decimals


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Precision:
    """
    Effective precision inputs of a single formatting call.

    Attributes:
        decimals: Non-negative decimal places used when scaled decimals mode is off.
        scaled_decimals: Base decimal places of scaled decimals mode, or None when the mode is off.
            Zero is a valid base precision and still grows with the selected tier.

    Examples:
        >>> Precision.resolve(None, None, default=1)
        Precision(decimals=1, scaled_decimals=None)
        >>> Precision.resolve(-2, 0).effective(1000)
        3
    """
    decimals: int
    scaled_decimals: int | None = None

    @classmethod
    def resolve(
            cls,
            decimals: int | None,
            scaled_decimals: int | None = None,
            default: int = FormatConf.DEFAULT_DECIMALS
    ) -> Self:
        """
        Build from raw call arguments: None decimals take the family default, negative decimals clamp to 0.
        """
        return cls(decimals=clamp_decimals(decimals, default), scaled_decimals=as_int_or_none(scaled_decimals))

    @property
    def is_scaled(self) -> bool:
        return self.scaled_decimals is not None

    def effective(self, magnitude: int | Fraction = 1) -> int:
        """
        Decimal places for a value displayed in a tier of the given magnitude.

        Scaled decimals mode adds one digit per decade of the tier magnitude: three per step on
        ladders of base 1000 or 1024, log10 of the tier multiplier on non-uniform ladders, and a
        negative increment for sub-unit tiers. The result is clamped at 0.
        """
        if self.scaled_decimals is None:
            return self.decimals
        return clamp_decimals(self.scaled_decimals + scaled_digits(magnitude))


# Methods --------------------------------------------------------------------------------------------------------------

def scaled_digits(magnitude: int | Fraction) -> int:
    """
    Decimal digits a tier multiplier adds to scaled decimals, round(log10(magnitude)).

    Examples:
        scaled_digits(1) == 0
        scaled_digits(1024 ** 3) == 9
        scaled_digits(3_600_000) == 7    # hours on a millisecond ladder
        scaled_digits(Fraction(1, 1000)) == -3
    """
    if magnitude <= 0:
        raise ValueError(f"magnitude must be positive, got {magnitude}")
    return round(math.log10(magnitude))
