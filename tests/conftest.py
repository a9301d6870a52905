#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import locale

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def c_numeric_locale():
    """Run a test under the "C" numeric locale and restore the previous one afterwards."""
    previous = locale.setlocale(locale.LC_NUMERIC)
    locale.setlocale(locale.LC_NUMERIC, "C")
    try:
        yield
    finally:
        locale.setlocale(locale.LC_NUMERIC, previous)


@pytest.fixture
def non_finite_values():
    """NaN and infinities with their default rendering."""
    return [
        (float("nan"), "NaN"),
        (float("inf"), "∞"),
        (float("-inf"), "-∞"),
    ]
