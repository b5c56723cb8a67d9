#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numfit.units import UnitLadder


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def weight_map() -> dict:
    """Caller-supplied unit map with a plain-mapping ladder, keyed as in JSON configs."""
    return {"weight": {"gap": 3, "suffices": ["g", "kg", "ton"], "baseIndex": 1}}


@pytest.fixture
def length_map() -> dict[str, UnitLadder]:
    """Caller-supplied unit map with a long ladder for multi-step searches."""
    return {
        "length": UnitLadder(gap=3, suffices=("nm", "µm", "mm", "m", "km"), base_index=3),
    }
