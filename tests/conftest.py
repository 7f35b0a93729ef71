# pytest configuration for chainset tests

import pytest

from chainset import HashSet

# ============================================================================
# Test Markers
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "fast: Fast tests (<1 second) - run on every commit"
    )
    config.addinivalue_line(
        "markers",
        "slow: Slow tests (>10 seconds) - run on PR only"
    )


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CHAINSET_* overrides from the outer environment out of tests."""
    for name in ("CHAINSET_DEFAULT_CAPACITY", "CHAINSET_LOAD_FACTOR", "CHAINSET_MAX_SIZE",
                 "CHAINSET_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def poe_set():
    """Set holding three short strings at capacity 16, load factor 0.75."""
    s = HashSet(16, 0.75)
    s.add("Poe")
    s.add("E.")
    s.add("Near a raven")
    return s


@pytest.fixture
def numbered_set():
    """Set holding the strings "0" through "31" at default settings."""
    s = HashSet()
    for i in range(32):
        s.add(str(i))
    return s
