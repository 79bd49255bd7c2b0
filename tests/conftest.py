import pytest

from polycap.cache import reset_default_cache


@pytest.fixture(autouse=True)
def fresh_default_cache():
    """Give every test an empty process-wide cache."""
    reset_default_cache()
    yield
    reset_default_cache()
