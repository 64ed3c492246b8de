import jax.numpy as jnp
import pytest

from orbitcore.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Tests that change the dtype (test_config.py) restore float64 afterwards,
    but with pytest-xdist a worker may pick them up in any order, so every
    test starts from the default explicitly.
    """
    set_dtype(jnp.float64)
