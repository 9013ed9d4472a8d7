import jax.numpy as jnp
import pytest

from terrajax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py overrides this with its own autouse fixture that resets
    to float32.
    """
    set_dtype(jnp.float64)
