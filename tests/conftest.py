import numpy as np
import pytest

from shapecore.config import reset_config


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from default tolerances."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def unit_square():
    return np.array([
        [0.0, 0.0],
        [1.0, 0.0],
        [1.0, 1.0],
        [0.0, 1.0]
    ], dtype=np.float64)


@pytest.fixture
def diamond():
    return np.array([
        [1.0, 0.0],
        [0.0, 1.0],
        [-1.0, 0.0],
        [0.0, -1.0]
    ], dtype=np.float64)
