import numpy as np
import pytest

from scarecrow.core.errors import InvalidConfiguration
from scarecrow.training.losses import REGISTRY as LOSS_REGISTRY


def test_mse_gradient_is_output_minus_target():
    loss, grad = LOSS_REGISTRY.resolve("mse")(np.array([0.8, 0.1]), np.array([1.0, 0.0]))
    assert np.allclose(grad, [-0.2, 0.1])
    assert loss == pytest.approx((0.04 + 0.01) / 2)


def test_squared_error_matches_textbook_derivative():
    loss, grad = LOSS_REGISTRY.resolve("squared_error")(np.array([0.5]), np.array([1.0]))
    assert loss == pytest.approx(0.25)
    assert np.allclose(grad, [-1.0])


def test_mae_gradient_is_sign():
    loss, grad = LOSS_REGISTRY.resolve("mae")(np.array([0.5, 2.0]), np.array([1.0, 1.0]))
    assert loss == pytest.approx(0.75)
    assert np.array_equal(grad, [-1.0, 1.0])


def test_registry_lists_and_rejects_names():
    assert list(LOSS_REGISTRY.names()) == ["mae", "mse", "squared_error"]
    with pytest.raises(InvalidConfiguration):
        LOSS_REGISTRY.resolve("cross_entropy")
    loss = LOSS_REGISTRY.resolve("mse")
    assert LOSS_REGISTRY.resolve(loss) is loss
