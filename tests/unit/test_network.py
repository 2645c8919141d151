import numpy as np
import pytest

from scarecrow.core.errors import NetworkStateError, ShapeMismatch
from scarecrow.core.layers import Dense, Hyperbolic, Sigmoid
from scarecrow.core.network import Network


def _small_network(seed: int = 0) -> Network:
    rng = np.random.default_rng(seed)
    return Network(
        [
            Dense.random(3, 4, rng),
            Hyperbolic(4),
            Dense.random(4, 2, rng),
            Sigmoid(2),
        ]
    )


def test_incompatible_adjacent_widths_fail_at_construction():
    with pytest.raises(ShapeMismatch):
        Network([Dense.random(2, 6, rng=0), Hyperbolic(5)])
    with pytest.raises(ShapeMismatch):
        Network([Dense.random(2, 6, rng=0), Hyperbolic(6), Dense.random(5, 1, rng=1)])


def test_network_requires_layers():
    with pytest.raises(ShapeMismatch):
        Network([])
    with pytest.raises(TypeError):
        Network([Dense.random(1, 1, rng=0), "not a layer"])


def test_forward_chains_layer_outputs():
    net = _small_network()
    x = np.array([0.5, -1.0, 2.0])
    expected = x
    for layer in net.layers:
        expected = layer.output(expected)
    assert np.allclose(net.forward(x), expected)
    assert np.allclose(net.output(x), expected)
    assert net.input_width == 3
    assert net.output_width == 2
    assert len(net) == 4


def test_forward_rejects_wrong_input_width():
    net = _small_network()
    with pytest.raises(ShapeMismatch):
        net.forward([1.0, 2.0])


def test_backward_requires_a_forward_pass():
    net = _small_network()
    with pytest.raises(NetworkStateError):
        net.backward([0.1, 0.1], 0.1)
    net.output([1.0, 2.0, 3.0])
    with pytest.raises(NetworkStateError):
        net.backward([0.1, 0.1], 0.1)


def test_backward_consumes_the_cache():
    net = _small_network()
    net.forward([1.0, 2.0, 3.0])
    net.backward([0.1, -0.1], 0.1)
    with pytest.raises(NetworkStateError):
        net.backward([0.1, -0.1], 0.1)


def test_backward_rejects_wrong_gradient_width():
    net = _small_network()
    net.forward([1.0, 2.0, 3.0])
    before = net.state_dict()
    with pytest.raises(ShapeMismatch):
        net.backward([0.1, 0.2, 0.3], 0.1)
    for key, value in net.state_dict().items():
        assert np.array_equal(value, before[key])
    # the cache survives the rejected call
    net.backward([0.1, -0.1], 0.1)
    with pytest.raises(NetworkStateError):
        net.backward([0.1, -0.1], 0.1)


def test_backward_updates_each_layer_before_propagating():
    first = Dense([[1.0]], [0.0])
    second = Dense([[2.0]], [0.0])
    net = Network([first, second])
    assert np.allclose(net.forward([1.0]), [2.0])
    net.backward([1.0], 0.5)
    # second layer: w = 2 - 0.5 * 1 * 1, gradient passed back uses the new w
    assert np.allclose(second.weights, [[1.5]])
    assert np.allclose(second.bias, [-0.5])
    assert np.allclose(first.weights, [[0.25]])
    assert np.allclose(first.bias, [-0.75])


def test_layers_are_fixed_after_construction():
    net = _small_network()
    assert isinstance(net.layers, tuple)
    with pytest.raises(AttributeError):
        net.layers.append(Sigmoid(2))  # type: ignore[attr-defined]


def test_state_dict_snapshots_dense_parameters():
    net = _small_network()
    state = net.state_dict()
    assert sorted(state) == ["0.bias", "0.weights", "2.bias", "2.weights"]
    assert state["0.weights"].shape == (4, 3)
    state["0.weights"][:] = 0.0
    assert not np.array_equal(net.state_dict()["0.weights"], state["0.weights"])
    assert net.parameter_count() == 3 * 4 + 4 + 4 * 2 + 2


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_single_small_step_does_not_increase_loss(seed):
    net = _small_network(seed)
    x = np.array([0.2, -0.7, 1.1])
    target = np.array([1.0, 0.0])

    before = float(np.sum((net.output(x) - target) ** 2))
    out = net.forward(x)
    net.backward(out - target, 1e-3)
    after = float(np.sum((net.output(x) - target) ** 2))
    assert after <= before
