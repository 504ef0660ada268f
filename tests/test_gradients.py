import random

import pytest
import torch

from perceptron import NeuralNetwork
from perceptron.network.torch_net import TorchNetwork

EPS = 1e-5


def _error_at(net, inputs, target):
    net.forward_propagation(inputs)
    return net.error(target, "meanSquaredError")


@pytest.mark.parametrize("hidden", ["sigmoid", "tanh"])
def test_link_derivatives_match_finite_difference(hidden):
    net = NeuralNetwork([2, 2, 1], hidden, "sigmoid", "l2", rng=random.Random(3))
    inputs, target = [0.7, -0.4], 1.0

    net.forward_propagation(inputs)
    net.back_propagation(target, "meanSquaredError")
    analytic = {link.id: link.error_derivative for link in net.links.values()}

    for link in net.links.values():
        w = link.weight
        link.weight = w + EPS
        plus = _error_at(net, inputs, target)
        link.weight = w - EPS
        minus = _error_at(net, inputs, target)
        link.weight = w

        numeric = (plus - minus) / (2 * EPS)
        assert analytic[link.id] == pytest.approx(numeric, abs=1e-4)


def test_bias_derivatives_match_finite_difference():
    net = NeuralNetwork([2, 3, 1], "sigmoid", "sigmoid", "l1", rng=random.Random(9))
    inputs, target = [1.0, 0.5], 0.0

    net.forward_propagation(inputs)
    net.back_propagation(target, "meanSquaredError")
    analytic = {node.id: node.input_derivative for node in net.iter_nodes(ignore_inputs=True)}

    for node in net.iter_nodes(ignore_inputs=True):
        b = node.bias
        node.bias = b + EPS
        plus = _error_at(net, inputs, target)
        node.bias = b - EPS
        minus = _error_at(net, inputs, target)
        node.bias = b

        assert analytic[node.id] == pytest.approx((plus - minus) / (2 * EPS), abs=1e-4)


@pytest.mark.parametrize("shape,hidden", [([2, 3, 1], "tanh"), ([3, 4, 2, 1], "sigmoid"), ([2, 5, 1], "relu")])
def test_manual_gradients_match_autograd(shape, hidden):
    net = NeuralNetwork(shape, hidden, "sigmoid", "l2", rng=random.Random(21))
    inputs = [0.25 * (i + 1) for i in range(shape[0])]
    target = 1.0

    output = net.forward_propagation(inputs)
    net.back_propagation(target, "meanSquaredError")

    module = TorchNetwork(net)
    prediction = module(torch.tensor([inputs], dtype=torch.float64))
    assert prediction.item() == pytest.approx(output, abs=1e-12)

    loss = (0.5 * (prediction - target) ** 2).sum()
    loss.backward()

    for i, link in enumerate(net.links.values()):
        assert module.weights.grad[i].item() == pytest.approx(link.error_derivative, abs=1e-10)
    for node in net.iter_nodes(ignore_inputs=True):
        idx = module.node_index[node.id]
        assert module.biases.grad[idx].item() == pytest.approx(node.input_derivative, abs=1e-10)


def test_torch_network_batches():
    net = NeuralNetwork([2, 3, 1], "tanh", "sigmoid", "l2", rng=random.Random(4))
    rows = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    module = TorchNetwork(net)
    with torch.no_grad():
        outputs = module(torch.tensor(rows))
    assert outputs.shape == (4,)
    for row, value in zip(rows, outputs.tolist()):
        assert value == pytest.approx(net.forward_propagation(row), abs=1e-12)


def test_export_network_writes_parameters_back():
    net = NeuralNetwork([2, 2, 1], "relu", "sigmoid", "l2", rng=random.Random(8))
    module = TorchNetwork(net)
    with torch.no_grad():
        module.weights.add_(1.0)
        module.biases.fill_(0.0)

    exported = module.export_network()
    for original, copied in zip(net.links.values(), exported.links.values()):
        assert copied.weight == pytest.approx(original.weight + 1.0)
        assert copied is not original
    assert all(node.bias == 0.0 for node in exported.iter_nodes(ignore_inputs=True))
    assert all(node.bias == 0.1 for node in net.iter_nodes())
