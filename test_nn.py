"""
Neuron / Layer / MLP built on the scalar engine.
"""

import math

import numpy as np
import pytest

from scalar_aad.aad.core.node import OpTag
from scalar_aad.aad.core.var import Value
from scalar_aad.nn import MLP, Layer, Neuron


def test_create_neuron():
    n = Neuron(3, rng=np.random.default_rng(0))
    assert len(n.parameters()) == 4
    assert all(-1.0 <= w.value() <= 1.0 for w in n.w)
    assert n.b.value() == 0.0
    assert repr(n) == "TanhNeuron(3)"


def test_neuron_forward_and_backward():
    n = Neuron(3, rng=np.random.default_rng(0))
    x = [1.0, -2.0, 0.5]
    out = n(x)
    pre = sum(xi * w.value() for xi, w in zip(x, n.w))
    assert out.op is OpTag.TANH
    assert out.value() == pytest.approx(math.tanh(pre))

    out.backward()
    local = 1.0 - out.value() ** 2
    for xi, w in zip(x, n.w):
        assert w.gradient() == pytest.approx(xi * local)
    assert n.b.gradient() == pytest.approx(local)


def test_neuron_accepts_values_and_passes_gradient_to_inputs():
    n = Neuron(2, nonlin=False, rng=np.random.default_rng(1))
    xs = Value.vec([0.5, 1.5])
    out = n(xs)
    assert out.op is OpTag.ADD
    out.backward()
    for x, w in zip(xs, n.w):
        assert x.gradient() == pytest.approx(w.value())


def test_linear_activation():
    n = Neuron(2, activation="linear", rng=np.random.default_rng(2))
    assert n([1.0, 1.0]).op is OpTag.ADD
    assert repr(n) == "LinearNeuron(2)"


def test_neuron_rejects_bad_input():
    n = Neuron(2, rng=np.random.default_rng(0))
    with pytest.raises(ValueError):
        n([1.0])
    with pytest.raises(ValueError):
        Neuron(2, activation="relu")


def test_layer():
    layer = Layer(3, 4, rng=np.random.default_rng(0))
    out = layer([1.0, 2.0, 3.0])
    assert len(out) == 4
    assert len(layer.parameters()) == 16
    single = Layer(3, 1, rng=np.random.default_rng(0))
    assert isinstance(single([1.0, 2.0, 3.0]), Value)


def test_mlp_forward_backward_and_zero_grad():
    model = MLP(3, [4, 4, 1], rng=np.random.default_rng(42))
    assert len(model.parameters()) == 41
    assert [n.nonlin for n in model.layers[-1].neurons] == [False]
    assert all(n.nonlin for n in model.layers[0].neurons)

    y = model([2.0, 3.0, -1.0])
    assert isinstance(y, Value)
    y.backward()
    grads = [p.gradient() for p in model.parameters()]
    assert all(math.isfinite(g) for g in grads)
    assert any(g != 0.0 for g in grads)
    # bias of the linear output neuron receives the seed directly
    assert model.layers[-1].neurons[0].b.gradient() == 1.0

    model.zero_grad()
    assert all(p.gradient() == 0.0 for p in model.parameters())


def test_mlp_with_single_hidden_unit():
    model = MLP(2, [1, 1], rng=np.random.default_rng(3))
    y = model([1.0, -1.0])
    assert isinstance(y, Value)
    assert len(model.parameters()) == 5
