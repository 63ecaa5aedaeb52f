"""
Small feed-forward network built from scalar Values.

Neuron -> Layer -> MLP. Every parameter is a leaf Value, so one backward()
from a scalar output fills in the gradient of every weight and bias.
"""

from typing import List, Optional, Sequence, Union

import numpy as np

from ..aad.core.var import Value

ACTIVATIONS = ("tanh", "linear")


class Module:
    """Base class: anything that owns trainable leaf Values."""

    def parameters(self) -> List[Value]:
        return []

    def zero_grad(self) -> None:
        for p in self.parameters():
            p.node.grad = 0.0


class Neuron(Module):
    """
    One unit: act(bias + sum_i x_i * w_i).

    Weights are drawn uniformly from [-1, 1], the bias starts at 0.
    Inputs may be Values or raw numbers; raw numbers become leaves.
    """

    def __init__(self, nin: int, nonlin: bool = True, activation: str = "tanh",
                 rng: Optional[np.random.Generator] = None):
        if activation not in ACTIVATIONS:
            raise ValueError(
                f"Unknown activation {activation!r}. Available: {', '.join(ACTIVATIONS)}"
            )
        rng = rng if rng is not None else np.random.default_rng()
        self.w = Value.vec(rng.uniform(-1.0, 1.0, size=nin).tolist())
        self.b = Value(0.0)
        self.nonlin = nonlin
        self.activation = activation

    def __call__(self, x: Sequence[Union[Value, float]]) -> Value:
        if len(x) != len(self.w):
            raise ValueError(f"expected {len(self.w)} inputs, got {len(x)}")
        act = self.b
        for xi, wi in zip(x, self.w):
            if not isinstance(xi, Value):
                xi = Value(xi, tape=self.b.tape)
            # node operand on the left so gradient reaches both sides
            act = act + xi * wi
        if self.nonlin and self.activation == "tanh":
            return act.tanh()
        return act

    def parameters(self) -> List[Value]:
        return self.w + [self.b]

    def __repr__(self):
        kind = "Tanh" if self.nonlin and self.activation == "tanh" else "Linear"
        return f"{kind}Neuron({len(self.w)})"


class Layer(Module):

    def __init__(self, nin: int, nout: int, **kwargs):
        self.neurons = [Neuron(nin, **kwargs) for _ in range(nout)]

    def __call__(self, x):
        out = [n(x) for n in self.neurons]
        return out[0] if len(out) == 1 else out

    def parameters(self) -> List[Value]:
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):
    """Multi-layer perceptron; every layer but the last is non-linear."""

    def __init__(self, nin: int, nouts: Sequence[int], **kwargs):
        kwargs.pop("nonlin", None)
        sz = [nin] + list(nouts)
        self.layers = [
            Layer(sz[i], sz[i + 1], nonlin=i != len(nouts) - 1, **kwargs)
            for i in range(len(nouts))
        ]

    def __call__(self, x):
        for layer in self.layers:
            x = layer(x)
            if isinstance(x, Value):
                x = [x] if layer is not self.layers[-1] else x
        return x

    def parameters(self) -> List[Value]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
