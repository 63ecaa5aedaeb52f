# scalar_aad/aad/ops/__init__.py

# Ensure forward rules are registered
from . import arithmetic
from . import transcendental

# Convenience re-exports so users can do: from scalar_aad.aad.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow, make_node
from .transcendental import tanh, exp

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "make_node",
    "tanh", "exp",
]
