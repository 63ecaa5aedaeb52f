# scalar_aad/aad/core/var.py
from __future__ import annotations
import numbers
from typing import Iterable, List, Optional, Tuple

from . import tape as tape_mod  # Use module access for use_tape() compatibility
from .node import Node, OpTag
from .tape import Tape


def _check_scalar(val) -> float:
    # bool is an Integral, but True + node is almost always a bug
    if isinstance(val, bool) or not isinstance(val, numbers.Real):
        raise TypeError(
            f"Value only accepts real scalars (int, float), but got {type(val)}"
        )
    return float(val)


class Value:
    """
    Handle on one node of a computation graph.

    A Value is just (tape, index): the node itself lives in the Tape arena, so
    any number of handles and consumers can share it. `Value(x)` records a new
    leaf on the active tape; derived Values come from the operators below.

    Scalar on the right (`node + 2.0`) wraps the scalar as a fresh leaf and
    keeps gradient flowing to both sides. Scalar on the LEFT (`2.0 + node`,
    `2.0 - node`, `2.0 * node`, `2.0 / node`) yields a detached leaf holding
    only the number: nothing flows back into `node` through it. Keep the
    node operand on the left whenever gradients matter.
    """

    __slots__ = ("tape", "index")

    def __init__(self, val, *, tape: Optional[Tape] = None):
        self.tape = tape if tape is not None else tape_mod.global_tape
        self.index = self.tape.push_node(op=OpTag.NONE, value=_check_scalar(val))

    @classmethod
    def _wrap(cls, tape: Tape, index: int) -> "Value":
        """Handle on an existing node; records nothing."""
        obj = cls.__new__(cls)
        obj.tape = tape
        obj.index = index
        return obj

    @classmethod
    def vec(cls, values: Iterable, *, tape: Optional[Tape] = None) -> List["Value"]:
        """Batch constructor: one leaf per raw number."""
        return [cls(v, tape=tape) for v in values]

    # ---- read accessors ----
    @property
    def node(self) -> Node:
        return self.tape.nodes[self.index]

    @property
    def op(self) -> OpTag:
        return self.node.op

    @property
    def id(self) -> int:
        return self.node.id

    @property
    def inputs(self) -> Tuple["Value", ...]:
        return tuple(Value._wrap(self.tape, i) for i in self.node.inputs)

    def value(self) -> float:
        return self.node.value

    def gradient(self) -> float:
        return self.node.grad

    def is_same(self, other: "Value") -> bool:
        """True when both handles address the same node."""
        return self.tape is other.tape and self.index == other.index

    def __repr__(self):
        n = self.node
        return f"Value({n.value!r}, grad={n.grad!r}, op={n.op.value})"

    def __str__(self):
        n = self.node
        return f"Value[{n.value}, grad={n.grad}, op={n.op.value}]"

    # ---- operator overloading ----
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import detached_add
        return detached_add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import detached_sub
        return detached_sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import detached_mul
        return detached_mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import detached_div
        return detached_div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def pow(self, exponent) -> "Value":
        return self ** exponent

    def tanh(self) -> "Value":
        from ..ops.transcendental import tanh
        return tanh(self)

    def exp(self) -> "Value":
        from ..ops.transcendental import exp
        return exp(self)

    # ---- differentiation ----
    def backward(self) -> None:
        """Accumulate d(self)/d(n) into every node n reachable from self."""
        from .engine import backward
        backward(self)

    def zero_grad(self) -> None:
        from .engine import zero_gradients
        zero_gradients(self)
