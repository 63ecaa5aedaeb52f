# scalar_aad/aad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class OpTag(Enum):
    """Operator that produced a node. NONE marks a leaf."""
    NONE = "none"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    NEG = "neg"
    TANH = "tanh"
    EXP = "exp"
    POW = "pow"


# Number of inputs each operator expects
ARITY = {
    OpTag.NONE: 0,
    OpTag.ADD: 2,
    OpTag.SUB: 2,
    OpTag.MUL: 2,
    OpTag.DIV: 2,
    OpTag.NEG: 1,
    OpTag.TANH: 1,
    OpTag.EXP: 1,
    OpTag.POW: 1,
}


class GraphInvariantError(AssertionError):
    """A node was wired with the wrong number of inputs for its operator."""


def check_arity(op: OpTag, inputs: Tuple[int, ...]) -> None:
    expected = ARITY[op]
    if len(inputs) != expected:
        raise GraphInvariantError(
            f"{op.value} node expects {expected} input(s), got {len(inputs)}"
        )


@dataclass
class Node:
    """
    One vertex of the computation graph, stored in a Tape arena.

    Attributes
    ----------
    op       : OpTag
        Operator that produced this node (OpTag.NONE for leaves).
    value    : float
        Forward value, computed eagerly at construction.
    inputs   : Tuple[int, ...]
        Arena indices of the operands, left then right for binary ops.
    id       : int
        Process-wide creation id. Only used for ordering ties and diagnostics.
    grad     : float
        Accumulated d(root)/d(this node), valid after a backward pass.
    exponent : Optional[float]
        Exponent of a POW node; None for every other operator.
    """
    op: OpTag
    value: float
    inputs: Tuple[int, ...]
    id: int
    grad: float = 0.0
    exponent: Optional[float] = None

    @property
    def is_leaf(self) -> bool:
        return self.op is OpTag.NONE
