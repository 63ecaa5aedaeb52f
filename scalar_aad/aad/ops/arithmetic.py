# scalar_aad/aad/ops/arithmetic.py
import numbers
from typing import Callable, Dict

import numpy as np

from ..core.node import OpTag, check_arity
from ..core.var import Value, _check_scalar
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility

# Forward formulas, keyed by operator. Transcendental ops register on import.
FORWARD: Dict[OpTag, Callable] = {}


def register_forward(op: OpTag, f: Callable) -> None:
    FORWARD[op] = f


def _eval(f, *args):
    """
    Evaluate a forward formula in float64. Division by zero, overflow and
    invalid powers degrade to inf/nan instead of raising.
    """
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        return float(f(*(np.float64(a) for a in args)))


def _as_value(x, tape):
    """Ensure x is a Value on `tape`; otherwise record it as a fresh leaf."""
    if isinstance(x, Value):
        if x.tape is not tape:
            raise ValueError("cannot combine Values recorded on different tapes")
        return x
    return Value(_check_scalar(x), tape=tape)


def make_node(op: OpTag, *operands, exponent=None) -> Value:
    """
    Low-level constructor for a derived node.

    Computes the forward value of `op` on the operands and records a node
    whose inputs are the operands, left to right. Raw numbers among the
    operands are recorded as fresh leaves. Operands are never modified.
    """
    if op not in FORWARD:
        raise ValueError(f"no forward rule registered for {op.value!r}")
    # validate everything before recording leaves for raw numbers
    check_arity(op, tuple(range(len(operands))))
    tape = next((o.tape for o in operands if isinstance(o, Value)), tape_mod.global_tape)
    for o in operands:
        if isinstance(o, Value):
            if o.tape is not tape:
                raise ValueError("cannot combine Values recorded on different tapes")
        else:
            _check_scalar(o)
    args = [_as_value(o, tape) for o in operands]
    vals = [a.value() for a in args]
    if op is OpTag.POW:
        vals.append(exponent)
    out = _eval(FORWARD[op], *vals)
    index = tape.push_node(op=op, value=out, inputs=[a.index for a in args],
                           exponent=exponent)
    return Value._wrap(tape, index)


register_forward(OpTag.ADD, lambda a, b: a + b)
register_forward(OpTag.SUB, lambda a, b: a + (-1.0 * b))
register_forward(OpTag.MUL, lambda a, b: a * b)
register_forward(OpTag.DIV, lambda a, b: a / b)
register_forward(OpTag.NEG, lambda a: -a)
register_forward(OpTag.POW, lambda a, k: np.power(a, k))


def add(x, y): return make_node(OpTag.ADD, x, y)
def sub(x, y): return make_node(OpTag.SUB, x, y)
def mul(x, y): return make_node(OpTag.MUL, x, y)
def div(x, y): return make_node(OpTag.DIV, x, y)
def neg(x): return make_node(OpTag.NEG, x)


def pow(x, exponent):
    """
    Power with a constant real exponent:
      out.val = x.val ** exponent

    The exponent is stored on the node, it is not a graph input.
    A negative base with a non-integer exponent gives nan.
    """
    if isinstance(exponent, Value) or isinstance(exponent, bool) \
            or not isinstance(exponent, numbers.Real):
        raise TypeError("only int/float exponents are supported")
    return make_node(OpTag.POW, x, exponent=float(exponent))


# ---- scalar on the left: detached leaves ----
# `k OP node` keeps only the number. The result is a leaf with no inputs,
# so gradient never reaches `node` along this path.

def _detached(f, k, node):
    k = _check_scalar(k)
    return Value(_eval(f, k, node.value()), tape=node.tape)


def detached_add(k, node): return _detached(FORWARD[OpTag.ADD], k, node)
def detached_sub(k, node): return _detached(FORWARD[OpTag.SUB], k, node)
def detached_mul(k, node): return _detached(FORWARD[OpTag.MUL], k, node)
def detached_div(k, node): return _detached(FORWARD[OpTag.DIV], k, node)
