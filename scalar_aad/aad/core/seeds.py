# scalar_aad/aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper records on its own fresh tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import Value
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return x.value() if isinstance(x, Value) else x


def _run(y: Any) -> None:
    # A function that ignores its inputs may return a plain number
    if isinstance(y, Value):
        backward(y)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Value], Value], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = Value(x0)
        _run(f(x))
        return x.gradient()


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Value]], Value],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form), from ONE reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a scalar Value
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # same key order as `inputs`
    """
    with use_tape():
        xs = {k: Value(v) for k, v in inputs.items()}
        _run(f(xs))
        return {k: xs[k].gradient() for k in inputs}


def grads_list(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), with inputs and partials given as lists.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + xs[1]*3
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs = Value.vec(x0_list)
        _run(f(xs))
        return [x.gradient() for x in xs]
