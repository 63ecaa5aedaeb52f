"""
scalar_aad - scalar-valued reverse-mode automatic differentiation.

Arithmetic on Value handles records a computation graph; backward() on a
scalar output fills in d(output)/d(node) for every node it depends on.

Usage:
    from scalar_aad import Value

    a, b, c = Value(2.0), Value(3.0), Value(10.0)
    d = a * b + c
    d.backward()
    a.gradient(), b.gradient(), c.gradient()   # (3.0, 2.0, 1.0)
"""

from scalar_aad.config import EngineConfig, get_config, set_config, use_config
from scalar_aad.aad import (
    Value,
    OpTag,
    GraphInvariantError,
    Tape,
    use_tape,
    reset_node_ids,
    topological_sort,
    backward,
    zero_gradients,
    grad,
    grads,
    grads_list,
    export_graph,
    make_node,
)

__version__ = "0.1.0"

__all__ = [
    "EngineConfig", "get_config", "set_config", "use_config",
    "Value", "OpTag", "GraphInvariantError",
    "Tape", "use_tape", "reset_node_ids",
    "topological_sort", "backward", "zero_gradients",
    "grad", "grads", "grads_list",
    "export_graph", "make_node",
]
