# scalar_aad/aad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core.var import Value
from .core.node import Node, OpTag, GraphInvariantError
from .core.tape import Tape, use_tape, reset_node_ids
from .core.engine import (
    topological_sort,
    backward,
    zero_gradients,
)
from .core.seeds import grad, grads, grads_list
from .core.graph_utils import export_graph, get_graph_stats, print_graph_summary

# Operators
from . import ops
from .ops import make_node, tanh, exp

__all__ = [
    # Core
    'Value',
    'Node',
    'OpTag',
    'GraphInvariantError',
    'Tape',
    'use_tape',
    'reset_node_ids',
    # Engine
    'topological_sort',
    'backward',
    'zero_gradients',
    'grad',
    'grads',
    'grads_list',
    # Graph
    'export_graph',
    'get_graph_stats',
    'print_graph_summary',
    # Ops
    'ops',
    'make_node',
    'tanh',
    'exp',
]
