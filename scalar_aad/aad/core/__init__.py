# scalar_aad/aad/core/__init__.py

"""
Core public API of the engine.

Exports:
    Value           : Handle on a graph node; arithmetic on it builds the graph.
    Node, OpTag     : The arena record and its operator tag.
    Tape            : Arena holding the nodes of one computation graph.
    use_tape        : Context manager to temporarily switch the active tape.
    topological_sort: Leaf-to-root dependency order of a subgraph.
    backward        : Run a single reverse pass from a scalar root.
    zero_gradients  : Reset gradients of a subgraph (or the active tape) to zero.
    grad, grads     : Convenience: gradients of a function on an isolated tape.
    export_graph    : Graphviz DOT description of a subgraph.
"""

from .node import Node, OpTag, GraphInvariantError
from .tape import Tape, use_tape, next_node_id, reset_node_ids
from .var import Value
from .engine import topological_sort, backward, zero_gradients
from .seeds import grad, grads, grads_list, value
from .graph_utils import export_graph, get_graph_stats, print_graph_summary

__all__ = [
    "Value", "Node", "OpTag", "GraphInvariantError",
    "Tape", "use_tape", "next_node_id", "reset_node_ids",
    "topological_sort", "backward", "zero_gradients",
    "grad", "grads", "grads_list", "value",
    "export_graph", "get_graph_stats", "print_graph_summary",
]
