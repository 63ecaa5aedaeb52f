"""
Graph utilities: summary statistics and Graphviz DOT export for the
subgraph under a root Value. Everything here is read-only.
"""

from collections import Counter
from typing import Dict

import numpy as np

from ...config import get_config
from .engine import topological_sort
from .node import OpTag
from .var import Value

# Index into the Graphviz "set28" colour scheme, per operator
OP_COLORS = {
    OpTag.NONE: 8,
    OpTag.ADD: 1,
    OpTag.SUB: 1,
    OpTag.MUL: 2,
    OpTag.DIV: 2,
    OpTag.NEG: 2,
    OpTag.TANH: 3,
    OpTag.EXP: 4,
    OpTag.POW: 5,
}


def get_graph_stats(root: Value) -> Dict:
    """
    Statistics of the graph under `root` (no printing).

    Fan-in counts inputs per node; fan-out counts consumers per node.
    """
    order = topological_sort(root)
    n_nodes = len(order)
    fan_ins = [len(v.node.inputs) for v in order]
    fan_outs = Counter(i for v in order for i in v.node.inputs)
    fan_out_list = [fan_outs.get(v.index, 0) for v in order]
    op_counter = Counter(v.op.value for v in order)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'leaves': op_counter.get(OpTag.NONE.value, 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_out_list),
        'avg_fan_out': float(np.mean(fan_out_list)),
        'operations': dict(op_counter),
    }


def print_graph_summary(root: Value, detailed: bool = False) -> Dict:
    """
    Print a summary of the graph under `root`.

    Args:
        root: output Value
        detailed: also list every node (only for graphs of at most 100 nodes)

    Returns:
        the statistics dict from get_graph_stats
    """
    stats = get_graph_stats(root)
    n_nodes = stats['nodes']

    print("\n" + "=" * 70)
    print("COMPUTATION GRAPH SUMMARY")
    print("=" * 70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / n_nodes
        print(f"  {op:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and n_nodes <= 100:
        print()
        for v in topological_sort(root):
            node = v.node
            inputs = ", ".join(f"Node{root.tape.nodes[i].id}" for i in node.inputs)
            print(f"Node {node.id:4d}: {node.op.value:6s} ({node.value:10.6f}) "
                  f"grad={node.grad:10.6f} <- [{inputs}]")

    print("=" * 70 + "\n")
    return stats


def export_graph(root: Value) -> str:
    """
    Graphviz DOT description of the graph under `root`.

    Each node is a record labelled {op value | grad}; each edge joins a node
    to one of its inputs. Nodes are keyed by creation id.
    """
    prec = get_config().dot_precision
    nodes = root.tape.nodes
    lines = [
        "strict graph {",
        "rankdir=RL;",
        "node [shape=record,colorscheme=set28];",
    ]
    for v in reversed(topological_sort(root)):
        node = v.node
        lines.append(
            f'{node.id} [label="{{{node.op.value} {node.value:.{prec}f} | '
            f'{node.grad:.{prec}f}}}", color={OP_COLORS[node.op]}];'
        )
        for i in node.inputs:
            lines.append(f"{node.id} -- {nodes[i].id};")
    lines.append("}")
    return "\n".join(lines) + "\n"
