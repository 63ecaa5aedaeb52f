# scalar_aad/aad/core/engine.py
from __future__ import annotations
import logging
import warnings
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Set, Tuple

import numpy as np

from ...config import get_config
from . import tape as tape_mod  # Use module access for use_tape() compatibility
from .node import GraphInvariantError, Node, OpTag, check_arity
from .tape import Tape
from .var import Value

_log = logging.getLogger(__name__)


def _reachable(tape: Tape, root: int) -> Set[int]:
    """Arena indices of every node reachable from `root`, root included."""
    seen = {root}
    stack = [root]
    while stack:
        for i in tape.nodes[stack.pop()].inputs:
            if i not in seen:
                seen.add(i)
                stack.append(i)
    return seen


def _layers(tape: Tape, root: int) -> List[List[int]]:
    """
    Dependency layers of the subgraph under `root`, leaves first.

    Layer 0 holds the reachable leaves; layer k holds every node whose inputs
    were all collected in layers < k. The root is always in the last layer.
    Within a layer nodes are sorted by creation id.

    All bookkeeping is local to this call, so the same graph can be ordered
    any number of times.
    """
    nodes = tape.nodes
    reachable = _reachable(tape, root)
    pending: Dict[int, int] = {}
    consumers: Dict[int, List[int]] = defaultdict(list)
    for i in reachable:
        distinct = set(nodes[i].inputs)   # x*x lists the same input twice
        pending[i] = len(distinct)
        for j in distinct:
            consumers[j].append(i)

    by_id = lambda i: nodes[i].id
    layer = sorted((i for i in reachable if pending[i] == 0), key=by_id)
    layers = []
    while layer:
        layers.append(layer)
        ready = []
        for i in layer:
            for c in consumers[i]:
                pending[c] -= 1
                if pending[c] == 0:
                    ready.append(c)
        layer = sorted(ready, key=by_id)

    collected = sum(len(l) for l in layers)
    if collected != len(reachable):
        # Only possible if someone wired a cycle by hand
        raise GraphInvariantError(
            f"dependency ordering collected {collected} of {len(reachable)} nodes"
        )
    return layers


def topological_sort(root: Value) -> List[Value]:
    """
    Every node reachable from `root`, each one after all of its inputs
    (leaves first, root last). Reverse it for a root-to-leaf order.
    """
    layers = _layers(root.tape, root.index)
    return [Value._wrap(root.tape, i) for layer in layers for i in layer]


def zero_gradients(root: Optional[Value] = None) -> None:
    """
    Set gradients to zero for every node reachable from `root`, or for every
    node on the active tape when `root` is None.
    """
    if root is None:
        for node in tape_mod.global_tape.nodes:
            node.grad = 0.0
        return
    nodes = root.tape.nodes
    for i in _reachable(root.tape, root.index):
        nodes[i].grad = 0.0


def backward(root: Value) -> None:
    """
    Run a single reverse pass from the scalar output `root`.

    Steps:
        1) reset every gradient strictly below the root to zero
        2) order the subgraph root-to-leaf
        3) seed root.grad = 1.0
        4) for each node, add its local chain-rule contribution into each input

    When a node is reached in step 4 every one of its consumers has already
    been processed, so its own gradient is fully summed.
    """
    tape = root.tape
    nodes = tape.nodes
    layers = _layers(tape, root.index)
    order = [i for layer in reversed(layers) for i in layer]
    _log.debug("backward from node %d: %d nodes in %d layers",
               nodes[root.index].id, len(order), len(layers))

    for i in order[1:]:
        nodes[i].grad = 0.0
    nodes[order[0]].grad = 1.0

    cfg = get_config()
    nonfinite = 0
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        for i in order:
            node = nodes[i]
            for j, contrib in _contributions(node, nodes, cfg.pow_gradient):
                if not np.isfinite(contrib):
                    nonfinite += 1
                # Accumulate: input.grad += d(root)/d(node) * d(node)/d(input)
                nodes[j].grad = float(nodes[j].grad + contrib)

    if nonfinite and cfg.warn_on_nonfinite:
        warnings.warn(
            f"backward produced {nonfinite} non-finite gradient contribution(s)",
            RuntimeWarning,
            stacklevel=2,
        )


def _contributions(node: Node, nodes: List[Node], pow_gradient: str) -> Iterator[Tuple[int, float]]:
    """
    Yield (input index, contribution) pairs for one node.

    g is this node's accumulated gradient and v its forward value.

        add   left += g                 right += g
        sub   left += g                 right += -g
        mul   left += right.v * g       right += left.v * g
        div   left += g / right.v       right += -left.v * g / right.v^2
        neg   child += -g
        tanh  child += (1 - v^2) * g
        exp   child += v * g
        pow   child += k * child.v^(k-1) * g
    """
    if node.is_leaf:
        return
    op = node.op
    check_arity(op, node.inputs)

    g = np.float64(node.grad)
    v = np.float64(node.value)

    if op in (OpTag.ADD, OpTag.SUB, OpTag.MUL, OpTag.DIV):
        l, r = node.inputs
        lv = np.float64(nodes[l].value)
        rv = np.float64(nodes[r].value)
        if op is OpTag.ADD:
            yield l, g
            yield r, g
        elif op is OpTag.SUB:
            yield l, g
            yield r, -g
        elif op is OpTag.MUL:
            yield l, rv * g
            yield r, lv * g
        else:
            yield l, g / rv
            yield r, -lv * g / (rv * rv)
        return

    (c,) = node.inputs
    cv = np.float64(nodes[c].value)

    if op is OpTag.NEG:
        yield c, -g
    elif op is OpTag.TANH:
        yield c, (1.0 - v * v) * g
    elif op is OpTag.EXP:
        yield c, v * g
    elif op is OpTag.POW:
        if pow_gradient == "log_recovery":
            # exponent recovered from the forward values, not read from the node
            k = np.log(v) / np.log(cv)
            yield c, k * v / cv * g
        else:
            k = np.float64(node.exponent)
            if k == 0.0:
                # a**0 is constant; skip 0 * inf at a zero base
                yield c, np.float64(0.0)
            else:
                yield c, k * np.power(cv, k - 1.0) * g
    else:
        raise GraphInvariantError(f"no backward rule for {op.value!r}")
