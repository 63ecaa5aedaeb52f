"""
Dependency ordering of the graph under a root.
"""

import numpy as np

from scalar_aad.aad.core.engine import _layers, topological_sort
from scalar_aad.aad.core.var import Value


def _positions(order):
    return {v.index: k for k, v in enumerate(order)}


def _assert_inputs_first(order):
    pos = _positions(order)
    for v in order:
        for i in v.node.inputs:
            assert pos[v.index] > pos[i]


def test_topological_order():
    v1, v2 = Value(5.0), Value(1.0)
    v3 = v1 + v2                      # 6
    v4 = v3 * Value(2.0)              # 12
    v5 = v3 * Value(3.0)              # 18
    v6 = v4 * v5                      # 216
    order = topological_sort(v6)
    assert len(order) == 8
    assert order[-1].is_same(v6)
    _assert_inputs_first(order)
    assert v6.value() == 216.0


def test_layers_are_longest_path_levels():
    a, b = Value(1.0), Value(2.0)
    c = a + b
    d = c * a
    layers = _layers(d.tape, d.index)
    assert layers == [[a.index, b.index], [c.index], [d.index]]


def test_leaf_root():
    a = Value(1.0)
    order = topological_sort(a)
    assert len(order) == 1 and order[0].is_same(a)


def test_only_reachable_nodes_are_ordered():
    a, b = Value(1.0), Value(2.0)
    _unrelated = b * b
    y = a.exp()
    order = topological_sort(y)
    assert {v.index for v in order} == {a.index, y.index}


def test_repeated_sort_is_stable():
    a, b = Value(1.0), Value(2.0)
    y = (a * b + a).tanh()
    first = [v.index for v in topological_sort(y)]
    second = [v.index for v in topological_sort(y)]
    assert first == second
    assert len(first) == 5


def test_random_dags():
    rng = np.random.default_rng(7)
    for _ in range(20):
        pool = Value.vec(rng.uniform(0.5, 1.5, size=4).tolist())
        for _ in range(30):
            i, j = rng.integers(0, len(pool), size=2)
            kind = rng.integers(0, 5)
            x, y = pool[i], pool[j]
            if kind == 0:
                pool.append(x + y)
            elif kind == 1:
                pool.append(x * y)
            elif kind == 2:
                pool.append(x - y)
            elif kind == 3:
                pool.append(x.tanh())
            else:
                pool.append(-x)
        root = pool[-1]
        order = topological_sort(root)
        _assert_inputs_first(order)
        assert order[-1].is_same(root)
        assert len({v.index for v in order}) == len(order)
