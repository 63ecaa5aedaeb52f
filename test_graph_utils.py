"""
Graph statistics and DOT export.
"""

from scalar_aad.aad.core.graph_utils import export_graph, get_graph_stats, print_graph_summary
from scalar_aad.aad.core.var import Value
from scalar_aad.config import use_config


def _abc():
    a, b, c = Value(2.0), Value(3.0), Value(10.0)
    return a, b, c, a * b + c


def test_export_graph_structure():
    a, b, c, d = _abc()          # ids 0, 1, 2; mul 3; add 4
    dot = export_graph(d)
    lines = dot.splitlines()
    assert lines[0] == "strict graph {"
    assert lines[1] == "rankdir=RL;"
    assert lines[2] == "node [shape=record,colorscheme=set28];"
    assert lines[-1] == "}"
    assert '4 [label="{add 16.00 | 0.00}", color=1];' in lines
    assert '3 [label="{mul 6.00 | 0.00}", color=2];' in lines
    assert '0 [label="{none 2.00 | 0.00}", color=8];' in lines
    for edge in ("4 -- 3;", "4 -- 2;", "3 -- 0;", "3 -- 1;"):
        assert edge in lines


def test_export_graph_shows_gradients_after_backward():
    a, b, c, d = _abc()
    d.backward()
    dot = export_graph(d)
    assert '0 [label="{none 2.00 | 3.00}", color=8];' in dot
    assert '1 [label="{none 3.00 | 2.00}", color=8];' in dot


def test_export_graph_is_read_only():
    a, b, c, d = _abc()
    d.backward()
    before = [(n.value, n.grad) for n in d.tape.nodes]
    export_graph(d)
    assert [(n.value, n.grad) for n in d.tape.nodes] == before


def test_export_graph_lists_shared_nodes_once():
    a = Value(2.0)
    y = a * a
    dot = export_graph(y)
    assert dot.count("0 [label=") == 1
    assert dot.count("1 -- 0;") == 2


def test_export_precision_follows_config():
    a = Value(2.0)
    with use_config(dot_precision=4):
        assert '{none 2.0000 | 0.0000}' in export_graph(a)


def test_graph_stats():
    a, b, c, d = _abc()
    stats = get_graph_stats(d)
    assert stats['nodes'] == 5
    assert stats['edges'] == 4
    assert stats['leaves'] == 3
    assert stats['max_fan_in'] == 2
    assert stats['max_fan_out'] == 1
    assert stats['avg_fan_in'] == 0.8
    assert stats['operations'] == {'none': 3, 'mul': 1, 'add': 1}


def test_print_graph_summary(capsys):
    a, b, c, d = _abc()
    stats = print_graph_summary(d, detailed=True)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "Total nodes:        5" in out
    assert "Node    4: add" in out
    assert stats['nodes'] == 5
