"""
Command-line sample computations.
"""

import pytest

from scalar_aad.cli import main, parse_args


def test_add(capsys):
    assert main(['add', '-2', '3']) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Value[c]=1.0", "Gradient[c]=0.0"]


def test_mul_backward(capsys):
    main(['mul', '2', '3', '--backward'])
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Value[c]=6.0",
        "Gradient[c]=1.0",
        "Gradient[a]=3.0",
        "Gradient[b]=2.0",
    ]


def test_div_by_zero_prints_inf(capsys):
    main(['div', '1', '0'])
    assert "Value[c]=inf" in capsys.readouterr().out


def test_dot_output(capsys):
    main(['sub', '5', '1', '--dot'])
    out = capsys.readouterr().out
    assert "strict graph {" in out
    assert "{sub 4.00 | 0.00}" in out


def test_demo(capsys):
    main(['demo'])
    out = capsys.readouterr().out
    assert "d = a*b + c = 16.0" in out
    assert "d(d)/d(a) = 3.0" in out
    assert "d(d)/d(b) = 2.0" in out
    assert "d(d)/d(c) = 1.0" in out


def test_requires_a_command():
    with pytest.raises(SystemExit):
        parse_args([])


def test_cli_does_not_touch_active_tape(fresh_tape):
    main(['demo'])
    assert len(fresh_tape) == 0
