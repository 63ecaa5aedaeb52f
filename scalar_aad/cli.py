"""
Command-line sample computations.

    scalar-aad add -2 3
    scalar-aad mul 2 3 --backward --dot
    scalar-aad demo
"""

import argparse
import logging
import sys

from .aad.core.graph_utils import export_graph
from .aad.core.tape import use_tape
from .aad.core.var import Value
from .config import configure_logging

_log = logging.getLogger(__name__)

BINARY_OPS = {
    'add': lambda a, b: a + b,
    'sub': lambda a, b: a - b,
    'mul': lambda a, b: a * b,
    'div': lambda a, b: a / b,
}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='scalar-aad',
        description='Scalar reverse-mode autodiff sample computations',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--log-level', type=str, default='WARNING',
                        help='Logging level for the scalar_aad logger')
    sub = parser.add_subparsers(dest='command', required=True)

    for name in BINARY_OPS:
        p = sub.add_parser(name, help=f'c = a {name} b')
        p.add_argument('a', type=float)
        p.add_argument('b', type=float)
        p.add_argument('--backward', action='store_true',
                       help='Run backward() from c before printing')
        p.add_argument('--dot', action='store_true',
                       help='Print the Graphviz DOT description of the graph')

    p = sub.add_parser('demo', help='d = a*b + c walkthrough with gradients')
    p.add_argument('--dot', action='store_true',
                   help='Print the Graphviz DOT description of the graph')
    return parser.parse_args(argv)


def run_binary(args) -> None:
    with use_tape():
        a, b = Value(args.a), Value(args.b)
        c = BINARY_OPS[args.command](a, b)
        if args.backward:
            c.backward()
        print(f"Value[c]={c.value()}")
        print(f"Gradient[c]={c.gradient()}")
        if args.backward:
            print(f"Gradient[a]={a.gradient()}")
            print(f"Gradient[b]={b.gradient()}")
        if args.dot:
            print(export_graph(c), end="")


def run_demo(args) -> None:
    with use_tape():
        a, b, c = Value(2.0), Value(3.0), Value(10.0)
        d = a * b + c
        d.backward()
        print(f"d = a*b + c = {d.value()}")
        for name, v in (('a', a), ('b', b), ('c', c)):
            print(f"  d(d)/d({name}) = {v.gradient()}")
        if args.dot:
            print(export_graph(d), end="")


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    _log.debug("running %s", args.command)
    if args.command == 'demo':
        run_demo(args)
    else:
        run_binary(args)
    return 0


if __name__ == '__main__':
    sys.exit(main())
