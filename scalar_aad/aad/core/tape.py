# scalar_aad/aad/core/tape.py
from __future__ import annotations
import itertools
import threading
from contextlib import contextmanager
from typing import List, Optional, Sequence

from .node import Node, OpTag, check_arity

# Process-wide creation counter shared by every tape
_id_lock = threading.Lock()
_id_counter = itertools.count()


def next_node_id() -> int:
    with _id_lock:
        return next(_id_counter)


def reset_node_ids(start: int = 0) -> None:
    """Restart node ids at `start`. Meant for test isolation."""
    global _id_counter
    with _id_lock:
        _id_counter = itertools.count(start)


class Tape:
    """
    Arena of graph nodes. A node is addressed by its slot index and never moves.

    Nodes are never freed or reused, since Value handles hold bare indices.
    The arena therefore grows with every operation recorded on it: scope
    short-lived graphs (e.g. a model evaluated in a loop) with `use_tape()`
    so the whole tape is dropped once the block exits.
    """
    def __init__(self):
        self.nodes: List[Node] = []

    def __len__(self):
        return len(self.nodes)

    def push_node(self, *, op: OpTag, value: float, inputs: Sequence[int] = (),
                  exponent: Optional[float] = None) -> int:
        """
        Append a Node(op, value, inputs) and return its index.
        `inputs` must already live on this tape.
        """
        inputs = tuple(inputs)
        check_arity(op, inputs)
        for i in inputs:
            if not 0 <= i < len(self.nodes):
                raise IndexError(f"input index {i} is not on this tape")
        self.nodes.append(Node(op=op, value=float(value), inputs=inputs,
                               id=next_node_id(), exponent=exponent))
        return len(self.nodes) - 1


# Global default tape
global_tape = Tape()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record on a fresh (or given) tape:
        with use_tape():
            ... build computation ...
            y.backward()
    """
    from . import tape as _tape_mod  # module access so callers see the swap
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
