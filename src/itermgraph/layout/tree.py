"""Split tree model and walker.

A tab's pane layout is a tree: leaves are sessions, internal nodes are splits
whose children are ordered left-to-right (or top-to-bottom). The walker visits
leaves in pre-order with an explicit stack, so arbitrarily deep layouts never
depend on the interpreter's recursion limit.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from iterm2 import api_pb2


@dataclass(frozen=True)
class Leaf:
    """A single session in the layout."""

    pane_id: str


@dataclass(frozen=True)
class Split:
    """A split with an ordered list of children."""

    children: tuple["Leaf | Split", ...] = field(default_factory=tuple)
    vertical: bool = False


Node = Leaf | Split


def iter_leaves(node: Node | None) -> Iterator[str]:
    """Yield every pane id under ``node`` in pre-order, children in order.

    An absent root or a split with no children yields nothing.
    """
    if node is None:
        return
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Leaf):
            yield current.pane_id
        else:
            # Reversed so the first child is popped first
            stack.extend(reversed(current.children))


def find_leaf(node: Node | None, match: Callable[[str], bool]) -> str | None:
    """Return the first pane id for which ``match`` is true, or None."""
    for pane_id in iter_leaves(node):
        if match(pane_id):
            return pane_id
    return None


def collect_leaves(node: Node | None) -> list[str]:
    """Return every pane id under ``node`` in traversal order."""
    return list(iter_leaves(node))


def split_tree_from_proto(node: api_pb2.SplitTreeNode) -> Split:
    """Convert an iTerm2 SplitTreeNode into an immutable Split.

    Links carrying neither a session nor a node are dropped. Nested splits are
    built with an explicit stack, like the walker.
    """
    # Frame: proto split, iterator over its links, children built so far
    stack = [(node, iter(node.links), [])]
    while True:
        current, links, children = stack[-1]
        link = next(links, None)
        if link is None:
            stack.pop()
            split = Split(children=tuple(children), vertical=current.vertical)
            if not stack:
                return split
            stack[-1][2].append(split)
            continue

        kind = link.WhichOneof("child")
        if kind == "session":
            children.append(Leaf(link.session.unique_identifier))
        elif kind == "node":
            stack.append((link.node, iter(link.node.links), []))
