"""
Depth-first tree walker

Generic pre-order traversal over a tree-sitter tree. What to collect is
decided entirely by the caller's selector.
"""

from collections.abc import Callable

from tree_sitter import Node

Selector = Callable[[Node], Node | None]


def traverse_and_select(root: Node, select: Selector) -> list[Node]:
    """
    Walk every descendant of root in pre-order and collect selected nodes.

    The walk starts at root's first child; select is never called on root.
    A single cursor drives the walk: descend when a child exists, otherwise
    advance to the next sibling, backtracking through parents until the
    cursor is back at root.

    Args:
        root: Node whose descendants are visited
        select: Called once per visited node; returns the node to collect
            (usually the visited node itself) or None

    Returns:
        Collected nodes in visit order
    """
    nodes: list[Node] = []
    cursor = root.walk()
    if not cursor.goto_first_child():
        return nodes

    while True:
        selected = select(cursor.node)
        if selected is not None:
            nodes.append(selected)

        if cursor.goto_first_child():
            continue

        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return nodes
