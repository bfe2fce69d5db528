"""Layout tree traversal.

Pure functions over a LayoutNode snapshot: no I/O, no mutation.
"""

from typing import List

from .models import LayoutNode


def get_workspaces(root: LayoutNode) -> List[LayoutNode]:
    """Return every workspace in the tree, scratchpad excluded.

    Depth-first pre-order over tiled children. Workspaces are never nested,
    so traversal stops at the first workspace on each branch.
    """
    workspaces: List[LayoutNode] = []

    def walk(node: LayoutNode) -> None:
        if node.is_workspace:
            workspaces.append(node)
            return
        for child in node.nodes:
            walk(child)

    walk(root)
    return workspaces


def get_windows(workspace: LayoutNode) -> List[LayoutNode]:
    """Return the titled tiled and floating containers under a workspace.

    Each node is listed before its descendants; tiled children are visited
    before floating children at every level. Unnamed split containers are
    skipped but still descended into.
    """
    windows: List[LayoutNode] = []

    def walk(node: LayoutNode) -> None:
        if node.is_window:
            windows.append(node)
        for child in node.nodes:
            walk(child)
        for child in node.floating_nodes:
            walk(child)

    walk(workspace)
    return windows
