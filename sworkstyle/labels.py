"""
Workspace label synthesis.

Turns the windows of one workspace into a label of the form
``"<num>: <icon> <icon> "`` and decides whether the workspace needs a
rename.
"""

import logging
from typing import List, Optional, Protocol, Tuple

from .errors import ErrorCode, WorkspaceLabelError
from .models import IdentitySource, LayoutNode, WindowIdentity

logger = logging.getLogger(__name__)

# Left-to-right override / pop directional formatting.
# Keeps right-to-left glyphs from reordering the joined label.
LRO = "\u202d"
PDF = "\u202c"

FALLBACK_LABEL = " "

WindowName = Tuple[Optional[str], Optional[str]]


class IconLookup(Protocol):
    """Anything that maps an identity and title to an icon."""

    def fetch_icon(self, exact_name: str, generic_name: Optional[str]) -> str:
        ...


def resolve_identity(node: LayoutNode) -> WindowIdentity:
    """Resolve the exact application identity of a window.

    Precedence: X11 ``window_class``, then Wayland ``app_id``, then unknown.
    """
    if node.window_class is not None:
        return WindowIdentity(IdentitySource.WINDOW_CLASS, node.window_class)
    if node.app_id is not None:
        return WindowIdentity(IdentitySource.APP_ID, node.app_id)
    return WindowIdentity(IdentitySource.UNKNOWN, None)


def _name_sort_key(name: WindowName) -> tuple:
    identity, title = name
    # None sorts before any string
    return (identity is not None, identity or "", title is not None, title or "")


def window_names(windows: List[LayoutNode], deduplicate: bool = False) -> List[WindowName]:
    """Return ``(identity, title)`` pairs for the given windows.

    With ``deduplicate`` the pairs are collapsed to a set and sorted, so the
    result no longer follows tree order.
    """
    names = [(resolve_identity(node).value, node.name) for node in windows]

    if deduplicate:
        names = sorted(set(names), key=_name_sort_key)

    return names


def _dedup_consecutive(icons: List[str]) -> List[str]:
    result: List[str] = []
    for icon in icons:
        if not result or result[-1] != icon:
            result.append(icon)
    return result


def workspace_icons(
    windows: List[LayoutNode],
    config: IconLookup,
    deduplicate: bool = False,
) -> str:
    """Render the icon part of a label, trailing space included."""
    icons = []
    for exact_name, generic_name in window_names(windows, deduplicate):
        if exact_name is not None:
            icon = config.fetch_icon(exact_name, generic_name)
        else:
            logger.warning(f"No exact name found for window with title={generic_name!r}")
            icon = config.fetch_icon("", generic_name)
        icons.append(f"{LRO}{icon}{PDF}")

    # Distinct windows can still map to the same glyph
    if deduplicate:
        icons = _dedup_consecutive(icons)

    joined = " ".join(icons)
    if joined:
        joined += " "
    return joined


def workspace_index(workspace: LayoutNode) -> int:
    """Return the workspace number.

    Raises:
        WorkspaceLabelError: If the workspace is unnumbered
    """
    if workspace.num is None:
        raise WorkspaceLabelError(
            ErrorCode.WORKSPACE_INDEX_MISSING,
            f"Could not fetch index for: {workspace.name}",
            workspace_id=workspace.id,
        )
    return workspace.num


def build_label(workspace: LayoutNode, icons: str) -> str:
    """Compose the label for a workspace from its rendered icons."""
    try:
        index = workspace_index(workspace)
    except WorkspaceLabelError as e:
        logger.error(f"{e.message}, falling back to blank label")
        return FALLBACK_LABEL

    if icons:
        return f"{index}: {icons}"
    return f"{index}"


def rename_command(current: str, new: str) -> str:
    """Format the compositor rename command.

    Quote characters inside names are passed through unescaped.
    """
    return f'rename workspace "{current}" to "{new}"'


def synthesize(
    workspace: LayoutNode,
    windows: List[LayoutNode],
    config: IconLookup,
    deduplicate: bool = False,
) -> Optional[str]:
    """Compute the rename command for a workspace, if one is needed.

    Returns:
        The rename command, or None when the label is already current

    Raises:
        WorkspaceLabelError: If the workspace has no name
    """
    if workspace.name is None:
        raise WorkspaceLabelError(
            ErrorCode.WORKSPACE_NAME_MISSING,
            f"Could not get name for workspace with id: {workspace.id}",
            workspace_id=workspace.id,
        )

    new_name = build_label(workspace, workspace_icons(windows, config, deduplicate))

    if workspace.name == new_name:
        return None
    return rename_command(workspace.name, new_name)
