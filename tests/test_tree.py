"""
Tree walker tests.

Covers workspace discovery, scratchpad exclusion, window collection order
and parsing of raw get_tree replies.
"""

from sworkstyle.models import LayoutNode, NodeType
from sworkstyle.tree import get_windows, get_workspaces


class TestLayoutNodeParsing:
    """Test building snapshots from raw IPC data."""

    def test_unknown_types_become_other(self, tree):
        """root/output/dockarea nodes are OTHER."""
        root = tree.snapshot(tree.root(tree.output("eDP-1", [tree.con(type="dockarea")])))

        assert root.node_type == NodeType.OTHER
        assert root.nodes[0].node_type == NodeType.OTHER
        assert root.nodes[0].nodes[0].node_type == NodeType.OTHER

    def test_window_class_lifted_from_window_properties(self, tree):
        """X11 class is read from window_properties."""
        node = tree.snapshot(tree.con("Terminal", window_class="URxvt"))

        assert node.window_class == "URxvt"
        assert node.app_id is None

    def test_negative_num_is_absent(self, tree):
        """i3 reports unnumbered workspaces as -1."""
        node = tree.snapshot(tree.workspace(None, name="mail"))

        assert node.num is None
        assert node.name == "mail"

    def test_empty_identity_is_kept(self, tree):
        """An empty app_id is still a reported identity."""
        node = tree.snapshot(tree.con("xterm", app_id="", window_class=""))

        assert node.app_id == ""
        assert node.window_class == ""

    def test_null_app_id_is_absent(self, tree):
        """Sway reports X11 windows with app_id = null."""
        node = tree.snapshot({**tree.con("xterm"), "app_id": None})

        assert node.app_id is None
        assert node.window_class is None

    def test_construct_by_field_name(self):
        """Snapshots can be built directly with node_type."""
        node = LayoutNode(id=7, node_type=NodeType.WORKSPACE, name="3", num=3)

        assert node.is_workspace
        assert node.nodes == []


class TestGetWorkspaces:
    """Test workspace extraction."""

    def test_workspaces_in_tree_order(self, tree):
        """Workspaces are returned output by output, top to bottom."""
        root = tree.snapshot(tree.root(
            tree.output("eDP-1", [tree.workspace(1), tree.workspace(2)]),
            tree.output("HDMI-A-1", [tree.workspace(5)]),
        ))

        assert [ws.num for ws in get_workspaces(root)] == [1, 2, 5]

    def test_scratchpad_excluded(self, tree):
        """The scratchpad workspace is never returned."""
        root = tree.snapshot(tree.root(
            tree.output("__i3", [
                tree.con(type="con", nodes=[
                    tree.scratchpad([tree.floating("hidden", app_id="kitty")]),
                ]),
            ]),
            tree.output("eDP-1", [tree.workspace(1)]),
        ))

        workspaces = get_workspaces(root)

        assert [ws.name for ws in workspaces] == ["1"]

    def test_scratchpad_excluded_when_nested_deeper(self, tree):
        """Scratchpad exclusion does not depend on depth."""
        root = tree.snapshot(tree.root(
            tree.con(nodes=[tree.con(nodes=[tree.con(nodes=[tree.scratchpad()])])]),
        ))

        assert get_workspaces(root) == []

    def test_named_workspace_without_number_returned(self, tree):
        """Unnumbered workspaces are still workspaces."""
        root = tree.snapshot(tree.root(tree.output("eDP-1", [tree.workspace(None, name="mail")])))

        workspaces = get_workspaces(root)

        assert len(workspaces) == 1
        assert workspaces[0].num is None

    def test_empty_tree(self, tree):
        """A tree without outputs has no workspaces."""
        assert get_workspaces(tree.snapshot(tree.root())) == []


class TestGetWindows:
    """Test window extraction."""

    def test_mixed_floating_and_tiled_depth_first(self, tree):
        """Titled containers come back depth-first, tiled before floating."""
        workspace = tree.snapshot(tree.workspace(
            1,
            nodes=[
                tree.con(nodes=[
                    tree.con("a", app_id="kitty"),
                    tree.con("b", app_id="kitty", floating_nodes=[tree.floating("c")]),
                ]),
                tree.con("d", app_id="firefox"),
            ],
            floating_nodes=[
                tree.floating("e", nodes=[tree.con("f")]),
                tree.floating("g"),
            ],
        ))

        names = [w.name for w in get_windows(workspace)]

        assert names == ["a", "b", "c", "d", "e", "f", "g"]

    def test_unnamed_containers_skipped(self, tree):
        """Split containers without a name are not windows."""
        workspace = tree.snapshot(tree.workspace(
            2,
            nodes=[tree.con(None, nodes=[tree.con("", nodes=[tree.con("vim", app_id="foot")])])],
        ))

        windows = get_windows(workspace)

        assert [w.name for w in windows] == ["vim"]

    def test_workspace_itself_not_a_window(self, tree):
        """The workspace node is never listed."""
        workspace = tree.snapshot(tree.workspace(4))

        assert get_windows(workspace) == []

    def test_floating_only_workspace(self, tree):
        """Floating windows alone populate the list."""
        workspace = tree.snapshot(tree.workspace(
            3,
            floating_nodes=[tree.floating("calc", app_id="gnome-calculator")],
        ))

        windows = get_windows(workspace)

        assert len(windows) == 1
        assert windows[0].node_type == NodeType.FLOATING_CON
