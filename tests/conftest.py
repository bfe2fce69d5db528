"""
Pytest configuration and fixtures for sworkstyle tests.
"""

import itertools
from pathlib import Path
from typing import Generator, Iterable, Optional
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from sworkstyle.config import IconConfig
from sworkstyle.models import LayoutNode


class TreeBuilder:
    """Builds raw get_tree replies shaped like sway's JSON."""

    def __init__(self):
        self._ids = itertools.count(1)

    def con(
        self,
        name: Optional[str] = None,
        app_id: Optional[str] = None,
        window_class: Optional[str] = None,
        nodes: Iterable[dict] = (),
        floating_nodes: Iterable[dict] = (),
        type: str = "con",
    ) -> dict:
        data = {
            "id": next(self._ids),
            "type": type,
            "name": name,
            "nodes": list(nodes),
            "floating_nodes": list(floating_nodes),
        }
        if app_id is not None:
            data["app_id"] = app_id
        if window_class is not None:
            data["window_properties"] = {"class": window_class, "instance": window_class.lower()}
        return data

    def floating(self, name: Optional[str] = None, **kwargs) -> dict:
        return self.con(name, type="floating_con", **kwargs)

    def workspace(
        self,
        num: Optional[int],
        name: Optional[str] = None,
        nodes: Iterable[dict] = (),
        floating_nodes: Iterable[dict] = (),
    ) -> dict:
        data = self.con(
            name if name is not None else str(num),
            nodes=nodes,
            floating_nodes=floating_nodes,
            type="workspace",
        )
        data["num"] = num if num is not None else -1
        return data

    def scratchpad(self, floating_nodes: Iterable[dict] = ()) -> dict:
        return self.con("__i3_scratch", floating_nodes=floating_nodes, type="workspace")

    def output(self, name: str, workspaces: Iterable[dict]) -> dict:
        return self.con(name, nodes=workspaces, type="output")

    def root(self, *outputs: dict) -> dict:
        return self.con("root", nodes=outputs, type="root")

    def snapshot(self, data: dict) -> LayoutNode:
        return LayoutNode.from_ipc(data)


@pytest.fixture
def tree() -> TreeBuilder:
    """Factory for layout tree replies."""
    return TreeBuilder()


@pytest.fixture
def icon_config() -> IconConfig:
    """Small icon table independent of the built-in defaults."""
    return IconConfig(
        fallback="?",
        matching={
            "firefox": "🦊",
            "code": "C",
            "Code": "C",
            "kitty": "K",
            "/Settings/": "S",
        },
    )


@pytest.fixture
def config_file(tmp_path) -> Generator[Path, None, None]:
    """Writable config.toml in a temporary directory."""
    path = tmp_path / "sworkstyle" / "config.toml"
    path.parent.mkdir()
    path.write_text(
        "fallback = '?'\n"
        "[matching]\n"
        "'kitty' = 'K'\n"
    )
    yield path


@pytest.fixture
def mock_sway_connection():
    """Mock i3ipc.aio connection with an empty tree."""
    conn = MagicMock()
    conn.connect = AsyncMock(return_value=conn)
    conn.subscribe = AsyncMock()
    conn.main = AsyncMock()
    conn.get_tree = AsyncMock(return_value=Mock(ipc_data={"id": 1, "type": "root", "nodes": []}))
    conn.command = AsyncMock(return_value=[Mock(success=True, error=None)])
    return conn


@pytest.fixture
def set_tree(mock_sway_connection):
    """Point the mock connection's get_tree at a raw tree."""
    def _set(data: dict) -> None:
        mock_sway_connection.get_tree.return_value = Mock(ipc_data=data)
    return _set
