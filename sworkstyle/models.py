"""
Pydantic data models for sworkstyle.

LayoutNode is a read-only snapshot of the compositor's layout tree, built
from the raw ``get_tree`` reply. A snapshot is fetched fresh for every
update cycle and dropped once the cycle finishes.
"""

import re
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


SCRATCHPAD_NAME = "__i3_scratch"


# Enumerations

class NodeType(str, Enum):
    """Layout tree node type, reduced to what label synthesis cares about."""
    WORKSPACE = "workspace"
    CON = "con"
    FLOATING_CON = "floating_con"
    OTHER = "other"


class IdentitySource(str, Enum):
    """Where a window's identity came from, in precedence order."""
    WINDOW_CLASS = "window_class"
    APP_ID = "app_id"
    UNKNOWN = "unknown"


# Core Entities

class LayoutNode(BaseModel):
    """A node of the compositor layout tree."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., description="Opaque node id, unique within a snapshot")
    node_type: NodeType = Field(NodeType.OTHER, alias="type", description="Node type")
    name: Optional[str] = Field(None, description="Workspace label or window title")
    num: Optional[int] = Field(None, description="Workspace index")
    app_id: Optional[str] = Field(None, description="Wayland application id")
    window_class: Optional[str] = Field(None, description="X11 WM_CLASS class")
    nodes: List["LayoutNode"] = Field(default_factory=list, description="Tiled children")
    floating_nodes: List["LayoutNode"] = Field(default_factory=list, description="Floating children")

    @model_validator(mode="before")
    @classmethod
    def extract_window_class(cls, data: Any) -> Any:
        """Lift ``window_properties.class`` from the raw IPC reply."""
        if isinstance(data, dict) and "window_class" not in data:
            props = data.get("window_properties")
            if isinstance(props, dict) and props.get("class") is not None:
                data = {**data, "window_class": props["class"]}
        return data

    @field_validator("node_type", mode="before")
    @classmethod
    def validate_node_type(cls, v: Any) -> Any:
        """Collapse root/output/dockarea and friends into OTHER."""
        if isinstance(v, NodeType):
            return v
        try:
            return NodeType(v)
        except ValueError:
            return NodeType.OTHER

    @field_validator("num", mode="before")
    @classmethod
    def validate_num(cls, v: Any) -> Any:
        """i3 reports unnumbered workspaces as num = -1."""
        if v is not None and v < 0:
            return None
        return v

    @classmethod
    def from_ipc(cls, data: dict) -> "LayoutNode":
        """Build a snapshot from a raw ``get_tree`` reply."""
        return cls.model_validate(data)

    @property
    def is_workspace(self) -> bool:
        """Check if this is a real (non-scratchpad) workspace."""
        return self.node_type == NodeType.WORKSPACE and self.name != SCRATCHPAD_NAME

    @property
    def is_window(self) -> bool:
        """Check if this is a titled tiled or floating container."""
        return self.node_type in (NodeType.CON, NodeType.FLOATING_CON) and bool(self.name)


LayoutNode.model_rebuild()


class WindowIdentity(NamedTuple):
    """Resolved application identity of a window."""

    source: IdentitySource
    value: Optional[str]


# Configuration

class IconConfigFile(BaseModel):
    """Schema of the user's config.toml.

    Keys of ``matching`` are either exact application identities or, when
    wrapped in slashes, regular expressions (``'/(?i)github.*firefox/'``).
    """

    fallback: Optional[str] = Field(None, description="Icon used when nothing matches")
    matching: Dict[str, str] = Field(default_factory=dict, description="Identity or /regex/ to icon")

    @field_validator("matching")
    @classmethod
    def validate_regex(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Validate /regex/ patterns."""
        for key in v:
            pattern = regex_pattern(key)
            if pattern is not None:
                try:
                    re.compile(pattern)
                except re.error as e:
                    raise ValueError(f"Invalid regex pattern {key!r}: {e}")
        return v


def regex_pattern(key: str) -> Optional[str]:
    """Return the pattern of a ``/regex/`` matching key, None for exact keys."""
    if len(key) > 2 and key.startswith("/") and key.endswith("/"):
        return key[1:-1]
    return None
