"""
Error types for sworkstyle.

Errors fall into three groups:
- connection-fatal: the compositor connection is gone, the daemon stops
- per-update: one workspace could not be relabelled, siblings continue
- config: the icon configuration could not be loaded, defaults are used
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for sworkstyle.

    - 1400-1499: Compositor IPC errors
    - 1500-1599: Workspace label errors
    - 1100-1199: Configuration errors
    """

    # Configuration errors (1100-1199)
    CONFIG_LOAD_FAILED = 1100

    # Compositor IPC errors (1400-1499)
    COMPOSITOR_CONNECTION_LOST = 1400
    RENAME_FAILED = 1401

    # Workspace label errors (1500-1599)
    WORKSPACE_NAME_MISSING = 1500
    WORKSPACE_INDEX_MISSING = 1501


class SworkstyleError(Exception):
    """Base exception for sworkstyle errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)


class CompositorConnectionError(SworkstyleError):
    """The compositor IPC connection was lost or could not be established."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.COMPOSITOR_CONNECTION_LOST,
            message=f"Compositor connection broken: {reason}",
            suggestion="Ensure Sway/i3 is running and SWAYSOCK/I3SOCK points at its IPC socket",
            context={"reason": reason}
        )


class WorkspaceLabelError(SworkstyleError):
    """A single workspace could not be relabelled."""

    def __init__(self, code: ErrorCode, message: str, workspace_id: Optional[int] = None):
        """
        Initialize workspace label error.

        Args:
            code: WORKSPACE_NAME_MISSING, WORKSPACE_INDEX_MISSING or RENAME_FAILED
            message: Error message
            workspace_id: Compositor node id of the workspace
        """
        context = {}
        if workspace_id is not None:
            context["workspace_id"] = workspace_id

        super().__init__(code=code, message=message, context=context)


class ConfigLoadError(SworkstyleError):
    """Configuration loading error."""

    def __init__(self, file_path: str, reason: str):
        """
        Initialize configuration load error.

        Args:
            file_path: Path to configuration file
            reason: Reason for load failure
        """
        super().__init__(
            code=ErrorCode.CONFIG_LOAD_FAILED,
            message=f"Failed to load configuration from {file_path}: {reason}",
            suggestion="Check file syntax and permissions",
            context={"file_path": file_path, "reason": reason}
        )
