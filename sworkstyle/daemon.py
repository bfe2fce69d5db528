"""
sworkstyle daemon

Keeps workspace names in sync with the applications they hold. A single
loop polls two sources without blocking on either: window events from the
compositor and writes to the configuration file.
"""

import asyncio
import logging
from collections import deque
from pathlib import Path
from typing import Deque, Optional

from i3ipc import Event
from i3ipc.aio import Connection

from .config import ConfigFileWatcher, IconConfig
from .errors import CompositorConnectionError, ErrorCode, WorkspaceLabelError
from .labels import synthesize
from .models import LayoutNode
from .tree import get_windows, get_workspaces

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1  # seconds


class Sworkstyle:
    """Main daemon: relabels workspaces on every window event."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        deduplicate: bool = False,
        poll_interval: float = POLL_INTERVAL,
    ):
        """
        Initialize daemon.

        Args:
            config_path: Icon configuration file, None for built-in icons
            deduplicate: Collapse identical windows into one icon
            poll_interval: Sleep between loop cycles in seconds
        """
        self.config_path = config_path
        self.deduplicate = deduplicate
        self.poll_interval = poll_interval

        # Replaced wholesale on reload, only ever touched from the loop
        self.config = IconConfig.load(config_path)

        self.file_watcher: Optional[ConfigFileWatcher] = None
        if config_path is not None and config_path.exists():
            self.file_watcher = ConfigFileWatcher(config_path)
        self.rearm_pending = False

        self.sway: Optional[Connection] = None
        self.events: Deque[object] = deque()
        self.main_task: Optional[asyncio.Task] = None
        self.running = False

    async def connect(self):
        """
        Connect to the compositor and subscribe to window events.

        Raises:
            CompositorConnectionError: If the IPC socket can't be reached
        """
        try:
            self.sway = await Connection(auto_reconnect=False).connect()
            self.sway.on(Event.WINDOW, self._on_window_event)
            await self.sway.subscribe([Event.WINDOW])
        except Exception as e:
            raise CompositorConnectionError(str(e) or type(e).__name__) from e

        logger.info("Connected to compositor IPC")

        # Event dispatch happens inside main(); its end means the socket is gone
        self.main_task = asyncio.create_task(self.sway.main())

    def _on_window_event(self, sway, event):
        """Queue a window event for the next loop cycle."""
        self.events.append(event)

    async def run(self):
        """
        Run the event loop until stopped or the connection breaks.

        Raises:
            CompositorConnectionError: If the compositor connection is lost
        """
        await self.connect()

        self.running = True

        try:
            if self.file_watcher:
                self.file_watcher.start()

            logger.info("Daemon started successfully")
            await self._update_or_fail()

            while self.running:
                await self.poll_compositor_event()
                self.poll_config_change()
                await asyncio.sleep(self.poll_interval)
        finally:
            self.stop()
            if self.main_task and not self.main_task.done():
                self.main_task.cancel()

    def stop(self):
        """Stop the daemon."""
        if self.running:
            logger.info("Stopping daemon...")
        self.running = False

        if self.file_watcher:
            self.file_watcher.stop()

        if self.sway:
            self.sway.main_quit()

    async def poll_compositor_event(self) -> bool:
        """
        Consume at most one queued window event.

        Returns:
            True if an event was handled

        Raises:
            CompositorConnectionError: If the event stream ended
        """
        if self.events:
            self.events.popleft()
            await self._update_or_fail()
            return True

        if self.main_task is not None and self.main_task.done() and self.running:
            raise self._connection_error()

        return False

    def _connection_error(self) -> CompositorConnectionError:
        task = self.main_task
        cause = None
        if task.cancelled():
            reason = "event loop cancelled"
        else:
            cause = task.exception()
            reason = (str(cause) or type(cause).__name__) if cause else "event stream closed"

        logger.warning(f"Connection broken, exiting: {reason}")
        error = CompositorConnectionError(reason)
        error.__cause__ = cause
        return error

    async def _update_or_fail(self):
        try:
            await self.update_workspaces()
        except (OSError, EOFError) as e:
            logger.warning(f"Connection broken, exiting: {e}")
            raise CompositorConnectionError(str(e) or type(e).__name__) from e
        except Exception as e:
            logger.error(f"Could not update workspace names: {e}")

    async def update_workspaces(self) -> int:
        """
        Relabel every workspace from a fresh tree snapshot.

        Workspaces are handled one at a time in tree order; a failure on one
        is logged and does not stop the others.

        Returns:
            Number of workspaces renamed
        """
        tree = await self.sway.get_tree()
        root = LayoutNode.from_ipc(tree.ipc_data)

        renamed = 0
        for workspace in get_workspaces(root):
            try:
                if await self.update_workspace_name(workspace):
                    renamed += 1
            except WorkspaceLabelError as e:
                logger.error(f"Could not update workspace name: {e}")

        return renamed

    async def update_workspace_name(self, workspace: LayoutNode) -> bool:
        """
        Rename one workspace if its label is out of date.

        Args:
            workspace: Workspace node from the current snapshot

        Returns:
            True if a rename command was sent

        Raises:
            WorkspaceLabelError: If the workspace has no name or sway rejects the rename
        """
        command = synthesize(workspace, get_windows(workspace), self.config, self.deduplicate)
        if command is None:
            return False

        logger.debug(command)
        replies = await self.sway.command(command)

        for reply in replies:
            if not reply.success:
                raise WorkspaceLabelError(
                    ErrorCode.RENAME_FAILED,
                    f"Rename of workspace {workspace.name!r} failed: {reply.error}",
                    workspace_id=workspace.id,
                )

        return True

    def poll_config_change(self) -> bool:
        """
        Reload the icon configuration if the file was written.

        Returns:
            True if the configuration was reloaded
        """
        if self.file_watcher is None:
            return False

        reloaded = False
        try:
            if self.file_watcher.poll():
                logger.info("Detected config change, reloading config..")
                self.config = IconConfig.load(self.config_path)
                self.rearm_pending = True
                reloaded = True

            if self.rearm_pending:
                self.file_watcher.rearm()
                self.rearm_pending = False
        except OSError as e:
            logger.debug(f"Config watch failed, retrying next cycle: {e}")

        return reloaded
