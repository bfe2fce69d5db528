"""
File watcher for the sworkstyle configuration file.

The watchdog observer thread only records that the file was written. The
daemon polls for that on its own loop, so the configuration is never
swapped from another thread.

The configuration is often a symlink into a dotfiles tree. Writes through
the link land in the target's directory, so both the link's directory and
the target's directory are watched.
"""

import logging
import os
import queue
from pathlib import Path
from typing import List, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import ObservedWatch

logger = logging.getLogger(__name__)


class ConfigFileHandler(FileSystemEventHandler):
    """Records completed writes to one configuration file."""

    def __init__(self, config_path: Path, pending: "queue.SimpleQueue[str]"):
        """
        Initialize file handler.

        Args:
            config_path: Absolute path of the watched file, symlinks unresolved
            pending: Queue receiving the paths of completed writes
        """
        super().__init__()
        self.config_path = config_path
        self.target_path = config_path.resolve()
        self.pending = pending

    def _is_config(self, path) -> bool:
        return Path(os.fsdecode(path)) in (self.config_path, self.target_path)

    def on_closed(self, event: FileSystemEvent):
        """Handle close-after-write, on the link or on its target."""
        if event.is_directory or not self._is_config(event.src_path):
            return

        logger.debug(f"Config file written: {self.config_path}")
        self.pending.put(str(self.config_path))

    def on_moved(self, event: FileSystemEvent):
        """Handle editors that save by renaming a temp file into place."""
        if event.is_directory or not self._is_config(event.dest_path):
            return

        logger.debug(f"Config file replaced: {self.config_path}")
        self.pending.put(str(self.config_path))

    def on_created(self, event: FileSystemEvent):
        """Handle a symlink that was removed and pointed somewhere else."""
        if Path(os.fsdecode(event.src_path)) != self.config_path:
            return
        if not self.config_path.is_symlink():
            return

        logger.debug(f"Config link repointed: {self.config_path}")
        self.pending.put(str(self.config_path))


class ConfigFileWatcher:
    """One-shot watch on the configuration file, re-armed after each change."""

    def __init__(self, config_path: Path):
        """
        Initialize file watcher.

        Args:
            config_path: Configuration file to watch
        """
        self.config_path = config_path.absolute()
        self.pending: "queue.SimpleQueue[str]" = queue.SimpleQueue()
        self.handler = ConfigFileHandler(self.config_path, self.pending)

        self.observer: Optional[Observer] = None
        self.watches: List[ObservedWatch] = []
        self.running = False

    def start(self):
        """Start file watcher."""
        if self.running:
            logger.warning("File watcher already running")
            return

        logger.info(f"Starting file watcher for {self.config_path}")

        self.observer = Observer()
        self._schedule()
        self.observer.start()
        self.running = True

    def watched_directories(self) -> List[Path]:
        """Directories holding the config path and, for a symlink, its target."""
        directories = [self.config_path.parent]
        target_dir = self.handler.target_path.parent
        if target_dir != directories[0]:
            directories.append(target_dir)
        return directories

    def _schedule(self):
        # A repointed link may now live somewhere else
        self.handler.target_path = self.config_path.resolve()

        for directory in self.watched_directories():
            self.watches.append(self.observer.schedule(
                self.handler,
                path=str(directory),
                recursive=False
            ))

    def poll(self) -> bool:
        """
        Check for completed writes without blocking.

        All pending notifications are consumed, so a burst of writes results
        in a single reload.

        Returns:
            True if the file was written since the last poll
        """
        changed = False
        while True:
            try:
                self.pending.get_nowait()
            except queue.Empty:
                break
            changed = True
        return changed

    def rearm(self):
        """
        Re-add the watches after they fired.

        Raises:
            OSError: If a directory can no longer be watched
        """
        if not self.running:
            return

        while self.watches:
            self.observer.unschedule(self.watches.pop())
        self._schedule()

    def stop(self):
        """Stop file watcher."""
        if not self.running:
            return

        logger.info("Stopping file watcher")

        if self.observer:
            self.observer.stop()
            self.observer.join()

        self.watches = []
        self.running = False

    def is_running(self) -> bool:
        """
        Check if file watcher is running.

        Returns:
            True if running, False otherwise
        """
        return self.running
