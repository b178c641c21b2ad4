"""Gist synchronization - background push, full merge and first-time setup.

One SyncCoordinator is built per process and handed to whatever needs to
sync; it owns the in-progress flag and the time of the last successful sync.
"""

import copy
import logging
import threading
import time
from pathlib import Path
from typing import Callable

from .adapters.gist_api import GistAdapter, RemoteError
from .config import GistConfig
from .core.entries import Entry, merge_entries
from .ports import RemoteStore

logger = logging.getLogger(__name__)

SYNC_DEBOUNCE_SECONDS = 5.0


def spawn_thread(task: Callable[[], None]) -> None:
    """Run a task detached from the caller. Nothing joins it."""
    threading.Thread(target=task, name="lifelog-sync").start()


class SyncCoordinator:
    """Coordinates every sync with the remote gist for this process."""

    def __init__(
        self,
        remote: RemoteStore | None = None,
        config_path: Path | None = None,
        clock: Callable[[], float] = time.monotonic,
        spawn: Callable[[Callable[[], None]], None] = spawn_thread,
        debounce: float = SYNC_DEBOUNCE_SECONDS,
    ):
        self.remote = remote or GistAdapter()
        self.config_path = config_path
        self.debounce = debounce
        self.in_progress = False
        self.last_sync: float | None = None
        self._clock = clock
        self._spawn = spawn
        self._lock = threading.Lock()

    def load_config(self) -> GistConfig:
        return GistConfig.load(self.config_path)

    def is_configured(self) -> bool:
        return self.load_config().is_configured

    def _synced_recently(self) -> bool:
        return self.last_sync is not None and self._clock() - self.last_sync < self.debounce

    def _mark_synced(self) -> None:
        with self._lock:
            self.last_sync = self._clock()

    def sync_in_background(self, entries: list[Entry]) -> bool:
        """
        Push entries to the gist without blocking the caller.

        Skipped while another sync runs or within the debounce window after a
        successful one. Returns whether a sync task was started. Failures are
        logged and never reach the caller.
        """
        with self._lock:
            if self.in_progress or self._synced_recently():
                logger.debug("Skipping background sync: another sync is in progress or synced recently")
                return False
            self.in_progress = True

        snapshot = copy.deepcopy(entries)
        try:
            self._spawn(lambda: self._push(snapshot))
        except RuntimeError as e:
            logger.error(f"Could not start background sync: {e}")
            with self._lock:
                self.in_progress = False
            return False
        return True

    def _push(self, entries: list[Entry]) -> None:
        try:
            config = self.load_config()
            if not config.is_configured:
                logger.debug("Gist sync not configured, skipping background sync")
                return

            if not self.remote.is_online():
                logger.debug("No internet connection, skipping background sync")
                return

            self.remote.update_remote(config.token, config.gist_id, entries)
            self._mark_synced()
            logger.debug("Successfully synced entries with gist in background")
        except Exception as e:
            logger.error(f"Background sync failed: {e}")
        finally:
            with self._lock:
                self.in_progress = False

    def perform_full_sync(self, local: list[Entry]) -> list[Entry]:
        """
        Pull, merge and push. Blocking.

        Returns the merged entries, or ``local`` unchanged when sync is not
        configured, offline, or the remote fails.
        """
        config = self.load_config()
        if not config.is_configured:
            logger.debug("Gist sync not configured, skipping full sync")
            return local

        if not self.remote.is_online():
            logger.debug("No internet connection, skipping full sync")
            return local

        try:
            remote_entries = self.remote.fetch_remote(config.token, config.gist_id)
            if not remote_entries:
                logger.debug("No remote entries found, using local entries only")
                self.remote.update_remote(config.token, config.gist_id, local)
                self._mark_synced()
                return local

            merged = merge_entries(local, remote_entries)
            self.remote.update_remote(config.token, config.gist_id, merged)
            self._mark_synced()
            logger.debug("Successfully performed full sync with gist")
            return merged
        except RemoteError as e:
            logger.error(f"Failed to perform full sync: {e}")
            return local

    def initialize_sync(self, token: str, local: list[Entry]) -> tuple[list[Entry], str]:
        """
        First-time gist setup. Returns the entries to keep locally and the gist id.

        Creates a new gist when none is saved or the saved one cannot be read.
        Otherwise reconciles both sides. Config is saved in every case.
        """
        gist_id = self.load_config().gist_id
        remote_entries = None
        if gist_id:
            try:
                remote_entries = self.remote.fetch_remote(token, gist_id)
            except RemoteError as e:
                logger.warning(f"Could not read existing gist {gist_id}: {e}")

        if not gist_id or remote_entries is None:
            gist_id = self.remote.create_remote(token, local)
            GistConfig(token=token, gist_id=gist_id).save(self.config_path)
            return local, gist_id

        if local and remote_entries:
            entries = merge_entries(local, remote_entries)
            self.remote.update_remote(token, gist_id, entries)
        elif remote_entries:
            entries = remote_entries
        elif local:
            self.remote.update_remote(token, gist_id, local)
            entries = local
        else:
            entries = local

        GistConfig(token=token, gist_id=gist_id).save(self.config_path)
        return entries, gist_id
