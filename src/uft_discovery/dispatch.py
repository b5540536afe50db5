"""Collaborators notified after a detection run.

The dispatcher forwards results with changes to downstream consumers; the
scheduler arranges a full scan when an incremental run cannot be trusted.
Both are passed to the service explicitly. The local implementations keep
their state in the workspace state directory so it outlives the process.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, NamedTuple, Optional, Protocol

from uft_discovery.config import state_dir
from uft_discovery.errors import PersistenceError

logger = logging.getLogger(__name__)

FULL_SCAN_MARKER = "FULL_SCAN_REQUIRED"
DISPATCH_QUEUE_FILE = "dispatch_queue.db"


class QueuedResult(NamedTuple):
    job_name: str
    build_number: int


class DiscoveryDispatcher(Protocol):
    def enqueue_result(self, job_name: str, build_number: int) -> None: ...


class FullScanScheduler(Protocol):
    def schedule_full_scan(self, delay_seconds: int, cause: str) -> None: ...

    def is_pending(self) -> bool: ...

    def clear(self) -> None: ...


class DispatchQueue:
    """SQLite-backed FIFO of (job name, build number) awaiting dispatch.

    Entries survive across invocations so a downstream consumer can drain
    them later. A (job name, build number) pair is queued at most once.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @classmethod
    def for_workspace(cls, workspace: Path) -> "DispatchQueue":
        return cls(state_dir(workspace) / DISPATCH_QUEUE_FILE)

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open dispatch queue {self.db_path}: {e}") from e

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS dispatch_queue (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    job_name TEXT NOT NULL,
                    build_number INTEGER NOT NULL,
                    queued_at INTEGER NOT NULL,
                    UNIQUE (job_name, build_number)
                )
            ''')
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot initialize dispatch queue {self.db_path}: {e}") from e
        finally:
            conn.close()

    def enqueue_result(self, job_name: str, build_number: int) -> None:
        conn = self._connect()
        try:
            cursor = conn.execute(
                'INSERT OR IGNORE INTO dispatch_queue (job_name, build_number, queued_at) '
                'VALUES (?, ?, ?)',
                (job_name, build_number, int(datetime.now(timezone.utc).timestamp())),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to queue {job_name} #{build_number}: {e}") from e
        finally:
            conn.close()

        if cursor.rowcount:
            logger.info(f"Queued detection result of {job_name} #{build_number}")
        else:
            logger.debug(f"Result of {job_name} #{build_number} already queued")

    def pending(self, limit: int = 1000) -> List[QueuedResult]:
        """Queued entries, oldest first. Nothing is removed."""
        conn = self._connect()
        try:
            rows = conn.execute(
                'SELECT job_name, build_number FROM dispatch_queue ORDER BY id ASC LIMIT ?',
                (limit,),
            ).fetchall()
        finally:
            conn.close()
        return [QueuedResult(job_name, build_number) for job_name, build_number in rows]

    def pop_next(self) -> Optional[QueuedResult]:
        """Remove and return the oldest entry, or None if the queue is empty."""
        conn = self._connect()
        try:
            row = conn.execute(
                'SELECT id, job_name, build_number FROM dispatch_queue ORDER BY id ASC LIMIT 1'
            ).fetchone()
            if row is None:
                return None
            conn.execute('DELETE FROM dispatch_queue WHERE id = ?', (row[0],))
            conn.commit()
        finally:
            conn.close()
        return QueuedResult(row[1], row[2])

    def size(self) -> int:
        conn = self._connect()
        try:
            (count,) = conn.execute('SELECT COUNT(*) FROM dispatch_queue').fetchone()
        finally:
            conn.close()
        return int(count)

    def __len__(self) -> int:
        return self.size()


class MarkerFullScanScheduler:
    """Request the next run to be a full scan through a marker file.

    The marker records the cause and the requested delay; the service checks
    it when choosing the scan mode and clears it after a full scan.
    """

    def __init__(self, directory: Path):
        self.marker_path = directory / FULL_SCAN_MARKER

    def schedule_full_scan(self, delay_seconds: int, cause: str) -> None:
        self.marker_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "cause": cause,
            "delay_seconds": delay_seconds,
            "requested_at": datetime.now(timezone.utc).isoformat(),
        }
        self.marker_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info(f"Full scan scheduled: {cause}")

    def is_pending(self) -> bool:
        return self.marker_path.exists()

    def clear(self) -> None:
        self.marker_path.unlink(missing_ok=True)
