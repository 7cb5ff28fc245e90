import json
import threading

import structlog

from ..domain.entities import StudentRecord, Roster, UNASSIGNED
from ..domain.errors import StorageError
from ..infrastructure.metrics import roster_mutations_total, roster_size, storage_errors_total
from ..infrastructure.storage import KeyValueStore

logger = structlog.get_logger()

FIELDS = ("id", "name", "email", "course", "image")


def encode_roster(roster: Roster) -> bytes:
    return json.dumps([r.to_dict() for r in roster], ensure_ascii=False).encode("utf-8")


def decode_roster(raw: bytes) -> Roster | None:
    """Parse a stored roster. Returns None when the value is not a list of student objects."""
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        return None
    if not isinstance(data, list):
        return None
    records = []
    for item in data:
        if not isinstance(item, dict):
            return None
        if not all(isinstance(item.get(f, ""), str) for f in FIELDS) or not item.get("id"):
            return None
        records.append(StudentRecord(**{f: item.get(f, "") for f in FIELDS}))
    if len({r.id for r in records}) != len(records):
        return None
    return tuple(records)


def course_counts(roster: Roster) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in roster:
        key = record.course or UNASSIGNED
        counts[key] = counts.get(key, 0) + 1
    return counts


class RosterStore:
    """The authoritative in-memory roster, mirrored to one key of a byte store.

    Every mutation builds a new tuple and rewrites the whole serialized
    roster while holding a lock, so requests served from different worker
    threads cannot overwrite each other's result. Storage failures are
    logged and never raised: an unreadable store loads as an empty roster,
    and a failed write leaves the new roster in memory only.
    """

    def __init__(self, storage: KeyValueStore, key: str = "students"):
        self.storage = storage
        self.key = key
        self._roster: Roster = ()
        self._lock = threading.Lock()

    @property
    def roster(self) -> Roster:
        return self._roster

    def get(self, student_id: str) -> StudentRecord | None:
        return next((r for r in self._roster if r.id == student_id), None)

    def load(self) -> Roster:
        try:
            raw = self.storage.get(self.key)
        except StorageError as e:
            storage_errors_total.labels(operation="read").inc()
            logger.warning("storage_read_failed", key=self.key, error=str(e))
            raw = None

        if raw is None:
            roster: Roster = ()
        else:
            decoded = decode_roster(raw)
            if decoded is None:
                logger.warning("roster_decode_failed", key=self.key, size=len(raw))
                roster = ()
            else:
                roster = decoded

        with self._lock:
            self._set(roster)
        logger.info("roster_loaded", key=self.key, count=len(roster))
        return roster

    def upsert(self, record: StudentRecord) -> Roster:
        with self._lock:
            if any(r.id == record.id for r in self._roster):
                roster = tuple(record if r.id == record.id else r for r in self._roster)
                roster_mutations_total.labels(operation="update").inc()
            else:
                roster = (record,) + self._roster
                roster_mutations_total.labels(operation="insert").inc()
            self._commit(roster)
        return roster

    def remove(self, student_id: str) -> Roster:
        with self._lock:
            roster = tuple(r for r in self._roster if r.id != student_id)
            roster_mutations_total.labels(operation="remove").inc()
            self._commit(roster)
        return roster

    def reset(self) -> Roster:
        with self._lock:
            try:
                self.storage.clear()
            except StorageError as e:
                storage_errors_total.labels(operation="clear").inc()
                logger.error("storage_clear_failed", error=str(e))
            self._set(())
        logger.info("roster_reset")
        return ()

    def course_counts(self) -> dict[str, int]:
        return course_counts(self._roster)

    def _commit(self, roster: Roster) -> None:
        self._set(roster)
        try:
            self.storage.set(self.key, encode_roster(roster))
        except StorageError as e:
            storage_errors_total.labels(operation="write").inc()
            logger.error("storage_write_failed", key=self.key, error=str(e))

    def _set(self, roster: Roster) -> None:
        self._roster = roster
        roster_size.set(len(roster))
