"""
Draft persistence for the store form.

A draft is a single JSON record under one storage key holding the field
values, the current step and the metadata (never the bytes) of staged
images. Drafts older than 24 hours are discarded instead of restored.
"""

from __future__ import annotations

import json
import logging
import re
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from models.enums import FileSlot
from models.schema import DraftRecord
from validators.slug import slugify
from .session import FormSession, TOTAL_STEPS, collect_form_data, values_from_form_data, TEXT_FIELDS

logger = logging.getLogger(__name__)

DEFAULT_DRAFT_KEY = "store-form-draft"
DEFAULT_MAX_AGE = timedelta(hours=24)
DEFAULT_AUTOSAVE_DELAY = 2.0

# Storage keys become file names
_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
_DRAFT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _epoch_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


# ------------------------------------------------------------------
# Storage backends
# ------------------------------------------------------------------

class DraftStorage(ABC):
    """Minimal string key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryStorage(DraftStorage):
    """In-process storage, used by tests and when no draft dir is configured."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage(DraftStorage):
    """One `<key>.json` file per key inside a directory."""

    def __init__(self, directory: Path | str):
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid draft key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


# ------------------------------------------------------------------
# Record building / restoring
# ------------------------------------------------------------------

def build_draft_record(session: FormSession, now: Optional[datetime] = None) -> DraftRecord:
    """Snapshot a session; staged files keep only name/size/type."""
    now = now or _utcnow()
    return DraftRecord(
        data=collect_form_data(session, now),
        current_step=session.current_step,
        uploaded_files={
            slot: (staged.metadata() if staged else None)
            for slot, staged in session.staged_files.items()
        },
        timestamp=_epoch_ms(now),
    )


def restore_session(record: DraftRecord) -> FormSession:
    """
    Rebuild a session from a draft.

    Staged files stay empty: their bytes were never saved and the user has
    to select them again. A slug that differs from the one the store name
    would produce is treated as manually edited.
    """
    values = {f: "" for f in TEXT_FIELDS}
    values.update(values_from_form_data(record.data))

    slug = values.get("store_slug", "")
    manually_edited = bool(slug) and slug != slugify(values.get("store_name", ""))

    session = FormSession(values=values, slug_manually_edited=manually_edited)
    if 1 <= record.current_step <= TOTAL_STEPS:
        session = session.with_step(record.current_step)
    return session


# ------------------------------------------------------------------
# Draft store
# ------------------------------------------------------------------

class DraftStore:
    """Save, load and clear the single draft record."""

    def __init__(
        self,
        storage: DraftStorage,
        key: str = DEFAULT_DRAFT_KEY,
        max_age: timedelta = DEFAULT_MAX_AGE,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._storage = storage
        self._key = key
        self._max_age = max_age
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    def save(self, record: DraftRecord) -> None:
        self._storage.set(self._key, json.dumps(record.to_dict()))
        logger.info("Form auto-saved (step %d)", record.current_step)

    def save_session(self, session: FormSession) -> DraftRecord:
        record = build_draft_record(session, self._clock())
        self.save(record)
        return record

    def load(self) -> Optional[DraftRecord]:
        """
        Return the stored draft if it is fresh.

        Stale and unreadable drafts are removed. Loading never applies the
        draft; the caller asks the user first.
        """
        try:
            raw = self._storage.get(self._key)
            if raw is None:
                return None
            record = DraftRecord.from_dict(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, TypeError, UnicodeDecodeError, OSError) as e:
            logger.error("Error loading draft: %s", e)
            self._storage.remove(self._key)
            return None

        age_ms = _epoch_ms(self._clock()) - record.timestamp
        if age_ms > self._max_age.total_seconds() * 1000:
            logger.info("Discarding draft older than %s", self._max_age)
            self._storage.remove(self._key)
            return None

        return record

    def clear(self) -> None:
        self._storage.remove(self._key)
        logger.info("Draft cleared")

    def saved_at(self, record: DraftRecord) -> datetime:
        return datetime.fromtimestamp(record.timestamp / 1000, tz=timezone.utc)


def describe_saved_files(record: DraftRecord) -> Dict[FileSlot, str]:
    """Names of images that were staged when the draft was saved."""
    return {
        slot: meta.name
        for slot, meta in record.uploaded_files.items()
        if meta is not None
    }


# ------------------------------------------------------------------
# Debounced autosave
# ------------------------------------------------------------------

class AutosaveScheduler:
    """
    Debounced draft writer.

    Each `schedule()` cancels the pending write and starts a new quiet
    period, so a burst of edits produces one write of the last session.
    """

    def __init__(
        self,
        store: DraftStore,
        delay: float = DEFAULT_AUTOSAVE_DELAY,
        timer_factory: Callable = threading.Timer,
    ):
        self._store = store
        self._delay = delay
        self._timer_factory = timer_factory
        self._timer = None
        self._pending: Optional[FormSession] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, session: FormSession) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = session
            self._timer = self._timer_factory(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> None:
        """Write the pending snapshot now instead of waiting."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
        self._fire()

    def _fire(self) -> None:
        with self._lock:
            session, self._pending = self._pending, None
            self._timer = None
        if session is None:
            return
        try:
            self._store.save_session(session)
        except Exception:
            logger.exception("Auto-save failed")


# ------------------------------------------------------------------
# Per-browser draft keys
# ------------------------------------------------------------------

def new_draft_id() -> str:
    return uuid.uuid4().hex


def resolve_draft_id(requested: Optional[str]) -> str:
    """Keep a well-formed id from the browser; anything else gets a fresh one."""
    if requested and _DRAFT_ID_PATTERN.match(requested):
        return requested
    return new_draft_id()


def browser_draft_key(base_key: str, draft_id: str) -> str:
    """Storage key of one browser's draft, e.g. `store-form-draft-<id>`."""
    return f"{base_key}-{draft_id}"
