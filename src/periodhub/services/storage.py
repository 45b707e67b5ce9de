"""Local journal storage using TinyDB."""

import logging
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from tinydb import Query, TinyDB
from tinydb.table import Document, Table

from ..exceptions import DuplicateEntry, EntryNotFound, ImportFailed
from ..models.assessment import AssessmentKind, StoredAssessment
from ..models.journal import ProgressEntry, SymptomEntry
from ..models.pain import PainRecord
from ..utils.config import Settings, get_settings
from ..utils.numbers import round_half_up

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0.0"
BYTES_PER_ENTRY = 200

M = TypeVar("M", bound=BaseModel)


class Namespace(str, Enum):
    """Journal namespaces, one TinyDB table each."""
    SYMPTOMS = "symptom_entries"
    PAIN = "pain_records"
    PROGRESS = "stress_progress"


NAMESPACE_MODELS: dict[Namespace, Type[BaseModel]] = {
    Namespace.SYMPTOMS: SymptomEntry,
    Namespace.PAIN: PainRecord,
    Namespace.PROGRESS: ProgressEntry,
}


@dataclass
class StorageInfo:
    """Fill level of a namespace against its capacity."""
    namespace: str
    total: int
    capacity: int
    warning_percent: int

    @property
    def usage_percent(self) -> int:
        return round_half_up(self.total / self.capacity * 100)

    @property
    def is_near_full(self) -> bool:
        return self.usage_percent >= self.warning_percent

    @property
    def is_full(self) -> bool:
        return self.usage_percent >= 100

    @property
    def estimated_bytes(self) -> int:
        return self.total * BYTES_PER_ENTRY


class JournalStorage:
    """
    Local storage for journal entries and assessment results using TinyDB.

    Each namespace is a table whose insertion order is the chronological
    order of the entries; "oldest" always means first inserted.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._db: Optional[TinyDB] = None

    @property
    def db_path(self) -> Path:
        """Path to the database file."""
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        return self.settings.data_dir / "periodhub.json"

    @property
    def db(self) -> TinyDB:
        """Get the TinyDB instance."""
        if self._db is None:
            self._db = TinyDB(self.db_path, encoding="utf-8", ensure_ascii=False)
            meta = self._db.table("meta")
            if not meta.all():
                meta.insert({"schema_version": SCHEMA_VERSION})
        return self._db

    @property
    def schema_version(self) -> str:
        rows = self.db.table("meta").all()
        return rows[0].get("schema_version", SCHEMA_VERSION) if rows else SCHEMA_VERSION

    def table(self, namespace: Namespace) -> Table:
        return self.db.table(Namespace(namespace).value)

    def _parse(self, namespace: Namespace | str, model: Type[M], row: Optional[Document]) -> Optional[M]:
        """Validate one stored row; corrupt rows are logged and read as missing."""
        if row is None:
            return None
        try:
            return model.model_validate(row)
        except ValidationError as e:
            name = getattr(namespace, "value", namespace)
            logger.warning(f"Skipping corrupt {name} row {row.doc_id}: {e}")
            return None

    def _load(self, namespace: Namespace, model: Type[M], rows: Optional[list[Document]] = None) -> list[M]:
        """Read rows of a namespace (all by default), skipping rows that no longer validate."""
        if rows is None:
            rows = self.table(namespace).all()
        parsed = (self._parse(namespace, model, row) for row in rows)
        return [item for item in parsed if item is not None]

    def _capacity(self, namespace: Namespace) -> int:
        return {
            Namespace.SYMPTOMS: self.settings.symptom_max_entries,
            Namespace.PAIN: self.settings.pain_max_records,
            Namespace.PROGRESS: self.settings.progress_max_entries,
        }[namespace]

    # Symptom journal

    def add_symptom_entry(self, entry: SymptomEntry) -> SymptomEntry:
        """Append a symptom entry."""
        self.table(Namespace.SYMPTOMS).insert(entry.model_dump(mode="json"))
        logger.info(f"Saved symptom entry {entry.id} for {entry.entry_date}")
        return entry

    def list_symptom_entries(self) -> list[SymptomEntry]:
        """All symptom entries, oldest first."""
        return self._load(Namespace.SYMPTOMS, SymptomEntry)

    def get_symptom_entry(self, entry_id: str) -> Optional[SymptomEntry]:
        Entry = Query()
        row = self.table(Namespace.SYMPTOMS).get(Entry.id == entry_id)
        return self._parse(Namespace.SYMPTOMS, SymptomEntry, row)

    def delete_symptom_entry(self, entry_id: str) -> bool:
        return self._delete(Namespace.SYMPTOMS, entry_id)

    # Pain tracker

    def add_pain_record(self, record: PainRecord, overwrite: bool = False) -> PainRecord:
        """
        Save a pain record.

        Only one record is kept per date. A second record on the same date
        raises DuplicateEntry unless ``overwrite`` is set, in which case it
        replaces the existing record in place and keeps its id.
        """
        Record = Query()
        table = self.table(Namespace.PAIN)
        existing = table.get(Record.entry_date == record.entry_date.isoformat())

        if existing is None:
            table.insert(record.model_dump(mode="json"))
            logger.info(f"Saved pain record {record.id} for {record.entry_date}")
            return record

        if not overwrite:
            raise DuplicateEntry(record.entry_date)

        previous = self._parse(Namespace.PAIN, PainRecord, existing)
        kept = {"id": previous.id, "created_at": previous.created_at} if previous else {}
        replacement = record.model_copy(update={**kept, "updated_at": datetime.now()})
        table.update(replacement.model_dump(mode="json"), doc_ids=[existing.doc_id])
        logger.info(f"Overwrote pain record {replacement.id} for {record.entry_date}")
        return PainRecord.model_validate(table.get(doc_id=existing.doc_id))

    def update_pain_record(self, record_id: str, **changes: Any) -> PainRecord:
        """Apply changes to a record; moving it onto a date that already has one raises DuplicateEntry."""
        current = self.get_pain_record(record_id)
        if current is None:
            raise EntryNotFound(record_id)
        updated = PainRecord.model_validate({
            **current.model_dump(),
            **changes,
            "updated_at": datetime.now(),
        })
        Record = Query()
        if updated.entry_date != current.entry_date:
            clash = self.table(Namespace.PAIN).get(
                (Record.entry_date == updated.entry_date.isoformat()) & (Record.id != record_id)
            )
            if clash is not None:
                raise DuplicateEntry(updated.entry_date)
        self.table(Namespace.PAIN).update(updated.model_dump(mode="json"), Record.id == record_id)
        return updated

    def get_pain_record(self, record_id: str) -> Optional[PainRecord]:
        Record = Query()
        row = self.table(Namespace.PAIN).get(Record.id == record_id)
        return self._parse(Namespace.PAIN, PainRecord, row)

    def list_pain_records(self) -> list[PainRecord]:
        """All pain records, oldest first."""
        return self._load(Namespace.PAIN, PainRecord)

    def pain_records_in_range(self, start_date: date, end_date: date) -> list[PainRecord]:
        """Pain records within a date range, sorted by date."""
        Record = Query()
        rows = self.table(Namespace.PAIN).search(
            (Record.entry_date >= start_date.isoformat()) &
            (Record.entry_date <= end_date.isoformat())
        )
        records = self._load(Namespace.PAIN, PainRecord, rows)
        records.sort(key=lambda r: r.recorded_at)
        return records

    def delete_pain_record(self, record_id: str) -> bool:
        return self._delete(Namespace.PAIN, record_id)

    # Stress-management progress

    def add_progress_entry(self, entry: ProgressEntry) -> ProgressEntry:
        """Append a progress entry, dropping the oldest beyond the configured maximum."""
        table = self.table(Namespace.PROGRESS)
        table.insert(entry.model_dump(mode="json"))

        overflow = len(table) - self.settings.progress_max_entries
        if overflow > 0:
            self.delete_oldest(Namespace.PROGRESS, overflow)
        return entry

    def update_progress_entry(self, entry_id: str, **changes: Any) -> ProgressEntry:
        Entry = Query()
        row = self.table(Namespace.PROGRESS).get(Entry.id == entry_id)
        if row is None:
            raise EntryNotFound(entry_id)
        updated = ProgressEntry.model_validate({**row, **changes, "timestamp": time.time() * 1000})
        self.table(Namespace.PROGRESS).update(updated.model_dump(mode="json"), doc_ids=[row.doc_id])
        return updated

    def delete_progress_entry(self, entry_id: str) -> bool:
        return self._delete(Namespace.PROGRESS, entry_id)

    def list_progress(self) -> list[ProgressEntry]:
        """All progress entries, oldest first."""
        return self._load(Namespace.PROGRESS, ProgressEntry)

    def recent_progress(self, count: int = 10) -> list[ProgressEntry]:
        """The newest ``count`` progress entries, newest first."""
        entries = sorted(self.list_progress(), key=lambda e: e.timestamp, reverse=True)
        return entries[:count]

    def progress_in_range(self, start_date: date, end_date: date) -> list[ProgressEntry]:
        return [e for e in self.list_progress() if start_date <= e.entry_date <= end_date]

    def progress_today(self) -> list[ProgressEntry]:
        today = date.today()
        return self.progress_in_range(today, today)

    def progress_this_week(self) -> list[ProgressEntry]:
        """Entries since the start of the calendar week (Sunday)."""
        today = date.today()
        return self.progress_in_range(today - timedelta(days=(today.weekday() + 1) % 7), today)

    def progress_this_month(self) -> list[ProgressEntry]:
        today = date.today()
        return self.progress_in_range(today.replace(day=1), today)

    def clear_progress(self) -> None:
        self.table(Namespace.PROGRESS).truncate()
        logger.info("Cleared stress progress entries")

    # Shared namespace operations

    def _delete(self, namespace: Namespace, entry_id: str) -> bool:
        Entry = Query()
        removed = self.table(namespace).remove(Entry.id == entry_id)
        return len(removed) > 0

    def delete_oldest(self, namespace: Namespace, count: int) -> int:
        """
        Delete the ``count`` oldest entries of a namespace.

        Removes exactly ``min(count, total)`` entries and leaves the rest in
        their original order. Returns the number removed.
        """
        if count <= 0:
            return 0
        table = self.table(namespace)
        doc_ids = sorted(doc.doc_id for doc in table.all())[:count]
        if doc_ids:
            table.remove(doc_ids=doc_ids)
            logger.info(f"Deleted {len(doc_ids)} oldest entries from {Namespace(namespace).value}")
        return len(doc_ids)

    def storage_info(self, namespace: Namespace) -> StorageInfo:
        namespace = Namespace(namespace)
        return StorageInfo(
            namespace=namespace.value,
            total=len(self.table(namespace)),
            capacity=self._capacity(namespace),
            warning_percent=self.settings.storage_warning_percent,
        )

    # Assessment history

    def save_assessment(self, kind: AssessmentKind, result: BaseModel) -> StoredAssessment:
        """Store an assessment result, keeping the newest few of each kind."""
        stored = StoredAssessment(kind=kind, result=result.model_dump(mode="json"))
        table = self.db.table("assessments")
        table.insert(stored.model_dump(mode="json"))

        Assessment = Query()
        rows = table.search(Assessment.kind == kind.value)
        overflow = len(rows) - self.settings.assessment_history_limit
        if overflow > 0:
            oldest = sorted(r.doc_id for r in rows)[:overflow]
            table.remove(doc_ids=oldest)
        return stored

    def assessment_history(self, kind: AssessmentKind) -> list[StoredAssessment]:
        """Stored results of one kind, newest first."""
        Assessment = Query()
        rows = self.db.table("assessments").search(Assessment.kind == kind.value)
        rows.sort(key=lambda r: r.doc_id, reverse=True)
        parsed = (self._parse("assessments", StoredAssessment, r) for r in rows)
        return [item for item in parsed if item is not None]

    # Export / import

    def export_data(self) -> dict:
        """Everything in the journal as a JSON-compatible mapping."""
        return {
            "schema_version": self.schema_version,
            "exported_at": datetime.now().isoformat(),
            **{ns.value: [dict(row) for row in self.table(ns).all()] for ns in Namespace},
        }

    def import_data(self, payload: dict, replace: bool = False) -> dict[str, int]:
        """
        Import a previously exported payload.

        Every namespace present must be a list of valid records, otherwise
        nothing is written. Entries whose id already exists are skipped
        unless ``replace`` clears the namespace first.
        """
        if not isinstance(payload, dict):
            raise ImportFailed("Import data must be a JSON object")

        parsed: dict[Namespace, list[BaseModel]] = {}
        for ns, model in NAMESPACE_MODELS.items():
            rows = payload.get(ns.value)
            if rows is None:
                continue
            if not isinstance(rows, list):
                raise ImportFailed(f"'{ns.value}' must be a list")
            try:
                parsed[ns] = [model.model_validate(r) for r in rows]
            except ValidationError as e:
                raise ImportFailed(f"Invalid record in '{ns.value}': {e.errors()[0]['msg']}") from e

        if not parsed:
            raise ImportFailed("Import data contains no journal entries")

        counts = {}
        for ns, items in parsed.items():
            table = self.table(ns)
            if replace:
                table.truncate()
            existing_ids = {row.get("id") for row in table.all()}
            new_rows = [i.model_dump(mode="json") for i in items if i.id not in existing_ids]
            table.insert_multiple(new_rows)
            counts[ns.value] = len(new_rows)

        logger.info(f"Imported journal data: {counts}")
        return counts

    def close(self) -> None:
        """Close the database connection."""
        if self._db:
            self._db.close()
            self._db = None

    def __enter__(self) -> "JournalStorage":
        return self

    def __exit__(self, *args) -> None:
        self.close()
