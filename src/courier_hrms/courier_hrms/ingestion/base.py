"""Row-by-row spreadsheet ingestion.

Every upload follows the same steps per row: read the identity cell, resolve
it against the identity store, build a record, persist it with an upsert on
(identity, period), then run side effects. Rows are handled sequentially in
sheet order so a duplicate later in the sheet overwrites an earlier one.
A failing row is counted and reported; it never aborts the batch.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Optional, Sequence, TypeVar

from ..core.enums import FailureReason
from ..core.exceptions import DuplicateEntryError, RenderError
from ..spreadsheets.normalizer import Row, resolve_text
from ..users.model import Employee
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class RowFailure:
    row: int
    identifier: str
    reason: str

    def to_dict(self) -> dict:
        return {"row": self.row, "identifier": self.identifier, "reason": self.reason}


@dataclass
class IngestionResult:
    total: int = 0
    success: int = 0
    failed: int = 0
    skipped_identifiers: list[str] = field(default_factory=list)
    failures: list[RowFailure] = field(default_factory=list)

    def record_success(self) -> None:
        self.success += 1

    def record_failure(self, row: int, identifier: str, reason: str, *, skipped: Optional[str] = None) -> None:
        self.failed += 1
        self.failures.append(RowFailure(row=row, identifier=identifier, reason=reason))
        if skipped:
            self.skipped_identifiers.append(skipped)

    def to_dict(self, *, detailed: bool = False) -> dict:
        data = {
            "total": self.total,
            "success": self.success,
            "failed": self.failed,
            "skippedIdentifiers": list(self.skipped_identifiers),
        }
        if detailed:
            data.update(
                {
                    "totalRows": self.total,
                    "successCount": self.success,
                    "failedCount": self.failed,
                    "failures": [f.to_dict() for f in self.failures],
                }
            )
        return data


class RowIngestionPipeline(ABC, Generic[RecordT]):
    """Template method: subclasses supply identity headers and record building."""

    identity_headers: Sequence[str] = ()

    def __init__(self, users: UserRepository):
        self._users = users

    def run(self, rows: Iterable[Row], context: Any) -> IngestionResult:
        result = IngestionResult()
        for index, row in enumerate(rows, start=1):
            result.total += 1
            self._process_row(index, row, context, result)

        logger.info(
            "%s: %s rows, %s ok, %s failed",
            type(self).__name__,
            result.total,
            result.success,
            result.failed,
        )
        return result

    def _process_row(self, index: int, row: Row, context: Any, result: IngestionResult) -> None:
        identifier = resolve_text(row, self.identity_headers)
        if not identifier:
            result.record_failure(index, "", FailureReason.MISSING_IDENTIFIER.value)
            return

        employee = self._users.find_by_fhr_id(identifier)
        if not employee:
            logger.info("Row %s: identity %r not found", index, identifier)
            result.record_failure(
                index,
                identifier,
                FailureReason.NOT_FOUND.value,
                skipped=self.skipped_label(identifier, FailureReason.NOT_FOUND),
            )
            return

        try:
            record = self.build_record(row, employee, context)
            record = self.before_persist(record)
            self.persist(record)
        except RenderError:
            self._fail(index, identifier, FailureReason.GENERATION_ERROR, result)
            return
        except DuplicateEntryError:
            self._fail(index, identifier, FailureReason.DUPLICATE_ENTRY, result)
            return
        except Exception:
            logger.exception("Row %s (%s) could not be stored", index, identifier)
            self._fail(index, identifier, FailureReason.PERSISTENCE_ERROR, result)
            return

        result.record_success()
        try:
            self.after_persist(record, employee, context)
        except Exception:
            logger.warning("Post-processing failed for row %s (%s)", index, identifier, exc_info=True)

    def _fail(self, index: int, identifier: str, reason: FailureReason, result: IngestionResult) -> None:
        result.record_failure(index, identifier, reason.value, skipped=self.skipped_label(identifier, reason))

    def skipped_label(self, identifier: str, reason: FailureReason) -> Optional[str]:
        """Entry for ``skipped_identifiers``; only unresolved identities by default."""
        return identifier if reason == FailureReason.NOT_FOUND else None

    @abstractmethod
    def build_record(self, row: Row, employee: Employee, context: Any) -> RecordT:
        raise NotImplementedError

    def before_persist(self, record: RecordT) -> RecordT:
        return record

    @abstractmethod
    def persist(self, record: RecordT) -> None:
        raise NotImplementedError

    def after_persist(self, record: RecordT, employee: Employee, context: Any) -> None:
        return None
