"""Ingestion Report - What One Catalog Refresh Loaded and Dropped.

A refresh never aborts because of one bad record: the record is dropped and
recorded here, and the rest of the batch still reaches the registry.

Key Concepts:
    - DroppedRecord: one provider block or model record left out, with cause
    - DropSummary: counts per DropReason for quick diagnosis
    - IngestionReport: immutable result of one ingest, with timing
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, computed_field

from .domain_type import DropReason


class DroppedRecord(BaseModel):
    """One upstream record left out of the snapshot.

    Attributes:
        provider_id: Provider block the record came from
        model_id: Model record key, None when the whole provider block was dropped
        reason: Category of the failure
        detail: Human-readable explanation (never empty)
    """

    provider_id: str
    model_id: str | None = None
    reason: DropReason
    detail: str = Field(min_length=1, max_length=1000)

    model_config = ConfigDict(frozen=True)


class DropSummary(RootModel[dict[DropReason, int]]):
    """Dropped record count distribution by reason.

    Computed Properties:
        total: Sum of all counts
        most_common: Reason with the highest count, None when nothing dropped
    """

    root: dict[DropReason, int] = Field(default_factory=dict)
    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def total(self) -> int:
        return sum(self.root.values())

    @computed_field
    @property
    def most_common(self) -> DropReason | None:
        if not self.root:
            return None
        return max(self.root.items(), key=lambda x: x[1])[0]


class IngestionReport(BaseModel):
    """Result of one catalog ingestion.

    Attributes:
        loaded: Number of models in the snapshot published by this ingest
        dropped: Records left out, in encounter order
        started_at: When normalization began
        finished_at: When the snapshot was published

    Example:
        >>> report = service.ingest(document)
        >>> print(f"{report.loaded} models, {report.dropped_count} dropped")
        >>> if report.drop_summary.most_common is DropReason.NORMALIZATION:
        ...     alert("upstream schema drift?")
    """

    loaded: int = Field(ge=0)
    dropped: tuple[DroppedRecord, ...] = ()
    started_at: datetime
    finished_at: datetime

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    @computed_field
    @property
    def drop_summary(self) -> DropSummary:
        counts = Counter(record.reason for record in self.dropped)
        return DropSummary(dict(counts))

    @computed_field
    @property
    def duration_ms(self) -> float:
        delta = self.finished_at - self.started_at
        return delta.total_seconds() * 1000

    def to_log_attributes(self) -> dict[str, Any]:
        """Flat, JSON-safe attributes for structured log records."""
        return {
            "ingest.loaded": self.loaded,
            "ingest.dropped": self.dropped_count,
            "ingest.duration_ms": self.duration_ms,
            "ingest.drop_summary": {k.value: v for k, v in self.drop_summary.root.items()},
        }


__all__ = ["DropSummary", "DroppedRecord", "IngestionReport"]
