from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field, field_validator

from linkstash.models.link.record import LinkRecord


class OutcomeStatus(str, Enum):
    ADDED = "added"
    SKIPPED = "skipped"
    FAILED = "failed"


class ItemOutcome(BaseModel):
    """What happened to one candidate URL during a batch run."""

    url: str
    status: OutcomeStatus
    reason: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        """``added``, ``skipped: <reason>`` or ``failed: <message>``."""
        if self.status is OutcomeStatus.ADDED:
            return self.status.value
        return f"{self.status.value}: {self.reason}"


class BatchResult(BaseModel):
    """Outcome of one orchestrator pass.

    ``new_records`` is the full working list: the records known before the
    run followed by the ones accepted during it, in input order.  It is the
    collection to persist.
    """

    added: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: list[ItemOutcome] = Field(default_factory=list)
    new_records: list[LinkRecord] = Field(default_factory=list)

    @classmethod
    def from_outcomes(
        cls, outcomes: list[ItemOutcome], records: list[LinkRecord]
    ) -> BatchResult:
        def count(status: OutcomeStatus) -> int:
            return sum(1 for o in outcomes if o.status is status)

        return cls(
            added=count(OutcomeStatus.ADDED),
            skipped=count(OutcomeStatus.SKIPPED),
            failed=count(OutcomeStatus.FAILED),
            outcomes=outcomes,
            new_records=records,
        )

    @property
    def summary(self) -> str:
        return (
            f"{self.added} added, {self.skipped} skipped, {self.failed} failed"
        )


class BatchRequest(BaseModel):
    """Request body for POST /links."""

    urls: list[str]

    @field_validator("urls")
    @classmethod
    def _drop_blank_and_comment_lines(cls, urls: list[str]) -> list[str]:
        stripped = (u.strip() for u in urls)
        return [u for u in stripped if u and not u.startswith("#")]


class BatchResponse(BaseModel):
    """API response shape for a batch run.

    The persisted collection is intentionally left out; fetch it with
    ``GET /links``.
    """

    added: int
    skipped: int
    failed: int
    outcomes: list[ItemOutcome]

    @classmethod
    def from_result(cls, result: BatchResult) -> BatchResponse:
        return cls(
            added=result.added,
            skipped=result.skipped,
            failed=result.failed,
            outcomes=result.outcomes,
        )
