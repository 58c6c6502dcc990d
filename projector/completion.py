# projector/completion.py
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Protocol

from .chain import advance
from .errors import NotFound
from .models import DONE, NewOccurrenceRequest, Occurrence, Termination

LOGGER = logging.getLogger(__name__)

CREATED = "created"
TERMINATED = "terminated"
NOT_RECURRING = "not_recurring"
SKIPPED = "skipped"
FAILED = "failed"


class OccurrenceStore(Protocol):
    def get_occurrence(self, occurrence_id: int) -> Occurrence | None: ...

    def update_status(self, occurrence_id: int, status: str) -> bool: ...

    def insert_occurrence(self, request: NewOccurrenceRequest) -> int: ...


@dataclass(frozen=True)
class TransitionResult:
    occurrence_id: int
    previous_status: str
    status: str

    @property
    def changed(self) -> bool:
        return self.previous_status != self.status


@dataclass(frozen=True)
class ChainResult:
    outcome: str
    next_id: int | None = None
    next_due_date: str = ""
    error: str = ""


@dataclass(frozen=True)
class CompletionResult:
    """
    Outcome of completing one occurrence. Only `transition` decides success;
    `chain` reports what happened to the recurrence and may be a failure.
    """
    transition: TransitionResult
    chain: ChainResult

    def to_dict(self) -> dict:
        data = asdict(self)
        data["transition"]["changed"] = self.transition.changed
        return data


def continue_chain(store: OccurrenceStore, occurrence: Occurrence) -> ChainResult:
    """Create the successor of `occurrence`, reporting failures instead of raising them."""
    if not occurrence.is_recurring:
        return ChainResult(outcome=NOT_RECURRING)

    try:
        decision = advance(occurrence)
        if isinstance(decision, Termination):
            LOGGER.info("Recurrence of occurrence %s finished: %s", occurrence.id, decision.to_error())
            return ChainResult(
                outcome=TERMINATED,
                next_due_date=decision.next_due,
                error=str(decision.to_error()),
            )
        next_id = store.insert_occurrence(decision)
    except Exception as e:
        # completion already happened; the chain is best-effort
        LOGGER.warning("Failed to create next repeated occurrence for %s: %s", occurrence.id, e)
        return ChainResult(outcome=FAILED, error=f"{type(e).__name__}: {e}")

    LOGGER.info(
        "Created occurrence %s due %s (remaining repeats: %s) after %s",
        next_id, decision.due_date, decision.repeat_count, occurrence.id,
    )
    return ChainResult(outcome=CREATED, next_id=next_id, next_due_date=decision.due_date)


def complete_occurrence(store: OccurrenceStore, occurrence_id: int) -> CompletionResult:
    """
    Mark an occurrence done, then create its successor if it repeats.

    The status write and the successor insert are separate store calls with no
    transaction around them: if the insert fails (or the process dies in between)
    the occurrence stays done and the chain ends there. Raises NotFound only.
    """
    occurrence = store.get_occurrence(occurrence_id)
    if occurrence is None:
        raise NotFound("occurrence", occurrence_id)

    if occurrence.status == DONE:
        LOGGER.info("Occurrence %s is already done", occurrence_id)
        return CompletionResult(
            transition=TransitionResult(occurrence_id, occurrence.status, DONE),
            chain=ChainResult(outcome=SKIPPED),
        )

    if not store.update_status(occurrence_id, DONE):
        if store.get_occurrence(occurrence_id) is None:
            raise NotFound("occurrence", occurrence_id)
        # another completion got there first and owns the successor
        LOGGER.info("Occurrence %s was completed concurrently", occurrence_id)
        return CompletionResult(
            transition=TransitionResult(occurrence_id, DONE, DONE),
            chain=ChainResult(outcome=SKIPPED),
        )
    LOGGER.info("Marked occurrence %s done", occurrence_id)

    # the snapshot read above still says pending; advance() ignores status
    chain = continue_chain(store, occurrence)
    return CompletionResult(
        transition=TransitionResult(occurrence_id, occurrence.status, DONE),
        chain=chain,
    )
