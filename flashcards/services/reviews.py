from typing import NamedTuple

from django.db import transaction
import structlog
from ..data.models import Flashcard, ReviewLog
from ..data.repos import (
    get_existing_idempotent,
    get_flashcard_for_update,
    persist_review,
    save_review_state,
)
from ..domain.logic import compute_next_review_state, stage_for, validate_score
from ..domain.state import ReviewState
from ..utils.time import local_now, to_local_iso

logger = structlog.get_logger()


class ReviewOutcome(NamedTuple):
    flashcard: Flashcard
    state: ReviewState
    log: ReviewLog
    idempotent: bool


def record_review(user_id, flashcard_id, score: int, idempotency_key: str, now=None) -> ReviewOutcome:
    logger.info("review_received",
        user_id=str(user_id),
        flashcard_id=str(flashcard_id),
        score=score,
        idempotency_key=idempotency_key,
    )
    validate_score(score)
    now = now or local_now()

    # Row lock serializes concurrent reviews of the same card until commit
    with transaction.atomic():
        card = get_flashcard_for_update(user_id, flashcard_id)

        existing = get_existing_idempotent(card.pk, idempotency_key)
        if existing:
            logger.info("idempotent_reuse",
                user_id=str(user_id),
                flashcard_id=str(flashcard_id),
                next_review_date=existing.next_review_date.isoformat(),
            )
            return ReviewOutcome(card, existing.review_state(), existing, True)

        state = compute_next_review_state(card.review_state(), score, now)
        save_review_state(card, state)
        log, was_idempotent = persist_review(card, score, idempotency_key, state)
        if was_idempotent:
            # A duplicate won the insert race: undo our state write, keep theirs
            transaction.set_rollback(True)

    if was_idempotent:
        card.refresh_from_db()
        logger.info("idempotent_reuse",
            user_id=str(user_id),
            flashcard_id=str(flashcard_id),
            next_review_date=log.next_review_date.isoformat(),
        )
        return ReviewOutcome(card, log.review_state(), log, True)

    logger.info("review_scheduled",
        user_id=str(user_id),
        flashcard_id=str(flashcard_id),
        ease_factor=state.ease_factor,
        repetitions=state.repetitions,
        interval_days=state.current_interval,
        stage=stage_for(state.repetitions).value,
        next_review_date=state.next_review_date.isoformat(),
        reviewed_at_local=to_local_iso(state.last_reviewed_at),
    )

    return ReviewOutcome(card, state, log, False)
