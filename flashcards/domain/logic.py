import math
from dataclasses import replace
from datetime import date, datetime, timedelta

from .enums import CardStage
from .errors import InvalidArgument
from .state import ReviewState
from ..config import (
    FAILURE_INTERVAL_DAYS,
    FIRST_INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    MAX_SCORE,
    MIN_EASE_FACTOR,
    MIN_SCORE,
    PASSING_SCORE,
    SECOND_INTERVAL_DAYS,
)


def validate_score(score) -> int:
    # bool is an int subclass but never a meaningful score
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidArgument(f"score must be an integer, got {score!r}")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidArgument(f"score must be between {MIN_SCORE} and {MAX_SCORE}, got {score}")
    return score


def validate_state(state: ReviewState) -> ReviewState:
    if not math.isfinite(state.ease_factor):
        raise InvalidArgument(f"ease_factor must be finite: {state.ease_factor}")
    if state.ease_factor < MIN_EASE_FACTOR:
        raise InvalidArgument(f"ease_factor below {MIN_EASE_FACTOR}: {state.ease_factor}")
    if state.repetitions < 0:
        raise InvalidArgument(f"repetitions must be >= 0: {state.repetitions}")
    if state.current_interval < 0:
        raise InvalidArgument(f"current_interval must be >= 0: {state.current_interval}")
    return state


def ease_adjustment(score: int) -> float:
    """SM-2 ease delta: +0.1 at a perfect score, 0.0 at 4, -0.14 at 3."""
    miss = MAX_SCORE - score
    return 0.1 - miss * (0.08 + miss * 0.02)


def round_half_up(value: float) -> int:
    # intervals are never negative, so this is also half-away-from-zero
    return int(math.floor(value + 0.5))


def next_review_date_for(review_day: date, interval: int) -> date:
    """Calendar date ``interval`` days after the review, refusing dates the store cannot hold."""
    if interval > MAX_INTERVAL_DAYS or interval > (date.max - review_day).days:
        raise InvalidArgument(f"interval of {interval} days from {review_day} is out of range")
    return review_day + timedelta(days=interval)


def compute_next_review_state(state: ReviewState, score: int, now: datetime) -> ReviewState:
    """
    Apply one review outcome to a card's state and return the replacement state.

    The review day is ``now.date()``, so the caller decides the calendar by the
    time zone ``now`` carries. The input state is never modified.
    """
    validate_score(score)
    validate_state(state)
    if not isinstance(now, datetime):
        raise InvalidArgument(f"now must be a datetime, got {now!r}")

    review_day = now.date()

    if score < PASSING_SCORE:
        return replace(
            state,
            repetitions=0,
            current_interval=FAILURE_INTERVAL_DAYS,
            next_review_date=next_review_date_for(review_day, FAILURE_INTERVAL_DAYS),
            last_reviewed_at=now,
        )

    repetitions = state.repetitions + 1
    ease_factor = max(MIN_EASE_FACTOR, state.ease_factor + ease_adjustment(score))

    if repetitions == 1:
        interval = FIRST_INTERVAL_DAYS
    elif repetitions == 2:
        interval = SECOND_INTERVAL_DAYS
    else:
        interval = round_half_up(state.current_interval * ease_factor)

    return ReviewState(
        ease_factor=ease_factor,
        repetitions=repetitions,
        current_interval=interval,
        next_review_date=next_review_date_for(review_day, interval),
        last_reviewed_at=now,
    )


def is_due(state: ReviewState, today: date) -> bool:
    return state.next_review_date <= today


def stage_for(repetitions: int) -> CardStage:
    if repetitions <= 0:
        return CardStage.NEW
    if repetitions < 3:
        return CardStage.LEARNING
    return CardStage.MATURE
