from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..config import DEFAULT_EASE_FACTOR


@dataclass(frozen=True)
class ReviewState:
    ease_factor: float
    repetitions: int
    current_interval: int
    next_review_date: date
    last_reviewed_at: Optional[datetime] = None

    @classmethod
    def initial(cls, today: date) -> "ReviewState":
        """State of a freshly created card: due immediately, never reviewed."""
        return cls(
            ease_factor=DEFAULT_EASE_FACTOR,
            repetitions=0,
            current_interval=0,
            next_review_date=today,
            last_reviewed_at=None,
        )
