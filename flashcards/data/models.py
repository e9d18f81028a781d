import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASE_FACTOR, MIN_EASE_FACTOR
from ..domain.state import ReviewState

# Columns owned by the scheduler; nothing else writes them
REVIEW_STATE_FIELDS = [
    "ease_factor",
    "repetitions",
    "current_interval",
    "next_review_date",
    "last_reviewed_at",
]


class Flashcard(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField()
    discipline = models.CharField(max_length=200)
    subject = models.CharField(max_length=200)
    question = models.TextField()
    answer = models.TextField()

    ease_factor = models.FloatField(
        default=DEFAULT_EASE_FACTOR, validators=[MinValueValidator(MIN_EASE_FACTOR)]
    )
    repetitions = models.PositiveIntegerField(default=0)
    current_interval = models.PositiveIntegerField(default=0)  # days
    next_review_date = models.DateField(default=timezone.localdate)
    last_reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "flashcards"
        indexes = [
            models.Index(fields=["user_id", "next_review_date"], name="flashcard_user_due_idx"),
        ]

    def review_state(self) -> ReviewState:
        return ReviewState(
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
            current_interval=self.current_interval,
            next_review_date=self.next_review_date,
            last_reviewed_at=self.last_reviewed_at,
        )

    def apply_review_state(self, state: ReviewState):
        for field in REVIEW_STATE_FIELDS:
            setattr(self, field, getattr(state, field))


class ReviewLog(models.Model):
    flashcard = models.ForeignKey(Flashcard, on_delete=models.CASCADE, related_name="reviews")
    user_id = models.UUIDField()
    score = models.SmallIntegerField()
    idempotency_key = models.CharField(max_length=64)
    reviewed_at = models.DateTimeField(default=timezone.now)
    ease_factor = models.FloatField()
    repetitions = models.PositiveIntegerField()
    interval_days = models.PositiveIntegerField()
    next_review_date = models.DateField()

    class Meta:
        app_label = "flashcards"
        unique_together = (("flashcard", "idempotency_key"),)
        indexes = [
            models.Index(fields=["user_id", "reviewed_at"], name="reviewlog_user_time_idx"),
        ]

    def review_state(self) -> ReviewState:
        """State the card was left in by this review."""
        return ReviewState(
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
            current_interval=self.interval_days,
            next_review_date=self.next_review_date,
            last_reviewed_at=self.reviewed_at,
        )


class SubjectProgress(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField()
    discipline = models.CharField(max_length=200)
    subject = models.CharField(max_length=200)
    last_study_date = models.DateField()
    next_review_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "flashcards"
        unique_together = (("user_id", "discipline", "subject"),)
        indexes = [
            models.Index(fields=["user_id", "next_review_date"], name="subject_user_due_idx"),
        ]
