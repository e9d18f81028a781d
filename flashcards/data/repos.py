from datetime import timedelta

from django.db import transaction, IntegrityError

from .models import Flashcard, ReviewLog, SubjectProgress, REVIEW_STATE_FIELDS
from ..config import SUBJECT_REVIEW_DAYS
from ..domain.errors import FlashcardNotFound, SubjectProgressNotFound
from ..domain.state import ReviewState


# Flashcards

def insert_flashcard(user_id, discipline, subject, question, answer, state: ReviewState):
    card = Flashcard(
        user_id=user_id, discipline=discipline, subject=subject,
        question=question, answer=answer,
    )
    card.apply_review_state(state)
    card.save()
    return card


def get_flashcard(user_id, flashcard_id):
    try:
        return Flashcard.objects.get(id=flashcard_id, user_id=user_id)
    except Flashcard.DoesNotExist:
        raise FlashcardNotFound(f"flashcard {flashcard_id} not found for user {user_id}")


def get_flashcard_for_update(user_id, flashcard_id):
    """
    Fetch a flashcard row and lock it until the surrounding transaction ends.
    Must be called inside transaction.atomic().
    """
    try:
        return (Flashcard.objects
                .select_for_update()
                .get(id=flashcard_id, user_id=user_id))
    except Flashcard.DoesNotExist:
        raise FlashcardNotFound(f"flashcard {flashcard_id} not found for user {user_id}")


def list_flashcards(user_id):
    return list(Flashcard.objects.filter(user_id=user_id).order_by("next_review_date", "created_at"))


def list_due_flashcards(user_id, day):
    return list(
        Flashcard.objects.filter(user_id=user_id, next_review_date__lte=day)
        .order_by("next_review_date", "created_at")
    )


def save_review_state(card: Flashcard, state: ReviewState):
    card.apply_review_state(state)
    card.save(update_fields=REVIEW_STATE_FIELDS + ["updated_at"])
    return card


def delete_flashcard(user_id, flashcard_id):
    deleted, _ = Flashcard.objects.filter(id=flashcard_id, user_id=user_id).delete()
    if not deleted:
        raise FlashcardNotFound(f"flashcard {flashcard_id} not found for user {user_id}")


# Review log

def get_existing_idempotent(flashcard_id, idem_key):
    return ReviewLog.objects.filter(
        flashcard_id=flashcard_id, idempotency_key=idem_key
    ).first()


def persist_review(card: Flashcard, score, idem_key, state: ReviewState):
    """
    Insert ReviewLog; if a concurrent duplicate slips in, return the existing one.
    """
    try:
        with transaction.atomic():
            return ReviewLog.objects.create(
                flashcard=card, user_id=card.user_id, score=score,
                idempotency_key=idem_key, reviewed_at=state.last_reviewed_at,
                ease_factor=state.ease_factor, repetitions=state.repetitions,
                interval_days=state.current_interval,
                next_review_date=state.next_review_date,
            ), False
    except IntegrityError:
        # Duplicate idempotency key safeguard
        existing = get_existing_idempotent(card.pk, idem_key)
        return existing, True


# Subject progress

def upsert_subject_progress(user_id, discipline, subject, session_date, today):
    progress, _ = SubjectProgress.objects.update_or_create(
        user_id=user_id, discipline=discipline, subject=subject,
        defaults={
            "last_study_date": session_date,
            "next_review_date": today + timedelta(days=SUBJECT_REVIEW_DAYS),
        },
    )
    return progress


def list_due_subjects(user_id, day):
    return list(
        SubjectProgress.objects.filter(user_id=user_id, next_review_date__lte=day)
        .order_by("next_review_date")
    )


def mark_subject_reviewed(user_id, progress_id, today):
    try:
        progress = SubjectProgress.objects.get(id=progress_id, user_id=user_id)
    except SubjectProgress.DoesNotExist:
        raise SubjectProgressNotFound(f"subject progress {progress_id} not found for user {user_id}")
    progress.last_study_date = today
    progress.next_review_date = today + timedelta(days=SUBJECT_REVIEW_DAYS)
    progress.save(update_fields=["last_study_date", "next_review_date", "updated_at"])
    return progress
