import structlog

from ..data import repos
from ..utils.time import local_today

logger = structlog.get_logger()


def record_study_session(user_id, discipline, subject, session_date):
    """Register a study session; the subject comes back for review a week from today."""
    progress = repos.upsert_subject_progress(
        user_id, discipline, subject, session_date, local_today()
    )
    logger.info("subject_progress_updated",
        user_id=str(user_id),
        discipline=discipline,
        subject=subject,
        last_study_date=progress.last_study_date.isoformat(),
        next_review_date=progress.next_review_date.isoformat(),
    )
    return progress


def list_due_subjects(user_id, on=None):
    return repos.list_due_subjects(user_id, on or local_today())


def mark_subject_reviewed(user_id, progress_id):
    progress = repos.mark_subject_reviewed(user_id, progress_id, local_today())
    logger.info("subject_reviewed",
        user_id=str(user_id),
        progress_id=str(progress_id),
        next_review_date=progress.next_review_date.isoformat(),
    )
    return progress
