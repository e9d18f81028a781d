import structlog

from ..data import repos
from ..domain.state import ReviewState
from ..utils.time import local_today

logger = structlog.get_logger()


def create_flashcard(user_id, discipline, subject, question, answer):
    state = ReviewState.initial(local_today())
    card = repos.insert_flashcard(user_id, discipline, subject, question, answer, state)
    logger.info("flashcard_created",
        user_id=str(user_id),
        flashcard_id=str(card.id),
        discipline=discipline,
        subject=subject,
        next_review_date=card.next_review_date.isoformat(),
    )
    return card


def get_flashcard(user_id, flashcard_id):
    return repos.get_flashcard(user_id, flashcard_id)


def list_flashcards(user_id):
    return repos.list_flashcards(user_id)


def list_due_flashcards(user_id, on=None):
    day = on or local_today()
    cards = repos.list_due_flashcards(user_id, day)
    logger.info("due_flashcards_listed",
        user_id=str(user_id),
        on=day.isoformat(),
        card_count=len(cards),
    )
    return cards


def delete_flashcard(user_id, flashcard_id):
    repos.delete_flashcard(user_id, flashcard_id)
    logger.info("flashcard_deleted", user_id=str(user_id), flashcard_id=str(flashcard_id))
