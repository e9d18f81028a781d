from .data.models import Flashcard, ReviewLog, SubjectProgress  # noqa: F401
