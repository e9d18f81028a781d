from django.urls import path
from .views import (
    DueCardsView,
    DueSubjectsView,
    FlashcardDetailView,
    FlashcardListView,
    ReviewView,
    StudySessionView,
    SubjectReviewView,
)

urlpatterns = [
    path("reviews", ReviewView.as_view(), name="review"),
    path("users/<uuid:user_id>/flashcards", FlashcardListView.as_view(), name="flashcards"),
    path(
        "users/<uuid:user_id>/flashcards/<uuid:flashcard_id>",
        FlashcardDetailView.as_view(),
        name="flashcard-detail",
    ),
    path("users/<uuid:user_id>/due-cards", DueCardsView.as_view(), name="due-cards"),
    path("users/<uuid:user_id>/subjects", StudySessionView.as_view(), name="subjects"),
    path("users/<uuid:user_id>/due-subjects", DueSubjectsView.as_view(), name="due-subjects"),
    path(
        "users/<uuid:user_id>/subjects/<uuid:progress_id>/review",
        SubjectReviewView.as_view(),
        name="subject-review",
    ),
]
