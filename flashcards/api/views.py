from rest_framework import views, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
import structlog
import uuid
from ..domain.enums import SCORE_LABELS, Score
from ..domain.errors import FlashcardNotFound, InvalidArgument, SubjectProgressNotFound
from ..domain.logic import stage_for
from ..services import cards as card_service
from ..services import subjects as subject_service
from ..services.reviews import record_review
from ..utils.time import local_today, to_local_iso
from .serializers import (
    DueQuerySerializer,
    FlashcardInSerializer,
    FlashcardSerializer,
    ReviewInSerializer,
    StudySessionInSerializer,
    SubjectProgressSerializer,
)

base_logger = structlog.get_logger()


def _request_logger():
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()))


class ReviewView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        user_id = s.validated_data["user_id"]
        flashcard_id = s.validated_data["flashcard_id"]
        score = s.validated_data["score"]
        idem = s.validated_data["idempotency_key"]

        try:
            outcome = record_review(user_id, flashcard_id, score, idem)
        except FlashcardNotFound as e:
            raise NotFound(str(e))
        except InvalidArgument as e:
            raise ValidationError({"detail": str(e)})

        state = outcome.state
        status_code = status.HTTP_200_OK if outcome.idempotent else status.HTTP_201_CREATED

        logger.info(
            "review_api_response",
            user_id=str(user_id),
            flashcard_id=str(flashcard_id),
            score=score,
            idempotent=outcome.idempotent,
            interval_days=state.current_interval,
            next_review_date=state.next_review_date.isoformat(),
            status=status_code,
        )

        return Response(
            {
                "message": "Flashcard already reviewed with this key" if outcome.idempotent
                else "Flashcard reviewed",
                "flashcard_id": str(flashcard_id),
                "ease_factor": state.ease_factor,
                "repetitions": state.repetitions,
                "current_interval": state.current_interval,
                "next_review_date": state.next_review_date.isoformat(),
                "last_reviewed_at": to_local_iso(state.last_reviewed_at),
                "stage": stage_for(state.repetitions).value,
                "score_label": SCORE_LABELS[Score(score)],
                "idempotent": outcome.idempotent,
            },
            status=status_code,
        )


class FlashcardListView(views.APIView):
    def get(self, request, user_id):
        cards = card_service.list_flashcards(user_id)
        return Response({"user_id": str(user_id), "flashcards": FlashcardSerializer(cards, many=True).data})

    def post(self, request, user_id):
        logger = _request_logger()

        s = FlashcardInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        card = card_service.create_flashcard(user_id, **s.validated_data)
        logger.info("flashcard_api_created", user_id=str(user_id), flashcard_id=str(card.id))
        return Response(FlashcardSerializer(card).data, status=status.HTTP_201_CREATED)


class FlashcardDetailView(views.APIView):
    def get(self, request, user_id, flashcard_id):
        try:
            card = card_service.get_flashcard(user_id, flashcard_id)
        except FlashcardNotFound as e:
            raise NotFound(str(e))
        return Response(FlashcardSerializer(card).data)

    def delete(self, request, user_id, flashcard_id):
        try:
            card_service.delete_flashcard(user_id, flashcard_id)
        except FlashcardNotFound as e:
            raise NotFound(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)


class DueCardsView(views.APIView):
    def get(self, request, user_id):
        logger = _request_logger()

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        on = qs.validated_data.get("on") or local_today()

        cards = card_service.list_due_flashcards(user_id, on)

        logger.info(
            "due_cards_api_response",
            user_id=str(user_id),
            on=on.isoformat(),
            card_count=len(cards),
        )

        return Response(
            {
                "user_id": str(user_id),
                "on": on.isoformat(),
                "card_ids": [str(card.id) for card in cards],
                "flashcards": FlashcardSerializer(cards, many=True).data,
            }
        )


class StudySessionView(views.APIView):
    def post(self, request, user_id):
        s = StudySessionInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        progress = subject_service.record_study_session(user_id, **s.validated_data)
        return Response(SubjectProgressSerializer(progress).data)


class DueSubjectsView(views.APIView):
    def get(self, request, user_id):
        subjects = subject_service.list_due_subjects(user_id)
        return Response({"user_id": str(user_id), "subjects": SubjectProgressSerializer(subjects, many=True).data})


class SubjectReviewView(views.APIView):
    def post(self, request, user_id, progress_id):
        try:
            progress = subject_service.mark_subject_reviewed(user_id, progress_id)
        except SubjectProgressNotFound as e:
            raise NotFound(str(e))
        return Response(SubjectProgressSerializer(progress).data)
