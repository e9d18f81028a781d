from rest_framework import serializers

from ..config import MAX_SCORE, MIN_SCORE
from ..data.models import Flashcard, SubjectProgress
from ..domain.logic import stage_for


class StrictIntegerField(serializers.IntegerField):
    """Accepts only JSON integers: "5", 5.0 and true are rejected instead of coerced."""

    default_error_messages = {"not_integer": "A JSON integer is required."}

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("not_integer")
        return super().to_internal_value(data)


class ReviewInSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    flashcard_id = serializers.UUIDField()
    score = StrictIntegerField(min_value=MIN_SCORE, max_value=MAX_SCORE)
    idempotency_key = serializers.CharField(max_length=64)


class FlashcardInSerializer(serializers.Serializer):
    discipline = serializers.CharField(max_length=200)
    subject = serializers.CharField(max_length=200)
    question = serializers.CharField()
    answer = serializers.CharField()


class FlashcardSerializer(serializers.ModelSerializer):
    stage = serializers.SerializerMethodField()

    class Meta:
        model = Flashcard
        fields = [
            "id", "user_id", "discipline", "subject", "question", "answer",
            "ease_factor", "repetitions", "current_interval",
            "next_review_date", "last_reviewed_at", "stage",
            "created_at", "updated_at",
        ]

    def get_stage(self, obj):
        return stage_for(obj.repetitions).value


class DueQuerySerializer(serializers.Serializer):
    on = serializers.DateField(required=False)  # ISO-8601 date, defaults to today


class StudySessionInSerializer(serializers.Serializer):
    discipline = serializers.CharField(max_length=200)
    subject = serializers.CharField(max_length=200)
    session_date = serializers.DateField()


class SubjectProgressSerializer(serializers.ModelSerializer):
    class Meta:
        model = SubjectProgress
        fields = [
            "id", "user_id", "discipline", "subject",
            "last_study_date", "next_review_date", "created_at", "updated_at",
        ]
