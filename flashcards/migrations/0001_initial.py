import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Flashcard",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField()),
                ("discipline", models.CharField(max_length=200)),
                ("subject", models.CharField(max_length=200)),
                ("question", models.TextField()),
                ("answer", models.TextField()),
                (
                    "ease_factor",
                    models.FloatField(
                        default=2.5, validators=[django.core.validators.MinValueValidator(1.3)]
                    ),
                ),
                ("repetitions", models.PositiveIntegerField(default=0)),
                ("current_interval", models.PositiveIntegerField(default=0)),
                ("next_review_date", models.DateField(default=django.utils.timezone.localdate)),
                ("last_reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["user_id", "next_review_date"], name="flashcard_user_due_idx")
                ],
            },
        ),
        migrations.CreateModel(
            name="SubjectProgress",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField()),
                ("discipline", models.CharField(max_length=200)),
                ("subject", models.CharField(max_length=200)),
                ("last_study_date", models.DateField()),
                ("next_review_date", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["user_id", "next_review_date"], name="subject_user_due_idx")
                ],
                "unique_together": {("user_id", "discipline", "subject")},
            },
        ),
        migrations.CreateModel(
            name="ReviewLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.UUIDField()),
                ("score", models.SmallIntegerField()),
                ("idempotency_key", models.CharField(max_length=64)),
                ("reviewed_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("ease_factor", models.FloatField()),
                ("repetitions", models.PositiveIntegerField()),
                ("interval_days", models.PositiveIntegerField()),
                ("next_review_date", models.DateField()),
                (
                    "flashcard",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews",
                        to="flashcards.flashcard",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["user_id", "reviewed_at"], name="reviewlog_user_time_idx")
                ],
                "unique_together": {("flashcard", "idempotency_key")},
            },
        ),
    ]
