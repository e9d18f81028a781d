import json
import uuid

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from flashcards.data.models import Flashcard
from flashcards.services.cards import create_flashcard

REQUIRED_KEYS = ("discipline", "subject", "question", "answer")


class Command(BaseCommand):
    help = "Create flashcards for a user from a JSON list of {discipline, subject, question, answer}"

    def add_arguments(self, parser):
        parser.add_argument("--user", required=True, help="Owner UUID")
        parser.add_argument("--file", required=True, help="JSON file to load flashcards from")
        parser.add_argument(
            "--replace", action="store_true", help="Delete the user's existing flashcards first"
        )

    def handle(self, *args, **options):
        try:
            user_id = uuid.UUID(options["user"])
        except ValueError:
            raise CommandError(f"Invalid user UUID: {options['user']}")

        file_name = options["file"]
        try:
            with open(file_name, encoding="utf-8") as json_file:
                rows = json.load(json_file)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Error reading {file_name}: {e}")

        if not isinstance(rows, list):
            raise CommandError(f"{file_name} must contain a JSON list")
        for i, row in enumerate(rows):
            missing = [k for k in REQUIRED_KEYS if not isinstance(row, dict) or not row.get(k)]
            if missing:
                raise CommandError(f"Entry {i} is missing {', '.join(missing)}")

        with transaction.atomic():
            if options["replace"]:
                deleted, _ = Flashcard.objects.filter(user_id=user_id).delete()
                self.stdout.write(self.style.SUCCESS(f"Deleted existing flashcards ({deleted} rows)"))

            for row in rows:
                create_flashcard(user_id, *(row[k] for k in REQUIRED_KEYS))

        self.stdout.write(
            self.style.SUCCESS(f"Loaded {len(rows)} flashcards from {file_name}")
        )
