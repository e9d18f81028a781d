import pytest
import logging
from django.urls import reverse
from datetime import timedelta
import uuid

from flashcards.data.models import Flashcard, ReviewLog
from flashcards.utils.time import local_today

logger = logging.getLogger(__name__)

# Helpers

def create_card(client, user_id, question="Qual o prazo do mandado de segurança?", answer="120 dias"):
    url = reverse("flashcards", kwargs={"user_id": str(user_id)})
    payload = {
        "discipline": "Direito Administrativo",
        "subject": "Mandado de segurança",
        "question": question,
        "answer": answer,
    }
    resp = client.post(url, data=payload, content_type="application/json")
    logger.info("POST /flashcards → status=%s", resp.status_code)
    return resp


def make_review(client, user_id, flashcard_id, score, idem_key):
    url = reverse("review")
    payload = {
        "user_id": str(user_id),
        "flashcard_id": str(flashcard_id),
        "score": score,
        "idempotency_key": idem_key,
    }
    resp = client.post(url, data=payload, content_type="application/json")
    data = resp.json()
    logger.info(
        "POST /reviews score=%s → status=%s interval=%s idempotent=%s",
        score,
        resp.status_code,
        data.get("current_interval"),
        data.get("idempotent"),
    )
    return resp


def get_due_cards(client, user_id, on=None):
    url = reverse("due-cards", kwargs={"user_id": str(user_id)})
    params = {"on": on.isoformat()} if on else {}
    resp = client.get(url, params)
    data = resp.json()
    logger.info(
        "GET /due-cards on=%s → status=%s card_count=%s",
        data.get("on"),
        resp.status_code,
        len(data["card_ids"]),
    )
    return resp


# Tests

@pytest.mark.django_db
def test_create_flashcard_with_default_state(client):
    user_id = uuid.uuid4()

    resp = create_card(client, user_id)
    data = resp.json()

    assert resp.status_code == 201
    assert data["user_id"] == str(user_id)
    assert data["ease_factor"] == 2.5
    assert data["repetitions"] == 0
    assert data["current_interval"] == 0
    assert data["next_review_date"] == local_today().isoformat()
    assert data["last_reviewed_at"] is None
    assert data["stage"] == "new"


@pytest.mark.django_db
def test_create_flashcard_requires_fields(client):
    url = reverse("flashcards", kwargs={"user_id": str(uuid.uuid4())})
    resp = client.post(url, data={"question": "?"}, content_type="application/json")

    assert resp.status_code == 400
    assert "answer" in resp.json()


@pytest.mark.django_db
def test_first_review_response(client):
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]

    resp = make_review(client, user_id, card_id, 5, "idem-1")
    data = resp.json()

    assert resp.status_code == 201
    assert data["repetitions"] == 1
    assert data["current_interval"] == 1
    assert data["ease_factor"] == pytest.approx(2.6)
    assert data["next_review_date"] == (local_today() + timedelta(days=1)).isoformat()
    assert data["stage"] == "learning"
    assert data["score_label"] == "Perfeito"
    assert data["idempotent"] is False
    logger.info("✓ Passed: score=5 scheduled for tomorrow")


@pytest.mark.django_db
def test_failure_review_resets_card(client):
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]

    make_review(client, user_id, card_id, 5, "idem-a")
    make_review(client, user_id, card_id, 5, "idem-b")
    data = make_review(client, user_id, card_id, 0, "idem-c").json()

    assert data["repetitions"] == 0
    assert data["current_interval"] == 1
    assert data["stage"] == "new"
    assert data["score_label"] == "Esqueci"


@pytest.mark.django_db
def test_idempotency_true_and_false(client):
    """First request transitions the card, the retry with the same key reuses it."""
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]

    first = make_review(client, user_id, card_id, 3, "idem-same")
    d1 = first.json()
    assert first.status_code == 201
    assert d1["idempotent"] is False

    second = make_review(client, user_id, card_id, 3, "idem-same")
    d2 = second.json()
    assert second.status_code == 200
    assert d2["idempotent"] is True
    assert d1["next_review_date"] == d2["next_review_date"]
    assert d2["repetitions"] == 1

    logger.info("✓ Passed: idempotency handled correctly")


@pytest.mark.django_db
@pytest.mark.parametrize("score", [-1, 6, "abc", "5", 5.0, True])
def test_out_of_range_score_rejected(client, score):
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]

    resp = make_review(client, user_id, card_id, score, "idem-bad")

    assert resp.status_code == 400
    assert "score" in resp.json()
    assert Flashcard.objects.get(pk=card_id).last_reviewed_at is None


@pytest.mark.django_db
def test_review_beyond_calendar_range_returns_400(client):
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]
    Flashcard.objects.filter(pk=card_id).update(repetitions=10, current_interval=2_000_000)

    resp = make_review(client, user_id, card_id, 5, "idem-far")

    assert resp.status_code == 400
    card = Flashcard.objects.get(pk=card_id)
    assert card.repetitions == 10
    assert card.current_interval == 2_000_000
    assert not ReviewLog.objects.exists()


@pytest.mark.django_db
def test_long_perfect_streak_never_errors(client):
    """Repeated perfect reviews compound until the date no longer fits, then get a 400."""
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]

    statuses = [
        make_review(client, user_id, card_id, 5, f"idem-streak-{i}").status_code
        for i in range(20)
    ]
    first_rejected = statuses.index(400)

    assert set(statuses[:first_rejected]) == {201}
    assert set(statuses[first_rejected:]) == {400}
    assert Flashcard.objects.get(pk=card_id).repetitions == first_rejected
    logger.info("✓ Passed: streak rejected after %s reviews", first_rejected)


@pytest.mark.django_db
def test_review_unknown_card_returns_404(client):
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]

    assert make_review(client, uuid.uuid4(), card_id, 4, "idem-other").status_code == 404
    assert make_review(client, user_id, uuid.uuid4(), 4, "idem-missing").status_code == 404


@pytest.mark.django_db
def test_due_cards_includes_and_excludes(client):
    """Due cards are those whose next review date is on or before the given day."""
    user_id = uuid.uuid4()
    card_new = create_card(client, user_id, question="Q1").json()["id"]
    card_reviewed = create_card(client, user_id, question="Q2").json()["id"]

    make_review(client, user_id, card_reviewed, 5, "idem-due")

    today = local_today()
    ids_today = get_due_cards(client, user_id).json()["card_ids"]
    assert ids_today == [card_new]

    ids_tomorrow = get_due_cards(client, user_id, today + timedelta(days=1)).json()["card_ids"]
    assert set(ids_tomorrow) == {card_new, card_reviewed}

    assert get_due_cards(client, user_id, today - timedelta(days=1)).json()["card_ids"] == []
    assert get_due_cards(client, uuid.uuid4()).json()["card_ids"] == []

    logger.info("✓ Passed: due-cards includes only due items")


@pytest.mark.django_db
def test_due_cards_rejects_bad_date(client):
    url = reverse("due-cards", kwargs={"user_id": str(uuid.uuid4())})
    resp = client.get(url, {"on": "not-a-date"})

    assert resp.status_code == 400


@pytest.mark.django_db
def test_list_orders_by_next_review_date(client):
    user_id = uuid.uuid4()
    reviewed = create_card(client, user_id, question="Q1").json()["id"]
    fresh = create_card(client, user_id, question="Q2").json()["id"]
    make_review(client, user_id, reviewed, 4, "idem-order")

    resp = client.get(reverse("flashcards", kwargs={"user_id": str(user_id)}))
    ids = [c["id"] for c in resp.json()["flashcards"]]

    assert resp.status_code == 200
    assert ids == [fresh, reviewed]


@pytest.mark.django_db
def test_get_and_delete_flashcard(client):
    user_id = uuid.uuid4()
    card_id = create_card(client, user_id).json()["id"]
    make_review(client, user_id, card_id, 4, "idem-del")
    url = reverse("flashcard-detail", kwargs={"user_id": str(user_id), "flashcard_id": card_id})
    other_url = reverse("flashcard-detail", kwargs={"user_id": str(uuid.uuid4()), "flashcard_id": card_id})

    assert client.get(url).json()["id"] == card_id
    assert client.get(other_url).status_code == 404
    assert client.delete(other_url).status_code == 404

    assert client.delete(url).status_code == 204
    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404
    assert not ReviewLog.objects.exists()
