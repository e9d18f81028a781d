import pytest
import requests
import uuid
import logging
from datetime import date, timedelta

BASE_URL = "http://127.0.0.1:8000"
logger = logging.getLogger(__name__)


def create_card(user_id, question="Qual o quórum de emenda constitucional?"):
    """Helper for POST /users/{id}/flashcards"""
    payload = {
        "discipline": "Direito Constitucional",
        "subject": "Processo legislativo",
        "question": question,
        "answer": "3/5 em dois turnos",
    }
    r = requests.post(f"{BASE_URL}/users/{user_id}/flashcards", json=payload)
    logger.info("POST /flashcards → status=%s", r.status_code)
    return r


def post_review(user_id, flashcard_id, score, idem):
    """Helper for POST /reviews"""
    payload = {
        "user_id": str(user_id),
        "flashcard_id": str(flashcard_id),
        "score": score,
        "idempotency_key": idem,
    }
    r = requests.post(f"{BASE_URL}/reviews", json=payload)
    data = r.json()
    logger.info(
        "POST /reviews score=%s (%s) → status=%s interval=%s idempotent=%s",
        score,
        data.get("score_label"),
        r.status_code,
        data.get("current_interval"),
        data.get("idempotent"),
    )
    return r


def get_due(user_id, on):
    """Helper for GET /users/{id}/due-cards"""
    r = requests.get(f"{BASE_URL}/users/{user_id}/due-cards", params={"on": on.isoformat()})
    data = r.json()
    logger.info(
        "GET /due-cards on=%s → status=%s card_count=%s",
        on.isoformat(),
        r.status_code,
        len(data["card_ids"]),
    )
    return r


@pytest.mark.integration
def test_schedule_progression_live():
    """Perfect answers go 1 day, 6 days, then compound"""
    user_id = uuid.uuid4()
    card_id = create_card(user_id).json()["id"]

    intervals = []
    for i in range(3):
        resp = post_review(user_id, card_id, 5, f"idem-live-prog-{i}")
        assert resp.status_code == 201
        intervals.append(resp.json()["current_interval"])

    assert intervals[:2] == [1, 6]
    assert intervals[2] == 17  # round(6 * 2.8)
    logger.info("✓ Passed: intervals %s", intervals)


@pytest.mark.integration
def test_failure_resets_live():
    user_id = uuid.uuid4()
    card_id = create_card(user_id).json()["id"]

    post_review(user_id, card_id, 5, "idem-live-ok")
    d = post_review(user_id, card_id, 0, "idem-live-fail").json()

    assert d["repetitions"] == 0
    assert d["current_interval"] == 1
    assert d["score_label"] == "Esqueci"
    logger.info("✓ Passed: score=0 reset the card")


@pytest.mark.integration
def test_idempotency_live():
    """Identical requests should reuse result with 200 + idempotent=True"""
    user_id = uuid.uuid4()
    card_id = create_card(user_id).json()["id"]

    first = post_review(user_id, card_id, 4, "idem-live-same")
    d1 = first.json()
    assert first.status_code == 201
    assert d1["idempotent"] is False

    second = post_review(user_id, card_id, 4, "idem-live-same")
    d2 = second.json()
    assert second.status_code == 200
    assert d2["idempotent"] is True
    assert d1["next_review_date"] == d2["next_review_date"]

    logger.info("✓ Passed: idempotency verified (201 then 200)")


@pytest.mark.integration
def test_due_cards_includes_and_excludes_live():
    """New cards are due immediately, reviewed ones only from their next date"""
    user_id = uuid.uuid4()
    card_new = create_card(user_id, "Q1").json()["id"]
    card_reviewed = create_card(user_id, "Q2").json()["id"]

    reviewed = post_review(user_id, card_reviewed, 5, "idem-live-due").json()
    next_date = date.fromisoformat(reviewed["next_review_date"])

    r1 = get_due(user_id, next_date - timedelta(days=1))
    assert r1.json()["card_ids"] == [card_new]

    r2 = get_due(user_id, next_date)
    assert set(r2.json()["card_ids"]) == {card_new, card_reviewed}

    logger.info("✓ Passed: due-cards includes/excludes correctly")
