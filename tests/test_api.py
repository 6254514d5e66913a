from __future__ import annotations

from typing import Iterator

import anyio
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from quizstreak.db import get_db
from quizstreak.deps import get_grader
from quizstreak.main import app
from quizstreak.security import hash_password
from quizstreak.store import Store
from tests.mocks.grader import FixedGrader


@pytest.fixture()
def grader() -> FixedGrader:
    return FixedGrader(rating="incorrect", feedback="Not quite")


@pytest.fixture()
def client(session_factory: sessionmaker, grader: FixedGrader) -> Iterator[TestClient]:
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_grader] = lambda: grader
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_grader, None)


def _login(client: TestClient, email: str, password: str) -> dict[str, str]:
    response = client.post("/auth/token", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _student(client: TestClient, email: str = "ana@example.edu") -> dict[str, str]:
    response = client.post("/auth/register", json={"email": email, "password": "secret123"})
    assert response.status_code == 201, response.text
    return _login(client, email, "secret123")


def _professor(client: TestClient, session_factory: sessionmaker) -> dict[str, str]:
    db = session_factory()
    try:
        anyio.run(
            lambda: Store(db).create_user(email="prof@example.edu", password_hash=hash_password("teach"), role="PROFESSOR")
        )
    finally:
        db.close()
    return _login(client, "prof@example.edu", "teach")


def _seed_question(session_factory: sessionmaker) -> str:
    db = session_factory()
    try:
        question = anyio.run(lambda: Store(db).create_question(text="What is HTML?", topic="HTML"))
    finally:
        db.close()
    return question.id


def test_health(client: TestClient) -> None:
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["message"] == "Backend is running correctly"


def test_routes_require_authentication(client: TestClient) -> None:
    assert client.post("/answers/submit", json={}).status_code == 401
    assert client.get("/appeals/my").status_code == 401


def test_register_rejects_duplicate_email(client: TestClient) -> None:
    _student(client)
    response = client.post("/auth/register", json={"email": "ana@example.edu", "password": "other"})
    assert response.status_code == 409


def test_login_rejects_bad_password(client: TestClient) -> None:
    _student(client)
    response = client.post("/auth/token", data={"username": "ana@example.edu", "password": "wrong"})
    assert response.status_code == 401


def test_me_hides_password(client: TestClient) -> None:
    headers = _student(client)
    body = client.get("/auth/me", headers=headers).json()
    assert body["email"] == "ana@example.edu"
    assert body["streak"] == 0
    assert "passwordHash" not in body and "password_hash" not in body


def test_submit_then_appeal_then_accept(client: TestClient, session_factory: sessionmaker) -> None:
    _seed_question(session_factory)
    student = _student(client)
    professor = _professor(client, session_factory)
    question_id = client.get("/questions/daily", headers=student).json()["id"]

    submitted = client.post(
        "/answers/submit",
        headers=student,
        json={"questionId": question_id, "questionText": "What is HTML?", "userAnswer": "A database"},
    )
    assert submitted.status_code == 200, submitted.text
    assert submitted.json() == {"success": True, "rating": "incorrect", "feedback": "Not quite", "newStreak": 0}

    again = client.post(
        "/answers/submit",
        headers=student,
        json={"questionId": question_id, "questionText": "What is HTML?", "userAnswer": "Markup"},
    )
    assert again.status_code == 409
    assert "come back tomorrow" in again.json()["detail"]

    answer_id = client.get("/users/history", headers=student).json()["history"][0]["id"]
    appeal = client.post("/appeals", headers=student, json={"answerId": answer_id})
    assert appeal.status_code == 201, appeal.text
    appeal_body = appeal.json()
    assert appeal_body["status"] == "pending"
    assert appeal_body["streakAtMoment"] == 0
    assert appeal_body["userName"] == "ana@example.edu"

    assert client.get("/appeals", headers=student).status_code == 403
    pending = client.get("/appeals", headers=professor, params={"status": "pending"}).json()
    assert [a["id"] for a in pending] == [appeal_body["id"]]

    resolved = client.patch(
        f"/appeals/{appeal_body['id']}/resolve",
        headers=professor,
        json={"status": "accepted", "feedback": "Fair point"},
    )
    assert resolved.status_code == 200, resolved.text
    assert resolved.json()["status"] == "accepted"
    assert resolved.json()["professorFeedback"] == "Fair point"
    assert client.get("/users/profile", headers=student).json()["profile"]["streak"] == 1

    twice = client.patch(
        f"/appeals/{appeal_body['id']}/resolve",
        headers=professor,
        json={"status": "accepted", "feedback": "again"},
    )
    assert twice.status_code == 409
    assert client.get("/users/profile", headers=student).json()["profile"]["streak"] == 1

    mine = client.get("/appeals/my", headers=student).json()
    assert mine[0]["status"] == "accepted"


def test_appeal_on_unknown_answer_is_404(client: TestClient) -> None:
    student = _student(client)
    response = client.post("/appeals", headers=student, json={"answerId": "nope"})
    assert response.status_code == 404


def test_resolve_rejects_invalid_status(client: TestClient, session_factory: sessionmaker) -> None:
    professor = _professor(client, session_factory)
    response = client.patch("/appeals/whatever/resolve", headers=professor, json={"status": "pending"})
    assert response.status_code == 422


def test_resolve_unknown_appeal_is_404(client: TestClient, session_factory: sessionmaker) -> None:
    professor = _professor(client, session_factory)
    response = client.patch("/appeals/missing/resolve", headers=professor, json={"status": "rejected"})
    assert response.status_code == 404


def test_daily_question_is_stable_within_the_day(client: TestClient, session_factory: sessionmaker) -> None:
    _seed_question(session_factory)
    _seed_question(session_factory)
    student = _student(client)

    first = client.get("/questions/daily", headers=student).json()
    second = client.get("/questions/daily", headers=student).json()

    assert first["id"] == second["id"]


def test_professor_manages_questions_and_users(client: TestClient, session_factory: sessionmaker) -> None:
    professor = _professor(client, session_factory)
    student = _student(client)

    assert client.get("/questions", headers=student).status_code == 403

    created = client.post("/questions", headers=professor, json={"text": "What is a div?", "topic": "HTML"})
    assert created.status_code == 201
    question_id = created.json()["question"]["id"]
    patched = client.patch(f"/questions/{question_id}", headers=professor, json={"topic": "Layout"})
    assert patched.json()["question"]["topic"] == "Layout"
    assert client.patch("/questions/missing", headers=professor, json={"topic": "x"}).status_code == 404
    assert client.delete(f"/questions/{question_id}", headers=professor).json() == {"success": True}

    new_user = client.post("/users", headers=professor, json={"email": "leo@example.edu", "password": "pw", "streak": 2})
    assert new_user.status_code == 201
    user_id = new_user.json()["user"]["id"]
    updated = client.patch(f"/users/{user_id}", headers=professor, json={"streak": 7.5})
    assert updated.json()["user"]["streak"] == 7.5
    assert client.get(f"/users/{user_id}/profile", headers=professor).json()["profile"]["email"] == "leo@example.edu"
    assert client.get(f"/users/{user_id}/history", headers=professor).json() == {"history": []}
    emails = {u["email"] for u in client.get("/users", headers=professor).json()["users"]}
    assert {"prof@example.edu", "ana@example.edu", "leo@example.edu"} <= emails
    assert client.delete(f"/users/{user_id}", headers=professor).json() == {"success": True}
    assert client.delete(f"/users/{user_id}", headers=professor).status_code == 404
