"""In-memory stand-in for ``quizstreak.store.Store`` that records every call."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from quizstreak.clock import day_bounds, utcnow
from quizstreak.schemas import AnswerRecord, AppealRecord, QuestionRecord, UserRecord


class FakeStore:
    def __init__(self) -> None:
        self.users: Dict[str, UserRecord] = {}
        self.questions: Dict[str, QuestionRecord] = {}
        self.answers: Dict[str, AnswerRecord] = {}
        self.appeals: Dict[str, AppealRecord] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self._seq = 0

    def _next_id(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}{self._seq}"

    def called(self, name: str) -> List[tuple]:
        return [args for call, args in self.calls if call == name]

    # ---- seeding helpers ----

    def add_user(self, user_id: str, streak: float = 0.0, **fields: Any) -> UserRecord:
        fields.setdefault("email", f"{user_id}@example.edu")
        user = UserRecord(id=user_id, streak=streak, **fields)
        self.users[user_id] = user
        return user

    def add_answer(self, answer_id: str, user_id: str, **fields: Any) -> AnswerRecord:
        defaults: Dict[str, Any] = {
            "question_id": "q1",
            "question_text": "What is HTML?",
            "user_answer": "A language",
            "rating": "incorrect",
            "feedback": "Too vague",
            "timestamp": utcnow(),
            "streak_at_moment": 0.0,
        }
        defaults.update(fields)
        answer = AnswerRecord(id=answer_id, user_id=user_id, **defaults)
        self.answers[answer_id] = answer
        return answer

    def add_appeal(self, appeal_id: str, user_id: str, **fields: Any) -> AppealRecord:
        defaults: Dict[str, Any] = {
            "user_name": f"{user_id}@example.edu",
            "answer_id": "ans1",
            "question_id": "q1",
            "question_text": "What is HTML?",
            "user_answer": "A language",
            "original_rating": "incorrect",
            "original_feedback": "Too vague",
            "streak_at_moment": 0.0,
            "status": "pending",
            "created_at": utcnow(),
        }
        defaults.update(fields)
        appeal = AppealRecord(id=appeal_id, user_id=user_id, **defaults)
        self.appeals[appeal_id] = appeal
        return appeal

    # ---- Store interface ----

    async def find_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        self.calls.append(("find_user_by_id", (user_id,)))
        return self.users.get(user_id)

    async def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        self.calls.append(("find_user_by_email", (email,)))
        return next((u for u in self.users.values() if u.email == email), None)

    async def update_user_streak(self, user_id: str, streak: float, is_appeal_adjustment: bool = False) -> None:
        self.calls.append(("update_user_streak", (user_id, streak, is_appeal_adjustment)))
        user = self.users.get(user_id)
        if user is not None:
            self.users[user_id] = user.model_copy(update={"streak": streak})

    async def assign_question_to_user(self, user_id: str, question_id: str, assigned_at: Optional[datetime] = None) -> None:
        self.calls.append(("assign_question_to_user", (user_id, question_id)))
        user = self.users[user_id]
        self.users[user_id] = user.model_copy(
            update={"current_question_id": question_id, "last_question_assigned_at": assigned_at or utcnow()}
        )

    async def count_questions(self) -> int:
        return len(self.questions)

    async def list_questions(self) -> List[QuestionRecord]:
        return list(self.questions.values())

    async def get_question_by_id(self, question_id: str) -> Optional[QuestionRecord]:
        self.calls.append(("get_question_by_id", (question_id,)))
        return self.questions.get(question_id)

    async def create_question(self, *, text: str, topic: str) -> QuestionRecord:
        self.calls.append(("create_question", (text, topic)))
        question = QuestionRecord(id=self._next_id("q"), text=text, topic=topic)
        self.questions[question.id] = question
        return question

    async def create_answer(self, **fields: Any) -> AnswerRecord:
        self.calls.append(("create_answer", (fields,)))
        fields.setdefault("timestamp", utcnow())
        answer = AnswerRecord(id=self._next_id("ans"), **fields)
        self.answers[answer.id] = answer
        return answer

    async def get_answers_by_user_id(self, user_id: str, limit: Optional[int] = 50) -> List[AnswerRecord]:
        self.calls.append(("get_answers_by_user_id", (user_id, limit)))
        rows = sorted((a for a in self.answers.values() if a.user_id == user_id), key=lambda a: a.timestamp, reverse=True)
        return rows if limit is None else rows[:limit]

    async def get_answer_for_question_today(self, user_id: str, question_id: str, now: Optional[datetime] = None) -> Optional[AnswerRecord]:
        self.calls.append(("get_answer_for_question_today", (user_id, question_id)))
        start, end = day_bounds(now)
        return next(
            (
                a
                for a in self.answers.values()
                if a.user_id == user_id and a.question_id == question_id and start <= a.timestamp < end
            ),
            None,
        )

    async def create_appeal(self, **fields: Any) -> AppealRecord:
        self.calls.append(("create_appeal", (fields,)))
        appeal = AppealRecord(id=self._next_id("ap"), **fields)
        self.appeals[appeal.id] = appeal
        return appeal

    async def get_appeal_by_id(self, appeal_id: str) -> Optional[AppealRecord]:
        self.calls.append(("get_appeal_by_id", (appeal_id,)))
        return self.appeals.get(appeal_id)

    async def update_appeal(self, appeal_id: str, **fields: Any) -> Optional[AppealRecord]:
        self.calls.append(("update_appeal", (appeal_id, fields)))
        appeal = self.appeals.get(appeal_id)
        if appeal is None:
            return None
        updated = appeal.model_copy(update=fields)
        self.appeals[appeal_id] = updated
        return updated

    async def get_appeals_by_user_id(self, user_id: str) -> List[AppealRecord]:
        return [a for a in self.appeals.values() if a.user_id == user_id]

    async def list_appeals(self, status: Optional[str] = None) -> List[AppealRecord]:
        return [a for a in self.appeals.values() if status is None or a.status == status]
