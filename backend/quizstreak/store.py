from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from .clock import day_bounds, utcnow
from .models import User, Question, Answer, Appeal
from .schemas import UserRecord, QuestionRecord, AnswerRecord, AppealRecord

logger = logging.getLogger(__name__)


class Store:
	"""Persistence collaborator used by the services.

	Methods are coroutines so the services await them the same way they await
	the grading call; every method returns a detached pydantic snapshot rather
	than a live ORM row.
	"""

	def __init__(self, db: Session) -> None:
		self.db = db

	# ---- users ----

	async def find_user_by_id(self, user_id: str) -> Optional[UserRecord]:
		row = self.db.get(User, user_id)
		return UserRecord.model_validate(row) if row else None

	async def find_user_by_email(self, email: str) -> Optional[UserRecord]:
		row = self.db.execute(select(User).where(User.email == email)).scalar_one_or_none()
		return UserRecord.model_validate(row) if row else None

	async def list_users(self) -> List[UserRecord]:
		rows = self.db.execute(select(User).order_by(User.created_at)).scalars().all()
		return [UserRecord.model_validate(r) for r in rows]

	async def create_user(self, *, email: str, password_hash: str, role: str = "STUDENT", streak: float = 0.0) -> UserRecord:
		row = User(email=email, password_hash=password_hash, role=role, streak=streak, created_at=utcnow())
		self.db.add(row)
		self.db.commit()
		self.db.refresh(row)
		return UserRecord.model_validate(row)

	async def update_user(self, user_id: str, **fields: Any) -> Optional[UserRecord]:
		row = self.db.get(User, user_id)
		if row is None:
			return None
		for key, value in fields.items():
			setattr(row, key, value)
		self.db.commit()
		self.db.refresh(row)
		return UserRecord.model_validate(row)

	async def delete_user(self, user_id: str) -> bool:
		row = self.db.get(User, user_id)
		if row is None:
			return False
		self.db.delete(row)
		self.db.commit()
		return True

	async def update_user_streak(self, user_id: str, streak: float, is_appeal_adjustment: bool = False) -> None:
		row = self.db.get(User, user_id)
		if row is None:
			return
		row.streak = streak
		self.db.commit()
		logger.info("streak for user %s set to %s (appeal=%s)", user_id, streak, is_appeal_adjustment)

	async def assign_question_to_user(self, user_id: str, question_id: str, assigned_at: Optional[datetime] = None) -> None:
		row = self.db.get(User, user_id)
		if row is None:
			return
		row.current_question_id = question_id
		row.last_question_assigned_at = assigned_at or utcnow()
		self.db.commit()

	# ---- questions ----

	async def count_questions(self) -> int:
		return self.db.execute(select(func.count()).select_from(Question)).scalar_one()

	async def list_questions(self) -> List[QuestionRecord]:
		rows = self.db.execute(select(Question).order_by(Question.topic, Question.id)).scalars().all()
		return [QuestionRecord.model_validate(r) for r in rows]

	async def get_question_by_id(self, question_id: str) -> Optional[QuestionRecord]:
		row = self.db.get(Question, question_id)
		return QuestionRecord.model_validate(row) if row else None

	async def create_question(self, *, text: str, topic: str) -> QuestionRecord:
		row = Question(text=text, topic=topic)
		self.db.add(row)
		self.db.commit()
		self.db.refresh(row)
		return QuestionRecord.model_validate(row)

	async def update_question(self, question_id: str, **fields: Any) -> Optional[QuestionRecord]:
		row = self.db.get(Question, question_id)
		if row is None:
			return None
		for key, value in fields.items():
			setattr(row, key, value)
		self.db.commit()
		self.db.refresh(row)
		return QuestionRecord.model_validate(row)

	async def delete_question(self, question_id: str) -> bool:
		row = self.db.get(Question, question_id)
		if row is None:
			return False
		self.db.delete(row)
		self.db.commit()
		return True

	# ---- answers ----

	async def create_answer(self, **fields: Any) -> AnswerRecord:
		fields.setdefault("timestamp", utcnow())
		row = Answer(**fields)
		self.db.add(row)
		self.db.commit()
		self.db.refresh(row)
		return AnswerRecord.model_validate(row)

	async def get_answers_by_user_id(self, user_id: str, limit: Optional[int] = 50) -> List[AnswerRecord]:
		stmt = select(Answer).where(Answer.user_id == user_id).order_by(Answer.timestamp.desc())
		if limit is not None:
			stmt = stmt.limit(limit)
		return [AnswerRecord.model_validate(r) for r in self.db.execute(stmt).scalars().all()]

	async def get_answer_for_question_today(self, user_id: str, question_id: str, now: Optional[datetime] = None) -> Optional[AnswerRecord]:
		start, end = day_bounds(now)
		stmt = (
			select(Answer)
			.where(
				Answer.user_id == user_id,
				Answer.question_id == question_id,
				Answer.timestamp >= start,
				Answer.timestamp < end,
			)
			.limit(1)
		)
		row = self.db.execute(stmt).scalar_one_or_none()
		return AnswerRecord.model_validate(row) if row else None

	# ---- appeals ----

	async def create_appeal(self, **fields: Any) -> AppealRecord:
		fields.setdefault("created_at", utcnow())
		row = Appeal(**fields)
		self.db.add(row)
		self.db.commit()
		self.db.refresh(row)
		return AppealRecord.model_validate(row)

	async def get_appeal_by_id(self, appeal_id: str) -> Optional[AppealRecord]:
		row = self.db.get(Appeal, appeal_id)
		return AppealRecord.model_validate(row) if row else None

	async def update_appeal(self, appeal_id: str, **fields: Any) -> Optional[AppealRecord]:
		row = self.db.get(Appeal, appeal_id)
		if row is None:
			return None
		for key, value in fields.items():
			setattr(row, key, value)
		self.db.commit()
		self.db.refresh(row)
		return AppealRecord.model_validate(row)

	async def get_appeals_by_user_id(self, user_id: str) -> List[AppealRecord]:
		stmt = select(Appeal).where(Appeal.user_id == user_id).order_by(Appeal.created_at.desc())
		return [AppealRecord.model_validate(r) for r in self.db.execute(stmt).scalars().all()]

	async def list_appeals(self, status: Optional[str] = None) -> List[AppealRecord]:
		stmt = select(Appeal).order_by(Appeal.created_at.desc())
		if status is not None:
			stmt = stmt.where(Appeal.status == status)
		return [AppealRecord.model_validate(r) for r in self.db.execute(stmt).scalars().all()]
