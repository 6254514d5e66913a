from __future__ import annotations
import uuid
from sqlalchemy import Column, String, DateTime, Float, Text, Index
from .clock import utcnow
from .db import Base


def _new_id() -> str:
	return uuid.uuid4().hex


class User(Base):
	__tablename__ = "users"
	id = Column(String(32), primary_key=True, default=_new_id)
	email = Column(String(256), unique=True, index=True, nullable=False)
	password_hash = Column(String(256), nullable=False)
	role = Column(String(16), default="STUDENT", nullable=False)
	# Half-point increments are exact in a float column
	streak = Column(Float, default=0.0, nullable=False)
	# Daily question assignment
	current_question_id = Column(String(32), nullable=True)
	last_question_assigned_at = Column(DateTime, nullable=True)
	created_at = Column(DateTime, default=utcnow, nullable=False)


class Question(Base):
	__tablename__ = "questions"
	id = Column(String(32), primary_key=True, default=_new_id)
	text = Column(Text, nullable=False)
	topic = Column(String(128), nullable=False)


class Answer(Base):
	__tablename__ = "answers"
	id = Column(String(32), primary_key=True, default=_new_id)
	user_id = Column(String(32), index=True, nullable=False)
	question_id = Column(String(32), nullable=False)
	# Snapshot of the question as it was asked
	question_text = Column(Text, nullable=False, default="")
	user_answer = Column(Text, nullable=False, default="")
	rating = Column(String(16), nullable=False)
	feedback = Column(Text, nullable=False, default="")
	timestamp = Column(DateTime, default=utcnow, nullable=False)
	streak_at_moment = Column(Float, default=0.0, nullable=False)

	__table_args__ = (Index("ix_answers_user_question_ts", "user_id", "question_id", "timestamp"),)


class Appeal(Base):
	__tablename__ = "appeals"
	id = Column(String(32), primary_key=True, default=_new_id)
	user_id = Column(String(32), index=True, nullable=False)
	user_name = Column(String(256), nullable=False)
	answer_id = Column(String(32), nullable=False)
	question_id = Column(String(32), nullable=False)
	question_text = Column(Text, nullable=False)
	user_answer = Column(Text, nullable=False)
	original_rating = Column(String(16), nullable=False)
	original_feedback = Column(Text, nullable=False)
	streak_at_moment = Column(Float, default=0.0, nullable=False)
	status = Column(String(16), default="pending", nullable=False, index=True)
	professor_feedback = Column(Text, nullable=True)
	created_at = Column(DateTime, default=utcnow, nullable=False)
	resolved_at = Column(DateTime, nullable=True)
