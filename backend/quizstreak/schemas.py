from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Rating = Literal["correct", "partial", "incorrect"]
AppealStatus = Literal["pending", "accepted", "rejected"]
Resolution = Literal["accepted", "rejected"]
Role = Literal["STUDENT", "PROFESSOR"]


class _Record(BaseModel):
	# Snapshot of a stored row; camelCase on the wire
	model_config = ConfigDict(from_attributes=True, frozen=True, alias_generator=to_camel, populate_by_name=True)


class UserRecord(_Record):
	id: str
	email: str
	role: Role = "STUDENT"
	streak: float = 0.0
	current_question_id: Optional[str] = None
	last_question_assigned_at: Optional[datetime] = None
	created_at: Optional[datetime] = None
	password_hash: str = Field(default="", exclude=True, repr=False)


class QuestionRecord(_Record):
	id: str
	text: str
	topic: str


class AnswerRecord(_Record):
	id: str
	user_id: str
	question_id: str
	question_text: str
	user_answer: str
	rating: Rating
	feedback: str
	timestamp: datetime
	streak_at_moment: float = 0.0


class AppealRecord(_Record):
	id: str
	user_id: str
	user_name: str
	answer_id: str
	question_id: str
	question_text: str
	user_answer: str
	original_rating: Rating
	original_feedback: str
	streak_at_moment: float = 0.0
	status: AppealStatus = "pending"
	professor_feedback: Optional[str] = None
	created_at: datetime
	resolved_at: Optional[datetime] = None


class Verdict(BaseModel):
	model_config = ConfigDict(frozen=True)

	rating: Rating
	feedback: str


# ---- Request / response bodies ----

class _Body(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubmitAnswerRequest(_Body):
	question_id: str
	question_text: str
	user_answer: str


class SubmitAnswerResponse(_Body):
	success: bool = True
	rating: Rating
	feedback: str
	new_streak: float


class CreateAppealRequest(_Body):
	answer_id: str


class ResolveAppealRequest(_Body):
	status: Resolution
	feedback: str = ""


class RegisterRequest(_Body):
	email: str
	password: str


class UserCreateRequest(_Body):
	email: str
	password: str
	role: Role = "STUDENT"
	streak: float = Field(default=0.0, ge=0)


class UserUpdateRequest(_Body):
	email: Optional[str] = None
	password: Optional[str] = None
	role: Optional[Role] = None
	streak: Optional[float] = Field(default=None, ge=0)


class QuestionCreateRequest(_Body):
	text: str
	topic: str


class QuestionUpdateRequest(_Body):
	text: Optional[str] = None
	topic: Optional[str] = None
