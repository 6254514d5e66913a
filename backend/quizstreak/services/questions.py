from __future__ import annotations
import logging
import random
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..clock import is_same_day, utcnow
from ..errors import NotFoundError, UserNotFoundError
from ..schemas import QuestionRecord
from ..store import Store

logger = logging.getLogger(__name__)


class QuestionService:
	def __init__(self, store: Store, *, rng: Optional[random.Random] = None) -> None:
		self.store = store
		self.rng = rng or random.Random()

	async def seed_questions(self, data: Iterable[Dict[str, str]]) -> int:
		if await self.store.count_questions() > 0:
			return 0
		created = 0
		for item in data:
			await self.store.create_question(text=item["text"], topic=item["topic"])
			created += 1
		logger.info("seeded %d questions", created)
		return created

	async def get_daily_question(self, user_id: str, now: Optional[datetime] = None) -> QuestionRecord:
		"""Return the question assigned to the user today, assigning a new one on a new day."""
		now = now or utcnow()
		user = await self.store.find_user_by_id(user_id)
		if user is None:
			raise UserNotFoundError()

		if user.current_question_id and is_same_day(user.last_question_assigned_at, now):
			question = await self.store.get_question_by_id(user.current_question_id)
			if question is not None:
				return question

		questions = await self.store.list_questions()
		if not questions:
			raise NotFoundError("No questions available")
		question = self.rng.choice(questions)
		await self.store.assign_question_to_user(user_id, question.id, now)
		return question

	async def list_questions(self) -> List[QuestionRecord]:
		return await self.store.list_questions()

	async def create_question(self, text: str, topic: str) -> QuestionRecord:
		return await self.store.create_question(text=text, topic=topic)

	async def update_question(self, question_id: str, **fields: Any) -> QuestionRecord:
		changes = {k: v for k, v in fields.items() if v is not None}
		question = await self.store.update_question(question_id, **changes)
		if question is None:
			raise NotFoundError("Question not found")
		return question

	async def delete_question(self, question_id: str) -> None:
		if not await self.store.delete_question(question_id):
			raise NotFoundError("Question not found")
