from __future__ import annotations
import logging
from dataclasses import dataclass

from ..errors import AlreadyAnsweredError, UserNotFoundError
from ..grader import AnswerGrader
from ..ledger import apply_rating
from ..locks import UserLocks, user_locks
from ..schemas import AnswerRecord
from ..store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitResult:
	answer: AnswerRecord
	new_streak: float


class AnswerService:
	def __init__(self, store: Store, grader: AnswerGrader, *, locks: UserLocks = user_locks) -> None:
		self.store = store
		self.grader = grader
		self.locks = locks

	async def submit_answer(self, user_id: str, question_id: str, question_text: str, user_answer: str) -> SubmitResult:
		"""Grade today's answer, move the streak and record the answer.

		The whole sequence runs under the user's lock: a second submission for
		the same question waits and then sees the first one, and an appeal
		resolved meanwhile cannot overwrite the new streak.
		"""
		async with self.locks.hold(user_id):
			existing = await self.store.get_answer_for_question_today(user_id, question_id)
			if existing is not None:
				raise AlreadyAnsweredError()

			verdict = await self.grader.evaluate(question_text, user_answer)

			user = await self.store.find_user_by_id(user_id)
			if user is None:
				raise UserNotFoundError()

			new_streak = apply_rating(user.streak, verdict.rating)
			await self.store.update_user_streak(user_id, new_streak)

			answer = await self.store.create_answer(
				user_id=user_id,
				question_id=question_id,
				question_text=question_text,
				user_answer=user_answer,
				rating=verdict.rating,
				feedback=verdict.feedback,
				streak_at_moment=new_streak,
			)
		logger.info("user %s answered %s: %s, streak %s -> %s", user_id, question_id, verdict.rating, user.streak, new_streak)
		return SubmitResult(answer=answer, new_streak=new_streak)
