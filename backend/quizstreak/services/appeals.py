from __future__ import annotations
import logging
from typing import List, Optional

from ..clock import utcnow
from ..errors import AppealAlreadyResolvedError, NotFoundError
from ..ledger import apply_appeal_acceptance
from ..locks import UserLocks, user_locks
from ..schemas import AppealRecord
from ..store import Store

logger = logging.getLogger(__name__)

RESOLUTIONS = ("accepted", "rejected")


class AppealService:
	def __init__(self, store: Store, *, locks: UserLocks = user_locks) -> None:
		self.store = store
		self.locks = locks

	async def create_appeal(self, user_id: str, user_name: str, answer_id: str) -> AppealRecord:
		# Scoped to the caller's own answers, so nobody can appeal someone else's
		answers = await self.store.get_answers_by_user_id(user_id, limit=None)
		answer = next((a for a in answers if a.id == answer_id), None)
		if answer is None:
			raise NotFoundError("Answer not found")

		return await self.store.create_appeal(
			user_id=user_id,
			user_name=user_name,
			answer_id=answer_id,
			question_id=answer.question_id,
			question_text=answer.question_text,
			user_answer=answer.user_answer,
			original_rating=answer.rating,
			original_feedback=answer.feedback,
			status="pending",
			created_at=utcnow(),
			streak_at_moment=answer.streak_at_moment,
		)

	async def list_my_appeals(self, user_id: str) -> List[AppealRecord]:
		return await self.store.get_appeals_by_user_id(user_id)

	async def list_appeals(self, status: Optional[str] = None) -> List[AppealRecord]:
		return await self.store.list_appeals(status)

	async def resolve_appeal(self, appeal_id: str, status: str, professor_feedback: str) -> AppealRecord:
		if status not in RESOLUTIONS:
			raise ValueError(f"status must be one of {RESOLUTIONS}, got {status!r}")

		appeal = await self.store.get_appeal_by_id(appeal_id)
		if appeal is None:
			raise NotFoundError("Appeal not found")

		async with self.locks.hold(appeal.user_id):
			# Another professor may have resolved it while we waited
			appeal = await self.store.get_appeal_by_id(appeal_id) or appeal
			if appeal.status != "pending":
				raise AppealAlreadyResolvedError(appeal.status)

			updated = await self.store.update_appeal(
				appeal_id,
				status=status,
				professor_feedback=professor_feedback,
				resolved_at=utcnow(),
			)
			if status == "accepted":
				await self._credit_streak(appeal)

		logger.info("appeal %s %s", appeal_id, status)
		return updated

	async def _credit_streak(self, appeal: AppealRecord) -> None:
		user = await self.store.find_user_by_id(appeal.user_id)
		if user is None:
			logger.warning("appeal %s accepted but user %s no longer exists, streak untouched", appeal.id, appeal.user_id)
			return
		new_streak = apply_appeal_acceptance(user.streak, appeal.original_rating, appeal.streak_at_moment)
		await self.store.update_user_streak(appeal.user_id, new_streak, is_appeal_adjustment=True)
