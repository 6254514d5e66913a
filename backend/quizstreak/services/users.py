from __future__ import annotations
from typing import Any, List, Optional

from ..errors import DuplicateEmailError, UserNotFoundError
from ..schemas import AnswerRecord, UserRecord
from ..security import STUDENT, hash_password, verify_password
from ..store import Store


class UserService:
	def __init__(self, store: Store) -> None:
		self.store = store

	async def register(self, email: str, password: str) -> UserRecord:
		return await self.create_user(email, password, role=STUDENT)

	async def authenticate(self, email: str, password: str) -> Optional[UserRecord]:
		user = await self.store.find_user_by_email(email.strip().lower())
		if user is None or not verify_password(password, user.password_hash):
			return None
		return user

	async def get_profile(self, user_id: str) -> UserRecord:
		user = await self.store.find_user_by_id(user_id)
		if user is None:
			raise UserNotFoundError()
		return user

	async def get_history(self, user_id: str, limit: int = 50) -> List[AnswerRecord]:
		return await self.store.get_answers_by_user_id(user_id, limit=max(1, limit))

	async def list_users(self) -> List[UserRecord]:
		return await self.store.list_users()

	async def create_user(self, email: str, password: str, *, role: str = STUDENT, streak: float = 0.0) -> UserRecord:
		email = email.strip().lower()
		if await self.store.find_user_by_email(email) is not None:
			raise DuplicateEmailError()
		return await self.store.create_user(email=email, password_hash=hash_password(password), role=role, streak=streak)

	async def update_user(
		self,
		user_id: str,
		*,
		email: Optional[str] = None,
		password: Optional[str] = None,
		role: Optional[str] = None,
		streak: Optional[float] = None,
	) -> UserRecord:
		fields: dict[str, Any] = {}
		if email is not None:
			email = email.strip().lower()
			other = await self.store.find_user_by_email(email)
			if other is not None and other.id != user_id:
				raise DuplicateEmailError()
			fields["email"] = email
		if password:
			fields["password_hash"] = hash_password(password)
		if role is not None:
			fields["role"] = role
		if streak is not None:
			fields["streak"] = streak
		user = await self.store.update_user(user_id, **fields)
		if user is None:
			raise UserNotFoundError()
		return user

	async def delete_user(self, user_id: str) -> None:
		if not await self.store.delete_user(user_id):
			raise UserNotFoundError()

	async def ensure_professor(self, email: Optional[str], password: Optional[str]) -> Optional[UserRecord]:
		"""Create the seed professor account if it is configured and missing."""
		if not email or not password:
			return None
		existing = await self.store.find_user_by_email(email.strip().lower())
		if existing is not None:
			return existing
		return await self.create_user(email, password, role="PROFESSOR")
