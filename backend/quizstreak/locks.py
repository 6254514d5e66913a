from __future__ import annotations
import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, DefaultDict


class UserLocks:
	"""Per-user critical section around read-compute-write streak updates.

	Only serializes callers inside one process; running several workers still
	needs a conditional update at the database.
	"""

	def __init__(self) -> None:
		# One lock per user ever seen; bounded by the size of the class roster
		self._locks: DefaultDict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

	@asynccontextmanager
	async def hold(self, user_id: str) -> AsyncIterator[None]:
		async with self._locks[user_id]:
			yield


user_locks = UserLocks()
