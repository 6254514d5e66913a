"""Streak scoring policy.

Answer grading moves the streak forward by one (correct) or half a point
(partial) and wipes it on an incorrect verdict. An accepted appeal tops the
*current* streak up to what a correct verdict would have given, without
replaying the answers that came after the appealed one.
"""
from __future__ import annotations

_RATING_STEP = {"correct": 1.0, "partial": 0.5}


def apply_rating(current_streak: float, rating: str) -> float:
	if rating == "incorrect":
		return 0.0
	try:
		step = _RATING_STEP[rating]
	except KeyError:
		raise ValueError(f"unknown rating: {rating!r}") from None
	return current_streak + step


def apply_appeal_acceptance(current_streak: float, original_rating: str, streak_at_moment: float = 0.0) -> float:
	"""Streak after an appeal on an answer graded ``original_rating`` is accepted.

	- ``incorrect``: the reset is undone, so the streak held when the answer was
	  recorded comes back on top of the corrected point and whatever has been
	  earned since: ``streak_at_moment + 1 + current_streak``.
	- ``partial``: the missing half point is added to the current streak.
	- ``correct``: nothing to correct.
	"""
	if original_rating == "incorrect":
		return streak_at_moment + 1.0 + current_streak
	if original_rating == "partial":
		return current_streak + 0.5
	if original_rating == "correct":
		return current_streak
	raise ValueError(f"unknown rating: {original_rating!r}")
