from __future__ import annotations


class QuizStreakError(Exception):
	"""Base class for the business errors raised by the services."""


class ConfigurationError(QuizStreakError):
	"""Deployment is missing something the service needs (not retryable)."""


class AlreadyAnsweredError(QuizStreakError):
	def __init__(self, message: str = "You already answered today's question, come back tomorrow") -> None:
		super().__init__(message)


class NotFoundError(QuizStreakError):
	pass


class UserNotFoundError(NotFoundError):
	def __init__(self, message: str = "User not found") -> None:
		super().__init__(message)


class AppealAlreadyResolvedError(QuizStreakError):
	def __init__(self, status: str) -> None:
		super().__init__(f"Appeal was already {status}")
		self.status = status


class DuplicateEmailError(QuizStreakError):
	def __init__(self, message: str = "User already exists") -> None:
		super().__init__(message)


class OracleError(QuizStreakError):
	"""A single grading attempt failed; never leaves the grader."""
