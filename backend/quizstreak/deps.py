from __future__ import annotations
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from .db import get_db
from .errors import (
	AlreadyAnsweredError,
	AppealAlreadyResolvedError,
	ConfigurationError,
	DuplicateEmailError,
	NotFoundError,
	QuizStreakError,
)
from .grader import AnswerGrader, build_grader
from .store import Store


def get_store(db: Session = Depends(get_db)) -> Store:
	return Store(db)


def get_grader(request: Request) -> AnswerGrader:
	grader = getattr(request.app.state, "grader", None)
	if grader is None:
		grader = build_grader()
		request.app.state.grader = grader
	return grader


_STATUS_BY_ERROR = (
	(AlreadyAnsweredError, 409),
	(AppealAlreadyResolvedError, 409),
	(DuplicateEmailError, 409),
	(NotFoundError, 404),
	(ConfigurationError, 503),
)


def http_error(exc: QuizStreakError) -> HTTPException:
	for error_type, status_code in _STATUS_BY_ERROR:
		if isinstance(exc, error_type):
			return HTTPException(status_code=status_code, detail=str(exc))
	return HTTPException(status_code=500, detail=str(exc))
