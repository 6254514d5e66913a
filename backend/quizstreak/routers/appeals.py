from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_store, http_error
from ..errors import QuizStreakError
from ..schemas import AppealRecord, CreateAppealRequest, ResolveAppealRequest
from ..security import Principal
from ..services.appeals import AppealService
from ..store import Store
from .auth import get_current_principal, require_professor

router = APIRouter(prefix="/appeals", tags=["appeals"])

_STATUSES = ("pending", "accepted", "rejected")


@router.post("", status_code=201, response_model=AppealRecord)
async def create_appeal(
	req: CreateAppealRequest,
	principal: Principal = Depends(get_current_principal),
	store: Store = Depends(get_store),
):
	try:
		return await AppealService(store).create_appeal(principal.user_id, principal.email, req.answer_id)
	except QuizStreakError as e:
		raise http_error(e)


@router.get("/my", response_model=List[AppealRecord])
async def my_appeals(principal: Principal = Depends(get_current_principal), store: Store = Depends(get_store)):
	return await AppealService(store).list_my_appeals(principal.user_id)


@router.get("", response_model=List[AppealRecord])
async def all_appeals(
	status: Optional[str] = Query(default=None),
	_: Principal = Depends(require_professor),
	store: Store = Depends(get_store),
):
	if status is not None and status not in _STATUSES:
		raise HTTPException(status_code=400, detail=f"status must be one of {list(_STATUSES)}")
	return await AppealService(store).list_appeals(status)


@router.patch("/{appeal_id}/resolve", response_model=AppealRecord)
async def resolve_appeal(
	appeal_id: str,
	req: ResolveAppealRequest,
	_: Principal = Depends(require_professor),
	store: Store = Depends(get_store),
):
	try:
		return await AppealService(store).resolve_appeal(appeal_id, req.status, req.feedback)
	except QuizStreakError as e:
		raise http_error(e)
