from fastapi import APIRouter, Depends, Query

from ..deps import get_store, http_error
from ..errors import QuizStreakError
from ..schemas import UserCreateRequest, UserUpdateRequest
from ..security import Principal
from ..services.users import UserService
from ..store import Store
from .auth import get_current_principal, require_professor

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile")
async def my_profile(principal: Principal = Depends(get_current_principal), store: Store = Depends(get_store)):
	try:
		return {"profile": await UserService(store).get_profile(principal.user_id)}
	except QuizStreakError as e:
		raise http_error(e)


@router.get("/history")
async def my_history(
	limit: int = Query(default=50, ge=1, le=500),
	principal: Principal = Depends(get_current_principal),
	store: Store = Depends(get_store),
):
	return {"history": await UserService(store).get_history(principal.user_id, limit)}


@router.get("")
async def list_users(_: Principal = Depends(require_professor), store: Store = Depends(get_store)):
	return {"users": await UserService(store).list_users()}


@router.post("", status_code=201)
async def create_user(req: UserCreateRequest, _: Principal = Depends(require_professor), store: Store = Depends(get_store)):
	try:
		user = await UserService(store).create_user(req.email, req.password, role=req.role, streak=req.streak)
	except QuizStreakError as e:
		raise http_error(e)
	return {"user": user}


@router.patch("/{user_id}")
async def update_user(
	user_id: str,
	req: UserUpdateRequest,
	_: Principal = Depends(require_professor),
	store: Store = Depends(get_store),
):
	try:
		user = await UserService(store).update_user(
			user_id, email=req.email, password=req.password, role=req.role, streak=req.streak
		)
	except QuizStreakError as e:
		raise http_error(e)
	return {"user": user}


@router.delete("/{user_id}")
async def delete_user(user_id: str, _: Principal = Depends(require_professor), store: Store = Depends(get_store)):
	try:
		await UserService(store).delete_user(user_id)
	except QuizStreakError as e:
		raise http_error(e)
	return {"success": True}


@router.get("/{user_id}/profile")
async def user_profile(user_id: str, _: Principal = Depends(require_professor), store: Store = Depends(get_store)):
	try:
		return {"profile": await UserService(store).get_profile(user_id)}
	except QuizStreakError as e:
		raise http_error(e)


@router.get("/{user_id}/history")
async def user_history(
	user_id: str,
	limit: int = Query(default=50, ge=1, le=500),
	_: Principal = Depends(require_professor),
	store: Store = Depends(get_store),
):
	return {"history": await UserService(store).get_history(user_id, limit)}
