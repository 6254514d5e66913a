from fastapi import APIRouter, Depends

from ..deps import get_store, http_error
from ..errors import QuizStreakError
from ..schemas import QuestionCreateRequest, QuestionRecord, QuestionUpdateRequest
from ..security import Principal
from ..services.questions import QuestionService
from ..store import Store
from .auth import get_current_principal, require_professor

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/daily", response_model=QuestionRecord)
async def daily_question(principal: Principal = Depends(get_current_principal), store: Store = Depends(get_store)):
	try:
		return await QuestionService(store).get_daily_question(principal.user_id)
	except QuizStreakError as e:
		raise http_error(e)


@router.get("")
async def list_questions(_: Principal = Depends(require_professor), store: Store = Depends(get_store)):
	return {"questions": await QuestionService(store).list_questions()}


@router.post("", status_code=201)
async def create_question(req: QuestionCreateRequest, _: Principal = Depends(require_professor), store: Store = Depends(get_store)):
	return {"question": await QuestionService(store).create_question(req.text, req.topic)}


@router.patch("/{question_id}")
async def update_question(
	question_id: str,
	req: QuestionUpdateRequest,
	_: Principal = Depends(require_professor),
	store: Store = Depends(get_store),
):
	try:
		question = await QuestionService(store).update_question(question_id, text=req.text, topic=req.topic)
	except QuizStreakError as e:
		raise http_error(e)
	return {"question": question}


@router.delete("/{question_id}")
async def delete_question(question_id: str, _: Principal = Depends(require_professor), store: Store = Depends(get_store)):
	try:
		await QuestionService(store).delete_question(question_id)
	except QuizStreakError as e:
		raise http_error(e)
	return {"success": True}
