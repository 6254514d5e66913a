from fastapi import APIRouter, Depends

from ..deps import get_grader, get_store, http_error
from ..errors import QuizStreakError
from ..grader import AnswerGrader
from ..schemas import SubmitAnswerRequest, SubmitAnswerResponse
from ..security import Principal
from ..services.answers import AnswerService
from ..store import Store
from .auth import get_current_principal

router = APIRouter(prefix="/answers", tags=["answers"])


@router.post("/submit", response_model=SubmitAnswerResponse)
async def submit_answer(
	req: SubmitAnswerRequest,
	principal: Principal = Depends(get_current_principal),
	store: Store = Depends(get_store),
	grader: AnswerGrader = Depends(get_grader),
):
	service = AnswerService(store, grader)
	try:
		result = await service.submit_answer(principal.user_id, req.question_id, req.question_text, req.user_answer)
	except QuizStreakError as e:
		raise http_error(e)
	return SubmitAnswerResponse(
		rating=result.answer.rating,
		feedback=result.answer.feedback,
		new_streak=result.new_streak,
	)
