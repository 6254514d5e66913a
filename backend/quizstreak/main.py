import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import init_db, session_scope
from .grader import build_grader
from .questions_data import QUESTIONS_DATA
from .routers import health, auth, answers, appeals, questions, users
from .services.questions import QuestionService
from .services.users import UserService
from .settings import settings
from .store import Store

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Daily Question API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(answers.router)
app.include_router(appeals.router)
app.include_router(questions.router)
app.include_router(users.router)


@app.get("/info")
def root():
	return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}


@app.on_event("startup")
async def startup_event():
	init_db()
	with session_scope() as db:
		store = Store(db)
		await QuestionService(store).seed_questions(QUESTIONS_DATA)
		await UserService(store).ensure_professor(settings.seed_professor_email, settings.seed_professor_password)
	app.state.grader = build_grader()


@app.on_event("shutdown")
async def shutdown_event():
	grader = getattr(app.state, "grader", None)
	if grader is not None:
		await grader.aclose()
