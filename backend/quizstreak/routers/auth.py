from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordRequestForm, OAuth2PasswordBearer
from pydantic import BaseModel

from ..deps import get_store, http_error
from ..errors import QuizStreakError
from ..schemas import RegisterRequest, UserRecord
from ..security import Principal, create_access_token, decode_access_token
from ..services.users import UserService
from ..store import Store

router = APIRouter(prefix="/auth", tags=["auth"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"


@router.post("/register", status_code=201, response_model=UserRecord)
async def register(req: RegisterRequest, store: Store = Depends(get_store)):
	email = (req.email or "").strip()
	if not email or not req.password:
		raise HTTPException(status_code=400, detail="email and password are required")
	try:
		return await UserService(store).register(email, req.password)
	except QuizStreakError as e:
		raise http_error(e)


@router.post("/token", response_model=Token)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), store: Store = Depends(get_store)):
	user = await UserService(store).authenticate(form_data.username, form_data.password)
	if not user:
		raise HTTPException(status_code=401, detail="Invalid credentials")
	principal = Principal(user_id=user.id, email=user.email, role=user.role)
	return Token(access_token=create_access_token(principal))


async def get_current_principal(token: str = Depends(oauth2_scheme), store: Store = Depends(get_store)) -> Principal:
	credentials_exception = HTTPException(status_code=401, detail="Not authenticated")
	claims = decode_access_token(token)
	if claims is None:
		raise credentials_exception
	# Role comes from the stored user so demotions apply to live tokens
	user = await store.find_user_by_id(claims.user_id)
	if user is None:
		raise credentials_exception
	return Principal(user_id=user.id, email=user.email, role=user.role)


async def require_professor(principal: Principal = Depends(get_current_principal)) -> Principal:
	if not principal.is_professor:
		raise HTTPException(status_code=403, detail="Forbidden: Professor access required")
	return principal


@router.get("/me", response_model=UserRecord)
async def me(principal: Principal = Depends(get_current_principal), store: Store = Depends(get_store)):
	try:
		return await UserService(store).get_profile(principal.user_id)
	except QuizStreakError as e:
		raise http_error(e)
