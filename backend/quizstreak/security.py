from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from .settings import settings

logging.getLogger('passlib').setLevel(logging.ERROR)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PROFESSOR = "PROFESSOR"
STUDENT = "STUDENT"


@dataclass(frozen=True)
class Principal:
	"""Identity of the caller, built once per request from the bearer token."""
	user_id: str
	email: str
	role: str

	@property
	def is_professor(self) -> bool:
		return self.role == PROFESSOR


def _bcrypt_safe(password: str) -> str:
	# bcrypt only looks at the first 72 bytes
	password_bytes = password.encode('utf-8')
	if len(password_bytes) > 72:
		password_bytes = password_bytes[:72]
	return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
	return pwd_context.hash(_bcrypt_safe(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
	if not hashed_password:
		return False
	return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)


def _resolve_expiry(expires_delta: Optional[timedelta]) -> datetime:
	delta = expires_delta
	if delta is None:
		minutes = settings.access_token_expire_minutes
		delta = timedelta(minutes=minutes) if minutes > 0 else timedelta(days=1)
	now = datetime.now(timezone.utc)
	try:
		return now + delta
	except OverflowError:
		return datetime.max.replace(tzinfo=timezone.utc)


def create_access_token(principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
	to_encode = {
		"sub": principal.user_id,
		"email": principal.email,
		"role": principal.role,
		"exp": _resolve_expiry(expires_delta),
	}
	return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Principal]:
	try:
		payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
	except JWTError:
		return None
	user_id = payload.get("sub")
	if not user_id:
		return None
	return Principal(user_id=user_id, email=payload.get("email", ""), role=payload.get("role", STUDENT))
