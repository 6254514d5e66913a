import time

from fastapi import APIRouter

from ..clock import utcnow
from ..settings import settings

router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/health")
def health():
	return {
		"status": "ok",
		"timestamp": utcnow().isoformat() + "Z",
		"uptime": round(time.monotonic() - _STARTED_AT, 3),
		"environment": settings.app_env,
		"message": "Backend is running correctly",
	}
