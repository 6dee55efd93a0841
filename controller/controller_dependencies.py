# controller/controller_dependencies.py
from fastapi import Request
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from repository.progress_repository import ProgressRepository
from service.progress_service import ProgressService

# Shared so tests can override it via app.dependency_overrides.
rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)


def get_progress_service() -> ProgressService:
    return ProgressService(ProgressRepository())


async def client_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
