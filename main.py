# main.py
from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis
from controller.controller_dependencies import client_ip
from util.constants import InternalURIs
from util.errors import ProgressError, ReportRejected
from util.logger import init_logger
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    try:
        init_logger()
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        redis = await get_redis()
        await FastAPILimiter.init(redis, identifier=client_ip)
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        print("Failed to connect to Redis:", e)
        raise

    try:
        yield
    finally:
        try:
            await close_redis()
        except Exception as e:
            print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=settings.ALLOWED_ORIGIN != "*",
    allow_methods=["GET"],
    allow_headers=["Content-Type", "Accept"],
)


@app.get(InternalURIs.HEALTHZ)
async def healthz():
    return {"ok": True}


@app.exception_handler(ProgressError)
async def progress_error_handler(request: Request, exc: ProgressError):
    # Readable text instead of a stack trace; one line per rejected pair.
    if isinstance(exc, ReportRejected):
        body = "\n".join([f"Error: {exc.info.value.message}", *exc.lines()])
    else:
        body = f"Error: {exc}"
    logger.warning(
        "request.rejected path=%s err=%s", request.url.path, type(exc).__name__
    )
    return PlainTextResponse(body, status_code=exc.info.value.http_status)


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": f"Too many requests. Try again in {settings.RATE_LIMIT_SECONDS}s.",
        },
        headers={"Retry-After": str(settings.RATE_LIMIT_SECONDS)},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=reload)
