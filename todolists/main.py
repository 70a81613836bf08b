import logging
import time

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from todolists import config
from todolists.errors import register_error_handlers
from todolists.routers import todolist_router, user_router

logger = logging.getLogger("todolists.access")


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s:%(name)s: %(message)s",
    )
    # basicConfig is a no-op when a handler is already installed (AWS Lambda)
    logging.getLogger().setLevel(level)


def create_app() -> FastAPI:
    app = FastAPI(title="Todo Lists")

    app.add_middleware(
        SessionMiddleware,
        secret_key=config.SECRET_KEY,
        session_cookie=config.SESSION_COOKIE,
        max_age=config.SESSION_MAX_AGE,
        same_site="lax",
        https_only=False,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    register_error_handlers(app)

    app.include_router(user_router.router, prefix="/users", tags=["Users"])
    app.include_router(todolist_router.router, prefix="/lists", tags=["Todo lists"])

    # Root health
    @app.get("/")
    async def read_root():
        return {"status": "ok"}

    return app


configure_logging()
app = create_app()
