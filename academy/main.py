# academy/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from academy.core.config import settings
from academy.core.db import is_missing_table_error
from academy.core.errors import AcademyError
from academy.api.errors import to_http
from academy.api.routers import auth as auth_router
from academy.api.routers import students as students_router
from academy.api.routers import sessions as sessions_router
from academy.api.routers import attendance as attendance_router
from academy.api.routers import session_students as session_students_router
from academy.api.routers import teacher_requests as teacher_requests_router
from academy.api.routers import payments as payments_router
from academy.api.routers import semesters as semesters_router
from academy.api.routers import database as database_router
from academy.api.routers import ai as ai_router

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Music Academy Admin", version="0.3.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)},
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.info("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Missing or invalid fields"})

    @app.exception_handler(AcademyError)
    async def domain_error(request: Request, exc: AcademyError):
        http = to_http(exc)
        return JSONResponse(status_code=http.status_code, content={"error": http.detail})

    @app.exception_handler(SQLAlchemyError)
    async def database_error(request: Request, exc: SQLAlchemyError):
        if is_missing_table_error(exc):
            logger.warning("Database not initialized (%s %s)", request.method, request.url.path)
            return JSONResponse(
                status_code=424,
                content={"error": "Database not initialized", "needsInitialization": True},
            )
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(getattr(exc, "orig", None) or exc)})

    app.include_router(auth_router.router, prefix="/api")
    app.include_router(students_router.router, prefix="/api")
    app.include_router(sessions_router.router, prefix="/api")
    app.include_router(attendance_router.router, prefix="/api")
    app.include_router(session_students_router.router, prefix="/api")
    app.include_router(teacher_requests_router.router, prefix="/api")
    app.include_router(payments_router.router, prefix="/api")
    app.include_router(semesters_router.router, prefix="/api")
    app.include_router(database_router.router, prefix="/api")
    app.include_router(ai_router.router, prefix="/api")

    @app.get("/healthz")
    def health():
        return {"ok": True}

    return app

app = create_app()
