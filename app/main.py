import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.http import auth_router, bottles_router, health_router
from app.core.config import settings
from app.core.db import create_db_and_tables
from app.db.errors import PersistenceError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    logger.info("Database tables are ready")
    yield


app = FastAPI(
    title="Wine Cellar",
    description="Учёт домашнего винного погреба",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Ошибки валидации - списком по полям, статус 400"""
    errors = [
        {
            "location": error["loc"][0] if error["loc"] else None,
            "param": ".".join(str(part) for part in error["loc"][1:]),
            "msg": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


@app.exception_handler(PersistenceError)
async def persistence_exception_handler(request: Request, exc: PersistenceError):
    # Подробности уже в логе репозитория, клиенту - только общий ответ
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server Error"},
    )


# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(bottles_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Wine Cellar API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
