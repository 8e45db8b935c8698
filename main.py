"""
Learner Grades Stats API

Main FastAPI application exposing learner records and pass-rate
statistics computed over grade records stored in MongoDB.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from config import settings
from database import init_db
from api import learners_router, grades_router, HealthResponse


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# --------------- Lifespan ---------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler – register schema and indexes on startup."""
    logger.info("Initializing database...")
    try:
        init_db()
    except PyMongoError:
        logger.exception("Database initialization failed, continuing without it")
    else:
        logger.info("Database initialized.")
    yield


# --------------- FastAPI app ---------------

app = FastAPI(
    title="Learner Grades Stats API",
    description="""
API over learner and grade records.

## Endpoints

- **GET /**: learners failing a validity rule
- **GET /grades/stats**: share of score entries above 70 across all grades
- **GET /grades/stats/{id}**: share of learners above 70 within one class
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Seems like we messed up somewhere..."}
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(learners_router)
app.include_router(grades_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.port,
        reload=settings.debug,
    )
