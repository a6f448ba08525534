import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from courtside.config import settings
from courtside.api import data_source, matches, model_weights, performance, players, predictions
from courtside.api.limits import limiter
from courtside.services.data_client import DataStoreError, ListOptions, NotFoundError
from courtside.services.data_source import get_data_source_router
from courtside.services.sample_data import seed_sample_data

# Rate limiting
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    source_router = get_data_source_router()

    # Startup: create tables on the relational store if one is configured
    if source_router.remote_client is not None:
        await source_router.remote_client.create_tables()

    local_client = source_router.local_client
    if settings.SEED_SAMPLE_DATA and not await local_client.players.list(ListOptions(limit=1)):
        await seed_sample_data(local_client, player_count=settings.SAMPLE_PLAYER_COUNT)

    logger.info(f"{settings.APP_NAME} started with data source '{source_router.current_source}'")

    yield

    if source_router.remote_client is not None:
        await source_router.remote_client.close()


app = FastAPI(
    title=settings.APP_NAME,
    description="Tennis match predictions: heuristic, ELO, surface, ensemble and ML models",
    version=APP_VERSION,
    lifespan=lifespan
)

# Initialize rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def invalid_request_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(DataStoreError)
async def data_store_handler(request: Request, exc: DataStoreError):
    logger.error(f"Data store error on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Data store unavailable"})


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(players.router, prefix="/api/players", tags=["Players"])
app.include_router(matches.router, prefix="/api/matches", tags=["Matches"])
app.include_router(predictions.router, prefix="/api/predictions", tags=["Predictions"])
app.include_router(model_weights.router, prefix="/api/model-weights", tags=["Model Weights"])
app.include_router(performance.router, prefix="/api/performance", tags=["Performance"])
app.include_router(data_source.router, prefix="/api/data-source", tags=["Data Source"])


@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "data_source": get_data_source_router().current_source}
