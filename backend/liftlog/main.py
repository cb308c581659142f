# liftlog/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from liftlog.routers.auth import router as auth_router
from liftlog.routers.settings import router as settings_router
from liftlog.routers.movements import router as movements_router
from liftlog.routers.workouts import router as workouts_router
from liftlog.routers.records import router as records_router
from liftlog.routers.progression import router as progression_router
from liftlog.routers.weights import router as weights_router
from liftlog.routers.nutrition import router as nutrition_router
from liftlog.routers.foods import router as foods_router
from liftlog.db import SessionLocal  # for healthz DB check
from liftlog.rate_limit import RateLimitExceeded
from liftlog.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()

app = FastAPI(
    title="LiftLog API",
    openapi_tags=[
        {"name": "auth", "description": "Registration & login"},
        {"name": "settings", "description": "Per-user preferences"},
        {"name": "movements", "description": "Exercise catalogue"},
        {"name": "workouts", "description": "Workouts and their sets"},
        {"name": "records", "description": "Personal records"},
        {"name": "progression", "description": "Per-movement chart series"},
        {"name": "weights", "description": "Body weight tracking"},
        {"name": "nutrition", "description": "Food log and goals"},
        {"name": "foods", "description": "Food catalogue"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(RateLimitExceeded)
async def rate_limited(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": str(exc)},
        headers={"Retry-After": str(exc.retry_after_seconds)},
    )

@app.get("/")
def root():
    return {"ok": True, "name": "LiftLog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(auth_router)
app.include_router(settings_router)
app.include_router(movements_router)
app.include_router(workouts_router)
app.include_router(records_router)
app.include_router(progression_router)
app.include_router(weights_router)
app.include_router(nutrition_router)
app.include_router(foods_router)
