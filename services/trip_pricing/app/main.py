from fastapi import FastAPI

from src.common.logging import setup_logging
from src.common.metrics import setup_metrics
from src.common.settings import settings
from src.common.telemetry import setup_otel

from .api import router

setup_logging(settings.log_level)

app = FastAPI(title="trip_pricing")
setup_metrics(app, "trip_pricing")
setup_otel(app, "trip_pricing")


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/readyz")
async def readyz() -> dict[str, str]:
    return {"status": "ready"}


app.include_router(router)
