import logging

from fastapi import FastAPI
from sqlalchemy import text

from .config import settings
from .database import engine
from .redis_client import redis_client
from .routers import appointments

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Clinic Booking API")
app.include_router(appointments.router)


@app.get("/health")
def health():
    with engine.connect() as conn:
        database_ok = conn.execute(text("SELECT 1")).scalar() == 1
    return {
        "database": database_ok,
        "redis": redis_client.ping() if redis_client is not None else None,
    }
