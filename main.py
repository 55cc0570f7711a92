import sys
import logging
from fastapi import FastAPI

from config import settings
from routers import bookings, customers, feedback, invoices
from routers import settings as settings_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Workplace API",
    description="API для администрирования коворкинга: клиенты, брони, счета, анализ отзывов.",
    version="1.0.0"
)

app.include_router(bookings.router)
app.include_router(customers.router)
app.include_router(invoices.router)
app.include_router(settings_router.router)
app.include_router(feedback.router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
