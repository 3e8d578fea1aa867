import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dashboard.api.customers import router as customers_router
from dashboard.api.invoices import router as invoices_router
from dashboard.api.overview import router as overview_router
from dashboard.config import get_settings
from dashboard.db.engine import get_engine
from dashboard.errors import DataFetchError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Only dispose an engine that was actually built
    if get_engine.cache_info().currsize:
        await get_engine().dispose()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(DataFetchError)
async def data_fetch_error_handler(request: Request, exc: DataFetchError) -> JSONResponse:
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(overview_router)
app.include_router(invoices_router)
app.include_router(customers_router)
