from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from inventory_api.api.health import router as health_router
from inventory_api.api.responses import validation_exception_handler
from inventory_api.api.routes_products import router as products_router
from inventory_api.config import settings
from inventory_api.db import init_db
from inventory_api.utils.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    init_db(reset=settings.RESET_DB)
    yield


app = FastAPI(title="Inventory API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(products_router, prefix="/api/products", tags=["products"])


def run():
    uvicorn.run("inventory_api.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
