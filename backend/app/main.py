"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import LOG_LEVEL
from app.models.database import init_db
from app.api.auth import router as auth_router
from app.api.catalog import router as catalog_router
from app.api.portfolio_routes import router as portfolio_router
from app.tasks.scheduler import (
    refresh_nav_data,
    start_scheduler,
    stop_scheduler,
    sync_fund_catalog,
)

logging.basicConfig(
    level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    await sync_fund_catalog()
    await refresh_nav_data()
    start_scheduler()
    yield
    stop_scheduler()


app = FastAPI(title="Mutual Fund Tracker", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(catalog_router)
app.include_router(portfolio_router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
