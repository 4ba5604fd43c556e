import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from debtplan.config import settings
from debtplan.db.connection import db_pool
from debtplan.api.routes import health, plans, debts, profiles

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initialize the profile store pool
    db_pool.initialize()
    yield
    # Shutdown: close DB pool
    db_pool.close()


app = FastAPI(title="Debt Plan Engine", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(plans.router, prefix="/api")
app.include_router(debts.router, prefix="/api")
app.include_router(profiles.router, prefix="/api")
