import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.config import settings
from .core.logging_setup import setup_logging
from .routers import alerts, localities

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)
logger.info("Starting %s (env=%s, alerts upstream=%s)", settings.app_name, settings.app_env, settings.alerts_api_base)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(alerts.router)
app.include_router(localities.router)

@app.get("/")
def root():
    return {"name": settings.app_name, "env": settings.app_env, "message": "OK"}
