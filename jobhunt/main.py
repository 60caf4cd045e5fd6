import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobhunt.core import config
from jobhunt.core.logging_config import setup_logging, sanitize_log_data
from jobhunt.api.routes import auth, bullets, experience, jobs, health

logger = logging.getLogger(__name__)


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="JobHunt API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(jobs.router)
app.include_router(bullets.router)
app.include_router(experience.router)
app.include_router(health.router)


@app.on_event("startup")
def on_startup():
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    logger.info(f"Starting JobHunt API: {sanitize_log_data({'database_url': config.DATABASE_URL, 'log_level': config.LOG_LEVEL})}")

    if config.RUN_MIGRATIONS:
        from jobhunt.db.migrate import run_migrations
        run_migrations()
    else:
        from jobhunt.db.init_db import init_db
        init_db()


@app.get("/")
def root():
    return {"status": "JobHunt API running"}
