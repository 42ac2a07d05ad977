import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from erpdash.config import settings
from erpdash.database import engine
from erpdash.middleware.exceptions import register_exception_handlers
from erpdash.routers import dashboard, health, leads, trash
from erpdash.routers import settings as settings_router
from erpdash.routers.entities import ENTITY_ROUTES, build_entity_router
from erpdash.utils.redis_client import close_redis

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("erpdash")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting erpdash ({settings.environment})")
    yield
    await close_redis()
    await engine.dispose()
    logger.info("Shut down erpdash")


app = FastAPI(
    title="ERP Dashboard",
    description="Per-user CRM, invoicing and project tracking with trash and restore",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)

# Lead conversion is registered ahead of the generic lead CRUD routes.
app.include_router(leads.router, prefix="/api/leads", tags=["leads"])
for segment, repo_cls in ENTITY_ROUTES.items():
    app.include_router(build_entity_router(repo_cls), prefix=f"/api/{segment}", tags=[segment])

app.include_router(trash.router, prefix="/api/trash", tags=["trash"])
app.include_router(settings_router.router, prefix="/api/settings", tags=["settings"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
