import logging
import time
from contextlib import asynccontextmanager
from typing import Optional, Sequence, Tuple

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from erp_backend.core.route_groups import normalize_prefix
from erp_backend.server import frontend
from erp_backend.server.api import explorer, system
from erp_backend.server.db.session import check_connection, get_engine, init_db
from erp_backend.server.feature_routers import load_feature_routers, normalize_router_prefix
from erp_backend.server.logging_setup import configure_logging
from erp_backend.server.settings.config import Settings, settings as default_settings
from erp_backend.server.uploads import ensure_upload_folders

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("erp_backend.access")


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    access_logger.info("%s %s %s %.1f ms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


def create_app(
    settings: Optional[Settings] = None,
    routers: Sequence[Tuple[str, APIRouter]] = (),
) -> FastAPI:
    """
    Bygg appen:
      {api_prefix}/...  API-sub-app (health, feature-routers, explorer sist)
      /...              frontend-bygget med fallback till index.html

    `routers` är (prefix, APIRouter)-par utöver de som anges i FEATURE_ROUTERS.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    api_prefix = normalize_prefix(settings.api_prefix)
    engine = get_engine(settings.database_url, settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Startar %s (%s)...", settings.app_name, settings.environment)
        if check_connection(engine):
            init_db(engine)
        app.state.upload_folders = ensure_upload_folders(settings.uploads_dir, settings.upload_subdirs)
        yield
        logger.info("Avslutar appen...")

    app = FastAPI(title=settings.app_name, lifespan=lifespan, openapi_url=None, docs_url=None, redoc_url=None)
    app.state.settings = settings

    # CORS – så frontenden kan prata med backend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    # API-sub-appen har egna docs under {api_prefix}/docs
    api = FastAPI(title=f"{settings.app_name} API")
    api.state.root_app = app
    api.state.api_prefix = api_prefix
    api.state.engine = engine
    api.state.settings = settings

    api.include_router(system.router)
    for prefix, router in [*load_feature_routers(settings.feature_routers), *routers]:
        api.include_router(router, prefix=normalize_router_prefix(prefix))
    api.include_router(explorer.router)  # catch-all, måste ligga sist

    app.mount(api_prefix, api)
    app.include_router(frontend.router)
    return app


app = create_app()
