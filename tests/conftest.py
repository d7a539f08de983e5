# tests/conftest.py
import os, sys
# lägg till projektroten (mappen som innehåller "erp_backend") först i sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from fastapi import APIRouter, Depends, FastAPI
from starlette.routing import Mount, Router

from erp_backend.server.settings.config import Settings


def authenticate():
    return "user"


def authorize():
    return True


def login_form():
    return {"step": "form"}


def login():
    return {"token": "t"}


def get_projects():
    return []


def build_sample_app() -> FastAPI:
    """
    /api/configuration/login  GET + POST
    /api/masters/project      GET, authenticate + authorize
    Varje område är en egen Mount, precis som nästlade routers.
    """
    configuration = APIRouter()
    configuration.add_api_route("/login", login_form, methods=["GET"])
    configuration.add_api_route("/login", login, methods=["POST"])

    masters = APIRouter(dependencies=[Depends(authenticate), Depends(authorize)])
    masters.add_api_route("/project", get_projects, methods=["GET"])

    api = Router(
        routes=[
            Mount("/configuration", routes=configuration.routes),
            Mount("/masters", routes=masters.routes),
        ]
    )
    app = FastAPI(openapi_url=None)
    app.mount("/api", api)
    return app


@pytest.fixture
def sample_app():
    return build_sample_app()


@pytest.fixture
def settings_factory(tmp_path):
    def make(**overrides):
        values = dict(
            database_url="sqlite://",
            debug=False,
            frontend_dir=str(tmp_path / "frontend"),
            uploads_dir=str(tmp_path / "uploads"),
            cors_allow_origins=["*"],
            feature_routers="",
        )
        values.update(overrides)
        return Settings(**values)
    return make
