from fastapi import APIRouter, Depends
from fastapi.testclient import TestClient

from erp_backend.server.api import explorer
from erp_backend.server.api.explorer import collect_api_routes, list_routes
from erp_backend.server.main import create_app


def require_auth():
    return "user"


def list_projects():
    return [{"Project_Id": 1}]


def login():
    return {"token": "t"}


def _feature_routers():
    configuration = APIRouter()
    configuration.add_api_route("/login", login, methods=["POST"])
    masters = APIRouter(dependencies=[Depends(require_auth)])
    masters.add_api_route("/project", list_projects, methods=["GET"])
    return [("/configuration", configuration), ("/masters", masters)]


def test_end_to_end_scenario(sample_app):
    routes = collect_api_routes(sample_app)
    assert [(r.method, r.full_path) for r in routes] == [
        ("GET", "/api/configuration/login"),
        ("POST", "/api/configuration/login"),
        ("GET", "/api/masters/project"),
    ]

    page = list_routes(sample_app)
    assert 'id="total-apis">3<' in page
    assert 'mono text-lg">/api/configuration<' in page
    assert 'mono text-lg">/api/masters<' in page
    assert "Group 5" not in page  # configuration, login, masters, project
    assert page.index(">authenticate<") < page.index(">authorize<")


def test_explorer_endpoint_lists_live_routes(settings_factory):
    app = create_app(settings_factory(), routers=_feature_routers())
    with TestClient(app) as client:
        r = client.get("/api/anything/unknown")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    page = r.text
    for path in ("/api/health", "/api/configuration/login", "/api/masters/project"):
        assert path in page
    assert "/api/:path" not in page  # explorerns egen catch-all syns inte
    assert f'id="total-apis">{len(collect_api_routes(app, hidden=(explorer.api_explorer,)))}<' in page
    assert ">require_auth<" in page


def test_concrete_routes_win_over_catch_all(settings_factory):
    app = create_app(settings_factory(), routers=_feature_routers())
    with TestClient(app) as client:
        assert client.get("/api/masters/project").json() == [{"Project_Id": 1}]


def test_explorer_failure_is_plain_500(settings_factory, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("trasigt träd")

    monkeypatch.setattr(explorer, "list_routes", boom)
    app = create_app(settings_factory())
    with TestClient(app) as client:
        r = client.get("/api/")

    assert r.status_code == 500
    assert r.text == "Failed to list routes"
    assert r.headers["content-type"].startswith("text/plain")


def test_custom_api_prefix(settings_factory):
    app = create_app(settings_factory(api_prefix="/v1"))
    with TestClient(app) as client:
        r = client.get("/v1/x")
    assert r.status_code == 200
    assert "/v1/health" in r.text


SUB_APP_DOCS = {"/api/openapi.json", "/api/docs", "/api/docs/oauth2-redirect", "/api/redoc"}


def test_create_app_lists_every_included_route(settings_factory):
    app = create_app(settings_factory(), routers=_feature_routers())
    routes = collect_api_routes(app, hidden=(explorer.api_explorer,))

    own = [(r.method, r.full_path, r.middlewares) for r in routes if r.full_path not in SUB_APP_DOCS]
    assert own == [
        ("POST", "/api/configuration/login", ("login",)),
        ("GET", "/api/health", ("get_session", "health")),
        ("GET", "/api/masters/project", ("require_auth", "list_projects")),
    ]
    assert SUB_APP_DOCS <= {r.full_path for r in routes}

    with TestClient(app) as client:
        page = client.get("/api/").text
    assert f'id="total-apis">{len(routes)}<' in page
    assert page.count('<td class="px-3 py-2 mono">') == len(routes)


def test_explorer_answers_get_only(settings_factory):
    with TestClient(create_app(settings_factory())) as client:
        assert client.post("/api/unknown").status_code == 405
