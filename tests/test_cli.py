import sys
import types

import pytest

from erp_backend.cli.__main__ import main


@pytest.fixture
def fake_app_module(monkeypatch, sample_app):
    module = types.ModuleType("fake_erp_app")
    module.app = sample_app
    monkeypatch.setitem(sys.modules, "fake_erp_app", module)
    return module


def test_list(fake_app_module, capsys):
    main(["list", "fake_erp_app:app"])
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "GET\t/api/configuration/login\tlogin_form",
        "POST\t/api/configuration/login\tlogin",
        "GET\t/api/masters/project\tauthenticate, authorize, get_projects",
    ]


def test_render_to_file(fake_app_module, tmp_path):
    out = tmp_path / "api.html"
    main(["render", "fake_erp_app:app", f"--out={out}"])
    page = out.read_text(encoding="utf-8")
    assert "API Explorer" in page
    assert 'id="total-apis">3<' in page


def test_prefix_option(fake_app_module, capsys):
    main(["list", "fake_erp_app:app", "--prefix=/api/masters"])
    assert capsys.readouterr().out.splitlines() == ["GET\t/api/masters/project\tauthenticate, authorize, get_projects"]


def test_usage_errors():
    with pytest.raises(SystemExit) as e:
        main(["list"])
    assert e.value.code == 1
    with pytest.raises(SystemExit) as e:
        main(["bogus", "x:y"])
    assert e.value.code == 1


def test_load_errors():
    for target in ("no_such_module_for_erp:app", "not-a-target"):
        with pytest.raises(SystemExit) as e:
            main(["list", target])
        assert e.value.code == 2


def test_import_frontend(tmp_path, capsys):
    build = tmp_path / "dist"
    build.mkdir()
    (build / "index.html").write_text("<html>ny</html>", encoding="utf-8")
    dest = tmp_path / "frontend"
    dest.mkdir()
    (dest / "old.js").write_text("gammal", encoding="utf-8")

    main(["import-frontend", str(build), str(dest)])

    assert (dest / "index.html").read_text(encoding="utf-8") == "<html>ny</html>"
    assert not (dest / "old.js").exists()

    with pytest.raises(SystemExit) as e:
        main(["import-frontend", str(tmp_path / "missing"), str(dest)])
    assert e.value.code == 2
