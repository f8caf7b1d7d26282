from pathlib import Path

import pytest

from lth.cache import ResourceCache
from lth.markup import HelperServices

from tests.infrastructure import make_web_root


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    # cache switches and debug level from the developer's shell must not leak in
    monkeypatch.delenv("LTH_CACHE", raising=False)
    monkeypatch.delenv("LTH_DEBUG", raising=False)


@pytest.fixture
def web_root(tmp_path: Path) -> Path:
    """Web root with a few stylesheets in nested folders."""
    return make_web_root(tmp_path / "wwwroot", [
        "site.css",
        "css/a.css",
        "css/b.css",
        "css/print.css",
        "lib/bootstrap/bootstrap.css",
        "lib/bootstrap/bootstrap.min.css",
        "js/app.js",
    ])


@pytest.fixture
def services(web_root: Path) -> HelperServices:
    return HelperServices(web_root=web_root, cache=ResourceCache())
