from pathlib import Path

from lth.cache import ResourceCache
from lth.globbing import GlobbingUrlBuilder, builder as builder_mod

from tests.infrastructure import touch_dir, write


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_get_or_set_computes_once():
    cache = ResourceCache()
    calls = []

    def factory():
        calls.append(1)
        return ("/a.css",)

    assert cache.get_or_set("k", factory) == ("/a.css",)
    assert cache.get_or_set("k", factory) == ("/a.css",)
    assert len(calls) == 1
    assert cache.get("k") == ("/a.css",)


def test_token_change_recomputes():
    cache = ResourceCache()
    assert cache.get_or_set("k", lambda: 1, token="t1") == 1
    assert cache.get_or_set("k", lambda: 2, token="t1") == 1
    assert cache.get_or_set("k", lambda: 3, token="t2") == 3
    assert cache.get("k", token="t1") is None


def test_ttl_expiry():
    clock = FakeClock()
    cache = ResourceCache(ttl=10, clock=clock)
    cache.set("k", "v")
    clock.now += 9
    assert cache.get("k") == "v"
    clock.now += 1
    assert cache.get("k") is None
    assert len(cache) == 0


def test_disabled_cache_never_stores():
    cache = ResourceCache(enabled=False)
    calls = []
    cache.get_or_set("k", lambda: calls.append(1))
    cache.get_or_set("k", lambda: calls.append(1))
    assert len(calls) == 2
    assert cache.snapshot().entries == 0


def test_env_switch_overrides_argument(monkeypatch):
    monkeypatch.setenv("LTH_CACHE", "off")
    assert ResourceCache(enabled=True).enabled is False
    monkeypatch.setenv("LTH_CACHE", "1")
    assert ResourceCache(enabled=False).enabled is True


def test_factory_error_stores_nothing():
    cache = ResourceCache()

    def boom():
        raise OSError("disk")

    try:
        cache.get_or_set("k", boom)
    except OSError:
        pass
    assert len(cache) == 0


def test_purge_and_snapshot():
    cache = ResourceCache(ttl=5)
    cache.set("a", 1)
    cache.set("b", 2)
    snap = cache.snapshot()
    assert (snap.enabled, snap.entries, snap.ttl) == (True, 2, 5)
    cache.purge_all()
    assert cache.snapshot().entries == 0


def test_builders_share_cache_entries(web_root: Path, monkeypatch):
    cache = ResourceCache()
    first = GlobbingUrlBuilder(web_root, cache, "", watch_files=False)
    assert first.build_url_list(None, "css/*.css", None) == ["/css/a.css", "/css/b.css", "/css/print.css"]

    second = GlobbingUrlBuilder(web_root, cache, "", watch_files=False)

    def fail(*args, **kwargs):
        raise AssertionError("cached matches must be reused")

    monkeypatch.setattr(second, "_find_files", fail)
    assert second.build_url_list(None, "css/*.css", None) == ["/css/a.css", "/css/b.css", "/css/print.css"]


def test_cache_key_includes_path_base(web_root: Path):
    cache = ResourceCache()
    a = GlobbingUrlBuilder(web_root, cache, "", watch_files=False).build_url_list(None, "site.css", None)
    b = GlobbingUrlBuilder(web_root, cache, "/app", watch_files=False).build_url_list(None, "site.css", None)
    assert a == ["/site.css"]
    assert b == ["/app/site.css"]
    assert len(cache) == 2


def test_new_file_invalidates_when_watching(web_root: Path):
    cache = ResourceCache()
    builder = GlobbingUrlBuilder(web_root, cache, "", watch_files=True)
    assert builder.build_url_list(None, "css/*.css", None) == ["/css/a.css", "/css/b.css", "/css/print.css"]

    write(web_root / "css" / "c.css", "")
    touch_dir(web_root / "css", 1_000_000_000)
    fresh = GlobbingUrlBuilder(web_root, cache, "", watch_files=True)
    assert fresh.build_url_list(None, "css/*.css", None) == [
        "/css/a.css", "/css/b.css", "/css/c.css", "/css/print.css",
    ]


def test_new_file_not_seen_without_watching(web_root: Path):
    cache = ResourceCache()
    builder = GlobbingUrlBuilder(web_root, cache, "", watch_files=False)
    before = builder.build_url_list(None, "css/*.css", None)
    write(web_root / "css" / "c.css", "")
    assert builder.build_url_list(None, "css/*.css", None) == before


def test_web_root_stamped_once_per_builder(web_root: Path, monkeypatch):
    stamps = []
    original = builder_mod.directory_stamp

    def counting(root):
        stamps.append(root)
        return original(root)

    monkeypatch.setattr(builder_mod, "directory_stamp", counting)
    builder = GlobbingUrlBuilder(web_root, ResourceCache(), "", watch_files=True)
    builder.build_url_list(None, "css/*.css", None)
    builder.build_url_list(None, "css/*.css", None)
    builder.build_url_list("a.css", "lib/**/*.css", None)
    assert stamps == [web_root]
