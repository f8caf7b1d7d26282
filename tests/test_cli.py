from pathlib import Path

from tests.infrastructure import jload, make_web_root, run_cli, write


def _project(tmp_path: Path) -> Path:
    make_web_root(tmp_path / "wwwroot", ["css/a.css", "css/b.css", "css/site.min.css"])
    return tmp_path


def test_cli_expand(tmp_path: Path):
    root = _project(tmp_path)
    cp = run_cli(root, "expand", "--include", "css/*.css", "--exclude", "**/*.min.css", "--path-base", "/app")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"urls": ["/app/css/a.css", "/app/css/b.css"]}


def test_cli_expand_static_href_first(tmp_path: Path):
    root = _project(tmp_path)
    cp = run_cli(root, "expand", "--include", "css/b.css", "--href", "https://cdn/x.css")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout)["urls"] == ["https://cdn/x.css", "/css/b.css"]


def test_cli_render_file(tmp_path: Path):
    root = _project(tmp_path)
    write(root / "page.html", '<head><link rel="stylesheet" href-include="css/*.css" href-exclude="**/*.min.css"></head>\n')
    cp = run_cli(root, "render", "page.html")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == (
        '<head><link rel="stylesheet" href="/css/a.css" />'
        '<link rel="stylesheet" href="/css/b.css" /></head>\n'
    )


def test_cli_render_uses_settings_and_output_file(tmp_path: Path):
    root = tmp_path
    make_web_root(root / "public", ["site.css"])
    write(root / "lth-cfg" / "settings.yaml", "web_root: public\npath_base: /shop\n")
    write(root / "page.html", '<link href-include="*.css">')
    cp = run_cli(root, "render", "page.html", "-o", "out.html")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == ""
    assert (root / "out.html").read_text(encoding="utf-8") == '<link href="/shop/site.css" />'


def test_cli_render_stdin(tmp_path: Path):
    root = _project(tmp_path)
    cp = run_cli(root, "render", "-", stdin='<link href="a.css">')
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == '<link href="a.css">'


def test_cli_missing_web_root_is_clean_error(tmp_path: Path):
    cp = run_cli(tmp_path, "expand", "--include", "*.css")
    assert cp.returncode == 2
    assert "Web root not found" in cp.stderr
    assert "Traceback" not in cp.stderr


def test_cli_missing_document(tmp_path: Path):
    cp = run_cli(tmp_path, "render", "nope.html")
    assert cp.returncode == 2
    assert "Document not found" in cp.stderr


def test_cli_version(tmp_path: Path):
    cp = run_cli(tmp_path, "--version")
    assert cp.returncode == 0
    assert cp.stdout.startswith("lth ")
