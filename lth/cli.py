from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings, load_settings
from .errors import LTHUserError
from .globbing import GlobbingUrlBuilder
from .jsonic import dumps as jdumps
from .logs import setup_logging
from .markup import HelperServices, render_document
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lth",
        description="Link Tag Helper (globbed and fallback stylesheet links)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Shared arguments for render/expand
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--web-root",
            metavar="DIR",
            help="directory the glob patterns are resolved against (default: settings web_root)",
        )
        sp.add_argument(
            "--path-base",
            metavar="PATH",
            help="application mount path prepended to resolved urls, e.g. /app",
        )
        sp.add_argument(
            "--log-level",
            metavar="LEVEL",
            help="DEBUG | INFO | WARNING | ERROR (default: settings logging.level)",
        )

    sp_render = sub.add_parser("render", help="Rewrite <link> elements of a document")
    add_common(sp_render)
    sp_render.add_argument("file", help="document to process, or - for stdin")
    sp_render.add_argument("-o", "--output", metavar="FILE", help="write the result here instead of stdout")

    sp_expand = sub.add_parser("expand", help="Resolved url list (JSON)")
    add_common(sp_expand)
    sp_expand.add_argument("--include", required=True, help="comma separated glob patterns")
    sp_expand.add_argument("--exclude", help="comma separated glob patterns to leave out")
    sp_expand.add_argument("--href", help="static url listed first")

    return p


def _settings(ns: argparse.Namespace, root: Path) -> Settings:
    settings = load_settings(root).with_overrides(
        web_root=getattr(ns, "web_root", None),
        path_base=getattr(ns, "path_base", None),
    )
    setup_logging(getattr(ns, "log_level", None) or settings.log_level)
    return settings


def _read_document(file_arg: str) -> str:
    if file_arg == "-":
        return sys.stdin.read()
    path = Path(file_arg)
    if not path.is_file():
        raise LTHUserError(f"Document not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LTHUserError(f"Failed to read document {path}: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    root = Path.cwd()

    try:
        settings = _settings(ns, root)
        services = HelperServices.from_settings(root, settings)

        if ns.cmd == "render":
            result = render_document(_read_document(ns.file), services)
            if ns.output:
                Path(ns.output).write_text(result, encoding="utf-8")
            else:
                sys.stdout.write(result)
            return 0

        if ns.cmd == "expand":
            builder = GlobbingUrlBuilder(
                services.web_root, services.cache, services.path_base,
                watch_files=services.watch_files,
            )
            urls = builder.build_url_list(ns.href, ns.include, ns.exclude)
            sys.stdout.write(jdumps({"urls": urls}))
            return 0

    except LTHUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
