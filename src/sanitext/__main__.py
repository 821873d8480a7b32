"""Entry point: python -m sanitext

Usage::

    sanitext sanitize page.html -o clean.html --profile strict
    sanitext highlight page.html --report
    sanitext profiles
    sanitext serve --port 8000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from sanitext.core.options import SanitizeOptions

_log = logging.getLogger("sanitext")


def _read_input(source: str | None) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(text: str, target: str | None) -> None:
    if target is None or target == "-":
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return
    Path(target).write_text(text, encoding="utf-8")


def _options_from_args(args: argparse.Namespace) -> SanitizeOptions:
    from sanitext.core.profiles import ProfileManager

    project_dir = Path(args.project) if args.project else None
    options = ProfileManager(project_dir=project_dir).load_options(args.profile)
    for name in args.enable or []:
        options = options.with_flag(name, True)
    for name in args.disable or []:
        options = options.with_flag(name, False)
    return options


def _cmd_sanitize(args: argparse.Namespace) -> int:
    from sanitext.core.highlight import extract_clean_markup
    from sanitext.core.pipeline import sanitize_markup
    from sanitext.core.tree import parse_fragment

    options = _options_from_args(args)
    markup = extract_clean_markup(parse_fragment(_read_input(args.file)))
    _write_output(sanitize_markup(markup, options), args.output)
    return 0


def _cmd_highlight(args: argparse.Namespace) -> int:
    from sanitext.core.highlight import clear_highlights, collect_findings, highlight_chars
    from sanitext.core.tree import parse_fragment, serialize

    options = _options_from_args(args)
    soup = parse_fragment(_read_input(args.file))
    clear_highlights(soup)
    if args.report:
        findings = [f.to_dict() for f in collect_findings(soup, options)]
        _write_output(json.dumps(findings, ensure_ascii=False, indent=2), args.output)
    else:
        highlight_chars(soup, options)
        _write_output(serialize(soup), args.output)
    return 0


def _cmd_profiles(args: argparse.Namespace) -> int:
    from sanitext.core.profiles import ProfileManager

    project_dir = Path(args.project) if args.project else None
    for info in ProfileManager(project_dir=project_dir).list_profiles():
        print(f"{info.id:<12} {info.scope:<8} {info.name}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("sanitext.web.app:app", host=args.host, port=args.port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sanitext", description="Sanitize rich text before copying or display."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def _add_io(p: argparse.ArgumentParser) -> None:
        p.add_argument("file", nargs="?", default=None, help="Input HTML file (default: stdin)")
        p.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
        p.add_argument("--profile", default="default", help="Option profile ID")
        p.add_argument("--project", default=None, help="Project folder with profiles/")
        flags = SanitizeOptions.names()
        p.add_argument("--enable", action="append", choices=flags, metavar="FLAG",
                       help=f"Turn a flag on ({', '.join(flags)})")
        p.add_argument("--disable", action="append", choices=flags, metavar="FLAG",
                       help="Turn a flag off")

    p_sanitize = sub.add_parser("sanitize", help="Run the full sanitize pipeline")
    _add_io(p_sanitize)
    p_sanitize.set_defaults(func=_cmd_sanitize)

    p_highlight = sub.add_parser("highlight", help="Mark problem characters")
    _add_io(p_highlight)
    p_highlight.add_argument("--report", action="store_true",
                             help="Print a JSON list of findings instead of markup")
    p_highlight.set_defaults(func=_cmd_highlight)

    p_profiles = sub.add_parser("profiles", help="List option profiles")
    p_profiles.add_argument("--project", default=None, help="Project folder with profiles/")
    p_profiles.set_defaults(func=_cmd_profiles)

    p_serve = sub.add_parser("serve", help="Run the web API with uvicorn")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    from sanitext.core.profiles import ProfileNotFoundError

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except ProfileNotFoundError as exc:
        print(f"[Sanitext] Unknown profile: {exc.args[0]}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"[Sanitext] {exc}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"[Sanitext] Input is not valid UTF-8: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
