"""CLI for inspecting, normalizing and checking devfile documents."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List

from .loader import FORMATS, MalformedDevfileError, dump_devfile, load_devfile
from .spec import DevfileSpec
from .summary import render_summary
from .validate import validate_devfile

logger = logging.getLogger("devfile")


def _load(path_str: str) -> DevfileSpec:
    path = Path(path_str).expanduser().resolve()
    return load_devfile(path)


def _emit(output: str, out_path: str | None) -> None:
    if out_path:
        path = Path(out_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(output, encoding="utf-8")
        print(f"Wrote {path}")
    else:
        print(output)


def cmd_validate(args: argparse.Namespace) -> int:
    path = Path(args.devfile).expanduser().resolve()
    return 0 if validate_devfile(path) else 1


def cmd_render(args: argparse.Namespace) -> int:
    spec = _load(args.devfile)
    _emit(dump_devfile(spec, fmt=args.format, indent=args.indent), args.output)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    spec = _load(args.devfile)
    names: List[str]
    if args.kind == "components":
        names = [c.alias or c.type for c in spec.components]
    elif args.kind == "commands":
        names = [cmd.name for cmd in spec.commands]
    else:
        names = [project.name for project in spec.projects]
    for name in names:
        print(name)
    return 0


def cmd_describe(args: argparse.Namespace) -> int:
    spec = _load(args.devfile)
    _emit(render_summary(spec), args.output)
    return 0


def cmd_schema(args: argparse.Namespace) -> int:
    schema = DevfileSpec.model_json_schema(by_alias=True)
    print(json.dumps(schema, indent=args.indent))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Devfile schema tooling CLI")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("DEVFILE_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $DEVFILE_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate", help="Parse a devfile and check its conventions"
    )
    validate.add_argument("devfile", help="Path to a devfile (YAML or JSON)")
    validate.set_defaults(func=cmd_validate)

    render = subparsers.add_parser(
        "render", help="Print a devfile in normalized document form"
    )
    render.add_argument("devfile", help="Path to a devfile (YAML or JSON)")
    render.add_argument("-o", "--output", help="Optional output path")
    render.add_argument("--format", choices=FORMATS, default="yaml")
    render.add_argument("--indent", type=int, default=2)
    render.set_defaults(func=cmd_render)

    list_cmd = subparsers.add_parser(
        "list", help="List components, commands or projects of a devfile"
    )
    list_cmd.add_argument("devfile", help="Path to a devfile (YAML or JSON)")
    list_cmd.add_argument(
        "--kind",
        choices=("components", "commands", "projects"),
        default="components",
    )
    list_cmd.set_defaults(func=cmd_list)

    describe = subparsers.add_parser(
        "describe", help="Render a Markdown summary of a devfile"
    )
    describe.add_argument("devfile", help="Path to a devfile (YAML or JSON)")
    describe.add_argument("-o", "--output", help="Optional output path")
    describe.set_defaults(func=cmd_describe)

    schema = subparsers.add_parser("schema", help="Print the devfile JSON Schema")
    schema.add_argument("--indent", type=int, default=2)
    schema.set_defaults(func=cmd_schema)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug(f"Running {args.command}")
    try:
        return args.func(args)
    except (MalformedDevfileError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
