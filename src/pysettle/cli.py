from __future__ import annotations

import argparse
import importlib
import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import SettleError, SourceLoadError
from .initializer import initialize
from .manager import Manager
from .metadata import metadata_to_dict
from .sources import load_input, read_env
from .validation import validate_spec


def load_target(ref: str) -> Manager | Mapping[str, Any]:
    """Import ``package.module:attribute`` and return the referenced object."""

    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise SourceLoadError(f"Target must look like 'package.module:attribute', got {ref!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise SourceLoadError(f"Could not import {module_name!r}: {exc}") from exc
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise SourceLoadError(f"{module_name!r} has no attribute {attr!r}") from exc
    if not isinstance(obj, (Manager, Mapping)):
        raise SourceLoadError(f"{ref!r} is neither a settings spec nor a Manager")
    return obj


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


def _render(data: Any, fmt: str) -> str:
    plain = _plain(data)
    if fmt == "yaml":
        return yaml.safe_dump(plain, sort_keys=False, allow_unicode=True).rstrip()
    return json.dumps(plain, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def show_cmd(args: argparse.Namespace) -> int:
    target = load_target(args.target)
    manager = target if isinstance(target, Manager) else Manager(target)
    for path in args.inputs:
        manager.change(load_input(path))
    if args.env_prefix:
        manager.change(read_env(args.env_prefix))

    if args.view == "metadata":
        out: Any = metadata_to_dict(manager.metadata)
    elif args.view == "original":
        out = manager.original()
    else:
        out = manager.data
    print(_render(out, args.format))
    return 0


def check_cmd(args: argparse.Namespace) -> int:
    target = load_target(args.target)
    fields = target.fields if isinstance(target, Manager) else target
    validate_spec(fields)
    initialize(fields)
    print("ok")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pysettle", description="Inspect settings resolved by pysettle."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_show = subparsers.add_parser("show", help="Resolve settings and print them.")
    p_show.add_argument("target", help="package.module:attribute holding a spec or Manager")
    p_show.add_argument(
        "-i", "--input", dest="inputs", action="append", type=Path, default=[],
        help="YAML/JSON/JSON5 file with changes (repeatable, applied in order)",
    )
    p_show.add_argument("--env-prefix", help="Apply changes from variables with this prefix")
    p_show.add_argument(
        "--view", choices=["data", "metadata", "original"], default="data"
    )
    p_show.add_argument("--format", choices=["json", "yaml"], default="json")
    p_show.set_defaults(func=show_cmd)

    p_check = subparsers.add_parser("check", help="Validate a spec and run its initializers.")
    p_check.add_argument("target")
    p_check.set_defaults(func=check_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    try:
        return int(func(args))
    except SettleError as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
