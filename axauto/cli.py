# axauto/cli.py
"""
@file cli.py
@brief Command-line interface for axauto.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import re
import sys
from typing import Any, Dict, List, Optional

from .actionlogger import ACTION_LOGGER
from .application import Application
from .config import AXConfig
from .exceptions import AXAutoError
from .interfaces import IAccessibilityBackend
from .manifest import load_manifest, record_manifest, save_manifest, write_wrappers
from .pathgen import describe_ancestry, render_path_function


def _configure_action_logger_from_env() -> None:
    """Configure action logging from environment variables."""
    enabled = os.getenv("AXAUTO_ACTION_LOGGING", "").lower() in {"1", "true", "yes", "on"}
    if not enabled:
        ACTION_LOGGER.disable()
        return

    ACTION_LOGGER.configure(
        console=True,
        file_path=os.getenv("AXAUTO_ACTION_LOG_FILE"),
        level=os.getenv("AXAUTO_ACTION_LOG_LEVEL", "INFO"),
        format=os.getenv("AXAUTO_ACTION_LOG_FORMAT", "line"),
    )
    ACTION_LOGGER.enable()


def _parse_like(text: str) -> tuple:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected PROPERTY=PATTERN, got {text!r}")
    prop, pattern = text.split("=", 1)
    return prop.strip(), pattern


def _describe(node: Any) -> Dict[str, Any]:
    return {
        "role": node.get("role"),
        "role_description": node.get("roleDescription"),
        "description": node.get("description"),
        "title": node.get("title"),
    }


def _locate(app: Application, args: argparse.Namespace) -> Optional[List[Any]]:
    root = app
    if args.window:
        root = app.cached_first_window
        if root is None:
            return None
    if args.like:
        prop, pattern = args.like
        return root.locate_where_like(prop, pattern, args.ordinal)
    return root.locate_where_has_action_like(args.action, args.ordinal)


def main(argv: Optional[List[str]] = None, backend: Optional[IAccessibilityBackend] = None) -> int:
    """Main entry point for the CLI."""
    argv = argv if argv is not None else sys.argv[1:]
    _configure_action_logger_from_env()

    p = argparse.ArgumentParser(
        prog="axauto",
        description="axauto - macOS accessibility tree queries and locator code generation",
    )
    p.add_argument("--config", "-c", default=None, help="Optional settings YAML")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # -------------------------
    # locate
    # -------------------------
    locp = sub.add_parser("locate", help="Search an application's tree and print the ancestry of a match")
    locp.add_argument("app", help="Application name or process id")
    what = locp.add_mutually_exclusive_group(required=True)
    what.add_argument("--like", type=_parse_like, help="PROPERTY=PATTERN, e.g. description=sound")
    what.add_argument("--action", help="Match nodes having an action like this name")
    locp.add_argument("--ordinal", "-n", type=int, default=1, help="Which match to return (default: 1)")
    locp.add_argument("--window", action="store_true", help="Search from the first window instead of the application")
    locp.add_argument("--emit-path", action="store_true", help="Print a replayable path function for the match")
    locp.add_argument("--function-name", default="my_element", help="Name of the generated function")
    locp.add_argument("--no-comments", action="store_true", help="Omit column comments in the generated function")

    # -------------------------
    # manifest
    # -------------------------
    manp = sub.add_parser("manifest", help="Record a capability manifest (YAML) for an application")
    manp.add_argument("app", help="Application name or process id")
    manp.add_argument("--out", "-o", required=True, help="Output manifest path")
    manp.add_argument("--depth", type=int, default=None, help="Maximum depth below the application")

    # -------------------------
    # codegen
    # -------------------------
    genp = sub.add_parser("codegen", help="Generate typed wrapper classes from a capability manifest")
    genp.add_argument("manifest", help="Manifest YAML path")
    genp.add_argument("--out", "-o", required=True, help="Output Python module path")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            AXConfig.install_run_config(AXConfig.from_yaml(args.config))

        if args.cmd == "codegen":
            out = write_wrappers(load_manifest(args.manifest), args.out)
            print(json.dumps({"status": "ok", "output": out}, indent=2))
            return 0

        app = Application(args.app, backend=backend)

        if args.cmd == "manifest":
            manifest = record_manifest(app, max_depth=args.depth, application=str(args.app))
            out = save_manifest(manifest, args.out)
            print(json.dumps({"status": "ok", "output": out, "roles": len(manifest["roles"])}, indent=2))
            return 0

        if args.cmd == "locate":
            ancestry = _locate(app, args)
            if not ancestry:
                print(json.dumps({"status": "not_found", "ordinal": args.ordinal}, indent=2))
                return 1

            print(json.dumps({
                "status": "ok",
                "depth": len(ancestry) - 1,
                "ancestry": [_describe(n) for n in ancestry],
            }, indent=2, ensure_ascii=False, default=str))

            if args.emit_path:
                steps = describe_ancestry(ancestry)
                # The generated function takes whatever root the search started from.
                print()
                print(render_path_function(
                    steps,
                    with_comments=not args.no_comments,
                    function_name=args.function_name,
                ), end="")
            return 0
    except (AXAutoError, ImportError, ValueError, re.error) as e:
        print(json.dumps({
            "status": "error",
            "error": f"{type(e).__name__}: {e}",
        }, indent=2), file=sys.stderr)
        return 2
    finally:
        AXConfig.clear_run_config()

    return 1


if __name__ == "__main__":
    sys.exit(main())
