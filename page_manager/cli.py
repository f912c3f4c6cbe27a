"""
Command line interface for inspecting and resolving pages.
Path: page_manager/cli.py
"""

import argparse
import json
import sys
from typing import List, Optional

import structlog

from page_manager.config import load_app_config
from page_manager.container import PageManager
from page_manager.context.providers import Account
from page_manager.exceptions import PageManagerError
from page_manager.utils.logging import configure_logging

logger = structlog.get_logger()


def handle_list(manager: PageManager, args: argparse.Namespace) -> int:
    for page in manager.storage.load_all():
        status = "enabled" if page.status() else "disabled"
        print(f"{page.id}\t{page.path}\t{status}\t{page.label}")
    return 0


def handle_show(manager: PageManager, args: argparse.Namespace) -> int:
    page = manager.storage.load(args.page_id)
    print(f"Page: {page.label} ({page.id})")
    print(f"Path: {page.path}")
    for condition in page.get_access_conditions():
        print(f"  access: {condition.summary()} [{condition.uuid()}]")
    for variant in page.get_variants():
        print(f"Variant: {variant.label()} [{variant.uuid()}] weight={variant.weight()} plugin={variant.get_plugin_id()}")
        for condition in variant.get_selection_conditions():
            print(f"  selection: {condition.summary()} [{condition.uuid()}]")
        if hasattr(variant, "get_region_assignments"):
            for region, blocks in variant.get_region_assignments().items():
                labels = ", ".join(block.label() for block in blocks) or "-"
                print(f"  {variant.get_region_name(region)}: {labels}")
    return 0


def handle_resolve(manager: PageManager, args: argparse.Namespace) -> int:
    match = manager.router().match(args.path)
    if match is None:
        print(f"No page matches {args.path}")
        return 2

    page, route_params = match
    for item in args.param or []:
        key, _, value = item.partition("=")
        route_params[key] = value

    default_roles = ["anonymous"] if args.uid == 0 else ["authenticated"]
    account = Account(uid=args.uid, name=args.user, roles=args.role or default_roles)
    result = manager.executable(page, route_params, account, manager.entity_converters()).build()
    output = {
        "page": page.id,
        "route_params": route_params,
        "access": result.access,
        "variant": result.variant.uuid() if result.variant is not None else None,
        "content": result.content,
    }
    print(json.dumps(output, indent=2, default=str))
    return 0 if result.found else 1


def handle_validate(manager: PageManager, args: argparse.Namespace) -> int:
    failures = 0
    for page_id in manager.storage.list_ids():
        try:
            manager.storage.read(page_id)
            print(f"{page_id}: ok")
        except PageManagerError as e:
            failures += 1
            print(f"{page_id}: {e}")
    return 1 if failures else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and resolve page manager pages")
    parser.add_argument("--config", help="Path to config file (YAML)")
    parser.add_argument("--pages", help="Directory of page files (overrides config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List pages")

    show = subparsers.add_parser("show", help="Show a page with its variants")
    show.add_argument("page_id")

    resolve = subparsers.add_parser("resolve", help="Route a path and select its variant")
    resolve.add_argument("path")
    resolve.add_argument("--user", default="anonymous", help="Name of the current user")
    resolve.add_argument("--uid", type=int, default=0, help="Id of the current user")
    resolve.add_argument("--role", action="append", help="Role of the current user (repeatable)")
    resolve.add_argument("--param", action="append", help="Extra route parameter as key=value (repeatable)")

    subparsers.add_parser("validate", help="Validate every page file against the schema")
    return parser


HANDLERS = {
    "list": handle_list,
    "show": handle_show,
    "resolve": handle_resolve,
    "validate": handle_validate,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_app_config(args.config)
    if args.pages:
        config["pages_directory"] = args.pages
    configure_logging(config.get("logging"))

    try:
        return HANDLERS[args.command](PageManager(config), args)
    except PageManagerError as e:
        print(f"Error: {e}")
        logger.error("cli.command_failed", command=args.command, error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
