#!/usr/bin/env python3
"""Inspect and manage containers from the command line.

Usage:
  .venv/bin/python scripts/cfctl.py info
  .venv/bin/python scripts/cfctl.py ls
  .venv/bin/python scripts/cfctl.py ls photos --detail --prefix 2024/
  .venv/bin/python scripts/cfctl.py stat photos
  .venv/bin/python scripts/cfctl.py stat photos cat.jpg
  .venv/bin/python scripts/cfctl.py rm photos cat.jpg
  .venv/bin/python scripts/cfctl.py publish photos --ttl 3600
  .venv/bin/python scripts/cfctl.py unpublish photos

Endpoints and token come from CLOUDFILES_STORAGE_URL,
CLOUDFILES_CDN_MANAGEMENT_URL and CLOUDFILES_AUTH_TOKEN (or .env).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence, TextIO

from cloudfiles.common.config import get_settings
from cloudfiles.common.logging import setup_logging
from cloudfiles.domain.errors import CloudFilesError
from cloudfiles.infra.http.client import TransportError
from cloudfiles.services.connection import Connection

logger = logging.getLogger("cloudfiles.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cloud Files container tool")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("info", help="Show account totals")

    ls = sub.add_parser("ls", help="List containers, or objects of a container")
    ls.add_argument("container", nargs="?", default=None)
    ls.add_argument("--detail", action="store_true", help="Show size and hash")
    ls.add_argument("--prefix", default=None)
    ls.add_argument("--limit", type=int, default=None)

    stat = sub.add_parser("stat", help="Show container or object metadata")
    stat.add_argument("container")
    stat.add_argument("object", nargs="?", default=None)

    rm = sub.add_parser("rm", help="Delete an object")
    rm.add_argument("container")
    rm.add_argument("object")

    publish = sub.add_parser("publish", help="Serve a container through the CDN")
    publish.add_argument("container")
    publish.add_argument(
        "--ttl",
        type=int,
        default=None,
        help="CDN cache TTL in seconds (default: CLOUDFILES_DEFAULT_CDN_TTL)",
    )

    unpublish = sub.add_parser("unpublish", help="Stop serving a container")
    unpublish.add_argument("container")
    return parser


def _run_command(args: argparse.Namespace, conn: Connection, out: TextIO) -> None:
    if args.command == "info":
        info = conn.get_info()
        print(f"containers: {info.container_count}", file=out)
        print(f"bytes: {info.bytes_used}", file=out)

    elif args.command == "ls" and args.container is None:
        if args.detail:
            for name, detail in conn.containers_detail(limit=args.limit).items():
                print(f"{name}\t{detail.count}\t{detail.bytes}", file=out)
        else:
            for name in conn.containers(limit=args.limit):
                print(name, file=out)

    elif args.command == "ls":
        container = conn.container(args.container)
        if args.detail:
            details = container.objects_detail(prefix=args.prefix, limit=args.limit)
            for name, detail in details.items():
                print(
                    f"{name}\t{detail.bytes}\t{detail.hash or '-'}\t"
                    f"{detail.content_type or '-'}\t{detail.last_modified or '-'}",
                    file=out,
                )
        else:
            for name in container.objects(prefix=args.prefix, limit=args.limit):
                print(name, file=out)

    elif args.command == "stat" and args.object is None:
        container = conn.container(args.container)
        print(f"container: {container.name}", file=out)
        print(f"objects: {container.object_count}", file=out)
        print(f"bytes: {container.bytes_used}", file=out)
        print(f"public: {container.is_public()}", file=out)
        if container.cdn_uri:
            print(f"cdn_uri: {container.cdn_uri}", file=out)

    elif args.command == "stat":
        obj = conn.container(args.container).object(args.object)
        print(f"object: {obj.name}", file=out)
        print(f"bytes: {obj.bytes}", file=out)
        print(f"content_type: {obj.content_type or '-'}", file=out)
        print(f"etag: {obj.etag or '-'}", file=out)
        print(f"last_modified: {obj.last_modified or '-'}", file=out)

    elif args.command == "rm":
        conn.container(args.container).delete_object(args.object)
        print(f"Deleted {args.container}/{args.object}", file=out)

    elif args.command == "publish":
        ttl = args.ttl if args.ttl is not None else conn.settings.DEFAULT_CDN_TTL
        container = conn.container(args.container)
        container.make_public(ttl=ttl)
        print(f"Published {container.name} (ttl={ttl})", file=out)

    elif args.command == "unpublish":
        container = conn.container(args.container)
        container.make_private()
        print(f"Unpublished {container.name}", file=out)


def run(
    argv: Sequence[str] | None = None,
    *,
    connection: Connection | None = None,
    out: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout
    try:
        conn = connection or Connection.from_settings()
    except ValueError as exc:
        logger.error("configuration_error %s", exc)
        return 2

    try:
        _run_command(args, conn, out)
    except (CloudFilesError, TransportError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 0


def main() -> None:
    # A broken environment is reported by run() with exit code 2.
    try:
        level = get_settings().LOG_LEVEL
    except ValueError:
        level = "INFO"
    setup_logging(level)
    sys.exit(run())


if __name__ == "__main__":
    main()
