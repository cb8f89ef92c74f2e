"""Command-line access to a blob store.

    blobstore --address dbm:///srv/blobs.db put greeting hello.txt
    blobstore --address dbm:///srv/blobs.db list --start g --limit 10

The address may also come from the `address` key of a YAML config file
given with `--config`. Exit status is 0 on success, 1 when a key is
missing or already present or an I/O error occurs, and 2 for usage or
configuration errors.
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

import yaml

from blobstore_lib.config import StoreConfig, load_config
from blobstore_lib.errors import ConfigError, KeyExists, KeyNotFound, StopListing
from blobstore_lib.logging_config import configure_logging
from blobstore_lib.storage import BlobStore, create_store

logger = logging.getLogger(__name__)


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="blobstore", description="Inspect and modify a blob store")
    p.add_argument("--address", help="Store address, e.g. dbm:///path/to/store.db?sync=5s")
    p.add_argument("--config", help="YAML config file providing `address` and `log_level`")
    p.add_argument("--log-level", help="Logging level (overrides the config file)")

    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("get", help="Write the blob stored under KEY to stdout")
    g.add_argument("key")

    put = sub.add_parser("put", help="Store FILE (or stdin) under KEY")
    put.add_argument("key")
    put.add_argument("file", nargs="?", help="Input file; stdin when omitted")
    put.add_argument("--replace", action="store_true", help="Overwrite an existing key")

    d = sub.add_parser("delete", help="Delete KEY")
    d.add_argument("key")

    ls = sub.add_parser("list", help="Print keys in ascending order")
    ls.add_argument("--start", default="", help="Only keys >= START")
    ls.add_argument("--limit", type=int, default=None, help="Print at most LIMIT keys")

    sub.add_parser("len", help="Print the number of keys")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    return parser.parse_args(argv)


def _list_keys(store: BlobStore, start: str, limit: Optional[int], out: BinaryIO) -> None:
    printed = 0

    def visit(key: str) -> None:
        nonlocal printed
        if limit is not None and printed >= limit:
            raise StopListing()
        out.write(key.encode("utf-8") + b"\n")
        printed += 1

    store.list(start, visit)


def run_command(store: BlobStore, args: argparse.Namespace, stdin: BinaryIO, stdout: BinaryIO) -> None:
    if args.command == "get":
        stdout.write(store.get(args.key))
    elif args.command == "put":
        data = Path(args.file).read_bytes() if args.file else stdin.read()
        store.put(args.key, data, replace=args.replace)
    elif args.command == "delete":
        store.delete(args.key)
    elif args.command == "list":
        _list_keys(store, args.start, args.limit, stdout)
    elif args.command == "len":
        stdout.write(f"{store.len()}\n".encode("ascii"))
    stdout.flush()


def main(
    argv: Optional[Iterable[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    args = parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer

    try:
        cfg = load_config(Path(args.config)) if args.config else StoreConfig()
    except (ValueError, yaml.YAMLError) as e:
        print(f"blobstore: {e}", file=sys.stderr)
        return 2
    configure_logging(Path(args.config) if args.config else None, level=args.log_level or cfg.log_level)

    address = args.address or cfg.address
    if not address:
        print("blobstore: no store address given (use --address or --config)", file=sys.stderr)
        return 2
    try:
        store = create_store(address)
    except ConfigError as e:
        print(f"blobstore: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"blobstore: {e}", file=sys.stderr)
        return 1

    logger.debug("Running %s against %s", args.command, address)
    try:
        run_command(store, args, stdin, stdout)
    except (KeyNotFound, KeyExists, OSError) as e:
        print(f"blobstore: {e}", file=sys.stderr)
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
