from __future__ import annotations

import argparse
import importlib.metadata
import json
import logging
import sys
from pathlib import Path

from .addressing import from_protocol_address, normalize_e164, to_whatsapp_jid, with_channel_prefix
from .chunking import split_into_chunks
from .config import RelaySettings
from .verbose import set_verbose

logger = logging.getLogger("relay_bridge.cli")


def _get_version() -> str:
    """Get the version from package metadata."""
    try:
        return importlib.metadata.version("relay-bridge")
    except importlib.metadata.PackageNotFoundError:
        return "0.1.0 (dev)"


def _emit(payload: object, json_output: bool) -> None:
    if json_output:
        print(json.dumps(payload))
        return
    if isinstance(payload, list):
        for item in payload:
            print(item)
        return
    print("" if payload is None else payload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Relay address and message utilities")
    parser.add_argument(
        "mode",
        choices=["normalize", "prefix", "jid", "resolve", "chunk", "version"],
    )
    parser.add_argument("value", nargs="?", default=None, help="Number, JID or text (stdin when omitted)")
    parser.add_argument("--json", dest="json_output", action="store_true", help="Emit machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log linked-id misses and debug output")
    parser.add_argument("--max-chars", dest="max_chars", type=int, default=None, metavar="N")
    parser.add_argument("--config-dir", dest="config_dir", default=None, help="Override the config directory")
    parser.add_argument("--lid-db", dest="lid_db", default=None, help="SQLite linked-id mapping database")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.mode == "version":
        print(f"relay-bridge {_get_version()}")
        return 0

    overrides: dict[str, object] = {}
    if args.verbose:
        overrides["verbose"] = True
    if args.config_dir:
        overrides["config_dir"] = Path(args.config_dir)
    if args.lid_db:
        overrides["lid_mapping_db_path"] = Path(args.lid_db)
    settings = RelaySettings(**overrides)

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    set_verbose(settings.verbose)

    value = args.value if args.value is not None else sys.stdin.read()

    if args.mode == "normalize":
        _emit(normalize_e164(value), args.json_output)
    elif args.mode == "prefix":
        _emit(with_channel_prefix(value), args.json_output)
    elif args.mode == "jid":
        _emit(to_whatsapp_jid(value), args.json_output)
    elif args.mode == "resolve":
        phone = from_protocol_address(value.strip(), settings=settings)
        _emit(phone, args.json_output)
        if phone is None:
            logger.warning("Could not resolve %s", value.strip())
            return 1
    elif args.mode == "chunk":
        max_chars = args.max_chars if args.max_chars is not None else settings.chunk_max_chars
        try:
            chunks = split_into_chunks(value, max_chars)
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        _emit(chunks, args.json_output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
