#!/usr/bin/env python3
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import Any


def _load_reflex() -> Any:
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))
    import reflex_client.api  # type: ignore

    return reflex_client.api


def _render(api: Any) -> list[str]:
    lines = [f"Operations: {len(api)}", f"Converters: {len(api.converters)}", ""]
    for name in sorted(api):
        op = api[name]
        lines.append(f"{name} [{op.category.value}]")
        lines.append(f"- Request: {op.request_type.__module__}.{op.request_type.__qualname__}")
        lines.append(f"- Required: {', '.join(op.constructor_keys) or '-'}")
        lines.append(f"- Options: {', '.join(op.option_keys) or '-'}")
        lines.append("")
    return lines


def main() -> int:
    parser = argparse.ArgumentParser(description="List the operations generated for an SDK package.")
    parser.add_argument("--package", help="SDK package the catalog paths are relative to")
    parser.add_argument(
        "--catalog",
        default="reflex_client.catalog",
        help="Module exposing REQUESTS and RESPONSES (default: reflex_client.catalog)",
    )
    parser.add_argument("--out", help="Write report to this file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log converter registration")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    api_module = _load_reflex()
    catalog = importlib.import_module(args.catalog)
    package = args.package or getattr(catalog, "PACKAGE", None)
    if not package:
        print("No SDK package given (use --package)", file=sys.stderr)
        return 2

    try:
        api = api_module.build_api(
            catalog.REQUESTS,
            catalog.RESPONSES,
            package=package,
            clients=getattr(catalog, "CLIENT_PATHS", api_module.CLIENT_PATHS),
        )
    except api_module.ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    lines = [f"Operation report ({package})", ""]
    lines.extend(_render(api))
    output = "\n".join(lines).rstrip() + "\n"
    if args.out:
        Path(args.out).write_text(output, encoding="utf-8")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
