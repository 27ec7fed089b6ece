#!/usr/bin/env python3
"""Dump stored toggle records and their current evaluation.

Usage
-----
Set environment variables and run::

    export TOGGLES_FEATURE_NAME="checkout"
    export TOGGLES_STORE_PATH="toggles.json"
    export TOGGLES_APP_VERSION="52000"
    export TOGGLES_BUILD_FLAVOR="PLAY"
    python scripts/dump_toggles.py --registry toggles_registry.json

Options::

    --registry FILE     JSON table {name: {"defaultValue": bool, ...}} (required)
    --apply FILE        Apply a remote feature payload before dumping
    --json              Output as machine-readable JSON
    -v, --verbose       Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytoggles import FeatureToggles, FeatureTogglesPlugin, ToggleError, TogglesConfig, ToggleRegistry  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--registry", required=True, type=Path, help="JSON toggle declaration table")
    parser.add_argument("--apply", type=Path, default=None, help="Remote feature payload to apply first")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def _rows(toggles: FeatureToggles) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for toggle in toggles.toggles():
        record = toggle.get_raw_stored_state()
        result = toggle.evaluate()
        rows.append(
            {
                "key": toggle.key,
                "enabled": result.enabled,
                "assignDefaultVariant": result.assign_default_variant,
                "default": toggle.metadata.default_enabled,
                "record": record.to_json_dict() if record is not None else None,
            }
        )
    return rows


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = TogglesConfig.from_env()
        table = json.loads(args.registry.read_text(encoding="utf-8"))
        registry = ToggleRegistry.from_mapping(config.feature_name, table)
        toggles = FeatureToggles.from_config(config, registry)
        if args.apply is not None:
            FeatureTogglesPlugin(toggles).store(config.feature_name, args.apply.read_text(encoding="utf-8"))
        rows = _rows(toggles)
    except (OSError, TypeError, ValueError, ToggleError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    for row in rows:
        marker = "ON " if row["enabled"] else "off"
        print(f"[{marker}] {row['key']}  (default={row['default']})")
        if row["record"] is not None:
            print(f"      {json.dumps(row['record'], sort_keys=True)}")
        if row["assignDefaultVariant"]:
            print("      no variant assigned; default variant would be forced")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
