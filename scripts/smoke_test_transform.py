#!/usr/bin/env python3
"""Basic smoke test for the export pipeline.

Converts a saved Cycly payload and checks the header and non-empty output.
This test avoids any network access.
"""
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from cycly_export.io import serialize_csv, write_csv  # type: ignore
from cycly_export.mapping import EXPORT_HEADERS  # type: ignore
from cycly_export.normalize import normalize_vehicles  # type: ignore
from cycly_export.transform import transform_rows  # type: ignore


def main() -> int:
    sample = ROOT / 'data' / 'input' / 'vehicles.json'
    if not sample.exists():
        print(f"Sample input not found: {sample}")
        return 0

    vehicles = normalize_vehicles(json.loads(sample.read_text(encoding='utf-8')))
    rows = transform_rows(vehicles)
    if not rows:
        print("Smoke test failed: no eligible vehicles")
        return 1
    content = serialize_csv(rows)
    if content.split("\n", 1)[0] != ",".join(EXPORT_HEADERS):
        print("Smoke test failed: unexpected header")
        return 1
    out_path = ROOT / 'data' / 'output' / 'smoke_test_output.csv'
    write_csv(out_path, content)
    print(f"Smoke test ok: wrote {len(rows)} rows to {out_path}")
    print("Headers:", EXPORT_HEADERS)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
