#!/usr/bin/env python3
import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from cycly_export.io import serialize_csv, write_csv
from cycly_export.mapping import EXPORT_HEADERS
from cycly_export.normalize import normalize_vehicles
from cycly_export.transform import generate_csv, transform_rows
from export_server.settings import load_settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    today = datetime.now(timezone.utc).date().isoformat()
    p = argparse.ArgumentParser(description="Export Cycly vehicles to a BikeExchange CSV.")
    p.add_argument("--env-file", default=".env", help="KEY=VALUE file loaded before reading the environment")
    p.add_argument("--input", default="", help="Saved Cycly vehicles JSON to convert instead of calling the API")
    p.add_argument("--output", default=f"cycly_vehicles_{today}.csv", help="Path to output CSV")
    p.add_argument("--sort-by-id", action="store_true", default=None, help="Sort vehicles by id (default: CYCLY_SORT_BY_ID)")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    settings = load_settings(args.env_file)
    sort_by_id = settings.sort_by_id if args.sort_by_id is None else args.sort_by_id
    output_path = Path(args.output)
    try:
        if args.input:
            payload = json.loads(Path(args.input).read_text(encoding="utf-8"))
            rows = transform_rows(normalize_vehicles(payload), sort_by_id=sort_by_id)
            content = serialize_csv(rows, EXPORT_HEADERS)
        else:
            content = generate_csv(settings.cycly_config(), sort_by_id=sort_by_id)
        write_csv(output_path, content)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Wrote Cycly export to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
