#!/usr/bin/env python3
"""Print type/state counts of a saved Cycly vehicles payload."""
import json
import sys
from collections import Counter
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / 'src'))
from cycly_export.normalize import normalize_vehicles  # type: ignore
from cycly_export.transform import filter_eligible  # type: ignore


def main():
    path = Path(sys.argv[1] if len(sys.argv) > 1 else 'data/input/vehicles.json')
    vehicles = normalize_vehicles(json.loads(path.read_text(encoding='utf-8')))
    records = [v for v in vehicles if isinstance(v, dict)]

    c_type = Counter([str(v.get('type') or '') for v in records])
    c_state = Counter([str(v.get('state') or '') for v in records])
    c_discount = sum(1 for v in records if v.get('discountPrice') is not None)
    c_no_ean = sum(1 for v in records if not v.get('ean'))

    print(f"Vehicles: {len(vehicles)}")
    print(f"Non-object entries: {len(vehicles) - len(records)}")
    print(f"Eligible: {len(filter_eligible(vehicles))}")
    print(f"With discountPrice: {c_discount}")
    print(f"Without ean: {c_no_ean}")
    print("Types:")
    for k, n in c_type.most_common():
        print(f"  {k or '(empty)'}: {n}")
    print("States:")
    for k, n in c_state.most_common():
        print(f"  {k or '(empty)'}: {n}")


if __name__ == '__main__':
    main()
