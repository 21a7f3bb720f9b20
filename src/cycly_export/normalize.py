from __future__ import annotations
from typing import Dict, List


def normalize_vehicles(payload) -> List[Dict]:
    """Return the vehicle records of a Cycly payload as a list.

    Arrays are used as-is; objects keyed by ID yield their values in the order
    received. The key is dropped, record["id"] is what counts downstream.
    """
    if isinstance(payload, list):
        return list(payload)
    if isinstance(payload, dict):
        return list(payload.values())
    raise TypeError(f"Unexpected Cycly payload type: {type(payload).__name__}")


def id_sort_key(record) -> tuple:
    # numeric ids first (numerically), then other ids as text, missing ids last
    rid = record.get("id") if isinstance(record, dict) else None
    if rid is None or isinstance(rid, bool):
        return (2, 0, "")
    if isinstance(rid, (int, float)):
        return (0, rid, "")
    text = str(rid).strip()
    try:
        return (0, int(text), "")
    except ValueError:
        return (1, 0, text)


def sort_by_id(records: List[Dict]) -> List[Dict]:
    return sorted(records, key=id_sort_key)
