from __future__ import annotations
import logging
from typing import Dict, List, Optional

import requests

from .cycly_client import CyclyConfig, fetch_vehicles
from .io import serialize_csv
from .mapping import EXPORT_HEADERS, map_vehicle
from .normalize import sort_by_id as _sort_by_id


NEW_BIKE_TYPE = "Neufahrzeug"
ELIGIBLE_STATES = ("Fertig montiert", "Angeliefert")

log = logging.getLogger(__name__)


def is_eligible(record) -> bool:
    if not isinstance(record, dict):
        return False
    return record.get("type") == NEW_BIKE_TYPE and record.get("state") in ELIGIBLE_STATES


def filter_eligible(records: List[Dict]) -> List[Dict]:
    return [r for r in records if is_eligible(r)]


def transform_rows(records: List[Dict], sort_by_id: bool = False) -> List[Dict]:
    src = _sort_by_id(records) if sort_by_id else list(records)
    eligible = filter_eligible(src)
    log.info(
        f"Vehicles after filtering ({NEW_BIKE_TYPE} + {' / '.join(ELIGIBLE_STATES)}): {len(eligible)}"
    )
    return [map_vehicle(r) for r in eligible]


def generate_csv(
    cfg: CyclyConfig,
    sort_by_id: bool = False,
    session: Optional[requests.Session] = None,
) -> str:
    """Fetch the branch inventory and return the export as CSV text."""
    vehicles = fetch_vehicles(cfg, session=session)
    rows = transform_rows(vehicles, sort_by_id=sort_by_id)
    content = serialize_csv(rows, EXPORT_HEADERS)
    log.info(f"CSV built successfully (lines: {len(rows) + 1})")
    return content
