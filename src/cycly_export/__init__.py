"""
Cycly → BikeExchange CSV export library.

This package provides the building blocks of the export:
- Fetching the vehicle inventory of a Cycly branch
- Filtering to new bikes that are assembled or delivered
- Mapping vehicles to the BikeExchange column layout
- Emitting CSV text with RFC 4180 style quoting

Public API:
- cycly_client.CyclyConfig, cycly_client.fetch_vehicles
- cycly_client.ConfigurationError, cycly_client.UpstreamError
- normalize.normalize_vehicles, normalize.sort_by_id
- mapping.EXPORT_HEADERS, mapping.map_vehicle, mapping.retail_price
- io.csv_escape, io.serialize_csv, io.write_csv
- transform.filter_eligible, transform.transform_rows, transform.generate_csv
"""

from . import io, mapping, normalize, cycly_client, transform  # re-export modules

__all__ = [
    "io",
    "mapping",
    "normalize",
    "cycly_client",
    "transform",
]
