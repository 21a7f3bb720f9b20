from __future__ import annotations
import json
import math
from decimal import Decimal
from typing import Dict, List


EXPORT_HEADERS: List[str] = [
    "ID",
    "gtin",
    "model",
    "brand",
    "mpn",
    "sku",
    "color",
    "frameSize",
    "frameSizeNumeric",
    "Lager",
    "price",
    "retailPrice",
]

# output column -> Cycly vehicle attribute
FIELD_MAP: Dict[str, str] = {
    "ID": "id",
    "gtin": "ean",
    "model": "model",
    "brand": "manufacturer",
    "mpn": "mpn",
    "sku": "sku",
    "color": "color",
    "frameSize": "frameSizeFormated",
    "frameSizeNumeric": "frameSize",
    "price": "price",
}

STOCK_VALUE = "1"


def _number_to_str(v: float) -> str:
    """Format a float the way JavaScript's Number#toString does.

    Plain notation for decimal exponents from -6 to 20, exponent notation
    (1e-7, 1.5e+21) outside that range. The digits are the shortest ones
    that round-trip, which Python's repr already produces.
    """
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    if v == 0:
        return "0"
    sign = "-" if v < 0 else ""
    _, digits, exponent = Decimal(repr(abs(v))).as_tuple()
    s = "".join(str(d) for d in digits)
    stripped = s.rstrip("0")
    exponent += len(s) - len(stripped)
    s = stripped
    k = len(s)
    n = k + exponent
    if k <= n <= 21:
        return sign + s + "0" * (n - k)
    if 0 < n <= 21:
        return sign + s[:n] + "." + s[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + s
    e = n - 1
    mantissa = s if k == 1 else s[0] + "." + s[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def value_to_str(v) -> str:
    """Text of a decoded JSON value as JavaScript's String() would give it.

    null -> '', booleans -> 'true'/'false', floats as Number#toString
    (999.0 -> '999', 1e-07 -> '1e-7'), arrays joined with commas. Objects are
    written as compact JSON instead of JavaScript's '[object Object]'.
    """
    if v is None:
        return ""
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float):
        return _number_to_str(v)
    if isinstance(v, list):
        return ",".join(value_to_str(x) for x in v)
    if isinstance(v, dict):
        return json.dumps(v, ensure_ascii=False, separators=(",", ":"))
    return str(v)


def _get(record, key: str):
    if not isinstance(record, dict):
        return None
    return record.get(key)


def retail_price(record):
    """discountPrice when set (0 included), otherwise the regular price."""
    discount = _get(record, "discountPrice")
    if discount is not None:
        return discount
    return _get(record, "price")


def map_vehicle(record) -> Dict:
    out = {h: "" for h in EXPORT_HEADERS}
    for column, attr in FIELD_MAP.items():
        val = _get(record, attr)
        out[column] = "" if val is None else val
    out["Lager"] = STOCK_VALUE
    rp = retail_price(record)
    out["retailPrice"] = "" if rp is None else rp
    return out
