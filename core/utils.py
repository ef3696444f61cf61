# MIT License
from __future__ import annotations

import hashlib
import json
import math

from .params import ProjectParameters


def scenario_hash(params: ProjectParameters) -> str:
    """Compute a stable hash for a parameter set.

    Serialises the parameters to JSON (with sorted keys) and computes a
    SHA256 hash.  Used to give exported files a name that identifies the
    scenario they came from.

    Parameters
    ----------
    params:
        ProjectParameters instance.

    Returns
    -------
    str
        Hexadecimal string representation of the hash.
    """
    record = params.model_dump(mode="json", by_alias=True)
    # ensure deterministic key ordering
    payload = json.dumps(record, sort_keys=True).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def js_round(x: float) -> float:
    """Round half up, like JavaScript's ``Math.round`` (2.5 -> 3, -2.5 -> -2)."""
    if not math.isfinite(x):
        return x
    # x - floor(x) is exact; floor(x + 0.5) is not (0.49999999999999994 -> 1)
    f = math.floor(x)
    return float(f + 1 if x - f >= 0.5 else f)


def fmt(x: float, digits: int = 0) -> str:
    """Format a number for display.

    Thousands are grouped with commas and at most ``digits`` fraction
    digits are shown, with trailing zeros dropped (``1234.50`` becomes
    ``"1,234.5"``).  Non-finite values render as ``"-"``.
    """
    if x is None or not math.isfinite(x):
        return "-"
    txt = f"{x:,.{digits}f}"
    if digits > 0:
        txt = txt.rstrip("0").rstrip(".")
    if txt in ("-0", ""):
        txt = "0"
    return txt


def pct(rate: float, digits: int = 2) -> str:
    """Format a decimal rate as a percentage string (0.1817 -> "18.17%")."""
    if rate is None or not math.isfinite(rate):
        return "-"
    return f"{fmt(rate * 100.0, digits)}%"
