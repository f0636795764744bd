"""
Fold joined rows into keyed groups (by radio band, by SSID).
"""
from typing import Any, Callable, Iterable

from src.wireless.models import Group, JoinedRow, parse_metric

KeyFn = Callable[[JoinedRow], str | None]


def band_key(band: Any) -> str | None:
    """
    Return the group key for a radio band: the raw band value plus "G".

    "5" -> "5G", "2.4" -> "2.4G". Existing sensor identities depend on
    this exact form. A missing band has no key.
    """
    if band is None or str(band) == "":
        return None
    return f"{band}G"


def by_band(row: JoinedRow) -> str | None:
    return band_key(row.band)


def by_ssid(row: JoinedRow) -> str | None:
    return row.ssid or None


def aggregate(rows: Iterable[JoinedRow], key_fn: KeyFn) -> dict[str, Group]:
    """
    Group rows by ``key_fn`` summing metrics and collecting OIDs.

    Rows whose key is None or empty are left out of this aggregation
    only. Groups keep first-seen order and OIDs keep row order.

    Raises:
        MetricValueError: a contributing row's metric is not numeric
    """
    groups: dict[str, Group] = {}
    for row in rows:
        key = key_fn(row)
        if not key:
            continue

        metric = parse_metric(row.metric, row.oid)
        group = groups.get(key)
        if group is None:
            groups[key] = Group(key=key, oids=[row.oid], total=metric)
        else:
            group.add(row.oid, metric)
    return groups
