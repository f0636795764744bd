"""
Index-keyed join of a metric table with auxiliary lookup columns.
"""
from typing import Any, Mapping

from src.snmp.oids import AltaWirelessOIDs
from src.wireless.models import JoinedRow, RawRow

# Attributes a secondary lookup may fill on a JoinedRow
JOIN_ATTRIBUTES = ("band", "ssid")


def join(
    primary: Mapping[str, RawRow],
    metric_column: str,
    oid_prefix: str,
    secondaries: Mapping[str, Mapping[str, Any]] | None = None,
) -> list[JoinedRow]:
    """
    Combine a metric table with secondary lookups sharing its row index.

    Args:
        primary: Metric-bearing rows by index; the only table iterated
        metric_column: Column in each primary row holding the metric
        oid_prefix: Column OID the metric instance OIDs are built from
        secondaries: Attribute name ("band", "ssid") -> {index: value}

    Returns:
        One JoinedRow per primary index, in primary order. A secondary
        that lacks an index leaves that attribute as None.
    """
    if not primary:
        return []

    secondaries = secondaries or {}
    unknown = set(secondaries) - set(JOIN_ATTRIBUTES)
    if unknown:
        raise ValueError(f"Unsupported join attributes: {sorted(unknown)}")

    joined = []
    for index, row in primary.items():
        attributes = {name: lookup.get(index) for name, lookup in secondaries.items()}
        joined.append(
            JoinedRow(
                index=index,
                oid=AltaWirelessOIDs.instance(oid_prefix, index),
                metric=row.values.get(metric_column),
                **attributes,
            )
        )
    return joined
