"""
Build Sensor records from aggregated groups or single joined rows.
"""
from typing import Callable

from src.wireless.models import (
    AggregationOp,
    Group,
    JoinedRow,
    Sensor,
    SensorCategory,
    parse_metric,
)

UnitFn = Callable[[int | float], int | float]


def build_group_sensor(
    category: SensorCategory,
    device_id: int | str,
    group: Group,
    group_tag: str,
    display_name: str,
    aggregation_op: AggregationOp = AggregationOp.NONE,
    low_limit: int | float | None = None,
    high_limit: int | float | None = None,
    low_warn_limit: int | float | None = None,
    high_warn_limit: int | float | None = None,
) -> Sensor:
    """Sensor whose value is a group total over all contributing OIDs."""
    return Sensor(
        category=category,
        device_id=device_id,
        oids=tuple(group.oids),
        group_tag=group_tag,
        index_label=group.key,
        display_name=display_name,
        value=group.total,
        aggregation_op=aggregation_op,
        low_limit=low_limit,
        high_limit=high_limit,
        low_warn_limit=low_warn_limit,
        high_warn_limit=high_warn_limit,
    )


def build_row_sensor(
    category: SensorCategory,
    device_id: int | str,
    row: JoinedRow,
    group_tag: str,
    index_label: str,
    display_name: str,
    unit_fn: UnitFn | None = None,
) -> Sensor:
    """
    Sensor backed by one OID; the row metric, optionally unit-converted.

    Raises:
        MetricValueError: the row metric is not numeric
    """
    value = parse_metric(row.metric, row.oid)
    if unit_fn is not None:
        value = unit_fn(value)
    return Sensor(
        category=category,
        device_id=device_id,
        oids=row.oid,
        group_tag=group_tag,
        index_label=index_label,
        display_name=display_name,
        value=value,
    )
