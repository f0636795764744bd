"""
Data records passed between the join, aggregation and sensor build steps.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SensorCategory(str, Enum):
    """Wireless sensor classes understood by the sensor sink."""
    CLIENTS = "clients"
    FREQUENCY = "frequency"
    UTILIZATION = "utilization"


class AggregationOp(str, Enum):
    """How a multi-OID sensor's polled values are combined."""
    SUM = "sum"
    NONE = "none"  # sink's default policy


class MetricValueError(ValueError):
    """A metric column held a value that is not a number."""

    def __init__(self, value: Any, oid: str):
        self.value = value
        self.oid = oid
        super().__init__(f"Non-numeric metric value {value!r} at {oid}")


def parse_metric(value: Any, oid: str) -> int | float:
    """
    Parse an SNMP metric value into a number.

    Integers stay integers so client totals compare exactly. Anything
    that is not a finite number raises MetricValueError instead of
    becoming 0 (or NaN).
    """
    if isinstance(value, bool) or value is None:
        raise MetricValueError(value, oid)

    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise MetricValueError(value, oid) from None

    if isinstance(number, float) and not math.isfinite(number):
        raise MetricValueError(value, oid)
    return number


@dataclass
class RawRow:
    """One SNMP table entry: row index plus its column values."""

    index: str
    values: dict[str, Any] = field(default_factory=dict)


def raw_rows(table: dict[str, dict[str, Any]]) -> dict[str, RawRow]:
    """Wrap fetcher output ({index: {column: value}}) as RawRows."""
    return {str(index): RawRow(index=str(index), values=dict(values)) for index, values in table.items()}


@dataclass
class JoinedRow:
    """A primary-table row with the secondary attributes found for its index."""

    index: str
    oid: str
    metric: Any
    band: str | None = None
    ssid: str | None = None


@dataclass
class Group:
    """Rows folded under one derived key."""

    key: str
    oids: list[str] = field(default_factory=list)
    total: int | float = 0

    def add(self, oid: str, metric: int | float) -> None:
        self.oids.append(oid)
        self.total += metric


@dataclass(frozen=True)
class Sensor:
    """
    A discovered wireless sensor.

    Identity for persistence is ``key``; the sink deduplicates on it
    across discovery runs. ``oids`` is a single OID for per-row sensors
    and a tuple for summed groups.
    """

    category: SensorCategory
    device_id: int | str
    oids: str | tuple[str, ...]
    group_tag: str
    index_label: str
    display_name: str
    value: int | float
    multiplier: int = 1
    divisor: int = 1
    aggregation_op: AggregationOp = AggregationOp.NONE
    low_limit: int | float | None = None
    high_limit: int | float | None = None
    low_warn_limit: int | float | None = None
    high_warn_limit: int | float | None = None

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.category.value, self.group_tag, self.index_label)

    @property
    def oid_list(self) -> list[str]:
        """Return the sensor OIDs as a list regardless of arity."""
        if isinstance(self.oids, str):
            return [self.oids]
        return list(self.oids)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the sensor sink."""
        return {
            "category": self.category.value,
            "device_id": self.device_id,
            "oids": self.oids if isinstance(self.oids, str) else list(self.oids),
            "group_tag": self.group_tag,
            "index_label": self.index_label,
            "display_name": self.display_name,
            "value": self.value,
            "multiplier": self.multiplier,
            "divisor": self.divisor,
            "aggregation_op": self.aggregation_op.value,
            "low_limit": self.low_limit,
            "high_limit": self.high_limit,
            "low_warn_limit": self.low_warn_limit,
            "high_warn_limit": self.high_warn_limit,
        }
