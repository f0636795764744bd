"""
Table fetchers feeding the discovery core.

The core only needs two synchronous calls: ``fetch`` for metric-bearing
tables and ``lookup_by_index`` for auxiliary single-column attributes.
``TableSnapshot`` answers both from columns walked ahead of time, so all
network I/O for one device happens in ``load_snapshot``.
"""
import logging
from typing import Any, Mapping, Protocol

from src.snmp.client import SNMPClient, SNMPCredential, SNMPError

logger = logging.getLogger(__name__)


class TableFetcher(Protocol):
    """Read-only access to SNMP table columns for a single device."""

    def fetch(self, column_name: str, mib_name: str) -> dict[str, dict[str, Any]]:
        """Return {index: {column_name: value}}; empty when the table has no rows."""
        ...

    def lookup_by_index(self, column_name: str, mib_name: str) -> dict[str, Any]:
        """Return {index: value} for one column; empty when absent."""
        ...


class TableSnapshot:
    """
    In-memory fetcher over already-walked columns.

    Columns are stored per (mib, column). Unknown columns read as empty
    tables, never as errors.
    """

    def __init__(self, columns: Mapping[tuple[str, str], Mapping[str, Any]] | None = None):
        self._columns: dict[tuple[str, str], dict[str, Any]] = {}
        for key, rows in (columns or {}).items():
            self._columns[key] = dict(rows)

    @classmethod
    def from_columns(cls, mib_name: str, columns: Mapping[str, Mapping[str, Any]]) -> "TableSnapshot":
        """Build a snapshot for a single MIB from {column: {index: value}}."""
        return cls({(mib_name, name): rows for name, rows in columns.items()})

    def add_column(self, column_name: str, mib_name: str, rows: Mapping[str, Any]) -> None:
        self._columns[(mib_name, column_name)] = dict(rows)

    def fetch(self, column_name: str, mib_name: str) -> dict[str, dict[str, Any]]:
        rows = self._columns.get((mib_name, column_name), {})
        return {index: {column_name: value} for index, value in rows.items()}

    def lookup_by_index(self, column_name: str, mib_name: str) -> dict[str, Any]:
        return dict(self._columns.get((mib_name, column_name), {}))

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._columns


async def load_snapshot(
    client: SNMPClient,
    credential: SNMPCredential,
    mib_name: str,
    columns: Mapping[str, str],
    max_rows: int | None = None,
) -> TableSnapshot:
    """
    Walk each column into a TableSnapshot.

    Args:
        client: SNMP client bound to the device
        credential: SNMP credential (v2c or v3)
        mib_name: MIB the columns belong to
        columns: Dict of column name -> column base OID
        max_rows: Optional cap on rows per column

    A walk that fails is logged and stored as an empty column, so one
    unreadable table only empties the sensor categories that depend on it.
    """
    snapshot = TableSnapshot()
    for name, column_oid in columns.items():
        try:
            rows = await client.walk_column(column_oid, credential, max_rows)
        except SNMPError as e:
            logger.warning(f"Walk of {mib_name}::{name} on {client.host} failed: {e}")
            rows = {}
        logger.debug(f"{client.host} {mib_name}::{name}: {len(rows)} rows")
        snapshot.add_column(name, mib_name, rows)
    return snapshot
