"""
SNMP transport for table walks, using the pysnmp asyncio API.
Handles both SNMPv2c and SNMPv3 credentials.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    UsmUserData,
    bulk_cmd,
    get_cmd,
    next_cmd,
    usmAesCfb128Protocol,
    usmAesCfb256Protocol,
    usmDESPrivProtocol,
    usmHMAC128SHA224AuthProtocol,
    usmHMAC192SHA256AuthProtocol,
    usmHMACMD5AuthProtocol,
    usmHMACSHAAuthProtocol,
    usmNoAuthProtocol,
    usmNoPrivProtocol,
)


class AuthProtocol(str, Enum):
    """SNMPv3 authentication protocols."""
    NONE = "none"
    MD5 = "MD5"
    SHA = "SHA"
    SHA224 = "SHA-224"
    SHA256 = "SHA-256"


class PrivProtocol(str, Enum):
    """SNMPv3 privacy protocols."""
    NONE = "none"
    DES = "DES"
    AES128 = "AES-128"
    AES256 = "AES-256"


AUTH_PROTOCOL_MAP = {
    AuthProtocol.NONE: usmNoAuthProtocol,
    AuthProtocol.MD5: usmHMACMD5AuthProtocol,
    AuthProtocol.SHA: usmHMACSHAAuthProtocol,
    AuthProtocol.SHA224: usmHMAC128SHA224AuthProtocol,
    AuthProtocol.SHA256: usmHMAC192SHA256AuthProtocol,
}

PRIV_PROTOCOL_MAP = {
    PrivProtocol.NONE: usmNoPrivProtocol,
    PrivProtocol.DES: usmDESPrivProtocol,
    PrivProtocol.AES128: usmAesCfb128Protocol,
    PrivProtocol.AES256: usmAesCfb256Protocol,
}

# Values pysnmp renders for missing instances / end of view
_EMPTY_MARKERS = ("noSuch", "endOfMib")


@dataclass
class SNMPv2cCredential:
    """SNMPv2c credential with community string."""
    community: str


@dataclass
class SNMPv3Credential:
    """SNMPv3 credential with auth and privacy settings."""
    username: str
    auth_protocol: AuthProtocol = AuthProtocol.NONE
    auth_password: str | None = None
    priv_protocol: PrivProtocol = PrivProtocol.NONE
    priv_password: str | None = None


SNMPCredential = SNMPv2cCredential | SNMPv3Credential


class SNMPError(Exception):
    """Base exception for SNMP operations."""
    pass


class SNMPTimeoutError(SNMPError):
    """SNMP request timed out."""
    pass


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    text = str(value)
    return any(marker in text for marker in _EMPTY_MARKERS)


def column_index(oid: str, column_oid: str) -> str | None:
    """
    Return the row index suffix of an instance OID under a column.

    Indices are kept as strings: multi-part indices ("3.1") and
    non-contiguous numbering are passed through untouched.
    """
    base = column_oid.strip(".")
    full = oid.strip(".")
    if not full.startswith(base + "."):
        return None
    return full[len(base) + 1:] or None


class SNMPClient:
    """
    SNMP client used to read AP tables.

    Usage:
        client = SNMPClient(host="192.168.1.10", timeout=5, retries=2)
        rows = await client.walk_column(".1.3.6.1.4.1.61802.1.1.2.1.9", cred)
    """

    def __init__(
        self,
        host: str,
        port: int = 161,
        timeout: int = 5,
        retries: int = 2
    ):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.retries = retries
        self._engine = SnmpEngine()

    def _get_auth_data(self, credential: SNMPCredential):
        """Build pysnmp auth data from credential."""
        if isinstance(credential, SNMPv2cCredential):
            return CommunityData(credential.community)

        return UsmUserData(
            userName=credential.username,
            authKey=credential.auth_password,
            privKey=credential.priv_password,
            authProtocol=AUTH_PROTOCOL_MAP.get(credential.auth_protocol, usmNoAuthProtocol),
            privProtocol=PRIV_PROTOCOL_MAP.get(credential.priv_protocol, usmNoPrivProtocol),
        )

    async def _get_transport(self):
        return await UdpTransportTarget.create(
            (self.host, self.port),
            timeout=self.timeout,
            retries=self.retries
        )

    def _raise_for_errors(self, error_indication, error_status, error_index, var_binds) -> None:
        if error_indication:
            if "timeout" in str(error_indication).lower():
                raise SNMPTimeoutError(f"SNMP timeout for {self.host}: {error_indication}")
            raise SNMPError(f"SNMP error for {self.host}: {error_indication}")

        if error_status:
            raise SNMPError(
                f"SNMP error {error_status.prettyPrint()} at "
                f"{error_index and var_binds[int(error_index) - 1][0] or '?'}"
            )

    async def get_many(
        self,
        oids: list[str],
        credential: SNMPCredential
    ) -> dict[str, str]:
        """
        Get several instance OIDs in a single request.

        Returns:
            Dict mapping OID (without leading dot) to value; instances the
            agent does not have are left out.
        """
        if not oids:
            return {}

        transport = await self._get_transport()
        result = await get_cmd(
            self._engine,
            self._get_auth_data(credential),
            transport,
            ContextData(),
            *[ObjectType(ObjectIdentity(oid.lstrip("."))) for oid in oids],
            lookupMib=False,
        )
        self._raise_for_errors(*result)

        values = {}
        for oid, value in result[3]:
            if not _is_empty(value):
                values[str(oid)] = str(value)
        return values

    async def walk(
        self,
        oid: str,
        credential: SNMPCredential,
        max_rows: int | None = None
    ) -> list[tuple[str, str]]:
        """
        Walk an OID subtree using GETBULK, falling back to GETNEXT when the
        agent rejects bulk requests or returns nothing.

        Returns:
            List of (oid, value) tuples
        """
        try:
            results = await self._walk(oid, credential, max_rows, bulk=True)
            if not results:
                return await self._walk(oid, credential, max_rows, bulk=False)
            return results
        except SNMPError as e:
            if "tooBig" in str(e) or "genErr" in str(e):
                return await self._walk(oid, credential, max_rows, bulk=False)
            raise

    async def walk_column(
        self,
        column_oid: str,
        credential: SNMPCredential,
        max_rows: int | None = None
    ) -> dict[str, str]:
        """Walk one table column and return {row index: value}."""
        rows: dict[str, str] = {}
        for oid, value in await self.walk(column_oid, credential, max_rows):
            index = column_index(oid, column_oid)
            if index is not None:
                rows[index] = value
        return rows

    async def _walk(
        self,
        oid: str,
        credential: SNMPCredential,
        max_rows: int | None,
        bulk: bool
    ) -> list[tuple[str, str]]:
        results: list[tuple[str, str]] = []
        base_oid = oid.strip(".")
        current_oid = base_oid
        batch_size = 50  # maxRepetitions per GETBULK

        while True:
            transport = await self._get_transport()
            if bulk:
                response = await bulk_cmd(
                    self._engine,
                    self._get_auth_data(credential),
                    transport,
                    ContextData(),
                    0,
                    batch_size,
                    ObjectType(ObjectIdentity(current_oid)),
                    lookupMib=False,
                )
            else:
                response = await next_cmd(
                    self._engine,
                    self._get_auth_data(credential),
                    transport,
                    ContextData(),
                    ObjectType(ObjectIdentity(current_oid)),
                    lookupMib=False,
                )
            self._raise_for_errors(*response)

            var_binds = response[3]
            if not var_binds:
                break

            last_oid = None
            for var_bind in var_binds:
                oid_str = str(var_bind[0])
                value = var_bind[1]

                if not oid_str.startswith(base_oid + "."):
                    return results
                if _is_empty(value):
                    return results

                results.append((oid_str, str(value)))
                last_oid = oid_str

                if max_rows is not None and len(results) >= max_rows:
                    return results

            if bulk and len(var_binds) < batch_size:
                break
            if last_oid is None:
                break
            current_oid = last_oid

        return results
