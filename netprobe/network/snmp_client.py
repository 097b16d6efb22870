"""
SNMP access port backed by pysnmp.

Queries a single remote device over SNMPv1/v2c (community) or SNMPv3 (USM).
Timeouts and retries are handled here; the collection core only sees a
terminal success or ``WalkError`` per request.
"""

import logging
from typing import List, Optional

from pysnmp.hlapi.v3arch.asyncio import (
    get_cmd,
    walk_cmd,
    SnmpEngine,
    CommunityData,
    UsmUserData,
    UdpTransportTarget,
    ContextData,
    ObjectType,
    ObjectIdentity,
    USM_AUTH_NONE,
    USM_AUTH_HMAC96_MD5,
    USM_AUTH_HMAC96_SHA,
    USM_PRIV_NONE,
    USM_PRIV_CBC56_DES,
    USM_PRIV_CFB128_AES,
)
from pysnmp.error import PySnmpError
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject

from ..core.config import SNMPConfig
from ..core.errors import WalkError
from .connection import SNMPAccessPort
from .value import SNMPResponse


logger = logging.getLogger(__name__)


AUTH_PROTOCOLS = {
    "MD5": USM_AUTH_HMAC96_MD5,
    "SHA": USM_AUTH_HMAC96_SHA,
}

PRIV_PROTOCOLS = {
    "DES": USM_PRIV_CBC56_DES,
    "AES": USM_PRIV_CFB128_AES,
}

_ABSENT = (NoSuchObject, NoSuchInstance, EndOfMibView)


class SNMPClient(SNMPAccessPort):
    """
    Access port for one remote device.

    Supports SNMPv1, SNMPv2c and SNMPv3 (authPriv, authNoPriv).
    """

    def __init__(self, host: str, config: Optional[SNMPConfig] = None):
        self.host = host
        self.config = config or SNMPConfig()
        self._engine = SnmpEngine()
        self._transport = None

    def __repr__(self) -> str:
        return f"SNMPClient(host={self.host!r}, version={self.config.version!r})"

    def _auth_data(self):
        cfg = self.config
        if cfg.version == "3":
            return UsmUserData(
                cfg.v3_username,
                authKey=cfg.v3_auth_key or None,
                privKey=cfg.v3_priv_key or None,
                authProtocol=AUTH_PROTOCOLS[cfg.v3_auth_protocol.upper()] if cfg.v3_auth_key else USM_AUTH_NONE,
                privProtocol=PRIV_PROTOCOLS[cfg.v3_priv_protocol.upper()] if cfg.v3_priv_key else USM_PRIV_NONE,
            )
        # mpModel 0 is SNMPv1, 1 is SNMPv2c
        return CommunityData(cfg.community, mpModel=0 if cfg.version == "1" else 1)

    async def _target(self):
        if self._transport is None:
            self._transport = await UdpTransportTarget.create(
                (self.host, self.config.port),
                timeout=self.config.timeout,
                retries=self.config.retries,
            )
        return self._transport

    async def get(self, *oids: str) -> List[SNMPResponse]:
        """Get single OID instances from the device."""
        try:
            errorIndication, errorStatus, errorIndex, varBinds = await get_cmd(
                self._engine,
                self._auth_data(),
                await self._target(),
                ContextData(),
                *[ObjectType(ObjectIdentity(oid)) for oid in oids],
            )
        except (OSError, PySnmpError) as e:
            raise WalkError(f"snmp get on {self.host} failed: {e}", oids[0] if oids else None) from e

        if errorIndication:
            raise WalkError(f"snmp get on {self.host} failed: {errorIndication}", oids[0] if oids else None)
        if errorStatus:
            raise WalkError(f"snmp get on {self.host} failed: {errorStatus.prettyPrint()}", oids[0] if oids else None)

        return [
            SNMPResponse(str(name), value)
            for name, value in varBinds
            if not isinstance(value, _ABSENT)
        ]

    async def walk(self, oid: str) -> List[SNMPResponse]:
        """Walk an OID subtree."""
        results = []
        logger.debug(f"Walking {oid} on {self.host}")

        try:
            async for errorIndication, errorStatus, errorIndex, varBinds in walk_cmd(
                self._engine,
                self._auth_data(),
                await self._target(),
                ContextData(),
                ObjectType(ObjectIdentity(oid)),
                lexicographicMode=False,
            ):
                if errorIndication:
                    raise WalkError(f"snmp walk on {self.host} failed: {errorIndication}", oid)
                if errorStatus:
                    raise WalkError(f"snmp walk on {self.host} failed: {errorStatus.prettyPrint()}", oid)
                for name, value in varBinds:
                    if isinstance(value, _ABSENT):
                        continue
                    results.append(SNMPResponse(str(name), value))
        except (OSError, PySnmpError) as e:
            raise WalkError(f"snmp walk on {self.host} failed: {e}", oid) from e

        logger.debug(f"Walk of {oid} on {self.host} returned {len(results)} values")
        return results

    async def close(self):
        self._engine.close_dispatcher()
