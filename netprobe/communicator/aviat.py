"""Aviat microwave radios."""

from typing import List

from ..core.models import Interface, RadioInterface
from ..deviceclass.device_class import Filter
from ..network.connection import connection_from_context
from .base import CodeCommunicator, walk_uint_sum
from .resolver import register_communicator


# AVIAT-MODEM-MIB
MODEM_STATUS_MAX_CAPACITY = "1.3.6.1.4.1.2509.9.3.2.4.1.1"
MODEM_CUR_CAPACITY_TX = "1.3.6.1.4.1.2509.9.3.2.1.1.11"
MODEM_CUR_CAPACITY_RX = "1.3.6.1.4.1.2509.9.3.2.1.1.12"

RADIO_PREFIX = "Radio"


@register_communicator("aviat")
class AviatCommunicator(CodeCommunicator):
    """Adds modem capacities to the radio interfaces."""

    async def get_interfaces(self, *filters: Filter) -> List[Interface]:
        interfaces = await self.inner.get_interfaces(*filters)

        port = connection_from_context()

        max_capacity = await walk_uint_sum(port, MODEM_STATUS_MAX_CAPACITY, "aviatModemStatusMaxCapacity")
        # current capacities are in kbit/s
        max_bitrate_tx = await walk_uint_sum(port, MODEM_CUR_CAPACITY_TX, "aviatModemCurCapacityTx") * 1000
        max_bitrate_rx = await walk_uint_sum(port, MODEM_CUR_CAPACITY_RX, "aviatModemCurCapacityRx") * 1000

        for interface in interfaces:
            if interface.if_name is not None and interface.if_name.startswith(RADIO_PREFIX):
                interface.max_speed_in = max_capacity
                interface.max_speed_out = max_capacity
                if interface.radio is None:
                    interface.radio = RadioInterface()
                interface.radio.maxbitrate_out = max_bitrate_tx
                interface.radio.maxbitrate_in = max_bitrate_rx

        return interfaces
