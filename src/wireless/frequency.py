"""
802.11 channel number to centre frequency (MHz).
"""
from typing import Any, Callable

from src.wireless.models import MetricValueError, parse_metric

ChannelConverter = Callable[[int], int]

_CHANNELS_2GHZ = {channel: 2407 + 5 * channel for channel in range(1, 14)}
_CHANNELS_2GHZ[14] = 2484

_CHANNELS_5GHZ = {
    channel: 5000 + 5 * channel
    for channel in (
        32, 34, 36, 38, 40, 42, 44, 46, 48, 50, 52, 54, 56, 58, 60, 62, 64, 68,
        96, 100, 102, 104, 106, 108, 110, 112, 114, 116, 118, 120, 122, 124,
        126, 128, 132, 134, 136, 138, 140, 142, 144, 149, 151, 153, 155, 157,
        159, 161, 163, 165, 167, 169, 171, 173, 175, 177,
    )
}

CHANNEL_FREQUENCIES: dict[int, int] = {**_CHANNELS_2GHZ, **_CHANNELS_5GHZ}


class UnknownChannelError(ValueError):
    """Channel number is not in the frequency table."""

    def __init__(self, channel: int):
        self.channel = channel
        super().__init__(f"No frequency known for channel {channel}")


def parse_channel(value: Any, oid: str) -> int:
    """
    Parse a polled channel number.

    Raises:
        MetricValueError: the value is not a whole number ("36.7", "n/a")
    """
    number = parse_metric(value, oid)
    if number != int(number):
        raise MetricValueError(value, oid)
    return int(number)


def channel_to_frequency(channel: int) -> int:
    """Return the centre frequency in MHz for a 2.4 or 5 GHz channel."""
    try:
        return CHANNEL_FREQUENCIES[int(channel)]
    except KeyError:
        raise UnknownChannelError(channel) from None
