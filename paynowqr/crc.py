"""CRC-16/CCITT-FALSE checksum used by the EMV tag 63 field."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16_ccitt_false(data: str) -> int:
    """Return the CRC-16/CCITT-FALSE register for ``data``.

    Polynomial 0x1021, initial value 0xFFFF, no reflection and no final XOR.
    EMV payloads are ASCII; anything else raises ``UnicodeEncodeError``.
    """

    register = CRC16_INIT
    for byte in data.encode("ascii"):
        register ^= byte << 8
        for _ in range(8):
            if register & 0x8000:
                register = (register << 1) ^ CRC16_POLY
            else:
                register <<= 1
            register &= 0xFFFF
    return register


def checksum(data: str) -> str:
    """Render the checksum of ``data`` as 4 uppercase hex digits."""

    return f"{crc16_ccitt_false(data):04X}"
