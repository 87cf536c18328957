"""PIV slots and management keys."""

from __future__ import annotations

import binascii
from enum import Enum

DEFAULT_MANAGEMENT_KEY = bytes([1, 2, 3, 4, 5, 6, 7, 8]) * 3


class Slot(Enum):
    """The PIV key slots usable for key agreement."""

    AUTHENTICATION = 0x9A
    SIGNATURE = 0x9C
    KEY_MANAGEMENT = 0x9D
    CARD_AUTHENTICATION = 0x9E

    @property
    def key(self) -> int:
        """Numeric slot identifier, as stored in file headers."""
        return self.value

    @property
    def object_id(self) -> int:
        """Identifier of the data object holding the slot certificate."""
        return _OBJECT_IDS[self]


_OBJECT_IDS = {
    Slot.AUTHENTICATION: 0x5FC105,
    Slot.SIGNATURE: 0x5FC10A,
    Slot.KEY_MANAGEMENT: 0x5FC10B,
    Slot.CARD_AUTHENTICATION: 0x5FC101,
}

_SLOT_NAMES = {
    **dict.fromkeys(("9a", "auth", "authentication"), Slot.AUTHENTICATION),
    **dict.fromkeys(("9c", "sig", "signature"), Slot.SIGNATURE),
    **dict.fromkeys(("9d", "km", "keymgmt", "keymanagement"), Slot.KEY_MANAGEMENT),
    **dict.fromkeys(("9e", "cardauth", "cardauthentication"), Slot.CARD_AUTHENTICATION),
}


def parse_slot(s: str) -> Slot:
    """Parse a slot given as a hex id (9a, 9c, 9d, 9e) or a friendly name."""
    try:
        return _SLOT_NAMES[s.strip().lower()]
    except KeyError:
        raise ValueError(f"unsupported slot {s!r} (use 9a, 9c, 9d, or 9e)") from None


def slot_from_key(key: int) -> Slot:
    """Return the slot with the numeric identifier ``key``."""
    try:
        return Slot(key)
    except ValueError:
        raise ValueError(
            f"unsupported slot key 0x{key:x} (only 9a/9c/9d/9e supported)"
        ) from None


def parse_management_key(s: str) -> bytes:
    """Parse a 24-byte management key from hex, or ``default``."""
    if s.strip().lower() == "default":
        return DEFAULT_MANAGEMENT_KEY
    text = s[2:] if s.startswith("0x") else s
    try:
        key = binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"decode mgmt key hex: {exc}") from exc
    if len(key) != 24:
        raise ValueError(
            f"management key must be 24 bytes (48 hex chars), got {len(key)} bytes"
        )
    return key