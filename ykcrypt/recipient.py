"""Recipient strings: the public half of a slot key, shareable as text."""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .header import CurveID
from .slots import Slot

RECIPIENT_PREFIX = "ykcrypt1"

_HEX_NUMBER = re.compile(r"\s*([0-9A-Fa-f]+)")
_DEC_NUMBER = re.compile(r"\s*([+-]?[0-9]+)")
_RAW_BASE64 = re.compile(r"[A-Za-z0-9+/]*")


@dataclass(frozen=True)
class Recipient:
    """The slot, curve and SEC1 uncompressed public key of a recipient."""

    slot_key: int
    curve_id: int
    pub_key_bytes: bytes


def curve_from_id(curve_id: int) -> ec.EllipticCurve:
    """Return the elliptic curve for a curve identifier."""
    if curve_id == CurveID.P256:
        return ec.SECP256R1()
    if curve_id == CurveID.P384:
        return ec.SECP384R1()
    raise ValueError(f"unsupported curve id {curve_id}")


def _curve_id_of(curve: ec.EllipticCurve) -> CurveID:
    if isinstance(curve, ec.SECP256R1):
        return CurveID.P256
    if isinstance(curve, ec.SECP384R1):
        return CurveID.P384
    raise ValueError("unsupported curve")


def _slot_key(slot: Slot | int) -> int:
    return slot.key if isinstance(slot, Slot) else int(slot)


def recipient_from_public_key(slot: Slot | int, public_key: ec.EllipticCurvePublicKey) -> str:
    """Build the recipient string ``ykcrypt1:<slotHex>:<curveId>:<base64>``."""
    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        raise ValueError("unsupported curve")
    curve_id = _curve_id_of(public_key.curve)
    point = public_key.public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint
    )
    encoded = base64.b64encode(point).decode("ascii").rstrip("=")
    return f"{RECIPIENT_PREFIX}:{_slot_key(slot):02x}:{int(curve_id)}:{encoded}"


def _decode_raw_base64(text: str) -> bytes:
    if not _RAW_BASE64.fullmatch(text) or len(text) % 4 == 1:
        raise ValueError(f"illegal base64 data in {text!r}")
    return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)


def parse_recipient(s: str) -> Recipient:
    """Parse a recipient string into a :class:`Recipient`."""
    parts = s.split(":")
    if len(parts) != 4 or parts[0] != RECIPIENT_PREFIX:
        raise ValueError(
            "invalid recipient format (expected ykcrypt1:<slotHex>:<curveId>:<b64pub>)"
        )
    slot_match = _HEX_NUMBER.match(parts[1])
    if slot_match is None:
        raise ValueError(f"parse slot hex: expected hex number, got {parts[1]!r}")
    slot_key = int(slot_match.group(1), 16)
    if slot_key > 0xFFFFFFFF:
        raise ValueError(f"parse slot hex: value out of range: {parts[1]!r}")

    curve_match = _DEC_NUMBER.match(parts[2])
    if curve_match is None:
        raise ValueError(f"parse curve id: expected integer, got {parts[2]!r}")
    curve_id = int(curve_match.group(1)) & 0xFF

    try:
        pub_bytes = _decode_raw_base64(parts[3])
    except ValueError as exc:
        raise ValueError(f"decode pubkey: {exc}") from exc

    return Recipient(slot_key=slot_key, curve_id=curve_id, pub_key_bytes=pub_bytes)


def recipient_from_cert(slot: Slot | int, cert: x509.Certificate) -> Recipient:
    """Extract the recipient from a slot certificate holding an EC public key."""
    public_key = cert.public_key()
    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        raise ValueError(
            f"cert public key type {type(public_key).__name__}, expected an EC public key"
        )
    return parse_recipient(recipient_from_public_key(slot, public_key))