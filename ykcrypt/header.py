"""The encrypted file header and its binary encoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO

from .ciphers import CipherID

MAGIC = b"YKCRYPT1"
FLAG_HAS_PASSPHRASE = 1 << 0
WRAP_NONCE_SIZE = 12
MAX_BLOB_SIZE = 0xFFFF

_FIXED = struct.Struct("<BBBIB")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


class CurveID(IntEnum):
    """Elliptic curve identifiers stored in headers and recipients."""

    P256 = 1
    P384 = 2


class HeaderError(ValueError):
    """Raised for a header that cannot be encoded or decoded."""


@dataclass
class Header:
    """Metadata at the start of every encrypted file."""

    version: int = 1
    curve_id: int = CurveID.P256
    cipher_id: int = CipherID.CHACHA20
    slot_key: int = 0x9D
    flags: int = 0
    eph_pub: bytes = b""
    salt: bytes = b""
    pass_salt: bytes = b""
    nonce_prefix: bytes = b""
    chunk_size: int = 0
    wrap_nonce: bytes = b""
    wrapped_key: bytes = b""

    @property
    def has_passphrase(self) -> bool:
        return bool(self.flags & FLAG_HAS_PASSPHRASE)

    def marshal_prefix_aad(self) -> bytes:
        """Encode the header up to, not including, the wrapped key."""
        if len(self.wrap_nonce) != WRAP_NONCE_SIZE:
            raise HeaderError(
                f"wrapNonce must be {WRAP_NONCE_SIZE} bytes, got {len(self.wrap_nonce)}"
            )
        try:
            parts = [
                MAGIC,
                _FIXED.pack(
                    self.version, self.curve_id, self.cipher_id, self.slot_key, self.flags
                ),
                _encode_blob(self.eph_pub),
                _encode_blob(self.salt),
                _encode_blob(self.pass_salt),
                _encode_blob(self.nonce_prefix),
                _U32.pack(self.chunk_size),
                bytes(self.wrap_nonce),
            ]
        except struct.error as exc:
            raise HeaderError(f"header field out of range: {exc}") from exc
        return b"".join(parts)

    def marshal_full(self) -> bytes:
        """Encode the complete header, including the wrapped key."""
        return self.marshal_prefix_aad() + _encode_blob(self.wrapped_key)


def _encode_blob(data: bytes) -> bytes:
    if len(data) > MAX_BLOB_SIZE:
        raise HeaderError(f"blob too large: {len(data)}")
    return _U16.pack(len(data)) + bytes(data)


def write_u16_bytes(stream: BinaryIO, data: bytes) -> None:
    """Write ``data`` preceded by its length as a little-endian uint16."""
    stream.write(_encode_blob(data))


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    data = stream.read(n) if n else b""
    if len(data) != n:
        raise HeaderError("unexpected end of header")
    return data


def read_u16_bytes(stream: BinaryIO) -> bytes:
    """Read a blob written by :func:`write_u16_bytes`."""
    (length,) = _U16.unpack(_read_exact(stream, _U16.size))
    return _read_exact(stream, length)


def parse_header(stream: BinaryIO) -> tuple[Header, bytes, bytes]:
    """Read a header from a binary stream.

    Returns the header, its full encoding (AAD for chunks) and the
    encoding up to the wrap nonce (AAD for key unwrapping).
    """
    magic = _read_exact(stream, len(MAGIC))
    if magic != MAGIC:
        raise HeaderError(
            f"this doesn't look like an encrypted file (expected magic "
            f"{MAGIC.decode()!r}, got {magic.decode('latin-1')!r}). Did you perhaps "
            "try to decrypt something that's already decrypted?"
        )
    raw = [magic]

    def take(n: int) -> bytes:
        data = _read_exact(stream, n)
        raw.append(data)
        return data

    def take_blob() -> bytes:
        (length,) = _U16.unpack(take(_U16.size))
        return take(length)

    version, curve_id, cipher_id, slot_key, flags = _FIXED.unpack(take(_FIXED.size))
    eph_pub = take_blob()
    salt = take_blob()
    pass_salt = take_blob()
    nonce_prefix = take_blob()
    (chunk_size,) = _U32.unpack(take(_U32.size))
    wrap_nonce = take(WRAP_NONCE_SIZE)
    wrap_aad = b"".join(raw)
    wrapped_key = take_blob()

    header = Header(
        version=version,
        curve_id=curve_id,
        cipher_id=cipher_id,
        slot_key=slot_key,
        flags=flags,
        eph_pub=eph_pub,
        salt=salt,
        pass_salt=pass_salt,
        nonce_prefix=nonce_prefix,
        chunk_size=chunk_size,
        wrap_nonce=wrap_nonce,
        wrapped_key=wrapped_key,
    )
    return header, b"".join(raw), wrap_aad