"""Symmetric ciphers, chunk nonces and wrap-key derivation."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from enum import IntEnum

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.argon2 import Argon2id
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from nacl import bindings as _sodium
from nacl.exceptions import CryptoError

WRAP_INFO = b"ykcrypt wrap v1"
WRAP_KEY_SIZE = 32

_ARGON2_TIME = 3
_ARGON2_MEMORY_KIB = 64 * 1024
_ARGON2_LANES = 4

_XCHACHA_NONCE_SIZE = _sodium.crypto_aead_xchacha20poly1305_ietf_NPUBBYTES
_XCHACHA_KEY_SIZE = _sodium.crypto_aead_xchacha20poly1305_ietf_KEYBYTES
_GCM_NONCE_SIZE = 12
_COUNTER_SIZE = 8


class CipherID(IntEnum):
    """Identifiers of the content ciphers stored in a file header."""

    CHACHA20 = 1
    AES256 = 2


_NONCE_SIZES = {
    CipherID.CHACHA20: _XCHACHA_NONCE_SIZE,
    CipherID.AES256: _GCM_NONCE_SIZE,
}


class FileAEAD:
    """An authenticated cipher for file content.

    Unknown cipher identifiers fall back to XChaCha20-Poly1305.
    """

    def __init__(self, key: bytes, cipher_id: int) -> None:
        key = bytes(key)
        if cipher_id == CipherID.AES256:
            if len(key) not in (16, 24, 32):
                raise ValueError(f"invalid AES key size {len(key)}")
            self.cipher_id = CipherID.AES256
            self.nonce_size = _GCM_NONCE_SIZE
            self._aesgcm = AESGCM(key)
        else:
            if len(key) != _XCHACHA_KEY_SIZE:
                raise ValueError(
                    f"XChaCha20-Poly1305 key must be {_XCHACHA_KEY_SIZE} bytes, got {len(key)}"
                )
            self.cipher_id = CipherID.CHACHA20
            self.nonce_size = _XCHACHA_NONCE_SIZE
            self._aesgcm = None
        self._key = key

    def _check_nonce(self, nonce: bytes) -> bytes:
        nonce = bytes(nonce)
        if len(nonce) != self.nonce_size:
            raise ValueError(f"nonce must be {self.nonce_size} bytes, got {len(nonce)}")
        return nonce

    def seal(self, nonce: bytes, plaintext: bytes, associated_data: bytes | None) -> bytes:
        """Encrypt and authenticate ``plaintext``; returns ciphertext with tag."""
        nonce = self._check_nonce(nonce)
        aad = bytes(associated_data) if associated_data else None
        if self._aesgcm is not None:
            return self._aesgcm.encrypt(nonce, bytes(plaintext), aad)
        return _sodium.crypto_aead_xchacha20poly1305_ietf_encrypt(
            bytes(plaintext), aad, nonce, self._key
        )

    def open(self, nonce: bytes, ciphertext: bytes, associated_data: bytes | None) -> bytes:
        """Verify and decrypt ``ciphertext``; raises ValueError if authentication fails."""
        nonce = self._check_nonce(nonce)
        aad = bytes(associated_data) if associated_data else None
        try:
            if self._aesgcm is not None:
                return self._aesgcm.decrypt(nonce, bytes(ciphertext), aad)
            return _sodium.crypto_aead_xchacha20poly1305_ietf_decrypt(
                bytes(ciphertext), aad, nonce, self._key
            )
        except (InvalidTag, CryptoError) as exc:
            raise ValueError("message authentication failed") from exc


def new_file_aead(file_key: bytes, cipher_id: int) -> FileAEAD:
    """Create the content cipher selected by ``cipher_id``."""
    return FileAEAD(file_key, cipher_id)


def nonce_prefix_size(cipher_id: int) -> int:
    """Size of the random nonce prefix for a cipher.

    The prefix fills the cipher's nonce except for the 8-byte chunk
    counter; unknown identifiers use the XChaCha20-Poly1305 layout.
    """
    try:
        nonce_size = _NONCE_SIZES[CipherID(cipher_id)]
    except ValueError:
        nonce_size = _XCHACHA_NONCE_SIZE
    return nonce_size - _COUNTER_SIZE


def make_chunk_nonce(prefix: bytes, index: int, cipher_id: int) -> bytes:
    """Build the nonce for chunk ``index`` from the random prefix."""
    if not 0 <= index < 1 << 64:
        raise ValueError(f"chunk index out of range: {index}")
    counter = index.to_bytes(_COUNTER_SIZE, "big")
    if cipher_id == CipherID.AES256:
        if len(prefix) < 4:
            raise ValueError(f"AES nonce prefix must be at least 4 bytes, got {len(prefix)}")
        return bytes(prefix[:4]) + counter
    return bytes(prefix[:16]).ljust(16, b"\x00") + counter


def cipher_name(cipher_id: int) -> str:
    """Human-readable name of a cipher identifier."""
    if cipher_id == CipherID.AES256:
        return "AES-256-GCM"
    if cipher_id == CipherID.CHACHA20:
        return "XChaCha20-Poly1305"
    return f"unknown({int(cipher_id)})"


_CIPHER_ALIASES = {
    **dict.fromkeys(
        ("chacha", "chacha20", "xchacha20", "xchacha20-poly1305"), CipherID.CHACHA20
    ),
    **dict.fromkeys(
        ("aes", "aes256", "aes-256", "aes-256-gcm", "aes256gcm"), CipherID.AES256
    ),
}


def parse_cipher_name(name: str) -> CipherID:
    """Map a user-supplied cipher name or alias to its identifier."""
    try:
        return _CIPHER_ALIASES[name.lower()]
    except KeyError:
        raise ValueError(f"unknown cipher {name!r} (use 'chacha' or 'aes')") from None


def derive_wrap_key(
    shared_secret: bytes, salt: bytes, pass_salt: bytes, passphrase: str
) -> bytes:
    """Derive the 32-byte wrap key from an ECDH secret and optional passphrase.

    HKDF-SHA256 gives the base key; with a passphrase, an Argon2id key
    is mixed in with HMAC-SHA256.
    """
    base = HKDF(
        algorithm=hashes.SHA256(),
        length=WRAP_KEY_SIZE,
        salt=bytes(salt) if salt else None,
        info=WRAP_INFO,
    ).derive(bytes(shared_secret))

    if not passphrase:
        return base
    if not pass_salt:
        raise ValueError("ciphertext requires passphrase but passSalt is empty")

    pass_key = Argon2id(
        salt=bytes(pass_salt),
        length=32,
        iterations=_ARGON2_TIME,
        lanes=_ARGON2_LANES,
        memory_cost=_ARGON2_MEMORY_KIB,
    ).derive(passphrase.encode("utf-8"))
    return hmac.new(pass_key, base, hashlib.sha256).digest()


def random_bytes(n: int) -> bytes:
    """Return ``n`` cryptographically secure random bytes."""
    return secrets.token_bytes(n)