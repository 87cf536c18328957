import pytest

from ykcrypt.ciphers import (
    CipherID,
    cipher_name,
    derive_wrap_key,
    make_chunk_nonce,
    new_file_aead,
    nonce_prefix_size,
    parse_cipher_name,
    random_bytes,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("chacha", CipherID.CHACHA20),
        ("chacha20", CipherID.CHACHA20),
        ("xchacha20", CipherID.CHACHA20),
        ("xchacha20-poly1305", CipherID.CHACHA20),
        ("CHACHA", CipherID.CHACHA20),
        ("aes", CipherID.AES256),
        ("aes256", CipherID.AES256),
        ("aes-256", CipherID.AES256),
        ("aes-256-gcm", CipherID.AES256),
        ("aes256gcm", CipherID.AES256),
        ("AES", CipherID.AES256),
    ],
)
def test_parse_cipher_name(name, expected):
    assert parse_cipher_name(name) == expected


@pytest.mark.parametrize("name", ["blowfish", ""])
def test_parse_cipher_name_invalid(name):
    with pytest.raises(ValueError, match="unknown cipher"):
        parse_cipher_name(name)


@pytest.mark.parametrize(
    "cipher_id, expected",
    [
        (CipherID.CHACHA20, "XChaCha20-Poly1305"),
        (CipherID.AES256, "AES-256-GCM"),
        (99, "unknown(99)"),
    ],
)
def test_cipher_name(cipher_id, expected):
    assert cipher_name(cipher_id) == expected


@pytest.mark.parametrize(
    "cipher_id, size", [(CipherID.CHACHA20, 16), (CipherID.AES256, 4), (0, 16)]
)
def test_nonce_prefix_size(cipher_id, size):
    assert nonce_prefix_size(cipher_id) == size


@pytest.mark.parametrize(
    "cipher_id, prefix_size, nonce_size",
    [(CipherID.CHACHA20, 16, 24), (CipherID.AES256, 4, 12)],
)
def test_make_chunk_nonce(cipher_id, prefix_size, nonce_size):
    prefix = random_bytes(prefix_size)
    nonce0 = make_chunk_nonce(prefix, 0, cipher_id)
    nonce1 = make_chunk_nonce(prefix, 1, cipher_id)
    assert len(nonce0) == nonce_size
    assert nonce0 != nonce1
    assert make_chunk_nonce(prefix, 0, cipher_id) == nonce0
    assert nonce0.startswith(prefix)


def test_make_chunk_nonce_layout():
    prefix = bytes(range(16))
    nonce = make_chunk_nonce(prefix, 0x0102, CipherID.CHACHA20)
    assert nonce == prefix + bytes([0, 0, 0, 0, 0, 0, 1, 2])
    aes_nonce = make_chunk_nonce(b"\xaa\xbb\xcc\xdd", 7, CipherID.AES256)
    assert aes_nonce == b"\xaa\xbb\xcc\xdd" + bytes(7) + b"\x07"


def test_make_chunk_nonce_short_aes_prefix():
    with pytest.raises(ValueError):
        make_chunk_nonce(b"\x01\x02", 0, CipherID.AES256)


@pytest.mark.parametrize(
    "cipher_id, nonce_size", [(CipherID.CHACHA20, 24), (CipherID.AES256, 12)]
)
def test_new_file_aead_nonce_size(cipher_id, nonce_size):
    aead = new_file_aead(random_bytes(32), cipher_id)
    assert aead.nonce_size == nonce_size
    assert aead.cipher_id == cipher_id


@pytest.mark.parametrize("cipher_id", [CipherID.CHACHA20, CipherID.AES256])
def test_file_aead_encrypt_decrypt(cipher_id):
    aead = new_file_aead(random_bytes(32), cipher_id)
    plaintext = b"Hello, World! This is a test message for encryption."
    aad = b"additional authenticated data"
    nonce = random_bytes(aead.nonce_size)

    ciphertext = aead.seal(nonce, plaintext, aad)
    assert len(ciphertext) == len(plaintext) + 16
    assert aead.open(nonce, ciphertext, aad) == plaintext

    tampered = bytes([ciphertext[0] ^ 0xFF]) + ciphertext[1:]
    with pytest.raises(ValueError):
        aead.open(nonce, tampered, aad)


def test_file_aead_wrong_aad_rejected():
    aead = new_file_aead(random_bytes(32), CipherID.CHACHA20)
    nonce = random_bytes(24)
    ciphertext = aead.seal(nonce, b"data", b"header-a")
    with pytest.raises(ValueError):
        aead.open(nonce, ciphertext, b"header-b")


def test_file_aead_wrong_nonce_size():
    aead = new_file_aead(random_bytes(32), CipherID.AES256)
    with pytest.raises(ValueError, match="nonce"):
        aead.seal(bytes(24), b"data", None)


def test_chacha_key_size_enforced():
    with pytest.raises(ValueError):
        new_file_aead(bytes(16), CipherID.CHACHA20)


def test_derive_wrap_key_without_passphrase():
    secret_bytes = bytes(range(32))
    salt = bytes(16)
    first = derive_wrap_key(secret_bytes, salt, b"", "")
    second = derive_wrap_key(secret_bytes, salt, b"", "")
    assert len(first) == 32
    assert first == second
    assert derive_wrap_key(secret_bytes, b"\x01" * 16, b"", "") != first


def test_derive_wrap_key_with_passphrase():
    secret_bytes = bytes(range(32))
    salt = bytes(16)
    pass_salt = b"\x02" * 16
    plain = derive_wrap_key(secret_bytes, salt, b"", "")
    mixed = derive_wrap_key(secret_bytes, salt, pass_salt, "passphrase")
    assert len(mixed) == 32
    assert mixed != plain
    assert derive_wrap_key(secret_bytes, salt, pass_salt, "passphrase") == mixed


def test_derive_wrap_key_requires_pass_salt():
    with pytest.raises(ValueError, match="passSalt is empty"):
        derive_wrap_key(bytes(32), bytes(16), b"", "passphrase")


def test_random_bytes_length():
    assert len(random_bytes(48)) == 48
    assert random_bytes(0) == b""