# ykcrypt

Building blocks for encrypting files against a key held in a YubiKey PIV
slot: the encrypted-file header format, recipient strings, content ciphers,
wrap-key derivation, slot and management-key parsing, container certificates
and hidden prompts, plus a small `ykcrypt` command.

## The scheme these pieces serve

- A file is encrypted with an ephemeral ECDH exchange against the public key
  of a PIV slot (P-256 or P-384). Only the recipient string is needed for
  that, not the YubiKey itself.
- A per-file key is wrapped with a key derived from the ECDH shared secret
  through HKDF-SHA256 (`derive_wrap_key`).
- As an optional second factor, a passphrase is stretched with Argon2id
  (time 3, 64 MiB, 4 lanes) and mixed into the wrap key with HMAC-SHA256.
- File contents are sealed in chunks with XChaCha20-Poly1305 (the default) or
  AES-256-GCM. Each chunk's nonce is built from a random prefix and the chunk
  index, and the serialized header is used as associated data.

## Installation

```
pip install .
```

Run the tests with:

```
pip install ".[test]"
pytest
```

## Command line

```
ykcrypt version
```

prints the version, git commit, build time and Python version. Run without a
subcommand, `ykcrypt` prints its help. The global `--reader` option is
accepted, but no command uses it yet. The exit status is 0 on success and 1
when the arguments cannot be parsed.

## What this package does not do

It does not talk to a YubiKey or any smart-card reader. There are no commands
to provision a slot, encrypt or decrypt files, or export a recipient string,
and nothing here performs the ECDH exchange with the card or streams a file
through the chunk cipher. The modules provide the format and the
cryptographic pieces such a tool is built from.

## Library

### Recipients (`ykcrypt.recipient`)

A recipient string has the form `ykcrypt1:<slot hex>:<curve id>:<base64 key>`,
for example `ykcrypt1:9d:1:BGx0ZXN0cHVia2V5Ynl0ZXM`. The key is an uncompressed
SEC1 point in unpadded standard base64; curve id 1 is P-256 and 2 is P-384.

```python
from ykcrypt.recipient import parse_recipient, curve_from_id

recipient = parse_recipient("ykcrypt1:9d:1:BGx0ZXN0cHVia2V5Ynl0ZXM")
print(recipient.slot_key, recipient.curve_id, recipient.pub_key_bytes)
curve = curve_from_id(recipient.curve_id)   # ec.SECP256R1()
```

`parse_recipient` raises `ValueError` for a malformed string.
`recipient_from_public_key(slot, public_key)` produces such a string from an
EC public key (`slot` is a `Slot` or a number), and
`recipient_from_cert(slot, cert)` returns the `Recipient` for the EC public
key in an X.509 certificate.

### Container certificates (`ykcrypt.certs`)

`make_container_cert(public_key, common_name)` creates a certificate holding a
P-256 or P-384 public key, restricted to key agreement and valid from five
minutes ago for twenty years. It is signed by a throwaway issuer key on the
same curve and returned as `(der_bytes, certificate)`.

### Slots and management keys (`ykcrypt.slots`)

```python
from ykcrypt.slots import Slot, parse_slot, slot_from_key, parse_management_key

slot = parse_slot("km")          # same as "9d", "keymgmt", "keymanagement"
assert slot is Slot.KEY_MANAGEMENT and slot_from_key(0x9d) is slot
print(hex(slot.key), hex(slot.object_id))
mgmt = parse_management_key("default")
```

Supported slots are 9a (authentication), 9c (signature), 9d (key management)
and 9e (card authentication). A management key is either `default`
(`DEFAULT_MANAGEMENT_KEY`) or 48 hex digits, with an optional `0x` prefix.
Invalid input raises `ValueError`.

### Ciphers (`ykcrypt.ciphers`)

```python
from ykcrypt.ciphers import (
    parse_cipher_name, cipher_name, nonce_prefix_size,
    make_chunk_nonce, new_file_aead, random_bytes,
)

cipher_id = parse_cipher_name("aes")          # or "chacha", "xchacha20", ...
print(cipher_name(cipher_id))                 # AES-256-GCM

prefix = random_bytes(nonce_prefix_size(cipher_id))
aead = new_file_aead(random_bytes(32), cipher_id)
nonce = make_chunk_nonce(prefix, 0, cipher_id)
sealed = aead.seal(nonce, b"chunk data", b"header bytes")
assert aead.open(nonce, sealed, b"header bytes") == b"chunk data"
```

`CipherID.CHACHA20` (1) uses a 16-byte prefix and a 24-byte nonce;
`CipherID.AES256` (2) a 4-byte prefix and a 12-byte nonce. Unknown ids fall
back to XChaCha20-Poly1305. `FileAEAD.open` raises `ValueError` when
authentication fails.

`derive_wrap_key(shared_secret, salt, pass_salt, passphrase)` turns an ECDH
shared secret, and optionally a passphrase, into the 32-byte wrap key; a
passphrase with an empty `pass_salt` raises `ValueError`.

### Prompts (`ykcrypt.prompt`)

`prompt_hidden(prompt)` writes the prompt to stderr and reads a value without
echo on a terminal, or a single word from standard input otherwise.
`prompt_passphrase(prompt)` does the same and refuses an empty value with
`ValueError`.

### File header (`ykcrypt.header`)

Every encrypted file starts with the magic `YKCRYPT1` and a header carrying the
version, curve and cipher ids, slot, flags, ephemeral public key, salts, nonce
prefix, chunk size, a 12-byte wrap nonce and the wrapped file key.
Variable-length fields are stored with a two-byte little-endian length
(`write_u16_bytes` / `read_u16_bytes`, at most 65535 bytes).

`Header.marshal_full()` serializes a header; `Header.marshal_prefix_aad()`
gives the part before the wrapped key, which authenticates the key wrapping.
`Header.has_passphrase` reports the passphrase flag. `parse_header(stream)`
reads a header from a binary stream and returns `(header, full_bytes,
wrap_aad)`. It raises `HeaderError` for truncated input or a wrong magic, the
latter with a hint that the file may not be encrypted at all.