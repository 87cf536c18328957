"""Header format, recipients, ciphers and key derivation for YubiKey PIV ECDH file encryption."""

__version__ = "1.0.0"