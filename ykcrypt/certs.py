"""Self-signed container certificates that carry a slot's public key."""

from __future__ import annotations

import datetime
import secrets

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

ISSUER_COMMON_NAME = "ykcrypt container cert issuer"
VALIDITY_YEARS = 20
CLOCK_SKEW = datetime.timedelta(minutes=5)


def _add_years(moment: datetime.datetime, years: int) -> datetime.datetime:
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        # 29 February in a year that is not a leap year rolls over to 1 March.
        return moment.replace(year=moment.year + years, month=3, day=1)


def _name(common_name: str) -> x509.Name:
    if not common_name:
        return x509.Name([])
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


def make_container_cert(
    public_key: ec.EllipticCurvePublicKey, common_name: str
) -> tuple[bytes, x509.Certificate]:
    """Create a certificate holding ``public_key``, signed by a throwaway issuer.

    Returns the DER encoding and the parsed certificate.
    """
    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        raise ValueError("unsupported curve")
    if isinstance(public_key.curve, ec.SECP256R1):
        ca_key = ec.generate_private_key(ec.SECP256R1())
        digest: hashes.HashAlgorithm = hashes.SHA256()
    elif isinstance(public_key.curve, ec.SECP384R1):
        ca_key = ec.generate_private_key(ec.SECP384R1())
        digest = hashes.SHA384()
    else:
        raise ValueError("unsupported curve")

    serial = secrets.randbelow((1 << 128) - 1) + 1
    now = datetime.datetime.now(datetime.timezone.utc)

    cert = (
        x509.CertificateBuilder()
        .subject_name(_name(common_name))
        .issuer_name(_name(ISSUER_COMMON_NAME))
        .public_key(public_key)
        .serial_number(serial)
        .not_valid_before(now - CLOCK_SKEW)
        .not_valid_after(_add_years(now, VALIDITY_YEARS))
        .add_extension(
            x509.KeyUsage(
                digital_signature=False,
                content_commitment=False,
                key_encipherment=False,
                data_encipherment=False,
                key_agreement=True,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
        .sign(ca_key, digest)
    )
    der = cert.public_bytes(serialization.Encoding.DER)
    return der, x509.load_der_x509_certificate(der)