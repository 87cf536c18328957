[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ykcrypt"
version = "1.0.0"
description = "Building blocks for YubiKey PIV ECDH file encryption: header format, recipient strings, ciphers and key derivation"
requires-python = ">=3.10"
keywords = [
    "yubikey",
    "piv",
    "ecdh",
    "encryption",
    "xchacha20-poly1305",
    "aes-gcm",
    "argon2id",
    "hkdf",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography>=44",
    "pynacl>=1.4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ykcrypt = "ykcrypt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ykcrypt"]

[tool.pytest.ini_options]
addopts = "-ra"
