"""Exception hierarchy shared by every cryptkit module.

Every error derives from `CryptError`, and additionally from the builtin exception a caller would naturally expect,
so code catching `ValueError` around a decryption keeps working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class CryptError(Exception):
    """Base class for all cryptkit errors."""


class ConfigError(CryptError, ValueError):
    """Invalid construction parameters, e.g. a bad IV length or an unsupported key size."""


class KeySizeError(ConfigError):
    """The RSA modulus is too small to hold the PKCS#1 v1.5 padding overhead."""


class PaddingError(CryptError, ValueError):
    """Malformed padding found while unpadding."""


class BlockAlignmentError(CryptError, ValueError):
    """Block-mode input is not a multiple of the block size."""


class PrimitiveError(CryptError, RuntimeError):
    """A single-block cipher operation failed."""
