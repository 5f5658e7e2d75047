"""AES in CBC, CFB, OFB and CTR modes on top of the `cryptography` block primitive.

CBC is a block mode and needs a padding scheme from `cryptkit.padding`. CFB, OFB and CTR turn AES into a
keystream and keep the input length. Every call starts over from the configured IV, so one object can be reused
for unrelated messages and shared between threads.

Typical usage example:

    enc = new_cbc_encrypter(key, iv, Pkcs7Padding(AES_BLOCK_SIZE))
    c = enc.encrypt(b"Hi there!")
    r = new_cbc_decrypter(key, iv, Pkcs7Padding(AES_BLOCK_SIZE)).decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import Callable

from cryptography.hazmat.decrepit.ciphers import modes as decrepit_modes
from cryptography.hazmat.primitives.ciphers import Cipher
from cryptography.hazmat.primitives.ciphers import algorithms
from cryptography.hazmat.primitives.ciphers import modes

from cryptkit.errors import BlockAlignmentError
from cryptkit.errors import ConfigError
from cryptkit.padding import Pkcs7Padding

AES128_KEY_SIZE = 128 // 8
AES192_KEY_SIZE = 192 // 8
AES256_KEY_SIZE = 256 // 8
AES_BLOCK_SIZE = 16
AES_IV_SIZE = AES_BLOCK_SIZE

_KEY_SIZES = (AES128_KEY_SIZE, AES192_KEY_SIZE, AES256_KEY_SIZE)

logger = logging.getLogger(__name__)


def _check_key_iv(key: bytes, iv: bytes) -> algorithms.AES:
    """Validates key and IV, returning the keyed block primitive.

    Raises:
        ConfigError: If the IV is not one block long or the key length selects no AES variant.
    """
    if len(iv) != AES_IV_SIZE:
        raise ConfigError(f"IV length must equal the block size ({AES_IV_SIZE}), got {len(iv)}.")
    if len(key) not in _KEY_SIZES:
        raise ConfigError(f"Key length must be one of {_KEY_SIZES}, got {len(key)}.")
    return algorithms.AES(bytes(key))


def _check_padding(padding: Pkcs7Padding) -> None:
    if padding.block_size % AES_BLOCK_SIZE != 0:
        raise ConfigError(f"Padding block size {padding.block_size} is not a multiple of {AES_BLOCK_SIZE}.")


class AesBlockModeEncrypter:
    """Encrypts whole messages in CBC mode with padding."""

    def __init__(self, key: bytes, iv: bytes, padding: Pkcs7Padding) -> None:
        self._algorithm = _check_key_iv(key, iv)
        _check_padding(padding)
        self._iv = bytes(iv)
        self.padding = padding

    def encrypt(self, data: bytes) -> bytes:
        """Pads and encrypts the data.

        Args:
            data: The cleartext.

        Returns:
            The ciphertext, a whole number of blocks long. Never shares storage with `data`.
        """
        buf = self.padding.pad(data)
        encryptor = Cipher(self._algorithm, modes.CBC(self._iv)).encryptor()
        return encryptor.update(buf) + encryptor.finalize()


class AesBlockModeDecrypter:
    """Decrypts whole messages in CBC mode with padding."""

    def __init__(self, key: bytes, iv: bytes, padding: Pkcs7Padding) -> None:
        self._algorithm = _check_key_iv(key, iv)
        _check_padding(padding)
        self._iv = bytes(iv)
        self.padding = padding

    def decrypt(self, data: bytes) -> bytes:
        """Decrypts the data and strips its padding.

        Args:
            data: The ciphertext.

        Returns:
            The cleartext.

        Raises:
            BlockAlignmentError: If the ciphertext is not a whole number of blocks.
            PaddingError: If the decrypted padding is malformed, usually meaning a wrong key or IV.
        """
        if len(data) % AES_BLOCK_SIZE != 0:
            raise BlockAlignmentError(f"Data size must be a multiple of the block size ({AES_BLOCK_SIZE}).")
        decryptor = Cipher(self._algorithm, modes.CBC(self._iv)).decryptor()
        buf = decryptor.update(bytes(data)) + decryptor.finalize()
        return self.padding.unpad(buf)


class AesStream:
    """AES driven as a keystream generator. Output length always equals input length."""

    def __init__(self, key: bytes, iv: bytes, mode: Callable[[bytes], modes.Mode], decrypt: bool = False) -> None:
        self._algorithm = _check_key_iv(key, iv)
        self._iv = bytes(iv)
        self._mode = mode
        self._decrypt = decrypt

    def crypt(self, data: bytes) -> bytes:
        """XORs the data with the keystream.

        Args:
            data: The bytes to transform.

        Returns:
            A new buffer of the same length.
        """
        cipher = Cipher(self._algorithm, self._mode(self._iv))
        ctx = cipher.decryptor() if self._decrypt else cipher.encryptor()
        return ctx.update(bytes(data)) + ctx.finalize()


def new_cbc_encrypter(key: bytes, iv: bytes, padding: Pkcs7Padding) -> AesBlockModeEncrypter:
    """CBC encrypter. The key selects AES-128, AES-192 or AES-256 by its length, the IV must be 16 bytes."""
    logger.debug("AES-%d CBC encrypter with %r", len(key) * 8, padding)
    return AesBlockModeEncrypter(key, iv, padding)


def new_cbc_decrypter(key: bytes, iv: bytes, padding: Pkcs7Padding) -> AesBlockModeDecrypter:
    """CBC decrypter. Same key and IV rules as `new_cbc_encrypter`."""
    logger.debug("AES-%d CBC decrypter with %r", len(key) * 8, padding)
    return AesBlockModeDecrypter(key, iv, padding)


def new_cfb_encrypter(key: bytes, iv: bytes) -> AesStream:
    """Full-block (128 bit segment) CFB encrypter."""
    return AesStream(key, iv, decrepit_modes.CFB)


def new_cfb_decrypter(key: bytes, iv: bytes) -> AesStream:
    """Full-block (128 bit segment) CFB decrypter."""
    return AesStream(key, iv, decrepit_modes.CFB, decrypt=True)


def new_ofb(key: bytes, iv: bytes) -> AesStream:
    """OFB keystream, which encrypts and decrypts alike."""
    return AesStream(key, iv, decrepit_modes.OFB)


def new_ctr(key: bytes, iv: bytes) -> AesStream:
    """CTR keystream. The IV is the initial 128 bit big-endian counter block."""
    return AesStream(key, iv, modes.CTR)
