"""Arbitrary-length payloads over a fixed-size public-key block operation.

A PKCS#1 v1.5 block carries at most `bsize - 11` bytes of payload and always encrypts to `bsize` bytes. The payload
is therefore cut into segments of `bsize - 11` bytes (the last one possibly shorter), each segment goes through the
key on its own, and the blocks are joined in order. Decryption cuts the ciphertext at every `bsize` bytes and
reverses the process.

Typical usage example:

    c = encrypt(pub, b"A" * 1000)
    r = decrypt(priv, c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from typing import Iterator, Protocol

from cryptkit.errors import KeySizeError

PKCS1_V15_OVERHEAD = 11


class BlockEncrypter(Protocol):
    bsize: int

    def encrypt_block(self, message: bytes) -> bytes:
        ...


class BlockDecrypter(Protocol):
    bsize: int

    def decrypt_block(self, ciphertext: bytes) -> bytes:
        ...


def segments(data: bytes, each_size: int) -> Iterator[bytes]:
    """Yields consecutive slices of `each_size` bytes, the last one possibly shorter. Nothing for empty data."""
    view = memoryview(data)
    for start in range(0, len(view), each_size):
        yield bytes(view[start:start + each_size])


def encrypt_size(bsize: int) -> int:
    """Payload bytes per block for a modulus of `bsize` bytes.

    Raises:
        KeySizeError: If the modulus cannot hold the PKCS#1 v1.5 overhead.
    """
    each_size = bsize - PKCS1_V15_OVERHEAD
    if each_size <= 0:
        raise KeySizeError(f"A {bsize} byte modulus leaves no room for PKCS#1 v1.5 padding.")
    return each_size


def encrypt(key: BlockEncrypter, data: bytes) -> bytes:
    """Encrypts a payload of any length.

    Args:
        key: Public key exposing `bsize` and `encrypt_block`.
        data: The payload. Empty data encrypts to empty output without touching the key.

    Returns:
        The concatenated ciphertext blocks, `bsize` bytes per segment.

    Raises:
        KeySizeError: If the modulus is too small.
        PrimitiveError: Propagated from the first failing block.
    """
    each_size = encrypt_size(key.bsize)
    return b"".join([key.encrypt_block(seg) for seg in segments(data, each_size)])


def decrypt(key: BlockDecrypter, data: bytes) -> bytes:
    """Decrypts the output of `encrypt`.

    Args:
        key: Private key exposing `bsize` and `decrypt_block`.
        data: Concatenated ciphertext blocks. A trailing short block makes its block decryption fail.

    Returns:
        The concatenated payload segments.

    Raises:
        KeySizeError: If the modulus is too small.
        PrimitiveError: Propagated from the first failing block.
    """
    encrypt_size(key.bsize)
    return b"".join([key.decrypt_block(seg) for seg in segments(data, key.bsize)])
