"""Block alignment padding, following PKCS#7 (RFC 2315 section 10.3) and PKCS#5 (RFC 2898 section 6.1.1).

The padding size is written into every filler byte, so a padded buffer describes its own framing and no length
prefix is required. The check performed on removal catches most corrupted buffers, but it is framing, not
authentication.

Typical usage example:

    padding = Pkcs7Padding(16)
    padded = padding.pad(b"Hi there!")
    clear = padding.unpad(padded)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptkit.errors import ConfigError
from cryptkit.errors import PaddingError

_MAX_BLOCK_SIZE = 255


class Pkcs7Padding:
    """PKCS#7 padding for a given block size.

    Attributes:
        block_size: Number of bytes in one alignment unit.
    """

    def __init__(self, block_size: int) -> None:
        """Initialize the padding scheme.

        Args:
            block_size: Number of bytes in one alignment unit. Must be in range `[1, 255]`.

        Raises:
            ConfigError: If the block size cannot be encoded in a single padding byte.
        """
        if not 1 <= block_size <= _MAX_BLOCK_SIZE:
            raise ConfigError(f"Block size must be in range [1, {_MAX_BLOCK_SIZE}], got {block_size}.")
        self.block_size = block_size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.block_size})"

    def pad(self, data: bytes) -> bytes:
        """Pads the data up to the next block boundary.

        A full block of padding is appended when the data is already aligned, so the result is never the input.

        Args:
            data: The bytes to pad.

        Returns:
            A new buffer holding the data followed by the filler bytes.
        """
        padding_size = self.block_size - len(data) % self.block_size
        return bytes(data) + bytes([padding_size]) * padding_size

    def unpad(self, data: bytes) -> bytes:
        """Strips the padding off the data.

        Args:
            data: The padded bytes.

        Returns:
            The data without the trailing padding. Slicing a memoryview shares its storage.

        Raises:
            PaddingError: If the buffer is empty or the trailing bytes are not valid padding.
        """
        length = len(data)
        if length == 0:
            raise PaddingError("Cannot unpad an empty buffer.")
        padding_size = data[-1]
        if padding_size == 0 or padding_size > length:
            raise PaddingError("Padding is wrong.")
        # The last byte is the claimed size itself.
        for i in range(2, padding_size + 1):
            if data[length - i] != padding_size:
                raise PaddingError("Padding is wrong.")
        return data[:length - padding_size]


class Pkcs5Padding(Pkcs7Padding):
    """PKCS#5 padding, which is PKCS#7 fixed to 8 byte blocks."""

    def __init__(self) -> None:
        super().__init__(8)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
