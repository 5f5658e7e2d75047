# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from cryptkit import padding
from cryptkit.errors import ConfigError
from cryptkit.errors import PaddingError

payloads = [b"", b"\x00", b"\x01\x02\x03", b"A" * 15, b"A" * 16, b"A" * 17, bytes(range(256))]


def test_pad_concrete():
    buf = bytearray([1, 2, 3, 0, 0, 0])
    orig = bytes(buf)
    res = padding.Pkcs7Padding(5).pad(buf[:3])
    assert res == bytes([1, 2, 3, 2, 2])
    assert buf == orig


def test_pad_aligned_adds_full_block():
    res = padding.Pkcs7Padding(5).pad(bytes([1, 2, 3, 4, 5]))
    assert res == bytes([1, 2, 3, 4, 5, 5, 5, 5, 5, 5])


def test_pad_returns_new_buffer():
    data = bytearray(b"A" * 7)
    res = padding.Pkcs7Padding(8).pad(data)
    data[0] = 0
    assert res[0] == ord("A")


@pytest.mark.parametrize("block_size", [1, 5, 8, 16, 255])
@pytest.mark.parametrize("payload", payloads)
def test_pad_shape(block_size, payload):
    res = padding.Pkcs7Padding(block_size).pad(payload)
    size = res[-1]
    assert len(res) % block_size == 0
    assert 1 <= size <= block_size
    assert res[-size:] == bytes([size]) * size
    assert res[:-size] == payload


@pytest.mark.parametrize("block_size", [1, 5, 8, 16, 255])
@pytest.mark.parametrize("payload", payloads)
def test_unpad_inverts_pad(block_size, payload):
    pad = padding.Pkcs7Padding(block_size)
    assert pad.unpad(pad.pad(payload)) == payload


def test_unpad_concrete():
    assert padding.Pkcs7Padding(5).unpad(bytes([1, 2, 3, 2, 2])) == bytes([1, 2, 3])


def test_unpad_memoryview_shares_storage():
    buf = bytearray([1, 2, 3, 2, 2])
    res = padding.Pkcs7Padding(5).unpad(memoryview(buf))
    buf[0] = 9
    assert bytes(res) == bytes([9, 2, 3])


@pytest.mark.parametrize("payload", [b"", bytes([6]), bytes([1, 2, 3, 2, 3]), bytes([1, 2, 3, 4, 3]),
                                     bytes([1, 2, 0]), bytes([4, 4, 4]), bytes([3, 4, 4, 4])])
def test_unpad_rejects(payload):
    with pytest.raises(PaddingError):
        padding.Pkcs7Padding(5).unpad(payload)


def test_unpad_error_is_valueerror():
    with pytest.raises(ValueError):
        padding.Pkcs7Padding(16).unpad(b"")


@pytest.mark.parametrize("block_size", [-1, 0, 256, 1024])
def test_block_size_validates(block_size):
    with pytest.raises(ConfigError):
        padding.Pkcs7Padding(block_size)


def test_pkcs5_is_pkcs7_eight():
    pkcs5 = padding.Pkcs5Padding()
    pkcs7 = padding.Pkcs7Padding(8)
    assert pkcs5.block_size == 8
    for payload in payloads:
        assert pkcs5.pad(payload) == pkcs7.pad(payload)
        assert pkcs5.unpad(pkcs7.pad(payload)) == payload
    assert repr(pkcs5) == "Pkcs5Padding()"
    assert repr(pkcs7) == "Pkcs7Padding(8)"
