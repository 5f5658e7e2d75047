# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import warnings

from cryptography.hazmat.primitives.ciphers import Cipher
from cryptography.hazmat.primitives.ciphers import algorithms
from cryptography.hazmat.primitives.ciphers import modes
import pytest

from cryptkit import aes
from cryptkit.errors import BlockAlignmentError
from cryptkit.errors import ConfigError
from cryptkit.errors import PaddingError
from cryptkit.padding import Pkcs5Padding
from cryptkit.padding import Pkcs7Padding

key = b"11112222333344445555666677778888"
iv = b"1234567812345678"
standard_payload = b"I love this girl! Does she?"

stream_vectors = {
    "cfb": (aes.new_cfb_encrypter, aes.new_cfb_decrypter, "+HVXA7n2iUln6vXL2buTcUuN844bbH5c1XEz"),
    "ofb": (aes.new_ofb, aes.new_ofb, "+HVXA7n2iUln6vXL2buTcQ/iMrzkSWcxWYEn"),
    "ctr": (aes.new_ctr, aes.new_ctr, "+HVXA7n2iUln6vXL2buTcfv28+am206YJuzC"),
}
cbc_vector = "DC9HZuq4EOq7fO+vP2Qs2Oh9zfaA8TI/u6tHN38yvcM="


@pytest.fixture(scope="module", params=stream_vectors.keys())
def stream(request):
    return stream_vectors[request.param]


@pytest.fixture(scope="module", params=[aes.AES128_KEY_SIZE, aes.AES192_KEY_SIZE, aes.AES256_KEY_SIZE])
def sized_key(request) -> bytes:
    return bytes(range(request.param))


def cbc_pair(k: bytes = key, i: bytes = iv):
    padding = Pkcs7Padding(aes.AES_BLOCK_SIZE)
    return aes.new_cbc_encrypter(k, i, padding), aes.new_cbc_decrypter(k, i, padding)


def test_cbc_encrypt_vector():
    enc, _ = cbc_pair()
    assert base64.b64encode(enc.encrypt(standard_payload)).decode() == cbc_vector


def test_cbc_decrypt_vector():
    _, dec = cbc_pair()
    assert dec.decrypt(base64.b64decode(cbc_vector)) == standard_payload


def test_cbc_calls_are_independent():
    enc, dec = cbc_pair()
    first = enc.encrypt(standard_payload)
    assert enc.encrypt(standard_payload) == first
    assert dec.decrypt(first) == dec.decrypt(first) == standard_payload


@pytest.mark.parametrize("payload", [b"", b"A", b"A" * 15, b"A" * 16, b"A" * 17, b"A" * 1000])
def test_cbc_roundtrip(sized_key, payload):
    enc, dec = cbc_pair(sized_key)
    ciph = enc.encrypt(payload)
    assert len(ciph) == (len(payload) // aes.AES_BLOCK_SIZE + 1) * aes.AES_BLOCK_SIZE
    assert dec.decrypt(ciph) == payload


def test_cbc_wider_padding():
    padding = Pkcs7Padding(2 * aes.AES_BLOCK_SIZE)
    ciph = aes.new_cbc_encrypter(key, iv, padding).encrypt(b"A")
    assert len(ciph) == 32
    assert aes.new_cbc_decrypter(key, iv, padding).decrypt(ciph) == b"A"


@pytest.mark.parametrize("length", [1, 15, 17, 27])
def test_cbc_decrypt_alignment(length):
    _, dec = cbc_pair()
    with pytest.raises(BlockAlignmentError):
        dec.decrypt(b"\x00" * length)


@pytest.mark.parametrize("last_block", [b"A" * 15 + b"\x00", b"A" * 15 + b"\x11", b"A" * 13 + b"\x03\x02\x03"])
def test_cbc_decrypt_bad_padding_bytes(last_block):
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciph = encryptor.update(last_block) + encryptor.finalize()
    _, dec = cbc_pair()
    with pytest.raises(PaddingError):
        dec.decrypt(ciph)


def test_cbc_decrypt_bad_padding(mocker):
    _, dec = cbc_pair()
    unpad = mocker.patch.object(dec.padding, "unpad", side_effect=PaddingError("Padding is wrong."))
    with pytest.raises(PaddingError):
        dec.decrypt(base64.b64decode(cbc_vector))
    unpad.assert_called_once()


@pytest.mark.parametrize("padding", [Pkcs5Padding(), Pkcs7Padding(1), Pkcs7Padding(24)])
def test_cbc_padding_validates(padding):
    with pytest.raises(ConfigError):
        aes.new_cbc_encrypter(key, iv, padding)
    with pytest.raises(ConfigError):
        aes.new_cbc_decrypter(key, iv, padding)


def test_stream_encrypt_vector(stream):
    encf, _, vector = stream
    assert base64.b64encode(encf(key, iv).crypt(standard_payload)).decode() == vector


def test_stream_decrypt_vector(stream):
    _, decf, vector = stream
    assert decf(key, iv).crypt(base64.b64decode(vector)) == standard_payload


@pytest.mark.parametrize("payload", [b"", b"A", b"A" * 16, b"A" * 1000])
def test_stream_roundtrip(stream, sized_key, payload):
    encf, decf, _ = stream
    ciph = encf(sized_key, iv).crypt(payload)
    assert len(ciph) == len(payload)
    assert decf(sized_key, iv).crypt(ciph) == payload


def test_stream_calls_are_independent(stream):
    encf, _, vector = stream
    crypter = encf(key, iv)
    crypter.crypt(b"A" * 100)
    assert base64.b64encode(crypter.crypt(standard_payload)).decode() == vector


@pytest.mark.parametrize("factory", [aes.new_cfb_encrypter, aes.new_cfb_decrypter, aes.new_ofb, aes.new_ctr])
@pytest.mark.parametrize("k,i", [(key, iv[:15]), (key, iv + b"9"), (key, b""), (key[:15], iv), (key[:20], iv),
                                 (b"", iv), (key + b"9", iv)])
def test_stream_validates(factory, k, i):
    with pytest.raises(ConfigError):
        factory(k, i)


@pytest.mark.parametrize("k,i", [(key, iv[:8]), (key[:31], iv), (b"A" * 64, iv)])
def test_cbc_validates(k, i):
    padding = Pkcs7Padding(aes.AES_BLOCK_SIZE)
    with pytest.raises(ConfigError):
        aes.new_cbc_encrypter(k, i, padding)
    with pytest.raises(ConfigError):
        aes.new_cbc_decrypter(k, i, padding)


def test_stream_modes_do_not_warn(stream):
    encrypter, decrypter, _ = stream
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        ciph = encrypter(key, iv).crypt(standard_payload)
        assert decrypter(key, iv).crypt(ciph) == standard_payload
