"""Block-cipher modes, padding schemes and chunked RSA encryption.

Provides PKCS#7/PKCS#5 padding, AES in CBC, CFB, OFB and CTR modes, and RSA PKCS#1 v1.5 encryption that splits
payloads of any length across as many key-sized blocks as needed. Key pairs are generated in-house and can be
stored as PEM files.

Typical usage example:

    enc = new_cbc_encrypter(key, iv, Pkcs7Padding(AES_BLOCK_SIZE))
    c = enc.encrypt(b"Hi there!")
    pk = RSAPrivKey.generate(2048)
    r = pk.decrypt(pk.pub.encrypt(b"Hi there!" * 100))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptkit.aes import AES128_KEY_SIZE
from cryptkit.aes import AES192_KEY_SIZE
from cryptkit.aes import AES256_KEY_SIZE
from cryptkit.aes import AES_BLOCK_SIZE
from cryptkit.aes import AES_IV_SIZE
from cryptkit.aes import AesBlockModeDecrypter
from cryptkit.aes import AesBlockModeEncrypter
from cryptkit.aes import AesStream
from cryptkit.aes import new_cbc_decrypter
from cryptkit.aes import new_cbc_encrypter
from cryptkit.aes import new_cfb_decrypter
from cryptkit.aes import new_cfb_encrypter
from cryptkit.aes import new_ctr
from cryptkit.aes import new_ofb
from cryptkit.errors import BlockAlignmentError
from cryptkit.errors import ConfigError
from cryptkit.errors import CryptError
from cryptkit.errors import KeySizeError
from cryptkit.errors import PaddingError
from cryptkit.errors import PrimitiveError
from cryptkit.keygen import check_prime
from cryptkit.keygen import generate_key_pair
from cryptkit.keygen import generate_primes
from cryptkit.padding import Pkcs5Padding
from cryptkit.padding import Pkcs7Padding
from cryptkit.rsa import RSAPrivKey
from cryptkit.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "AES128_KEY_SIZE",
    "AES192_KEY_SIZE",
    "AES256_KEY_SIZE",
    "AES_BLOCK_SIZE",
    "AES_IV_SIZE",
    "AesBlockModeDecrypter",
    "AesBlockModeEncrypter",
    "AesStream",
    "new_cbc_decrypter",
    "new_cbc_encrypter",
    "new_cfb_decrypter",
    "new_cfb_encrypter",
    "new_ctr",
    "new_ofb",
    "BlockAlignmentError",
    "ConfigError",
    "CryptError",
    "KeySizeError",
    "PaddingError",
    "PrimitiveError",
    "check_prime",
    "generate_key_pair",
    "generate_primes",
    "Pkcs5Padding",
    "Pkcs7Padding",
    "RSAPrivKey",
    "RSAPubKey",
]
