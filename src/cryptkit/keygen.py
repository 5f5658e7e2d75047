"""RSA key-pair generation built on a probable prime search.

Primes are found roughly the way FIPS 186-5 Appendix A.1.3 describes: random odd candidates with the two top bits
set, screened by trial division against a cached table of small primes, then confirmed by Miller-Rabin rounds.

Typical usage example:

    pair = generate_key_pair(2048)
    c = pow(m, pair.pub_exp, pair.mod)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import secrets
import typing

from cryptkit.errors import ConfigError

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
# Bits of |p - q| that must survive, FIPS 186-5 A.1.3 step 5.4.
_MINIMUM_PRIME_SEPARATION: int = 100

logger = logging.getLogger(__name__)


class KeyPair(typing.NamedTuple):
    """Raw integers of a two-prime RSA key."""
    mod: int
    pub_exp: int
    priv_exp: int
    p: int
    q: int


def _sieve(n: int = 10000) -> list[int]:
    """Lists all primes up to `n` with an odd-only Sieve of Eratosthenes."""
    if n < 2:
        return []
    odd_count = (n - 1) // 2
    is_prime: list[bool] = [True] * odd_count
    for i in range(int(n**0.5) // 2):
        if is_prime[i]:
            step = 2 * i + 3
            for j in range((step * step - 3) // 2, odd_count, step):
                is_prime[j] = False
    return [2] + [2 * i + 3 for i, flag in enumerate(is_prime) if flag]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Returns the cached small primes, sieving again when the cache does not reach `n`.

    Args:
        n: Upper bound of the wanted primes. Must be >= 0.
        change: Force a fresh sieve even if the cache already covers `n`.

    Returns:
        Ascending list of primes covering at least `n`.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Returns False if `no` has a factor among the small primes, True otherwise."""
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int) -> bool:
    """Miller-Rabin probabilistic primality test, FIPS 186-5 Appendix B.3.

    Args:
        w: The odd integer to test.
        iters: Number of random bases to try.

    Returns:
        True if `w` is probably prime, False if it is certainly composite.
    """
    if w <= 3:
        return w in (2, 3)
    w_minus = w - 1
    a = (w_minus & -w_minus).bit_length() - 1
    m = w_minus >> a
    for _ in range(iters):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z in (1, w_minus):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == w_minus:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def _rounds_for(bits: int) -> int:
    # FIPS 186-5 Appendix C.1, table C.1.
    if bits <= 512:
        return 40
    if bits <= 1024:
        return 56
    if bits <= 1536:
        return 64
    if bits <= 2048:
        return 70
    return 74


def check_prime(candidate: int, iters: int | None = None, n: int = 10000) -> bool:
    """Composite primality test: trial division by the small primes, then Miller-Rabin.

    Args:
        candidate: The number to test.
        iters: Miller-Rabin rounds. Chosen from the candidate size when omitted.
        n: Bound of the small primes used for trial division.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if candidate <= n:
        return candidate in get_pre_primes(n)
    if not _trial_division(candidate, n):
        return False
    if iters is None:
        iters = _rounds_for(candidate.bit_length())
    return _miller_rabin(candidate, iters)


def _generate_probable_prime(size: int, pub: int = 65537, other: int | None = None) -> int:
    """Searches for a probable prime of exactly `size` bits usable with exponent `pub`.

    Args:
        size: Bit length of the prime.
        pub: Public exponent. `p - 1` must be coprime to it.
        other: The first prime of the pair, when searching for the second one. Candidates too close to it are
            skipped.

    Returns:
        A probable prime.

    Raises:
        RuntimeError: If no prime turns up in an improbably long search.
    """
    tries = size * 5 * (1 if other is None else 2)
    # Both top bits set, so the product of two such primes has the full key length.
    top = (1 << size - 1) | (1 << size - 2)
    for _ in range(tries):
        candidate = secrets.randbits(size) | top | 1
        if (other is not None and size > _MINIMUM_PRIME_SEPARATION
                and abs(other - candidate) <= (1 << (size - _MINIMUM_PRIME_SEPARATION))):
            continue
        if math.gcd(candidate - 1, pub) == 1 and check_prime(candidate):
            return candidate
    raise RuntimeError(f"Ran {tries} loops with no prime found. Check the system random number generator.")


def generate_primes(size: int, pub: int = 65537) -> tuple[int, int]:
    """Generates two distinct primes whose product is a `size` bit modulus.

    Args:
        size: Modulus size in bits. Must be a multiple of 8.
        pub: Public exponent. Must be odd and at least 3.

    Returns:
        The pair `(p, q)`.

    Raises:
        ConfigError: If `size` or `pub` is unusable.
    """
    if size % 8 != 0 or size < 16:
        raise ConfigError(f"Key size must be a positive multiple of 8 bits, got {size}.")
    if pub % 2 == 0 or pub < 3:
        raise ConfigError("Public exponent must be odd and at least 3.")
    p = _generate_probable_prime(size // 2, pub)
    q = _generate_probable_prime(size // 2, pub, p)
    while p == q:
        q = _generate_probable_prime(size // 2, pub, p)
    return p, q


def generate_key_pair(size: int, pub: int = 65537) -> KeyPair:
    """Generates a full RSA key pair.

    Args:
        size: Modulus size in bits. Must be a multiple of 8.
        pub: Public exponent, 65537 unless there is a good reason otherwise.

    Returns:
        The key integers. The private exponent is reduced modulo lcm(p - 1, q - 1).
    """
    logger.debug("Generating %d bit key pair, e=%d", size, pub)
    p, q = generate_primes(size, pub)
    totient = math.lcm(p - 1, q - 1)
    return KeyPair(p * q, pub, pow(pub, -1, totient), p, q)
