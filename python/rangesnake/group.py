"""Hidden-order group Z_n* parameter generation"""

import logging
from math import gcd
from typing import NamedTuple

from .constant import MAX_GENERATOR_ATTEMPTS, MAX_PRIME_ATTEMPTS, SetupProfile
from .errors import DecodeError, SetupExhaustedError
from .primes import generate_probable_prime
from .utils import get_rng, hex_to_int, int_to_hex

logger = logging.getLogger(__name__)


class GroupParameters(NamedTuple):
    """
    Public parameters (g, h, n) shared read-only by prover and verifier.

    n = p*q with p, q kept out of the parameters, g and h are units of Z_n*
    with g != h.
    """

    g: int
    h: int
    n: int

    def to_lines(self) -> list:
        return [int_to_hex(self.g), int_to_hex(self.h), int_to_hex(self.n)]

    @classmethod
    def from_lines(cls, lines: list):
        """Parse parameters from the 3-line hex format"""
        if len(lines) < 3:
            raise DecodeError("params file too short")
        params = cls(hex_to_int(lines[0]), hex_to_int(lines[1]), hex_to_int(lines[2]))
        params.check()
        return params

    def check(self):
        """Raise `DecodeError` unless g and h are distinct units of Z_n*"""
        g, h, n = self
        if n <= 2:
            raise DecodeError("modulus must be greater than 2")
        if not (2 <= g < n and 2 <= h < n):
            raise DecodeError("generators must lie in [2, n)")
        if g == h:
            raise DecodeError("generators must be distinct")
        if gcd(g, n) != 1 or gcd(h, n) != 1:
            raise DecodeError("generators must be coprime to n")


def _sample_unit(n: int, rng, max_attempts: int, exclude=None) -> int:
    for _ in range(max_attempts):
        x = rng.randrange(2, n)
        if gcd(x, n) == 1 and x != exclude:
            return x

    raise SetupExhaustedError(f"No generator found in {max_attempts} attempts")


def setup(
    bits: int = SetupProfile.FAST.value,
    rng=None,
    max_attempts: int = MAX_PRIME_ATTEMPTS,
    max_generator_attempts: int = MAX_GENERATOR_ATTEMPTS,
) -> GroupParameters:
    """
    Generate (g, h, n) from two distinct `bits`-bit probable primes.

    Args:
        bits: bit length of each prime factor
        rng: randomness source, defaults to the system CSPRNG
        max_attempts: candidate cap for each prime
        max_generator_attempts: sampling cap for each of g and h
    """
    rng = get_rng(rng)

    p = generate_probable_prime(bits, rng, max_attempts)
    for _ in range(max_attempts):
        q = generate_probable_prime(bits, rng, max_attempts)
        if q != p:
            break
    else:
        raise SetupExhaustedError("Could not draw two distinct primes")

    n = p * q
    logger.debug("generated %d-bit modulus", n.bit_length())

    g = _sample_unit(n, rng, max_generator_attempts)
    h = _sample_unit(n, rng, max_generator_attempts, exclude=g)

    return GroupParameters(g, h, n)


def setup_profile(profile: SetupProfile, rng=None) -> GroupParameters:
    """Setup with the prime size of a named profile"""
    logger.debug("running %s setup", profile.name.lower())
    return setup(profile.value, rng)
