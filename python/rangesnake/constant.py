from enum import Enum


class SetupProfile(Enum):
    """Prime bit length of each setup profile (n has twice as many bits)"""

    TRUSTED = 1024
    FAST = 256
    EVM = 128


SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

MILLER_RABIN_ROUNDS = 16

BLINDING_BITS = 256

DEFAULT_DIMENSION = 64
INTERACTIVE_DIMENSION = 16

SQUARE_SEARCH_CUTOFF = 1_000_000

MAX_PRIME_ATTEMPTS = 100_000
MAX_GENERATOR_ATTEMPTS = 1_000
