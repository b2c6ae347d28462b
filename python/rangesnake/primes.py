"""Probable prime generation"""

from .constant import MAX_PRIME_ATTEMPTS, MILLER_RABIN_ROUNDS, SMALL_PRIMES
from .errors import SetupExhaustedError
from .utils import get_rng


def miller_rabin(n: int, k: int = MILLER_RABIN_ROUNDS, rng=None, witnesses=None) -> bool:
    """
    Miller-Rabin primality test with `k` random witnesses in [2, n-2].

    When `witnesses` is given those bases are used instead of random ones,
    which makes the test deterministic. Candidates are first filtered by
    trial division against `SMALL_PRIMES`.
    """
    if n < 2:
        return False
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    d = n - 1
    r = 0
    while d % 2 == 0:
        d >>= 1
        r += 1

    if witnesses is None:
        rng = get_rng(rng)
        witnesses = (rng.randrange(2, n - 1) for _ in range(k))

    for a in witnesses:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False

    return True


def is_probable_prime(n: int, rng=None) -> bool:
    return miller_rabin(n, MILLER_RABIN_ROUNDS, rng)


def generate_probable_prime(bits: int, rng=None, max_attempts: int = MAX_PRIME_ATTEMPTS) -> int:
    """
    Sample odd `bits`-bit candidates (top bit fixed) until one passes
    Miller-Rabin. Raises `SetupExhaustedError` after `max_attempts` candidates.
    """
    if bits < 2:
        raise ValueError("Prime bit length must be at least 2")

    rng = get_rng(rng)
    top = 1 << (bits - 1)

    for _ in range(max_attempts):
        candidate = rng.getrandbits(bits) | top | 1
        if miller_rabin(candidate, MILLER_RABIN_ROUNDS, rng):
            return candidate

    raise SetupExhaustedError(
        f"No probable prime of {bits} bits found in {max_attempts} attempts"
    )
