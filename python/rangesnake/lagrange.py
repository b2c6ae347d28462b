"""
Sum-of-squares decompositions used to encode `v in [a, b]`.

For v1 = 4v - 4a + 1 and v2 = 4b - 4v + 1, both are = 1 (mod 4) and
positive exactly when a <= v <= b, so each is a sum of three squares
(Legendre). The six roots form the base vector of the range proof.
"""

from math import isqrt

from .constant import SMALL_PRIMES, SQUARE_SEARCH_CUTOFF
from .primes import miller_rabin


def _exhaustive_3_squares(n: int):
    for x in range(isqrt(n) + 1):
        for y in range(x + 1):
            xy = x * x + y * y
            if xy > n:
                break
            z = isqrt(n - xy)
            if xy + z * z == n:
                return x, y, z
    return None


def _two_squares_prime(p: int):
    """Write a prime p = 1 (mod 4) as y^2 + z^2 (Hermite-Serret)"""
    for c in range(2, min(p, 10_000)):
        if pow(c, (p - 1) // 2, p) == p - 1:
            break
    else:
        return None

    t = pow(c, (p - 1) // 4, p)
    a, b = p, t
    while b * b > p:
        a, b = b, a % b

    z = isqrt(p - b * b)
    if b * b + z * z == p:
        return b, z
    return None


def _search_3_squares(n: int, max_tries: int):
    x = isqrt(n)
    for _ in range(max_tries):
        if x < 0:
            break
        m = n - x * x
        if m == 0:
            return x, 0, 0

        s = isqrt(m)
        if s * s == m:
            return x, s, 0

        if m % 4 == 1 and miller_rabin(m, witnesses=SMALL_PRIMES):
            yz = _two_squares_prime(m)
            if yz:
                return x, yz[0], yz[1]
        x -= 1
    return None


def find_3_squares(n: int, max_tries: int = 100_000):
    """
    Return non-negative (x, y, z) with x^2 + y^2 + z^2 == n.

    Small inputs are searched exhaustively. Large inputs first try the
    `(2^k)^2 + (2^(k-1))^2 + 1` pattern, then walk x down from isqrt(n)
    until n - x^2 splits into two squares. Raises `ValueError` when no
    decomposition is found (n < 0 or n of the form 4^a(8b+7)).
    """
    if n < 0:
        raise ValueError(f"{n} is not a sum of squares")

    if n <= SQUARE_SEARCH_CUTOFF:
        result = _exhaustive_3_squares(n)
        if result is None:
            raise ValueError(f"{n} is not a sum of three squares")
        return result

    for k in range(1, 33):
        t1 = 1 << k
        t2 = 1 << (k - 1)
        pattern = t1 * t1 + t2 * t2 + 1
        if pattern == n:
            return t1, t2, 1
        if pattern > n:
            break

    result = _search_3_squares(n, max_tries)
    if result is None:
        raise ValueError(f"No three-square decomposition found for {n}")
    return result


def find_4_squares(n: int):
    """Return non-negative (a, b, c, d) with a^2 + b^2 + c^2 + d^2 == n"""
    if n < 0:
        raise ValueError(f"{n} is not a sum of squares")

    for a in range(isqrt(n) + 1):
        for b in range(a + 1):
            for c in range(b + 1):
                rem = n - a * a - b * b - c * c
                if rem < 0:
                    break
                d = isqrt(rem)
                if d * d == rem:
                    return a, b, c, d

    raise AssertionError("unreachable: every integer is a sum of four squares")


def range_encoding(v: int, a: int, b: int):
    """Return (v1, v2) = (4v - 4a + 1, 4b - 4v + 1)"""
    return 4 * v - 4 * a + 1, 4 * b - 4 * v + 1


def square_vector(v: int, a: int, b: int, dimension: int) -> list:
    """
    Three-square roots of v1 then v2, tiled to `dimension` entries.

    d[i] = base[i % 6]
    """
    v1, v2 = range_encoding(v, a, b)
    base = list(find_3_squares(v1)) + list(find_3_squares(v2))
    return [base[i % len(base)] for i in range(dimension)]
