"""Pedersen commitment over Z_n*"""

from .constant import BLINDING_BITS
from .utils import random_bigint


def mod_exp(base: int, exp: int, modulus: int) -> int:
    """
    Modular exponentiation on absolute values.

    The sign of both base and exponent is dropped, so a negative exponent is
    NOT a modular inverse. Proofs depend on this convention.
    """
    return pow(abs(base), abs(exp), modulus)


def pedersen_commit(g: int, h: int, m: int, r: int, n: int) -> int:
    """Commit to `m` with blinding `r`: g^m * h^r mod n"""
    return mod_exp(g, m, n) * mod_exp(h, r, n) % n


class Pedersen:
    """
    Pedersen commitment bound to a set of group parameters

    Args:
        params: `GroupParameters` (g, h, n)
    """

    def __init__(self, params):
        self.g, self.h, self.n = params

    def commit(self, m: int, r: int) -> int:
        return pedersen_commit(self.g, self.h, m, r, self.n)

    def commit_random(self, m: int, rng=None):
        """Commit with fresh blinding, return `(commitment, blinding)`"""
        r = random_bigint(BLINDING_BITS, rng)
        return self.commit(m, r), r

    def open(self, commitment: int, m: int, r: int) -> bool:
        return self.commit(m, r) == commitment
