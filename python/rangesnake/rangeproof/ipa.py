from dataclasses import dataclass
from math import ceil, log2

from ..commitment import pedersen_commit
from ..constant import BLINDING_BITS
from ..transcript import FiatShamirTranscript
from ..utils import inner_product, int_to_hex, is_power_of_two, random_bigint


@dataclass(frozen=True)
class InnerProductProof:
    """
    Compressed inner product argument.

    `L` and `R` hold one commitment per recursion level in leaf-to-root
    order; `a` and `b` are the final folded scalars.
    """

    L: tuple
    R: tuple
    a: int
    b: int

    def to_lines(self) -> list:
        lines = [str(len(self.L))]
        lines += [int_to_hex(x) for x in self.L]
        lines += [str(len(self.R))]
        lines += [int_to_hex(x) for x in self.R]
        lines += [int_to_hex(self.a), int_to_hex(self.b)]
        return lines


def expected_rounds(dimension: int) -> int:
    """Number of folding levels for a vector of `dimension` entries"""
    return ceil(log2(dimension))


class InnerProductArgument:
    """
    Recursive halving argument over two integer vectors

    Args:
        params: `GroupParameters` (g, h, n)
        transcript: challenge strategy, SHA-256 by default
        rng: randomness source for the per-level blindings
    """

    def __init__(self, params, transcript: FiatShamirTranscript = None, rng=None):
        self.g, self.h, self.n = params
        self.transcript = transcript or FiatShamirTranscript()
        self.rng = rng

    def __split_half(self, data: list):
        mid = len(data) // 2
        return data[:mid], data[mid:]

    def _fold(self, l: list, r: list):
        if len(l) == 1:
            return l[0], r[0], [], []

        l_left, l_right = self.__split_half(l)
        r_left, r_right = self.__split_half(r)

        c_L = inner_product(l_left, r_right)
        c_R = inner_product(l_right, r_left)

        L = pedersen_commit(self.g, self.h, c_L, random_bigint(BLINDING_BITS, self.rng), self.n)
        R = pedersen_commit(self.g, self.h, c_R, random_bigint(BLINDING_BITS, self.rng), self.n)

        y = self.transcript.challenge(L, R) % self.n

        l_new = [lo + y * hi for lo, hi in zip(l_left, r_right)]
        r_new = [lo + y * hi for lo, hi in zip(r_left, l_right)]

        a, b, L_list, R_list = self._fold(l_new, r_new)

        # children first, this level last
        L_list.append(L)
        R_list.append(R)

        return a, b, L_list, R_list

    def prove(self, l: list, r: list) -> InnerProductProof:
        if len(l) != len(r):
            raise ValueError("Vectors must have equal length")
        if not is_power_of_two(len(l)):
            raise ValueError("Vector length must be a power of two")

        a, b, L_list, R_list = self._fold(list(l), list(r))

        return InnerProductProof(tuple(L_list), tuple(R_list), a, b)
