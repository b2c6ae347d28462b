import os
import random
import re
import time

from .errors import DecodeError

_system_random = random.SystemRandom()

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def get_rng(rng=None):
    """Return `rng` or the process-wide CSPRNG"""
    return rng if rng is not None else _system_random


def random_bigint(bits: int, rng=None) -> int:
    """Get random non-negative integer below 2^bits"""
    return get_rng(rng).getrandbits(bits)


def get_n_jobs():
    """Get number of supported cores for multiprocessing if enabled"""
    check_env = os.environ.get("RANGESNAKE_PARALLEL_CPU")
    if check_env:
        return int(check_env)
    else:
        return -1


def is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def inner_product(a: list, b: list) -> int:
    """Exact (non-modular) inner product of two integer vectors"""
    return sum(x * y for x, y in zip(a, b))


def byte_length(x: int) -> int:
    """Length of the minimal big-endian encoding, zero takes one byte"""
    return max(1, (x.bit_length() + 7) // 8)


def int_to_hex(x: int) -> str:
    """Big-endian hex of a non-negative integer, no prefix, even length"""
    return x.to_bytes(byte_length(x), "big").hex()


def hex_to_int(s: str) -> int:
    """Strict inverse of `int_to_hex`, raising `DecodeError` on bad input"""
    t = s.strip()
    if not t:
        raise DecodeError("empty hex")
    if len(t) % 2 or not _HEX_RE.fullmatch(t):
        raise DecodeError(f"invalid hex: {t[:16]!r}")
    return int.from_bytes(bytes.fromhex(t), "big")


class Timer:
    def __init__(self, name, verbose=False):
        self.start_time = 0
        self.end_time = 0
        self.elapsed = 0
        self.name = name
        self.verbose = verbose

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        if self.verbose:
            print(f"{self.name}: {self.elapsed:.4f} seconds")
