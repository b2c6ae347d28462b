"""Timing harness for setup, prove and verify across range sizes"""

import logging
from dataclasses import dataclass

from .constant import SetupProfile
from .group import setup_profile
from .rangeproof.range_proof import RangeProof
from .transcript import FiatShamirTranscript
from .utils import Timer, random_bigint

logger = logging.getLogger(__name__)

DEFAULT_LENGTHS = (8, 16, 32, 64, 128, 256, 512, 1024)

WARMUP_RUNS = 3
SETUP_ITERATIONS = 5
PROVE_ITERATIONS = 3
VERIFY_ITERATIONS = 10


@dataclass
class BenchmarkResult:
    range_length: int
    setup_time_ms: float
    prove_time_ms: float
    verify_time_ms: float
    proof_size_bytes: int
    success: bool


def _average_ms(fn, iterations: int, warmup: int = WARMUP_RUNS):
    for _ in range(warmup):
        fn()

    result = None
    with Timer("measure") as t:
        for _ in range(iterations):
            result = fn()
    return t.elapsed * 1000 / iterations, result


def benchmark_range_length(
    length: int,
    profile: SetupProfile = SetupProfile.FAST,
    rng=None,
    iterations=(SETUP_ITERATIONS, PROVE_ITERATIONS, VERIFY_ITERATIONS),
    warmup: int = WARMUP_RUNS,
) -> BenchmarkResult:
    """
    Benchmark a proof that v = 2^(length-1) lies in [0, 2^length - 1].

    Each phase runs `warmup` untimed iterations, then the average over its
    entry of `iterations` (setup, prove, verify) is reported.
    """
    setup_iters, prove_iters, verify_iters = iterations

    a = 0
    b = (1 << length) - 1
    v = 1 << (length - 1)

    setup_ms, params = _average_ms(lambda: setup_profile(profile, rng), setup_iters, warmup)

    hash_alg = "keccak256" if profile is SetupProfile.EVM else "sha256"
    rp = RangeProof(params, transcript=FiatShamirTranscript(hash_alg), rng=rng)
    r = random_bigint(256, rng)

    prove_ms, proof = _average_ms(lambda: rp.prove(v, r, a, b), prove_iters, warmup)
    verify_ms, valid = _average_ms(lambda: rp.verify(proof), verify_iters, warmup)

    logger.debug("range length %d: valid=%s size=%d", length, valid, proof.size())

    return BenchmarkResult(
        range_length=length,
        setup_time_ms=setup_ms,
        prove_time_ms=prove_ms,
        verify_time_ms=verify_ms,
        proof_size_bytes=proof.size(),
        success=valid,
    )


def benchmark_multiple_ranges(
    lengths=DEFAULT_LENGTHS, profile: SetupProfile = SetupProfile.FAST, **kwargs
) -> list:
    results = []
    for length in lengths:
        logger.info("benchmarking %d-bit range", length)
        results.append(benchmark_range_length(length, profile, **kwargs))
    return results


def print_benchmark_summary(results: list):
    header = (
        f"{'Range':>7} | {'Setup (ms)':>12} | {'Prove (ms)':>12} | "
        f"{'Verify (ms)':>12} | {'Size (B)':>9} | {'OK':>3}"
    )
    print(header)
    print("-" * len(header))
    for res in results:
        print(
            f"{res.range_length:>7} | {res.setup_time_ms:>12.2f} | "
            f"{res.prove_time_ms:>12.2f} | {res.verify_time_ms:>12.2f} | "
            f"{res.proof_size_bytes:>9} | {'yes' if res.success else 'no':>3}"
        )

    if results:
        n = len(results)
        print("-" * len(header))
        print(
            f"{'avg':>7} | {sum(r.setup_time_ms for r in results) / n:>12.2f} | "
            f"{sum(r.prove_time_ms for r in results) / n:>12.2f} | "
            f"{sum(r.verify_time_ms for r in results) / n:>12.2f} | "
            f"{sum(r.proof_size_bytes for r in results) // n:>9} | "
            f"{sum(r.success for r in results):>3}"
        )
