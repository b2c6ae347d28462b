import time

from rangesnake import FiatShamirTranscript, RangeProof, SetupProfile, setup_profile
from rangesnake.utils import random_bigint


def run(profile, bitsize):

    time_results = []

    a = 0
    b = 2**bitsize - 1
    v = 2 ** (bitsize - 1)

    start = time.time()
    params = setup_profile(profile)
    end = time.time() - start
    time_results.append(end)

    hash_alg = "keccak256" if profile is SetupProfile.EVM else "sha256"
    rp = RangeProof(params, transcript=FiatShamirTranscript(hash_alg))

    start = time.time()
    proof = rp.prove(v, random_bigint(256), a, b)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    assert rp.verify_with_range(proof, a, b)
    end = time.time() - start
    time_results.append(end)

    return time_results


bitsizes = [8, 16, 32, 64, 128, 256, 512, 1024]

for profile in [SetupProfile.EVM, SetupProfile.FAST, SetupProfile.TRUSTED]:
    results = []
    for i in bitsizes:
        results.append(run(profile, i))

    print(f"{profile.name} ({profile.value}-bit primes)")
    for i, (setup_time, prove_time, verify_time) in enumerate(results):
        print(
            f"  {bitsizes[i]:>5}-bit range: setup {setup_time:.4f}s, "
            f"prove {prove_time:.4f}s, verify {verify_time:.4f}s"
        )
