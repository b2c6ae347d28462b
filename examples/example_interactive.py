"""
Run the interactive prover/verifier session step by step
"""

from rangesnake import SetupProfile, setup_profile
from rangesnake.rangeproof import InteractiveProver, InteractiveVerifier
from rangesnake.utils import random_bigint

params = setup_profile(SetupProfile.EVM)

prover = InteractiveProver(params, 1337, random_bigint(256), 1000, 2000)
verifier = InteractiveVerifier(params)

verifier.receive_commitments(*prover.commit())
y, z = verifier.challenge_yz()

verifier.receive_t(*prover.open_t(y, z))
x = verifier.challenge_x()

final = prover.finalize(x)
assert verifier.decide(final)
print(f"Session finished in state {verifier.state.value}")
