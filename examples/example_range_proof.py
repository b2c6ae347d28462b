"""
Prove that a committed value v lies in [a, b] without revealing v,
using the three-square encoding over a hidden-order group
"""

from rangesnake import RangeProof, SetupProfile, setup_profile
from rangesnake.utils import random_bigint

params = setup_profile(SetupProfile.FAST)
rp = RangeProof(params)

a, b = 18, 65

# secret value v and its blinding
value = 42
blinding = random_bigint(256)

proof = rp.prove(value, blinding, a, b)
assert rp.verify_with_range(proof, a, b)
print(f"Proof is valid: committed value is in [{a}, {b}] ({proof.size()} bytes)")

# a value outside the interval has no square decomposition
value = 70
try:
    rp.prove(value, blinding, a, b)
except ValueError:
    print(f"Cannot prove {value} is in [{a}, {b}]")
