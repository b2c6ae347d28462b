"""
Range proof over a hidden-order group with a recursive inner product argument
"""

from .ipa import InnerProductArgument, InnerProductProof
from .range_proof import RangeProof, RangeProofObject
from .interactive import InteractiveProver, InteractiveVerifier, run_interactive
