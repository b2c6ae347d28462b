"""
Range proofs over the hidden-order group Z_n* using the Lagrange
three-square encoding and a recursive inner product argument
"""

from .constant import SetupProfile
from .errors import DecodeError, ProtocolStateError, RangeSnakeError, SetupExhaustedError
from .group import GroupParameters, setup, setup_profile
from .commitment import Pedersen, pedersen_commit
from .transcript import FiatShamirTranscript
from .lagrange import find_3_squares, find_4_squares
from .rangeproof import RangeProof, RangeProofObject
from .codec import load_params, load_proof, save_params, save_proof
