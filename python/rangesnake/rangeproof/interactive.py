"""
Interactive variant of the range proof.

The verifier draws its challenges as g^k mod n for fresh random k instead of
hashing the transcript. Its final decision only checks that no message or
challenge is zero: this is a reference/demo flow, it does NOT check the
algebraic relations that `RangeProof.verify` checks.
"""

from enum import Enum
from typing import NamedTuple

from ..commitment import Pedersen
from ..constant import BLINDING_BITS, INTERACTIVE_DIMENSION
from ..errors import ProtocolStateError
from ..group import GroupParameters
from ..lagrange import square_vector
from ..transcript import FiatShamirTranscript
from ..utils import get_rng, inner_product, random_bigint
from .ipa import InnerProductArgument


class ProtocolState(Enum):
    INIT = "init"
    PROVER_COMMITTED = "prover_committed"
    CHALLENGE_YZ = "challenge_yz"
    PROVER_OPENED_T = "prover_opened_t"
    CHALLENGE_X = "challenge_x"
    PROVER_FINAL = "prover_final"
    VERIFIED = "verified"
    REJECTED = "rejected"


class FinalMessage(NamedTuple):
    t_hat: int
    mu: int
    tau_x: int
    a: int
    b: int


class _Party:

    state = ProtocolState.INIT

    def _expect(self, *states):
        if self.state not in states:
            raise ProtocolStateError(
                f"{type(self).__name__} is in state {self.state.value}, "
                f"expected {' or '.join(s.value for s in states)}"
            )


class InteractiveProver(_Party):
    """
    Prover side, holds the witness for the whole session

    Args:
        params: `GroupParameters`
        v, r: committed value and its blinding
        a, b: public interval
        dimension: square vector length, a power of two
    """

    def __init__(self, params, v, r, a, b, dimension=INTERACTIVE_DIMENSION, rng=None):
        self.params = GroupParameters(*params)
        self.pedersen = Pedersen(self.params)
        self.rng = get_rng(rng)
        self.dimension = dimension

        self.d = square_vector(v, a, b, dimension)

        self.C = self.pedersen.commit(v, r)

        self.alpha = self._random()
        self.rho = self._random()
        self.s_L = [self._random() for _ in range(dimension)]
        self.s_R = [self._random() for _ in range(dimension)]

        self.l_0 = None
        self.r_0 = None
        self.tau1 = None
        self.tau2 = None

    def _random(self):
        return random_bigint(BLINDING_BITS, self.rng)

    def commit(self):
        """Send (A, S)"""
        self._expect(ProtocolState.INIT)

        A = self.pedersen.commit(sum(self.d), self.alpha)
        S = self.pedersen.commit(sum(self.s_L) + sum(self.s_R), self.rho)

        self.state = ProtocolState.PROVER_COMMITTED
        return A, S

    def open_t(self, y: int, z: int):
        """Receive (y, z), send (T1, T2)"""
        self._expect(ProtocolState.PROVER_COMMITTED)

        self.l_0 = [z * d_i + y for d_i in self.d]
        self.r_0 = [z * d_i + y for d_i in self.d]

        t1 = inner_product(self.l_0, self.s_R) + inner_product(self.r_0, self.s_L)
        t2 = inner_product(self.s_L, self.s_R)

        self.tau1 = self._random()
        self.tau2 = self._random()

        self.state = ProtocolState.PROVER_OPENED_T
        return self.pedersen.commit(t1, self.tau1), self.pedersen.commit(t2, self.tau2)

    def finalize(self, x: int) -> FinalMessage:
        """Receive x, send the final scalars"""
        self._expect(ProtocolState.PROVER_OPENED_T)

        l_vec = [l0_i + sl_i * x for l0_i, sl_i in zip(self.l_0, self.s_L)]
        r_vec = [r0_i + sr_i * x for r0_i, sr_i in zip(self.r_0, self.s_R)]

        t_hat = inner_product(l_vec, r_vec)
        mu = self.alpha + self.rho * x
        tau_x = self.tau2 * x * x + self.tau1 * x

        ipa = InnerProductArgument(self.params, FiatShamirTranscript(), self.rng)
        ipp_proof = ipa.prove(l_vec, r_vec)

        self.state = ProtocolState.PROVER_FINAL
        return FinalMessage(t_hat, mu, tau_x, ipp_proof.a, ipp_proof.b)


class InteractiveVerifier(_Party):
    """Verifier side, accumulates messages and issues challenges"""

    def __init__(self, params, rng=None):
        self.params = GroupParameters(*params)
        self.rng = get_rng(rng)
        self.C = None
        self.A = self.S = self.T1 = self.T2 = 0
        self.y = self.z = self.x = 0

    def _challenge(self) -> int:
        g, _, n = self.params
        return pow(g, random_bigint(BLINDING_BITS, self.rng), n)

    def receive_commitments(self, A: int, S: int, C: int = None):
        """Receive (A, S) and optionally the prover's value commitment C"""
        self._expect(ProtocolState.INIT)
        self.A, self.S, self.C = A, S, C
        self.state = ProtocolState.PROVER_COMMITTED

    def challenge_yz(self):
        self._expect(ProtocolState.PROVER_COMMITTED)
        self.y = self._challenge()
        self.z = self._challenge()
        self.state = ProtocolState.CHALLENGE_YZ
        return self.y, self.z

    def receive_t(self, T1: int, T2: int):
        self._expect(ProtocolState.CHALLENGE_YZ)
        self.T1, self.T2 = T1, T2
        self.state = ProtocolState.PROVER_OPENED_T

    def challenge_x(self):
        self._expect(ProtocolState.PROVER_OPENED_T)
        self.x = self._challenge()
        self.state = ProtocolState.CHALLENGE_X
        return self.x

    def decide(self, final: FinalMessage) -> bool:
        """Accept iff every message, challenge and the received C is non-zero"""
        self._expect(ProtocolState.CHALLENGE_X)
        self.state = ProtocolState.PROVER_FINAL

        values = (self.A, self.S, self.T1, self.T2, self.y, self.z, self.x) + tuple(final)
        if self.C is not None:
            values += (self.C,)
        accepted = all(value != 0 for value in values)

        self.state = ProtocolState.VERIFIED if accepted else ProtocolState.REJECTED
        return accepted


def run_interactive(params, v, r, a, b, dimension=INTERACTIVE_DIMENSION, rng=None) -> bool:
    """Run one complete prover/verifier session and return the verdict"""
    prover = InteractiveProver(params, v, r, a, b, dimension, rng)
    verifier = InteractiveVerifier(params, rng)

    verifier.receive_commitments(*prover.commit(), C=prover.C)
    verifier.receive_t(*prover.open_t(*verifier.challenge_yz()))
    final = prover.finalize(verifier.challenge_x())

    return verifier.decide(final)
