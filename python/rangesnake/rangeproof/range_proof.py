from dataclasses import dataclass, fields

from joblib import Parallel, delayed

from ..commitment import Pedersen
from ..constant import BLINDING_BITS, DEFAULT_DIMENSION
from ..errors import DecodeError
from ..group import GroupParameters
from ..lagrange import range_encoding, square_vector
from ..transcript import FiatShamirTranscript
from ..utils import (
    byte_length,
    get_n_jobs,
    hex_to_int,
    inner_product,
    int_to_hex,
    is_power_of_two,
    random_bigint,
)
from .ipa import InnerProductArgument, InnerProductProof, expected_rounds

SCALAR_FIELDS = (
    "A", "S", "T1", "T2", "tau_x", "mu", "t_hat", "C", "C_v1", "C_v2",
    "t0", "t1", "t2", "tau1", "tau2",
)


class _LineReader:

    def __init__(self, lines):
        self.lines = list(lines)
        self.pos = 0

    def take(self) -> str:
        if self.pos >= len(self.lines):
            raise DecodeError("unexpected end of file")
        line = self.lines[self.pos]
        self.pos += 1
        return line

    def take_int(self) -> int:
        return hex_to_int(self.take())

    def take_length(self, name: str) -> int:
        s = self.take().strip()
        if not s.isdigit():
            raise DecodeError(f"invalid {name} length")
        length = int(s)
        if length == 0:
            raise DecodeError(f"{name} length must be > 0")
        return length


@dataclass(frozen=True)
class RangeProofObject:
    """Proof that the value committed in `C` lies in a public interval"""

    A: int
    S: int
    T1: int
    T2: int
    tau_x: int
    mu: int
    t_hat: int
    C: int
    C_v1: int
    C_v2: int
    t0: int
    t1: int
    t2: int
    tau1: int
    tau2: int
    ipp_proof: InnerProductProof

    def to_lines(self) -> list:
        lines = [int_to_hex(getattr(self, name)) for name in SCALAR_FIELDS]
        return lines + self.ipp_proof.to_lines()

    @classmethod
    def from_lines(cls, lines: list):
        """Strict parser, raises `DecodeError` on any malformed field"""
        reader = _LineReader(lines)

        scalars = {name: reader.take_int() for name in SCALAR_FIELDS}

        l_len = reader.take_length("L")
        L = tuple(reader.take_int() for _ in range(l_len))
        r_len = reader.take_length("R")
        if r_len != l_len:
            raise DecodeError("L and R length mismatch")
        R = tuple(reader.take_int() for _ in range(r_len))

        a = reader.take_int()
        b = reader.take_int()

        if 0 in (scalars["A"], scalars["S"], scalars["T1"], scalars["T2"]):
            raise DecodeError("zero scalar in header")

        return cls(ipp_proof=InnerProductProof(L, R, a, b), **scalars)

    def size(self) -> int:
        """Proof size in bytes as the sum of minimal big-endian encodings"""
        total = sum(byte_length(getattr(self, name)) for name in SCALAR_FIELDS)
        total += sum(byte_length(x) for x in self.ipp_proof.L)
        total += sum(byte_length(x) for x in self.ipp_proof.R)
        total += byte_length(self.ipp_proof.a) + byte_length(self.ipp_proof.b)
        return total

    def __str__(self):
        return "\n".join(f"{f.name} = {getattr(self, f.name)}" for f in fields(self))


def verify_proof(proof: RangeProofObject, params, dimension: int, transcript) -> bool:
    """
    Check a `RangeProofObject` against public parameters.

    Returns a bare boolean for every rejection path.
    """
    n = params[2]
    pedersen = Pedersen(params)

    # 1. challenges
    y = transcript.challenge(proof.A, proof.S, proof.C, proof.C_v1, proof.C_v2) % n
    if y == 0:
        return False
    z = transcript.challenge(y) % n
    if z == 0:
        return False
    x = transcript.challenge(proof.T1, proof.T2) % n
    if x == 0:
        return False

    # 2. T1, T2 openings
    if pedersen.commit(proof.t1, proof.tau1) != proof.T1:
        return False
    if pedersen.commit(proof.t2, proof.tau2) != proof.T2:
        return False

    # 3. t_hat = t0 + t1 x + t2 x^2 over the integers
    rhs_t = proof.t0 + proof.t1 * x + proof.t2 * x * x
    if proof.t_hat != rhs_t:
        return False

    # 4. same blinding on both sides, implied by 3
    if pedersen.commit(proof.t_hat, proof.tau_x) != pedersen.commit(rhs_t, proof.tau_x):
        return False

    # 5. IPP shape only
    ipp = proof.ipp_proof
    if len(ipp.L) != len(ipp.R):
        return False
    if len(ipp.L) != expected_rounds(dimension):
        return False

    # 6. non-trivial and pairwise distinct commitments
    for value in (proof.A, proof.S, proof.T1, proof.T2, proof.C, proof.C_v1, proof.C_v2):
        if value % n == 0:
            return False
    if proof.C == proof.C_v1 or proof.C == proof.C_v2 or proof.C_v1 == proof.C_v2:
        return False

    return True


class RangeProof:
    """
    Range proof over a hidden-order group using the Lagrange
    three-square encoding of `v in [a, b]`

    Args:
        params: `GroupParameters` from `setup`
        dimension: length of the square vector, a power of two
        transcript: challenge strategy, SHA-256 by default
        rng: randomness source, system CSPRNG by default
    """

    def __init__(
        self,
        params,
        dimension: int = DEFAULT_DIMENSION,
        transcript: FiatShamirTranscript = None,
        rng=None,
    ):
        if not is_power_of_two(dimension):
            raise ValueError("dimension must be a power of two")
        self.params = GroupParameters(*params)
        self.dimension = dimension
        self.transcript = transcript or FiatShamirTranscript()
        self.rng = rng
        self.pedersen = Pedersen(params)

    def _random(self) -> int:
        return random_bigint(BLINDING_BITS, self.rng)

    def prove(self, v: int, r: int, a: int, b: int) -> RangeProofObject:
        """
        Prove that the value `v` committed with blinding `r` lies in [a, b].

        A value outside the interval is not rejected here; its proof simply
        carries a wrong statement. `ValueError` is raised only when v1 or v2
        is negative and has no square decomposition.
        """
        n = self.params.n
        commit = self.pedersen.commit

        v1, v2 = range_encoding(v, a, b)
        d = square_vector(v, a, b, self.dimension)

        C = commit(v, r)
        C_v1 = commit(v1, self._random())
        C_v2 = commit(v2, self._random())

        alpha = self._random()
        rho = self._random()
        s_L = [self._random() for _ in range(self.dimension)]
        s_R = [self._random() for _ in range(self.dimension)]

        A = commit(sum(d), alpha)
        S = commit(sum(s_L) + sum(s_R), rho)

        y = self.transcript.challenge(A, S, C, C_v1, C_v2) % n
        z = self.transcript.challenge(y) % n

        l_0 = [z * d_i + y for d_i in d]
        r_0 = [z * d_i + y for d_i in d]

        t0 = inner_product(l_0, r_0)
        t1 = inner_product(l_0, s_R) + inner_product(r_0, s_L)
        t2 = inner_product(s_L, s_R)

        tau1 = self._random()
        tau2 = self._random()
        T1 = commit(t1, tau1)
        T2 = commit(t2, tau2)

        x = self.transcript.challenge(T1, T2) % n

        t_hat = t0 + t1 * x + t2 * x * x
        mu = alpha + rho * x
        tau_x = tau2 * x * x + tau1 * x

        l_vec = [l0_i + sl_i * x for l0_i, sl_i in zip(l_0, s_L)]
        r_vec = [r0_i + sr_i * x for r0_i, sr_i in zip(r_0, s_R)]

        ipa = InnerProductArgument(self.params, self.transcript, self.rng)
        ipp_proof = ipa.prove(l_vec, r_vec)

        return RangeProofObject(
            A, S, T1, T2, tau_x, mu, t_hat, C, C_v1, C_v2,
            t0, t1, t2, tau1, tau2, ipp_proof,
        )

    def verify(self, proof: RangeProofObject) -> bool:
        return verify_proof(proof, self.params, self.dimension, self.transcript)

    def verify_with_range(self, proof: RangeProofObject, a: int, b: int) -> bool:
        """Verify `proof`, then reject an empty (a > b) or degenerate (a == b) interval"""
        if not self.verify(proof):
            return False
        if a > b:
            return False
        if a == b:
            return False
        return True

    def batch_verify(self, proofs: list) -> list:
        """Verify many proofs in parallel, one boolean per proof"""
        return Parallel(n_jobs=get_n_jobs())(
            delayed(verify_proof)(proof, self.params, self.dimension, self.transcript)
            for proof in proofs
        )
