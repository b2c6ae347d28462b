"""
Export a proof as fixed-width uint256 scalars for an on-chain verifier.

T1, T2, x, t_hat and tau_x are recomputed from the coefficients reduced mod n
so the exported values satisfy the verifier relation modulo n. The source
proof is never modified.
"""

import json

from .commitment import pedersen_commit
from .group import GroupParameters
from .rangeproof.range_proof import SCALAR_FIELDS
from .transcript import FiatShamirTranscript


def to_uint256(x: int, n: int) -> str:
    """x mod n as 64 hex chars, keeping the low 32 bytes of wider values"""
    return ((x % n) & ((1 << 256) - 1)).to_bytes(32, "big").hex()


def evm_values(proof, params, transcript: FiatShamirTranscript = None) -> dict:
    """Scalars of `proof` in on-chain form, keyed by field name"""
    g, h, n = GroupParameters(*params)
    transcript = transcript or FiatShamirTranscript("keccak256")

    t0 = proof.t0 % n
    t1 = proof.t1 % n
    t2 = proof.t2 % n
    tau1 = proof.tau1 % n
    tau2 = proof.tau2 % n

    T1 = pedersen_commit(g, h, t1, tau1, n)
    T2 = pedersen_commit(g, h, t2, tau2, n)
    x = transcript.challenge(T1, T2) % n

    values = {name: getattr(proof, name) for name in SCALAR_FIELDS}
    values.update(
        T1=T1,
        T2=T2,
        tau_x=(tau2 * x * x + tau1 * x) % n,
        t_hat=(t0 + t1 * x + t2 * x * x) % n,
        t0=t0,
        t1=t1,
        t2=t2,
        tau1=tau1,
        tau2=tau2,
    )
    return values


def export_proof_json(proof, params, transcript=None) -> str:
    n = params[2]
    values = evm_values(proof, params, transcript)
    ipp = proof.ipp_proof

    document = {
        "scalars": ["0x" + to_uint256(values[name], n) for name in SCALAR_FIELDS],
        "ipp_L": ["0x" + to_uint256(x, n) for x in ipp.L],
        "ipp_R": ["0x" + to_uint256(x, n) for x in ipp.R],
        "ipp_a": "0x" + to_uint256(ipp.a, n),
        "ipp_b": "0x" + to_uint256(ipp.b, n),
    }
    return json.dumps(document, indent=2) + "\n"


def serialize_proof_for_evm(proof, params, transcript=None) -> str:
    """Render the proof as Solidity memory declarations"""
    n = params[2]
    values = evm_values(proof, params, transcript)
    ipp = proof.ipp_proof

    out = [
        "// Range proof for EVM (uint256 scalars)",
        f"// [{', '.join(SCALAR_FIELDS)}]",
        f"uint256[{len(SCALAR_FIELDS)}] memory scalars = [",
    ]
    for i, name in enumerate(SCALAR_FIELDS):
        sep = "," if i < len(SCALAR_FIELDS) - 1 else ""
        out.append(f"    uint256(0x{to_uint256(values[name], n)}){sep} // {name}")
    out.append("];")
    out.append("")

    for label, vector in (("ipp_L", ipp.L), ("ipp_R", ipp.R)):
        out.append(f"uint256[] memory {label} = new uint256[]({len(vector)});")
        for i, x in enumerate(vector):
            out.append(f"{label}[{i}] = uint256(0x{to_uint256(x, n)});")
        out.append("")

    out.append(f"uint256 ipp_a = uint256(0x{to_uint256(ipp.a, n)});")
    out.append(f"uint256 ipp_b = uint256(0x{to_uint256(ipp.b, n)});")
    return "\n".join(out) + "\n"


def save_proof_json(path, proof, params, transcript=None):
    with open(path, "w", encoding="ascii") as f:
        f.write(export_proof_json(proof, params, transcript))


def save_proof_for_evm(path, proof, params, transcript=None):
    with open(path, "w", encoding="ascii") as f:
        f.write(serialize_proof_for_evm(proof, params, transcript))
