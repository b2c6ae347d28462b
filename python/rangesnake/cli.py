"""Command line interface: rangesnake {setup,prove,verify,benchmark}"""

import argparse
import logging
import sys

from .benchmark import DEFAULT_LENGTHS, benchmark_multiple_ranges, print_benchmark_summary
from .codec import load_params, load_proof, save_params, save_proof
from .constant import SetupProfile
from .errors import RangeSnakeError
from .export import save_proof_for_evm, save_proof_json
from .group import setup_profile
from .rangeproof.range_proof import RangeProof
from .transcript import SUPPORTED_HASHES, FiatShamirTranscript
from .utils import hex_to_int, random_bigint

logger = logging.getLogger(__name__)

PROFILES = {p.name.lower(): p for p in SetupProfile}


def _export_path(proof_path: str, suffix: str) -> str:
    return f"{proof_path.removesuffix('.txt')}_evm.{suffix}"


def _hex_arg(s: str) -> int:
    """Command line hex: optional 0x prefix, odd length allowed"""
    t = s.strip()
    if t[:2].lower() == "0x":
        t = t[2:]
    if len(t) % 2:
        t = "0" + t
    return hex_to_int(t)


def _transcript(args, params) -> FiatShamirTranscript:
    # parameter files carry no profile, an EVM-sized modulus selects Keccak-256
    alg = args.hash
    if alg is None:
        evm = params.n.bit_length() <= 2 * SetupProfile.EVM.value
        alg = "keccak256" if evm else "sha256"
    return FiatShamirTranscript(alg)


def cmd_setup(args):
    params = setup_profile(PROFILES[args.profile])
    save_params(args.params, params)
    print(f"Saved {args.profile} parameters ({params.n.bit_length()}-bit n) to {args.params}")
    return 0


def cmd_prove(args):
    params = load_params(args.params)
    a, b, v = _hex_arg(args.a), _hex_arg(args.b), _hex_arg(args.v)

    rp = RangeProof(params, transcript=_transcript(args, params))
    proof = rp.prove(v, random_bigint(256), a, b)
    save_proof(args.proof, proof)
    print(f"Saved proof ({proof.size()} bytes) to {args.proof}")

    if args.evm:
        path = _export_path(args.proof, "sol")
        save_proof_for_evm(path, proof, params)
        print(f"Saved EVM-compatible proof to {path}")

    if args.json:
        path = _export_path(args.proof, "json")
        save_proof_json(path, proof, params)
        print(f"Saved JSON proof to {path}")

    return 0


def cmd_verify(args):
    params = load_params(args.params)
    a, b = _hex_arg(args.a), _hex_arg(args.b)
    proof = load_proof(args.proof)

    rp = RangeProof(params, transcript=_transcript(args, params))
    if rp.verify_with_range(proof, a, b):
        print("VALID")
        return 0

    print("INVALID")
    return 1


def cmd_benchmark(args):
    lengths = args.lengths or DEFAULT_LENGTHS
    results = benchmark_multiple_ranges(lengths, PROFILES[args.profile])
    print_benchmark_summary(results)
    return 0 if all(r.success for r in results) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rangesnake", description="Range proofs over hidden-order groups"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("setup", help="Generate group parameters")
    p.add_argument("profile", choices=sorted(PROFILES))
    p.add_argument("params", help="Output parameter file")
    p.set_defaults(func=cmd_setup)

    p = sub.add_parser("prove", help="Prove that v lies in [a, b]")
    p.add_argument("params")
    p.add_argument("a", metavar="A_HEX")
    p.add_argument("b", metavar="B_HEX")
    p.add_argument("v", metavar="V_HEX")
    p.add_argument("proof", help="Output proof file")
    p.add_argument("--evm", action="store_true", help="Also write a Solidity snippet")
    p.add_argument("--json", action="store_true", help="Also write uint256 JSON")
    p.add_argument("--hash", choices=SUPPORTED_HASHES,
                   help="Challenge hash, Keccak-256 for EVM-sized parameters by default")
    p.set_defaults(func=cmd_prove)

    p = sub.add_parser("verify", help="Verify a proof against [a, b]")
    p.add_argument("params")
    p.add_argument("a", metavar="A_HEX")
    p.add_argument("b", metavar="B_HEX")
    p.add_argument("proof")
    p.add_argument("--hash", choices=SUPPORTED_HASHES,
                   help="Challenge hash, Keccak-256 for EVM-sized parameters by default")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("benchmark", help="Time setup, prove and verify")
    p.add_argument("profile", choices=sorted(PROFILES))
    p.add_argument("lengths", nargs="*", type=int, metavar="LENGTH")
    p.set_defaults(func=cmd_benchmark)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        return args.func(args)
    except (RangeSnakeError, ValueError, OSError) as e:
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
