import hashlib

from Crypto.Hash import keccak

from .utils import byte_length

SUPPORTED_HASHES = ("sha256", "keccak256")


def _new_hasher(alg: str):
    if alg == "keccak256":
        return keccak.new(digest_bits=256)
    return hashlib.new(alg)


class FiatShamirTranscript:
    """
    Hash-to-integer challenge derivation.

    Every appended integer is encoded big-endian; with `width` set each one is
    left-padded to at least `width` bytes (Keccak-256 pads to 32 so transcripts
    match fixed-width uint256 hashing on chain).

    Args:
        alg: `sha256` or `keccak256`
        width: minimum encoded byte length per input
    """

    def __init__(self, alg: str = "sha256", width: int = None):
        if alg not in SUPPORTED_HASHES:
            raise ValueError(f"Unsupported hash {alg}")
        self.alg = alg
        self.width = width if width is not None else (32 if alg == "keccak256" else 0)
        self.state = []

    def reset(self):
        self.state = []

    def _encode(self, x: int) -> bytes:
        if x < 0:
            raise ValueError("Transcript inputs must be non-negative")
        return x.to_bytes(max(self.width, byte_length(x)), "big")

    def append(self, data):
        if isinstance(data, int):
            self.state.append(self._encode(data))
        elif isinstance(data, (list, tuple)) and all(isinstance(d, int) for d in data):
            for d in data:
                self.state.append(self._encode(d))
        else:
            raise TypeError(f"Type of {type(data)} is not supported as transcript")

    def get_challenge(self) -> bytes:
        hasher = _new_hasher(self.alg)
        for chunk in self.state:
            hasher.update(chunk)
        return hasher.digest()

    def get_challenge_scalar(self) -> int:
        return int.from_bytes(self.get_challenge(), "big")

    def challenge(self, *inputs: int) -> int:
        """One-shot challenge over `inputs` in order, ignores appended state"""
        local = FiatShamirTranscript(self.alg, self.width)
        local.append(list(inputs))
        return local.get_challenge_scalar()

    def __repr__(self):
        return f"FiatShamirTranscript(alg={self.alg!r}, width={self.width})"
