"""Flat hex file format for parameters and proofs"""

import logging
import os

from .errors import DecodeError
from .group import GroupParameters
from .rangeproof.range_proof import RangeProofObject

logger = logging.getLogger(__name__)


def write_lines(path, lines: list):
    parent = os.path.dirname(os.fspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="ascii") as f:
        f.write("\n".join(lines))
    logger.debug("wrote %d lines to %s", len(lines), path)


def read_lines(path) -> list:
    with open(path, "rb") as f:
        content = f.read()
    try:
        return content.decode("ascii").splitlines()
    except UnicodeDecodeError as e:
        raise DecodeError(f"{path} is not an ascii hex file") from e


def save_params(path, params: GroupParameters):
    write_lines(path, GroupParameters(*params).to_lines())


def load_params(path) -> GroupParameters:
    """Raises `DecodeError` for malformed content"""
    return GroupParameters.from_lines(read_lines(path))


def save_proof(path, proof: RangeProofObject):
    write_lines(path, proof.to_lines())


def load_proof(path) -> RangeProofObject:
    """Raises `DecodeError` for malformed content"""
    return RangeProofObject.from_lines(read_lines(path))
