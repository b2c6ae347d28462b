import random

import pytest
from rangesnake import RangeProof, RangeProofObject, setup
from rangesnake.cli import main
from rangesnake.codec import load_params, load_proof, read_lines, save_params, save_proof
from rangesnake.errors import DecodeError
from rangesnake.utils import hex_to_int, int_to_hex


@pytest.fixture(scope="module")
def params():
    return setup(64, random.Random(21))


@pytest.fixture(scope="module")
def proof(params):
    return RangeProof(params, dimension=8, rng=random.Random(22)).prove(42, 7, 1, 100)


def test_hex_encoding():

    assert int_to_hex(0) == "00"
    assert int_to_hex(0xABC) == "0abc"
    assert hex_to_int("0abc") == 0xABC
    assert hex_to_int(" 00ff\n") == 255

    for bad in ["", "abc", "0x12", "zz", "12 34"]:
        with pytest.raises(DecodeError):
            hex_to_int(bad)


def test_params_file(tmp_path, params):

    path = tmp_path / "params.txt"
    save_params(path, params)

    assert load_params(path) == params
    assert path.read_text() == "\n".join(int_to_hex(x) for x in params)


def test_proof_file(tmp_path, params, proof):

    path = tmp_path / "out" / "proof.txt"
    save_proof(path, proof)

    loaded = load_proof(path)

    assert loaded == proof
    assert RangeProof(params, dimension=8).verify(loaded)
    assert len(read_lines(path)) == 15 + 2 + 2 * len(proof.ipp_proof.L) + 2


def _decode(lines):
    return RangeProofObject.from_lines(lines)


def test_proof_decode_errors(proof):

    lines = proof.to_lines()
    l_pos = 15

    with pytest.raises(DecodeError):
        _decode([])

    with pytest.raises(DecodeError):
        _decode(lines[:-1])

    bad = list(lines)
    bad[3] = "abc"
    with pytest.raises(DecodeError):
        _decode(bad)

    bad = list(lines)
    bad[0] = "00"
    with pytest.raises(DecodeError, match="zero scalar"):
        _decode(bad)

    bad = list(lines)
    bad[l_pos] = "0"
    with pytest.raises(DecodeError):
        _decode(bad)

    bad = list(lines)
    bad[l_pos] = "x"
    with pytest.raises(DecodeError):
        _decode(bad)

    rounds = len(proof.ipp_proof.L)
    bad = lines[: l_pos + 1 + rounds] + [str(rounds - 1)] + lines[l_pos + 2 + rounds :]
    with pytest.raises(DecodeError, match="mismatch"):
        _decode(bad)


def test_params_decode_errors(tmp_path):

    path = tmp_path / "params.txt"

    path.write_text("02\n03")
    with pytest.raises(DecodeError):
        load_params(path)

    path.write_bytes(b"02\n\xff\xfe\n0100")
    with pytest.raises(DecodeError):
        load_params(path)

    path.write_text("02\n03\n0100")
    with pytest.raises(DecodeError, match="coprime"):
        load_params(path)

    with pytest.raises(OSError):
        load_params(tmp_path / "missing.txt")


def test_degenerate_params_rejected(tmp_path, proof, capsys):

    params_path = tmp_path / "params.txt"
    params_path.write_text("02\n03\n00")
    proof_path = tmp_path / "proof.txt"
    save_proof(proof_path, proof)

    with pytest.raises(DecodeError, match="modulus"):
        load_params(params_path)

    assert main(["verify", str(params_path), "01", "64", str(proof_path)]) == 2
    assert "modulus" in capsys.readouterr().err
