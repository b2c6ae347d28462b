import json
import random

import pytest
from rangesnake import FiatShamirTranscript, RangeProof, SetupProfile, setup_profile
from rangesnake.cli import main
from rangesnake.codec import load_params, load_proof, save_params


@pytest.fixture(scope="module")
def params_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("cli") / "params.txt"
    assert main(["setup", "evm", str(path)]) == 0
    return path


def test_cli_setup(params_path, capsys):

    params = load_params(params_path)

    assert params.n.bit_length() in (255, 256)


def test_cli_prove_verify(params_path, tmp_path, capsys):

    proof_path = tmp_path / "proof.txt"

    assert main(["prove", str(params_path), "01", "64", "2a", str(proof_path), "--json", "--evm"]) == 0
    assert load_proof(proof_path).ipp_proof.L

    assert (tmp_path / "proof_evm.sol").exists()
    assert len(json.loads((tmp_path / "proof_evm.json").read_text())["scalars"]) == 15

    capsys.readouterr()
    assert main(["verify", str(params_path), "01", "64", str(proof_path)]) == 0
    assert capsys.readouterr().out.strip() == "VALID"

    assert main(["verify", str(params_path), "05", "05", str(proof_path)]) == 1
    assert capsys.readouterr().out.strip() == "INVALID"

    assert main(["verify", str(params_path), "01", "64", str(proof_path), "--hash", "sha256"]) == 1
    assert capsys.readouterr().out.strip() == "INVALID"


def test_cli_keccak(params_path, tmp_path, capsys):

    proof_path = tmp_path / "proof.txt"

    assert main(["prove", str(params_path), "00", "ff", "80", str(proof_path), "--hash", "keccak256"]) == 0
    capsys.readouterr()

    assert main(["verify", str(params_path), "00", "ff", str(proof_path), "--hash", "keccak256"]) == 0
    assert capsys.readouterr().out.strip() == "VALID"


def test_cli_errors(params_path, tmp_path, capsys):

    assert main(["prove", str(params_path), "0x", "64", "2a", str(tmp_path / "p.txt")]) == 2
    assert "error:" in capsys.readouterr().err

    assert main(["prove", str(params_path), "01", "6g", "2a", str(tmp_path / "p.txt")]) == 2
    assert "error:" in capsys.readouterr().err

    assert main(["verify", str(params_path), "01", "64", str(tmp_path / "missing.txt")]) == 2
    assert "error:" in capsys.readouterr().err

    bad = tmp_path / "bad.txt"
    bad.write_text("zz")
    assert main(["verify", str(params_path), "01", "64", str(bad)]) == 2

    assert main(["prove", str(params_path), "01", "64", "c8", str(tmp_path / "p.txt")]) == 2

    with pytest.raises(SystemExit):
        main(["setup", "huge", str(tmp_path / "x.txt")])


def test_cli_loose_hex_arguments(params_path, tmp_path, capsys):

    proof_path = tmp_path / "proof.txt"

    assert main(["prove", str(params_path), "1", "0x64", "2A", str(proof_path)]) == 0
    capsys.readouterr()

    assert main(["verify", str(params_path), "0x1", "64", str(proof_path)]) == 0
    assert capsys.readouterr().out.strip() == "VALID"


def test_cli_default_hash_follows_modulus_size(params_path, tmp_path, capsys):

    proof_path = tmp_path / "proof.txt"
    assert main(["prove", str(params_path), "01", "64", "2a", str(proof_path)]) == 0

    params = load_params(params_path)
    proof = load_proof(proof_path)

    assert RangeProof(params, transcript=FiatShamirTranscript("keccak256")).verify(proof)
    assert not RangeProof(params).verify(proof)

    big = tmp_path / "fast.txt"
    save_params(big, setup_profile(SetupProfile.FAST, random.Random(3)))
    assert main(["prove", str(big), "01", "64", "2a", str(proof_path)]) == 0
    assert RangeProof(load_params(big)).verify(load_proof(proof_path))
