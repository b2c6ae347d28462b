import json
import random

import pytest
from rangesnake import FiatShamirTranscript, RangeProof, SetupProfile, pedersen_commit, setup_profile
from rangesnake.export import (
    evm_values,
    export_proof_json,
    save_proof_for_evm,
    save_proof_json,
    serialize_proof_for_evm,
    to_uint256,
)


@pytest.fixture(scope="module")
def params():
    return setup_profile(SetupProfile.EVM, random.Random(41))


@pytest.fixture(scope="module")
def proof(params):
    rp = RangeProof(params, transcript=FiatShamirTranscript("keccak256"), rng=random.Random(42))
    return rp.prove(42, 1337, 1, 100)


def test_to_uint256():

    n = 2**255 + 19

    assert to_uint256(5, n) == "0" * 63 + "5"
    assert to_uint256(n + 5, n) == "0" * 63 + "5"
    assert len(to_uint256(n - 1, n)) == 64
    assert to_uint256(n - 1, n) == (n - 1).to_bytes(32, "big").hex()


def test_evm_values_relation(params, proof):

    g, h, n = params
    values = evm_values(proof, params)

    x = FiatShamirTranscript("keccak256").challenge(values["T1"], values["T2"]) % n

    assert values["T1"] == pedersen_commit(g, h, values["t1"], values["tau1"], n)
    assert values["T2"] == pedersen_commit(g, h, values["t2"], values["tau2"], n)
    assert values["t_hat"] == (values["t0"] + values["t1"] * x + values["t2"] * x * x) % n
    assert values["tau_x"] == (values["tau2"] * x * x + values["tau1"] * x) % n
    assert all(values[k] < n for k in ["t0", "t1", "t2", "tau1", "tau2"])
    assert values["C"] == proof.C


def test_export_json(params, proof):

    document = json.loads(export_proof_json(proof, params))

    assert len(document["scalars"]) == 15
    assert len(document["ipp_L"]) == len(proof.ipp_proof.L)
    assert len(document["ipp_R"]) == len(proof.ipp_proof.R)
    assert all(s.startswith("0x") and len(s) == 66 for s in document["scalars"])
    assert int(document["scalars"][7], 16) == proof.C % params.n
    assert int(document["ipp_a"], 16) == proof.ipp_proof.a % params.n


def test_serialize_for_evm(params, proof):

    snippet = serialize_proof_for_evm(proof, params)

    assert "uint256[15] memory scalars = [" in snippet
    assert "// t_hat" in snippet
    assert f"new uint256[]({len(proof.ipp_proof.L)})" in snippet
    assert "uint256 ipp_a = uint256(0x" in snippet
    assert "uint256 ipp_b = uint256(0x" in snippet


def test_save_exports(tmp_path, params, proof):

    save_proof_json(tmp_path / "proof_evm.json", proof, params)
    save_proof_for_evm(tmp_path / "proof_evm.sol", proof, params)

    assert json.loads((tmp_path / "proof_evm.json").read_text())["scalars"]
    assert (tmp_path / "proof_evm.sol").read_text() == serialize_proof_for_evm(proof, params)
