import random

import pytest
from rangesnake import Pedersen, pedersen_commit, setup
from rangesnake.commitment import mod_exp


@pytest.fixture(scope="module")
def params():
    return setup(64, random.Random(2))


def test_commit_homomorphic(params):

    pedersen = Pedersen(params)
    n = params.n

    c1 = pedersen.commit(13, 1337)
    c2 = pedersen.commit(29, 4242)

    assert c1 * c2 % n == pedersen.commit(13 + 29, 1337 + 4242)


def test_commit_binding_opening(params):

    pedersen = Pedersen(params)
    c, r = pedersen.commit_random(42, random.Random(0))

    assert pedersen.open(c, 42, r)
    assert not pedersen.open(c, 43, r)
    assert not pedersen.open(c, 42, r + 1)


def test_commit_blinding_hides(params):

    pedersen = Pedersen(params)

    assert pedersen.commit(42, 1) != pedersen.commit(42, 2)


def test_negative_exponent_uses_absolute_value(params):

    g, h, n = params

    assert mod_exp(g, -5, n) == pow(g, 5, n)
    assert mod_exp(-g, 5, n) == pow(g, 5, n)
    assert pedersen_commit(g, h, -7, 3, n) == pedersen_commit(g, h, 7, 3, n)


def test_commit_matches_definition(params):

    g, h, n = params

    assert Pedersen(params).commit(0, 0) == 1
    assert Pedersen(params).commit(5, 9) == pow(g, 5, n) * pow(h, 9, n) % n
