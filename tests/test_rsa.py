# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

import pytest

import textbookrsa
import textbookrsa.rsa as rsau
from textbookrsa.errors import DegenerateKeyPair
from textbookrsa.errors import InvalidModulus
from textbookrsa.errors import MessageOutOfRange

# Textbook example: p = 61, q = 53, lcm(60, 52) = 780.
KNOWN_PUB = rsau.RSAPubKey(3233, 17)
KNOWN_PRIV = rsau.RSAPrivKey(3233, 413)


@pytest.fixture(scope="module", params=[4, 8, 64])
def keyset(request) -> tuple[rsau.RSAPubKey, rsau.RSAPrivKey]:
    return rsau.generate_keys(request.param, random.Random(request.param))


def test_known_vector():
    assert rsau.encrypt(65, KNOWN_PUB) == 2790
    assert rsau.decrypt(2790, KNOWN_PRIV) == 65


def test_known_vector_euler_exponent():
    # The phi(n) based private exponent decrypts just as well.
    assert rsau.decrypt(2790, (3233, 2753)) == 65


def test_key_shape():
    assert KNOWN_PUB.modulus == 3233
    assert KNOWN_PUB.exponent == 17
    n, d = KNOWN_PRIV
    assert (n, d) == (3233, 413)
    assert repr(KNOWN_PUB) == "RSAPubKey(modulus=3233, exponent=17)"
    assert isinstance(KNOWN_PRIV, rsau.RSAKey)


def test_methods_match_functions():
    assert KNOWN_PUB.encrypt(1234) == rsau.encrypt(1234, KNOWN_PUB) == rsau.encrypt(1234, (3233, 17))
    assert KNOWN_PRIV.decrypt(1234) == rsau.decrypt(1234, KNOWN_PRIV) == rsau.decrypt(1234, (3233, 413))


def test_swapped_keys_rejected():
    with pytest.raises(TypeError):
        rsau.encrypt(200, KNOWN_PRIV)
    with pytest.raises(TypeError):
        rsau.decrypt(2790, KNOWN_PUB)


def test_swapped_generated_keys_rejected(keyset):
    pub, priv = keyset
    with pytest.raises(TypeError):
        textbookrsa.decrypt(textbookrsa.encrypt(1, pub), pub)
    with pytest.raises(TypeError):
        textbookrsa.encrypt(1, priv)


def test_generate_keys_types(keyset):
    pub, priv = keyset
    assert isinstance(pub, rsau.RSAPubKey)
    assert isinstance(priv, rsau.RSAPrivKey)
    assert pub.modulus == priv.modulus


def test_generate_keys_reproducible():
    assert rsau.generate_keys(16, random.Random(3)) == rsau.generate_keys(16, random.Random(3))


def test_round_trip_sampled(keyset, rng):
    pub, priv = keyset
    for _ in range(200):
        m = rng.randint(0, pub.modulus - 1)
        assert rsau.decrypt(rsau.encrypt(m, pub), priv) == m


def test_round_trip_edges(keyset):
    pub, priv = keyset
    for m in (0, 1, 2, pub.modulus - 2, pub.modulus - 1):
        assert priv.decrypt(pub.encrypt(m)) == m


def test_round_trip_exhaustive():
    pub, priv = rsau.generate_keys(4, random.Random(11))
    for m in range(pub.modulus):
        assert priv.decrypt(pub.encrypt(m)) == m


@pytest.mark.slow
def test_round_trip_exhaustive_eight_bits():
    pub, priv = rsau.generate_keys(8, random.Random(12))
    for m in range(pub.modulus):
        assert priv.decrypt(pub.encrypt(m)) == m


def test_fresh_eight_bit_keys():
    for _ in range(100):
        pub, priv = textbookrsa.generate_keys(8)
        assert textbookrsa.decrypt(textbookrsa.encrypt(200, pub), priv) == 200


@pytest.mark.parametrize("message", [-1, 3233, 3234, 2**80])
def test_encrypt_out_of_range(message):
    with pytest.raises(MessageOutOfRange):
        rsau.encrypt(message, KNOWN_PUB)


@pytest.mark.parametrize("ciphertext", [-5, 3233])
def test_decrypt_out_of_range(ciphertext):
    with pytest.raises(MessageOutOfRange):
        rsau.decrypt(ciphertext, KNOWN_PRIV)


def test_out_of_range_is_value_error():
    with pytest.raises(ValueError):
        KNOWN_PUB.encrypt(4000)


@pytest.mark.parametrize("modulus", [0, -3233])
def test_invalid_key_modulus(modulus):
    with pytest.raises(InvalidModulus):
        rsau.encrypt(0, (modulus, 17))


def test_generate_keys_degenerate():
    with pytest.raises(DegenerateKeyPair):
        rsau.generate_keys(1)


def test_generate_keys_validates():
    with pytest.raises(ValueError):
        rsau.generate_keys(0)


@pytest.mark.extreme
def test_round_trip_large():
    pub, priv = rsau.generate_keys(1024, random.Random(1024))
    m = 17092025232642
    assert priv.decrypt(pub.encrypt(m)) == m
