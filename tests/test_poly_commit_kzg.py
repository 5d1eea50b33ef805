import logging

from pytest import raises

from kzgcommit.betterpairing import ZR, G1, G2
from kzgcommit.exceptions import (
    NoPolynomialError,
    PointNotOnPolynomialError,
    PolynomialCapacityError,
)
from kzgcommit.polynomial import polynomials_over
from kzgcommit.poly_commit_kzg import (
    KZGCommitment,
    KZGProver,
    KZGVerifier,
    KZGWitness,
    generate_trapdoor_and_setup,
    insecure_setup,
    setup,
)


def test_setup_powers_of_trapdoor(toy_params):
    g, h = G1.generator(), G2.generator()
    assert toy_params.g == g
    assert toy_params.h == h
    assert toy_params.max_degree == 10
    assert len(toy_params.gs) == len(toy_params.hs) == 10
    assert toy_params.gs[0] == g ** 7
    assert toy_params.gs[1] == g ** 49
    assert toy_params.gs[9] == g ** (ZR(7) ** 10)
    assert toy_params.hs[0] == h ** 7
    assert toy_params.hs[2] == h ** 343


def test_setup_is_deterministic(toy_params):
    params = setup(ZR(7), 10)
    assert params.gs == toy_params.gs
    assert params.hs == toy_params.hs


def test_params_are_immutable(params):
    with raises(AttributeError):
        params.g = G1.generator()
    with raises(TypeError):
        params.gs[0] = G1.generator()
    assert not hasattr(params, "__dict__")


def test_setup_rejects_bad_arguments():
    with raises(ValueError):
        setup(7, 0)
    with raises(ValueError):
        setup(0, 4)
    with raises(ValueError):
        setup(ZR.modulus, 4)
    with raises(AssertionError):
        setup("7", 4)
    with raises(AssertionError):
        setup(7, 4.0)


def test_insecure_setup_draws_trapdoor(mocker, caplog):
    random = mocker.patch.object(ZR, "random", side_effect=[ZR(0), ZR(7)])
    with caplog.at_level(logging.WARNING):
        params = insecure_setup(3)
    assert random.call_count == 2
    assert params.gs == setup(7, 3).gs
    assert "single-party" in caplog.text


def test_insecure_setup_does_not_expose_trapdoor():
    assert generate_trapdoor_and_setup is insecure_setup
    params = insecure_setup(2)
    assert params.max_degree == 2
    assert set(vars(type(params))["__slots__"]) == {"g", "h", "gs", "hs"}


def test_concrete_scenario(toy_params):
    poly = toy_params.polynomials()([3, 5])
    prover = KZGProver(toy_params)
    verifier = KZGVerifier(toy_params)

    commitment = prover.commit(poly)
    assert commitment == KZGCommitment(toy_params.g ** 3 * toy_params.gs[0] ** 5)
    assert commitment.value == G1.generator() ** (3 + 5 * 7)

    witness = prover.create_witness(2, 13)
    psi = toy_params.polynomials()([5])
    assert witness == KZGWitness(KZGProver(toy_params).commit(psi).value)
    assert witness.value == toy_params.g ** 5
    assert verifier.verify_eval(2, 13, commitment, witness)

    with raises(PointNotOnPolynomialError):
        prover.create_witness(2, 0)


def test_commitment_soundness(polynomial, prover, verifier):
    for degree in (0, 1, 5, 9):
        poly = polynomial.random(degree)
        commitment = prover.commit(poly)
        assert verifier.verify_poly(commitment, poly)


def test_commitment_binding(polynomial, prover, verifier):
    poly = polynomial.random(5)
    commitment = prover.commit(poly)
    other = polynomial.random(5)
    assert other != poly
    assert not verifier.verify_poly(commitment, other)
    tweaked = poly.copy()
    tweaked.subtract_constant(1)
    assert not verifier.verify_poly(commitment, tweaked)


def test_commitment_is_deterministic(polynomial, params):
    poly = polynomial.random(7)
    c1 = KZGProver(params).commit(poly)
    c2 = KZGProver(params).commit(poly)
    assert c1 == c2
    assert c1.value.point == c2.value.point
    assert hash(c1) == hash(c2)


def test_commitment_of_zero_polynomial(polynomial, prover, verifier):
    commitment = prover.commit(polynomial.zero())
    assert commitment.value.is_identity()
    assert verifier.verify_poly(commitment, polynomial.zero())


def test_commitment_and_witness_never_compare_equal():
    g = G1.generator()
    assert KZGCommitment(g) == KZGCommitment(g * G1.one())
    assert KZGCommitment(g) != KZGWitness(g)


def test_evaluation_soundness(polynomial, prover, verifier):
    poly = polynomial.random(6)
    commitment = prover.commit(poly)
    x = ZR.random()
    y = poly(x)
    witness = prover.create_witness(x, y)
    assert verifier.verify_eval(x, y, commitment, witness)


def test_evaluation_proof_rejects_other_claims(polynomial, prover, verifier):
    poly = polynomial.random(4)
    commitment = prover.commit(poly)
    witness = prover.create_witness(3, poly(3))
    assert not verifier.verify_eval(4, poly(3), commitment, witness)
    assert not verifier.verify_eval(3, poly(3) + 1, commitment, witness)


def test_evaluation_binding(polynomial, prover):
    poly = polynomial.random(4)
    prover.commit(poly)
    x = ZR.random()
    with raises(PointNotOnPolynomialError):
        prover.create_witness(x, poly(x) + 1)


def test_cross_proof_rejection(polynomial, params, verifier):
    poly = polynomial.random(4)
    other = polynomial.random(4)
    prover = KZGProver(params)
    prover.commit(poly)
    x = ZR.random()
    witness = prover.create_witness(x, poly(x))
    other_commitment = KZGProver(params).commit(other)
    assert not verifier.verify_eval(x, poly(x), other_commitment, witness)


def test_no_polynomial(prover):
    with raises(NoPolynomialError):
        prover.open()
    with raises(NoPolynomialError):
        prover.create_witness(1, 2)


def test_open_returns_committed_polynomial(polynomial, prover, verifier):
    poly = polynomial.random(3)
    commitment = prover.commit(poly)
    opened = prover.open()
    assert opened == poly
    assert verifier.verify_poly(commitment, opened)
    # The prover keeps its own copy
    opened.subtract_constant(1)
    poly.subtract_constant(1)
    assert prover.open() != poly


def test_create_witness_leaves_polynomial_untouched(polynomial, prover):
    poly = polynomial([3, 5])
    prover.commit(poly)
    prover.create_witness(2, 13)
    with raises(PointNotOnPolynomialError):
        prover.create_witness(2, 0)
    assert prover.open() == polynomial([3, 5])


def test_commit_replaces_previous_polynomial(polynomial, prover):
    first, second = polynomial([1, 1]), polynomial([2, 2])
    prover.commit(first)
    commitment = prover.commit(second)
    assert prover.open() == second
    assert prover.commitment == commitment


def test_reserved_batch_state_is_unused(polynomial, prover):
    assert prover.batch_witness is None
    assert prover.witnesses == [None] * 10
    prover.commit(polynomial([3, 5]))
    prover.create_witness(2, 13)
    assert prover.batch_witness is None
    assert prover.witnesses == [None] * 10


def test_commit_rejects_polynomial_above_max_degree(prover):
    big = polynomials_over(ZR, 12)
    with raises(PolynomialCapacityError):
        prover.commit(big.random(10))
    # Larger containers are fine as long as the degree fits
    prover.commit(big([1, 2, 3]))


def test_witness_for_constant_polynomial_with_tiny_params():
    params = setup(ZR.random(1), 1)
    prover = KZGProver(params)
    prover.commit(params.polynomials()([9]))
    witness = prover.create_witness(4, 9)
    assert witness.value.is_identity()
    assert KZGVerifier(params).verify_eval(4, 9, prover.commitment, witness)
