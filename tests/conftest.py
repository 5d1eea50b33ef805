from pytest import fixture


@fixture(scope="session")
def params():
    from kzgcommit.betterpairing import ZR
    from kzgcommit.poly_commit_kzg import setup

    return setup(ZR.random(42), 10)


@fixture(scope="session")
def toy_params():
    """Trapdoor 7, never use outside tests."""
    from kzgcommit.poly_commit_kzg import setup

    return setup(7, 10)


@fixture
def polynomial(params):
    return params.polynomials()


@fixture
def prover(params):
    from kzgcommit.poly_commit_kzg import KZGProver

    return KZGProver(params)


@fixture
def verifier(params):
    from kzgcommit.poly_commit_kzg import KZGVerifier

    return KZGVerifier(params)
