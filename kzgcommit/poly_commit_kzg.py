import logging

from kzgcommit.betterpairing import ZR, G1, G2, pair
from kzgcommit.exceptions import (
    NoPolynomialError,
    PointNotOnPolynomialError,
    PolynomialCapacityError,
)
from kzgcommit.polynomial import degree_of, polynomials_over
from kzgcommit.utils.typecheck import TypeCheck


class KZGParams(object):
    """Public parameters of one trusted setup.

    ``g`` and ``h`` generate G1 and G2, ``gs[i] = g ** (s ** (i + 1))`` and
    ``hs[i] = h ** (s ** (i + 1))`` for the trapdoor ``s``. Instances are frozen
    once built so they can be shared by any number of provers and verifiers.
    """

    __slots__ = ("g", "h", "gs", "hs")

    def __init__(self, g, h, gs, hs):
        assert type(g) is G1 and type(h) is G2
        assert len(gs) == len(hs) and len(gs) > 0
        object.__setattr__(self, "g", g)
        object.__setattr__(self, "h", h)
        object.__setattr__(self, "gs", tuple(gs))
        object.__setattr__(self, "hs", tuple(hs))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        return f"KZGParams(max_degree={self.max_degree})"

    @property
    def max_degree(self):
        return len(self.gs)

    def polynomials(self):
        """The polynomial class these parameters can commit to."""
        return polynomials_over(ZR, self.max_degree)


class _G1Element(object):
    __slots__ = ("value",)

    def __init__(self, value):
        assert type(value) is G1
        self.value = value.to_affine()

    def __eq__(self, other):
        if type(other) is not type(self):
            return False
        # Both sides are affine, compare coordinates as they are
        return self.value.point == other.value.point

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{type(self).__name__}{self.value}"


class KZGCommitment(_G1Element):
    """Commitment to one polynomial, a single G1 element."""

    __slots__ = ()


class KZGWitness(_G1Element):
    """Evaluation proof for one ``(x, y)`` pair, a single G1 element."""

    __slots__ = ()


def commit_coefficients(parameters, polynomial):
    """Computes ``g ** a_0 * gs[0] ** a_1 * ... * gs[d-1] ** a_d``.

    This is ``g ** P(s)`` without knowing ``s``.
    """
    if degree_of(polynomial.coeffs) >= parameters.max_degree:
        raise PolynomialCapacityError(
            f"polynomial of degree {degree_of(polynomial.coeffs)} exceeds "
            f"max degree {parameters.max_degree - 1}"
        )
    c = G1.one()
    for i, coeff in enumerate(polynomial.coeffs):
        if coeff == 0:
            continue
        base = parameters.g if i == 0 else parameters.gs[i - 1]
        c *= base ** coeff
    return c.to_affine()


class KZGProver(object):
    """Holds at most one committed polynomial at a time.

    Not safe for concurrent use: ``commit`` replaces the held polynomial.
    """

    def __init__(self, parameters):
        self.parameters = parameters
        self.polynomial = None
        self.commitment = None
        # Reserved for batched opening proofs, never populated
        self.batch_witness = None
        self.witnesses = [None] * parameters.max_degree

    def commit(self, polynomial):
        commitment = KZGCommitment(commit_coefficients(self.parameters, polynomial))
        self.polynomial = polynomial.copy()
        self.commitment = commitment
        logging.debug("Committed to polynomial of degree %d", polynomial.degree)
        return commitment

    def open(self):
        if self.polynomial is None:
            raise NoPolynomialError("no polynomial has been committed")
        return self.polynomial.copy()

    def create_witness(self, x, y):
        """Proves ``P(x) = y`` for the committed polynomial ``P``.

        The witness is a commitment to ``psi(X) = (P(X) - y) / (X - x)``. By the
        polynomial remainder theorem the division leaves a remainder exactly
        when ``P(x) != y``, in which case ``PointNotOnPolynomialError`` is
        raised.
        """
        if self.polynomial is None:
            raise NoPolynomialError("no polynomial has been committed")

        dividend = self.polynomial.copy()
        dividend.subtract_constant(y)

        poly = polynomials_over(dividend.field, max(dividend.capacity, 2))
        divisor = poly.new_from_coeffs([-x, 1], 1)

        psi, remainder = dividend.long_division(divisor)
        if remainder is not None:
            raise PointNotOnPolynomialError(
                f"({x}, {y}) is not on the committed polynomial"
            )

        logging.debug("Created witness for point %s", x)
        return KZGWitness(commit_coefficients(self.parameters, psi))


class KZGVerifier(object):
    def __init__(self, parameters):
        self.parameters = parameters

    def verify_poly(self, commitment, polynomial):
        """Full opening: recompute the commitment and compare."""
        check = KZGCommitment(commit_coefficients(self.parameters, polynomial))
        return check == commitment

    def verify_eval(self, x, y, commitment, witness):
        """Checks ``e(w, h^s / h^x) == e(c / g^y, h)``.

        Both sides equal ``e(g, h)`` raised to ``psi(s) * (s - x)`` and
        ``P(s) - y`` respectively, which agree when ``P(X) - y`` is divisible by
        ``X - x``.
        """
        params = self.parameters
        lhs = pair(witness.value, params.hs[0] / params.h ** x)
        rhs = pair(commitment.value / params.g ** y, params.h)
        result = lhs == rhs
        logging.debug("Evaluation proof at point %s verified: %s", x, result)
        return result


@TypeCheck()
def setup(s: (ZR, int), max_degree: int):
    """Derives parameters for polynomials of degree below ``max_degree`` from the
    trapdoor ``s``.

    ``s`` is toxic waste: anyone who knows it can open a commitment to any
    value. It is not kept anywhere in the returned parameters, so callers that
    produced it (e.g. a setup ceremony) are responsible for erasing it.
    """
    if max_degree < 1:
        raise ValueError(f"max_degree must be positive, got {max_degree}")
    s = ZR(s)
    if s == 0:
        raise ValueError("trapdoor must be nonzero")

    logging.info("Generating KZG parameters for max degree %d", max_degree)
    g = G1.generator()
    h = G2.generator()

    (gs, hs) = ([], [])
    curr = g
    for _ in range(max_degree):
        curr = (curr ** s).to_affine()
        gs.append(curr)
    curr = h
    for _ in range(max_degree):
        curr = (curr ** s).to_affine()
        hs.append(curr)

    return KZGParams(g, h, gs, hs)


@TypeCheck()
def insecure_setup(max_degree: int):
    """Runs ``setup`` with a trapdoor drawn from the system random source.

    The trapdoor only lives for the duration of this call, but the process
    that ran it is still a single trusted party. Do not use this where a
    multi-party or verifiable setup is required.
    """
    logging.warning(
        "Running single-party KZG setup; parameters are only as trustworthy "
        "as this process"
    )
    s = ZR.random()
    while s == 0:
        s = ZR.random()
    return setup(s, max_degree)


generate_trapdoor_and_setup = insecure_setup
