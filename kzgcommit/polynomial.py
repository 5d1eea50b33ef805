import logging

from .exceptions import PolynomialCapacityError
from .utils.typecheck import TypeCheck


def degree_of(coeffs):
    """Index of the highest nonzero coefficient, 0 for the zero polynomial."""
    for i in range(len(coeffs) - 1, 0, -1):
        if coeffs[i] != 0:
            return i
    return 0


_poly_cache = {}


@TypeCheck()
def polynomials_over(field, capacity: int):
    """Returns the polynomial class over ``field`` holding at most ``capacity``
    coefficients, i.e. polynomials of degree at most ``capacity - 1``.

    Every instance stores exactly ``capacity`` coefficients with the constant
    term first; anything above ``degree`` is zero. The capacity is checked when
    a polynomial is built, coefficients are never silently dropped.
    """
    if capacity <= 0:
        raise ValueError(f"capacity must be positive, got {capacity}")
    if (field, capacity) in _poly_cache:
        return _poly_cache[(field, capacity)]

    logging.debug("Creating polynomials over %s with capacity %d", field, capacity)

    class Polynomial(object):
        def __init__(self, coeffs, degree=None):
            coeffs = list(coeffs)
            if len(coeffs) > capacity:
                raise PolynomialCapacityError(
                    f"{len(coeffs)} coefficients do not fit in capacity {capacity}"
                )
            self.coeffs = [c if type(c) is field else field(c) for c in coeffs]
            self.coeffs += [field(0) for _ in range(capacity - len(coeffs))]
            if degree is None:
                degree = degree_of(self.coeffs)
            elif not 0 <= degree < capacity:
                raise PolynomialCapacityError(
                    f"degree {degree} is outside capacity {capacity}"
                )
            self.degree = degree
            self.field = field

        @classmethod
        def new_from_coeffs(cls, coeffs, degree):
            # Caller guarantees coeffs[degree + 1:] are zero
            return cls(coeffs, degree)

        @classmethod
        def zero(cls):
            return cls([])

        @classmethod
        def random(cls, degree, y0=None):
            if degree >= capacity:
                raise PolynomialCapacityError(
                    f"degree {degree} is outside capacity {capacity}"
                )
            coeffs = [field.random() for _ in range(degree + 1)]
            while degree > 0 and coeffs[degree] == 0:
                coeffs[degree] = field.random()
            if y0 is not None:
                coeffs[0] = y0
            return cls(coeffs, degree)

        def copy(self):
            return Polynomial.new_from_coeffs(list(self.coeffs), self.degree)

        def is_zero(self):
            return not any(self.coeffs)

        def leading_coefficient(self):
            return self.coeffs[degree_of(self.coeffs)]

        def subtract_constant(self, value):
            """Subtracts ``value`` from the constant term in place."""
            self.coeffs[0] = self.coeffs[0] - value

        def __repr__(self):
            if self.is_zero():
                return "0"
            return " + ".join(
                ["%s x^%d" % (a, i) if i > 0 else "%s" % a
                 for i, a in enumerate(self.coeffs[:self.degree + 1])]
            )

        def __call__(self, x):
            # Horner's rule
            y = field(0)
            for coeff in reversed(self.coeffs[:self.degree + 1]):
                y = y * x + coeff
            return y

        def __iter__(self):
            return iter(self.coeffs)

        def __len__(self):
            return len(self.coeffs)

        def _padded_pairs(self, other):
            size = max(len(self), len(other))
            pad = [field(0)]
            return zip(
                self.coeffs + pad * (size - len(self)),
                other.coeffs + pad * (size - len(other)),
            )

        def _from_sum(self, coeffs):
            # Drop zero padding so only a real overflow trips the capacity check
            return Polynomial(coeffs[:degree_of(coeffs) + 1])

        def __eq__(self, other):
            if getattr(other, "field", None) is not field:
                return NotImplemented
            return all(a == b for a, b in self._padded_pairs(other))

        def __neg__(self):
            return Polynomial([-a for a in self])

        def __add__(self, other):
            return self._from_sum([a + b for a, b in self._padded_pairs(other)])

        def __sub__(self, other):
            return self._from_sum([a - b for a, b in self._padded_pairs(other)])

        def __mul__(self, other):
            if self.is_zero() or other.is_zero():
                return Polynomial.zero()

            self_deg, other_deg = degree_of(self.coeffs), degree_of(other.coeffs)
            if self_deg + other_deg >= capacity:
                raise PolynomialCapacityError(
                    f"product of degree {self_deg + other_deg} "
                    f"does not fit in capacity {capacity}"
                )

            new_coeffs = [field(0) for _ in range(self_deg + other_deg + 1)]
            for i, a in enumerate(self.coeffs[:self_deg + 1]):
                for j, b in enumerate(other.coeffs[:other_deg + 1]):
                    new_coeffs[i + j] += a * b
            return Polynomial(new_coeffs)

        def long_division(self, divisor):
            """Schoolbook division of ``self`` by ``divisor``.

            Returns ``(quotient, remainder)`` with
            ``self == quotient * divisor + remainder``. ``remainder`` is
            ``None`` exactly when the division is exact; no meaning is attached
            to a nonzero remainder here.
            """
            if divisor.is_zero():
                raise ZeroDivisionError("polynomial division by zero")

            divisor_deg = degree_of(divisor.coeffs)
            divisor_lc = divisor.coeffs[divisor_deg]

            quotient = [field(0) for _ in range(capacity)]
            remainder = list(self.coeffs)
            remainder_deg = degree_of(remainder)

            while any(remainder) and remainder_deg >= divisor_deg:
                shift = remainder_deg - divisor_deg
                factor = remainder[remainder_deg] / divisor_lc
                quotient[shift] = factor
                for i in range(divisor_deg + 1):
                    remainder[shift + i] -= factor * divisor.coeffs[i]
                remainder_deg = degree_of(remainder)

            if not any(remainder):
                return Polynomial(quotient), None
            return Polynomial(quotient), Polynomial(remainder)

        def __divmod__(self, divisor):
            quotient, remainder = self.long_division(divisor)
            if remainder is None:
                remainder = Polynomial.zero()
            return quotient, remainder

        def __truediv__(self, divisor):
            return divmod(self, divisor)[0]

        def __mod__(self, divisor):
            return divmod(self, divisor)[1]

    Polynomial.field = field
    Polynomial.capacity = capacity

    _poly_cache[(field, capacity)] = Polynomial
    return Polynomial
