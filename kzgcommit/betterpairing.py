import random

from gmpy2 import invert, mpz, powmod
from py_ecc import optimized_bls12_381 as bls12_381

# Order of BLS group
bls12_381_r = 52435875175126190479447740508185965837690552500527637822603658699938581184513  # (# noqa: E501)

assert bls12_381_r == bls12_381.curve_order

_mpz_type = type(mpz(0))


def pair(g1, g2):
    assert type(g1) is G1 and type(g2) is G2
    return GT(bls12_381.pairing(g2.point, g1.point))


def _coords(value):
    # FQ exposes ``n``, FQ2 exposes ``coeffs``
    if hasattr(value, "coeffs"):
        return tuple(int(c) for c in value.coeffs)
    return int(value.n)


class _CurvePoint(object):
    """Common base for G1 and G2.

    The group is written multiplicatively: ``a * b`` is the group operation,
    ``a / b`` multiplies by the inverse and ``a ** k`` is scalar
    multiplication. Points are kept in py_ecc's projective form so that
    repeated additions skip field inversions; ``to_affine`` produces the
    canonical form used for storage and structural comparison.
    """

    _identity = None
    _generator = None
    _b = None

    def __init__(self, other=None):
        if other is None:
            self.point = self._identity
        elif type(other) is tuple and len(other) == 3:
            if not bls12_381.is_on_curve(other, self._b):
                raise ValueError(f"point is not on the {type(self).__name__} curve")
            self.point = other
        elif type(other) is tuple and len(other) == 2:
            x, y = other
            self.__init__((x, y, type(x).one()))
        else:
            raise TypeError(str(type(other)))

    def __str__(self):
        if self.is_identity():
            return "(infinity)"
        x, y = bls12_381.normalize(self.point)
        return "(" + str(_coords(x)) + ", " + str(_coords(y)) + ")"

    def __repr__(self):
        return str(self)

    def __mul__(self, other):
        if type(other) is type(self):
            return type(self)(bls12_381.add(self.point, other.point))
        raise TypeError(
            f"Invalid multiplication param. Expected {type(self).__name__}. "
            f"Got {type(other)}"
        )

    def __truediv__(self, other):
        if type(other) is type(self):
            return type(self)(
                bls12_381.add(self.point, bls12_381.neg(other.point))
            )
        raise TypeError(
            f"Invalid division param. Expected {type(self).__name__}. "
            f"Got {type(other)}"
        )

    def __pow__(self, other):
        if type(other) is ZR:
            exponend = int(other)
        elif isinstance(other, int):
            exponend = other % bls12_381_r
        else:
            raise TypeError(
                "Invalid exponentiation param. Expected ZR or int. Got "
                + str(type(other))
            )
        return type(self)(bls12_381.multiply(self.point, exponend))

    def __eq__(self, other):
        if type(other) is not type(self):
            return False
        return bls12_381.eq(self.point, other.point)

    def __hash__(self):
        affine = self.to_affine()
        if affine.is_identity():
            return hash((type(self).__name__, None))
        x, y, _ = affine.point
        return hash((type(self).__name__, _coords(x), _coords(y)))

    def is_identity(self):
        return bls12_381.is_inf(self.point)

    def to_affine(self):
        if self.is_identity():
            return type(self)(self._identity)
        x, y = bls12_381.normalize(self.point)
        return type(self)((x, y, type(x).one()))

    def duplicate(self):
        return type(self)(self.point)

    @classmethod
    def one(cls):
        return cls(cls._identity)

    @classmethod
    def generator(cls):
        return cls(cls._generator)

    @classmethod
    def rand(cls, seed=None):
        return cls.generator() ** ZR.random(seed)


class G1(_CurvePoint):
    _identity = bls12_381.Z1
    _generator = bls12_381.G1
    _b = bls12_381.b

    def pair_with(self, other):
        return pair(self, other)


class G2(_CurvePoint):
    _identity = bls12_381.Z2
    _generator = bls12_381.G2
    _b = bls12_381.b2


class GT:
    def __init__(self, other=None):
        if other is None:
            self.fq12 = bls12_381.FQ12.one()
        elif isinstance(other, bls12_381.FQ12):
            self.fq12 = other
        else:
            raise TypeError(str(type(other)))

    def __str__(self):
        return str(self.fq12)

    def __repr__(self):
        return str(self)

    def __pow__(self, other):
        if type(other) is ZR:
            exponend = int(other)
        elif isinstance(other, int):
            exponend = other % bls12_381_r
        else:
            raise TypeError(
                "Invalid exponentiation param. Expected ZR or int. Got "
                + str(type(other))
            )
        return GT(self.fq12 ** exponend)

    def __mul__(self, other):
        if type(other) is GT:
            return GT(self.fq12 * other.fq12)
        raise TypeError(
            "Invalid multiplication param. Expected GT. Got " + str(type(other))
        )

    def __truediv__(self, other):
        if type(other) is GT:
            return GT(self.fq12 / other.fq12)
        raise TypeError("Invalid division param. Expected GT. Got " + str(type(other)))

    def __eq__(self, other):
        if type(other) is not GT:
            return False
        return self.fq12 == other.fq12

    def __hash__(self):
        return hash(tuple(int(c) for c in self.fq12.coeffs))

    @staticmethod
    def one():
        return GT()


class ZR:
    """Element of the BLS12-381 scalar field, backed by a gmpy2 ``mpz``."""

    modulus = bls12_381_r

    def __init__(self, val=None):
        if val is None:
            self.val = mpz(0)
        elif type(val) is ZR:
            self.val = val.val
        elif isinstance(val, (int, _mpz_type)):
            self.val = mpz(val) % bls12_381_r
        elif type(val) is str:
            if val[0:2] == "0x":
                intval = int(val, 0)
            else:
                intval = int(val)
            self.val = mpz(intval) % bls12_381_r
        else:
            raise TypeError(
                "Invalid ZR param. Expected ZR, int or str. Got " + str(type(val))
            )

    def __str__(self):
        return str(int(self.val))

    def __repr__(self):
        return str(self)

    def __int__(self):
        return int(self.val)

    def __bool__(self):
        return self.val != 0

    def _coerce(self, other, op):
        if type(other) is ZR:
            return other.val
        if isinstance(other, int):
            return mpz(other)
        raise TypeError(
            f"Invalid {op} param. Expected ZR or int. Got " + str(type(other))
        )

    def __add__(self, other):
        return ZR(self.val + self._coerce(other, "addition"))

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return ZR(self.val - self._coerce(other, "subtraction"))

    def __rsub__(self, other):
        return ZR(self._coerce(other, "subtraction") - self.val)

    def __mul__(self, other):
        return ZR(self.val * self._coerce(other, "multiplication"))

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        divisor = self._coerce(other, "division") % bls12_381_r
        if divisor == 0:
            raise ZeroDivisionError("Cannot invert zero")
        return ZR(self.val * invert(divisor, bls12_381_r))

    def __rtruediv__(self, other):
        return ZR(other).__truediv__(self)

    def __pow__(self, other):
        if isinstance(other, int):
            # Fermat: exponents live modulo r - 1, which also maps negatives
            return ZR(powmod(self.val, other % (bls12_381_r - 1), bls12_381_r))
        elif type(other) is ZR:
            raise TypeError(
                "Invalid exponentiation param. Expected int. Got ZR. This is not a bug"
            )
        else:
            raise TypeError(
                "Invalid exponentiation param. Expected int. Got " + str(type(other))
            )

    def __neg__(self):
        return ZR(-self.val)

    def __eq__(self, other):
        if isinstance(other, int):
            other = ZR(other)
        if type(other) is not ZR:
            return False
        return self.val == other.val

    def __hash__(self):
        return hash(int(self.val))

    @staticmethod
    def random(seed=None):
        r = bls12_381_r
        if seed is None:
            return ZR(random.SystemRandom().randint(0, r - 1))
        # Generate pseudorandomly based on seed
        return ZR(random.Random(seed).randint(0, r - 1))

    @staticmethod
    def zero():
        return ZR(0)

    @staticmethod
    def one():
        return ZR(1)
