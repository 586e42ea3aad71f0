"""Occupation (smearing) functions and their derivatives."""

import enum
import math

PI = 3.1415926535897932385
# Boltzmann constant in Hartree per Kelvin.
KB = 0.00000316681156340226

_SQRT2 = math.sqrt(2.0)
_SQRTPI = math.sqrt(PI)


class SmearingType(enum.Enum):
    FERMI_DIRAC = "fermi_dirac"
    GAUSSIAN_SPLINE = "gaussian_spline"
    GAUSS = "gauss"
    METHFESSEL_PAXTON = "methfessel_paxton"
    COLD = "cold"


class SmearingKernel:
    """Sums of a smearing's functions over band energies.

    Subclasses define the static methods ``fn``, ``delta``, ``dxdelta`` and
    ``entropy`` of the scaled argument x = (mu - e) / kT and the maximal
    occupancy ``mo``.
    """

    non_monotonous = False

    @classmethod
    def _sum(cls, func, ek, mu, T, mo):
        kT = KB * T
        return sum(func(-1.0 * (float(e) - mu) / kT, mo) for e in ek)

    @classmethod
    def sum_fn(cls, ek, mu, T, mo):
        return cls._sum(cls.fn, ek, mu, T, mo)

    @classmethod
    def sum_delta(cls, ek, mu, T, mo):
        return cls._sum(cls.delta, ek, mu, T, mo)

    @classmethod
    def sum_dxdelta(cls, ek, mu, T, mo):
        return cls._sum(cls.dxdelta, ek, mu, T, mo)

    @classmethod
    def sum_entropy(cls, ek, mu, T, mo):
        return cls._sum(cls.entropy, ek, mu, T, mo)


class FermiDirac(SmearingKernel):
    """Fermi-Dirac smearing."""

    @staticmethod
    def fn(x, mo):
        if x < -35:
            return 0.0
        if x > 40:
            return mo
        return mo - mo / (1 + math.exp(x))

    @staticmethod
    def delta(x, mo):
        if abs(x) > 35:
            return 0.0
        denom = math.exp(-x / 2) + math.exp(x / 2)
        return mo / (denom * denom)

    @staticmethod
    def dxdelta(x, mo):
        if abs(x) > 40:
            return 0.0
        expx = math.exp(x)
        return -mo * (expx * (expx - 1)) / (1 + expx) ** 3

    @staticmethod
    def entropy(x, mo):
        if abs(x) > 40:
            return 0.0
        expx = math.exp(x)
        return mo * (math.log(1 + expx) - expx * x / (1 + expx))


class GaussianSpline(SmearingKernel):
    """Gaussian-spline smearing."""

    @staticmethod
    def fn(x, mo):
        if x > 8:
            return mo
        if x < -8:
            return 0.0
        if x <= 0:
            return mo / 2 * math.exp(x * (_SQRT2 - x))
        return mo * (1 - 0.5 * math.exp(-x * (_SQRT2 + x)))

    @staticmethod
    def delta(x, mo):
        if abs(x) > 7:
            return 0.0
        if x <= 0:
            return mo * 0.5 * math.exp((_SQRT2 - x) * x) * (_SQRT2 - 2 * x)
        return mo * 0.5 * math.exp(-x * (_SQRT2 + x)) * (_SQRT2 + 2 * x)

    @staticmethod
    def entropy(x, mo):
        if abs(x) > 7:
            return 0.0
        sqrte = math.exp(0.5)
        if x > 0:
            return 0.25 * (
                2 * math.exp(-x * (_SQRT2 + x)) * x
                + sqrte * _SQRTPI * math.erfc(1 / _SQRT2 + x)
            )
        return 0.25 * (
            -2 * math.exp(x * (_SQRT2 - x)) * x
            + sqrte * _SQRTPI * math.erfc(1 / _SQRT2 - x)
        )

    @staticmethod
    def dxdelta(x, mo):
        if x > 8 or x < -8:
            return 0.0
        if x <= 0:
            return -2 * mo * math.exp((_SQRT2 - x) * x) * (_SQRT2 - x)
        return -2 * mo * math.exp(-x * (_SQRT2 + x)) * x * (_SQRT2 + x)


class ColdSmearing(SmearingKernel):
    """Cold (Marzari-Vanderbilt) smearing."""

    non_monotonous = True

    @staticmethod
    def fn(x, mo):
        if x > 8:
            return mo
        if x < -8:
            return 0.0
        return mo * (
            math.exp(-0.5 + (_SQRT2 - x) * x) * _SQRT2 / _SQRTPI
            + 0.5 * math.erfc(1 / _SQRT2 - x)
        )

    @staticmethod
    def delta(x, mo):
        if x < -8 or x > 10:
            return 0.0
        z = x - 1 / _SQRT2
        return mo * math.exp(-z * z) * (2 - _SQRT2 * x) / _SQRTPI

    @staticmethod
    def dxdelta(x, mo):
        if x < -8 or x > 10:
            return 0.0
        return (
            mo
            * math.exp(-0.5 + _SQRT2 * x - x * x)
            * (_SQRT2 - 6 * x + 2 * _SQRT2 * x * x)
            / _SQRTPI
        )

    @staticmethod
    def entropy(x, mo):
        if x < -8 or x > 10:
            return 0.0
        return mo * math.exp(-0.5 + (_SQRT2 - x) * x) * (1 - _SQRT2 * x) / 2 / _SQRTPI


class MethfesselPaxton(SmearingKernel):
    """First order Methfessel-Paxton smearing."""

    non_monotonous = True

    @staticmethod
    def fn(x, mo):
        return mo / 2 * (1 + math.exp(-x * x) * x / _SQRTPI + math.erf(x))

    @staticmethod
    def delta(x, mo):
        x2 = x * x
        return mo * math.exp(-x2) * (1 + 0.25 * (2 - 4 * x2)) / _SQRTPI

    @staticmethod
    def dxdelta(x, mo):
        return mo * math.exp(-x * x) * (2 * x * x - 5) / _SQRTPI

    @staticmethod
    def entropy(x, mo):
        x2 = x * x
        return mo * math.exp(-x2) * (1 - 2 * x2) / 4 / _SQRTPI


class GaussSmearing(SmearingKernel):
    """Gaussian smearing."""

    @staticmethod
    def fn(x, mo):
        return mo / 2 * (1 + math.erf(x))

    @staticmethod
    def delta(x, mo):
        return mo * math.exp(-x * x) / _SQRTPI

    @staticmethod
    def entropy(x, mo):
        return mo / 2 * math.exp(-x * x) / _SQRTPI

    @staticmethod
    def dxdelta(x, mo):
        return -2 * mo * math.exp(-x * x) * x / _SQRTPI


_KERNELS = {
    SmearingType.FERMI_DIRAC: FermiDirac,
    SmearingType.GAUSSIAN_SPLINE: GaussianSpline,
    SmearingType.GAUSS: GaussSmearing,
    SmearingType.METHFESSEL_PAXTON: MethfesselPaxton,
    SmearingType.COLD: ColdSmearing,
}


def kernel_for(smearing_type):
    """Return the kernel class for a SmearingType."""
    try:
        return _KERNELS[smearing_type]
    except (KeyError, TypeError):
        raise ValueError(f"invalid smearing given: {smearing_type!r}") from None