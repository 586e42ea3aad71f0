"""Linear algebra on column-major matrices and on multi-vectors of them.

Matrices are two-dimensional numpy arrays (column-major where they are
allocated here). A multi-vector is a dictionary keyed by (k-point, spin)
tuples whose values are such matrices.
"""

import math
from collections.abc import Mapping

import numpy as np

from . import blas
from .arrays import zeros_like
from .blas import Transpose


def _matrix(a, name):
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a matrix, got {arr.ndim} dimension(s)")
    return arr


def _target(c, name):
    if not isinstance(c, np.ndarray) or c.ndim != 2:
        raise ValueError(f"{name} must be a two-dimensional numpy array")
    return c


def diag(x):
    """Return a copy of the main diagonal of the matrix ``x``."""
    return np.diag(_matrix(x, "x")).copy()


def make_diag(x):
    """Return a square column-major matrix with ``x`` on its diagonal."""
    vec = np.asarray(x)
    if vec.ndim != 1:
        raise ValueError("make_diag expects a one-dimensional array")
    return np.asfortranarray(np.diag(vec))


def scale(dst, src, x=None, alpha=1.0, beta=0.0):
    """Compute ``dst <- beta * dst + alpha * src * x`` in place and return ``dst``.

    ``x`` holds one factor per column of ``src``; when it is None the
    columns are not scaled. ``dst`` is not read when ``beta`` is zero.
    """
    dst = _target(dst, "dst")
    src = _matrix(src, "src")
    if dst.shape != src.shape:
        raise ValueError(f"dst has shape {dst.shape}, src has shape {src.shape}")
    result = alpha * src
    if x is not None:
        factors = np.asarray(x)
        if factors.shape != (src.shape[1],):
            raise ValueError(
                f"x must hold {src.shape[1]} column factors, got shape {factors.shape}"
            )
        result = result * factors[np.newaxis, :]
    if beta != 0:
        result = result + beta * dst
    dst[...] = result
    return dst


def scale_alloc(src, x, alpha=1.0):
    """Return ``alpha * src * x`` (columns scaled by ``x``) as a new matrix."""
    src = _matrix(src, "src")
    dtype = np.result_type(src, np.asarray(x), alpha)
    dst = np.empty(src.shape, dtype=dtype, order="F")
    return scale(dst, src, x, alpha, 0.0)


def add(dst, src, alpha, beta=1.0):
    """Compute ``dst <- beta * dst + alpha * src`` in place and return ``dst``."""
    dst = _target(dst, "dst")
    src = _matrix(src, "src")
    if dst.shape != src.shape:
        raise ValueError(f"dst has shape {dst.shape}, src has shape {src.shape}")
    if beta == 0:
        dst[...] = alpha * src
    else:
        dst[...] = dst * beta + alpha * src
    return dst


def inner(c, a, b, alpha=1.0, beta=0.0):
    """Compute ``c <- alpha * a^H @ b + beta * c`` in place and return ``c``."""
    return blas.gemm(Transpose.C, Transpose.N, alpha, a, b, beta, _target(c, "c"))


def inner_product(a, b, alpha=1.0, beta=0.0):
    """Return ``alpha * a^H @ b`` as a new column-major matrix."""
    a = _matrix(a, "a")
    b = _matrix(b, "b")
    dtype = np.result_type(a, b, alpha, beta)
    c = np.zeros((a.shape[1], b.shape[1]), dtype=dtype, order="F")
    return inner(c, a, b, alpha, beta)


def outer(c, a, b, alpha=1.0, beta=0.0):
    """Compute ``c <- alpha * a @ b^H + beta * c`` in place and return ``c``."""
    return blas.gemm(Transpose.N, Transpose.C, alpha, a, b, beta, _target(c, "c"))


def transform(c, beta, alpha, a, b):
    """Compute ``c <- beta * c + alpha * a @ b`` in place and return ``c``."""
    return blas.gemm(Transpose.N, Transpose.N, alpha, a, b, beta, _target(c, "c"))


def transform_alloc(a, b, alpha=1.0, beta=0.0):
    """Return ``alpha * a @ b`` as a new column-major matrix."""
    a = _matrix(a, "a")
    b = _matrix(b, "b")
    dtype = np.result_type(a, b, alpha, beta)
    c = np.zeros((a.shape[0], b.shape[1]), dtype=dtype, order="F")
    return transform(c, beta, alpha, a, b)


def eigh(s):
    """Eigen-decompose a Hermitian matrix; returns ``(w, u)`` with ascending ``w``."""
    return blas.zheevd(s)


def cholesky(a):
    """Return the upper Cholesky factor ``u`` of ``a`` (``a = u^H @ u``)."""
    return blas.potrf(a)


def solve_sym(a, rhs):
    """Solve ``a @ x = rhs`` for Hermitian positive definite ``a``."""
    return blas.potrs(blas.potrf(a), rhs)


def innerh_tr(x, y):
    """Return ``sum(x * conj(y))`` over all entries, i.e. tr(y^H @ x)."""
    x = np.asarray(x)
    y = np.asarray(y)
    if x.shape != y.shape:
        raise ValueError(f"shapes differ: {x.shape} and {y.shape}")
    return np.sum(x * np.conj(y))


def innerh_reduce(x, y):
    """Real part of the summed Hermitian inner product over two multi-vectors."""
    if not isinstance(x, Mapping) or not isinstance(y, Mapping):
        raise TypeError("innerh_reduce expects two multi-vectors")
    total = sum((innerh_tr(value, y[key]) for key, value in x.items()), 0.0)
    return float(np.real(total))


def l2norm(x):
    """Frobenius norm of a matrix or of a whole multi-vector."""
    if isinstance(x, Mapping):
        return math.sqrt(innerh_reduce(x, x))
    return math.sqrt(float(np.real(innerh_tr(x, x))))


def loewdin(x, sx=None):
    """Loewdin orthogonalisation of the columns of ``x``.

    Returns ``y = x @ M^(-1/2)`` with ``M = x^H @ sx``; ``sx`` is the
    overlap operator applied to ``x`` and defaults to ``x`` itself.
    """
    x = _matrix(x, "x")
    sx = x if sx is None else _matrix(sx, "sx")
    m = inner_product(x, sx)
    w, u = eigh(m)
    if np.any(w <= 0):
        raise np.linalg.LinAlgError("overlap matrix is not positive definite")
    scaled = scale_alloc(u, 1.0 / np.sqrt(w), 1.0)
    r = zeros_like(u).astype(np.result_type(scaled, u), order="F")
    outer(r, scaled, u)
    return transform_alloc(x, r)