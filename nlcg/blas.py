"""Dense BLAS/LAPACK-style kernels on column-major numpy arrays.

The routines follow the conventions of their BLAS/LAPACK namesakes:
``gemm`` and ``geam`` combine matrices with optional (conjugate)
transposition, ``zheevd`` solves the Hermitian eigenvalue problem,
``potrf``/``potrs`` factor and solve Hermitian positive definite systems,
and ``getrf``/``getrs`` do the same for general systems via LU. Failures
raise ``numpy.linalg.LinAlgError`` (or ``ValueError`` for bad shapes)
instead of returning an info code.
"""

import enum

import numpy as np
import scipy.linalg


class Transpose(enum.Enum):
    """How a matrix operand is used: as is, transposed or conjugate-transposed."""

    N = "N"
    T = "T"
    C = "C"

    def apply(self, a):
        """Return ``op(a)`` for this transposition."""
        if self is Transpose.N:
            return a
        if self is Transpose.T:
            return a.T
        return a.conj().T


def _as_transpose(value):
    if isinstance(value, Transpose):
        return value
    try:
        return Transpose(value)
    except ValueError:
        raise ValueError(f"invalid transpose argument: {value!r}") from None


def _matrix(a, name):
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a matrix, got {arr.ndim} dimension(s)")
    return arr


def _square(a, name):
    arr = _matrix(a, name)
    if arr.shape[0] != arr.shape[1]:
        raise ValueError(f"{name} must be square, got shape {arr.shape}")
    return arr


def gemm(transa, transb, alpha, a, b, beta, c):
    """Compute ``c <- alpha * op(a) @ op(b) + beta * c`` in place and return ``c``.

    As in BLAS, ``c`` is not read when ``beta`` is zero.
    """
    opa = _as_transpose(transa).apply(_matrix(a, "a"))
    opb = _as_transpose(transb).apply(_matrix(b, "b"))
    if not isinstance(c, np.ndarray) or c.ndim != 2:
        raise ValueError("c must be a two-dimensional numpy array")
    m, k = opa.shape
    k2, n = opb.shape
    if k != k2:
        raise ValueError(f"inner dimensions differ: {opa.shape} and {opb.shape}")
    if c.shape != (m, n):
        raise ValueError(f"c has shape {c.shape}, expected {(m, n)}")
    result = alpha * (opa @ opb)
    if beta != 0:
        result = result + beta * c
    c[...] = result
    return c


def geam(alpha, a, beta, b, transa=Transpose.N, transb=Transpose.N):
    """Return ``alpha * op(a) + beta * op(b)`` as a new column-major matrix."""
    opa = _as_transpose(transa).apply(_matrix(a, "a"))
    opb = _as_transpose(transb).apply(_matrix(b, "b"))
    if opa.shape != opb.shape:
        raise ValueError(f"shapes differ: {opa.shape} and {opb.shape}")
    return np.asfortranarray(alpha * opa + beta * opb)


def zheevd(a):
    """Eigen-decompose a Hermitian matrix using its upper triangle.

    Returns ``(w, v)``: ascending eigenvalues and the eigenvectors as columns.
    """
    arr = _square(a, "a")
    w, v = scipy.linalg.eigh(arr, lower=False)
    return w, np.asfortranarray(v)


def potrf(a):
    """Upper Cholesky factor ``u`` with ``a = u^H @ u``.

    Raises numpy.linalg.LinAlgError when ``a`` is not positive definite.
    """
    arr = _square(a, "a")
    return np.asfortranarray(scipy.linalg.cholesky(arr, lower=False))


def potrs(factor, b):
    """Solve ``a @ x = b`` given the upper Cholesky ``factor`` of ``a``."""
    u = _square(factor, "factor")
    rhs = np.asarray(b)
    if rhs.shape[0] != u.shape[0]:
        raise ValueError(f"b has {rhs.shape[0]} rows, expected {u.shape[0]}")
    return np.asfortranarray(scipy.linalg.cho_solve((u, False), rhs))


def getrf(a):
    """LU factorisation with partial pivoting; returns ``(lu, piv)``.

    Raises numpy.linalg.LinAlgError when ``a`` is exactly singular.
    """
    arr = _square(a, "a")
    if arr.shape[0] and np.any(np.diag(scipy.linalg.lu_factor(arr)[0]) == 0):
        raise np.linalg.LinAlgError("matrix is singular")
    lu, piv = scipy.linalg.lu_factor(arr)
    return np.asfortranarray(lu), piv


def getrs(lu, piv, b):
    """Solve ``a @ x = b`` from the LU factorisation returned by :func:`getrf`."""
    lu_arr = _square(lu, "lu")
    rhs = np.asarray(b)
    if rhs.shape[0] != lu_arr.shape[0]:
        raise ValueError(f"b has {rhs.shape[0]} rows, expected {lu_arr.shape[0]}")
    return np.asfortranarray(scipy.linalg.lu_solve((lu_arr, np.asarray(piv)), rhs))