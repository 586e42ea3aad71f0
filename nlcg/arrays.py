"""Array helpers: strided views, allocation, and per-key maps over multi-vectors.

A multi-vector is a plain dictionary keyed by (k-point, spin) tuples whose
values are numpy arrays (or scalars). Matrices are column-major (Fortran
order), matching the layout the BLAS/LAPACK helpers expect.
"""

import enum
from collections.abc import Mapping

import numpy as np
from numpy.lib.stride_tricks import as_strided


class MemoryType(enum.Enum):
    """Where the data of a buffer lives."""

    NONE = "none"
    HOST = "host"
    DEVICE = "device"


def flatten(nested):
    """Concatenate a sequence of sequences into one list."""
    return [elem for inner in nested for elem in inner]


def linspace(begin, end, npoints):
    """Return ``npoints`` evenly spaced floats from ``begin`` to ``end`` inclusive."""
    if npoints < 0:
        raise ValueError("npoints must be non-negative")
    dx = (end - begin) / (npoints - 1) if npoints > 1 else 0.0
    return [begin + i * dx for i in range(npoints)]


def _order(x):
    return "F" if np.ndim(x) >= 2 else "C"


def empty_like(x):
    """Uninitialised array (or multi-vector of arrays) shaped like ``x``."""
    if isinstance(x, Mapping):
        return {key: empty_like(value) for key, value in x.items()}
    x = np.asarray(x)
    return np.empty_like(x, order=_order(x))


def zeros_like(x):
    """Zero array (or multi-vector of arrays) shaped like ``x``."""
    if isinstance(x, Mapping):
        return {key: zeros_like(value) for key, value in x.items()}
    x = np.asarray(x)
    return np.zeros_like(x, order=_order(x))


def copy(x):
    """Deep copy of an array (or multi-vector of arrays) in column-major layout."""
    if isinstance(x, Mapping):
        return {key: copy(value) for key, value in x.items()}
    out = empty_like(x)
    out[...] = x
    return out


def strided_view(buffer, sizes, strides):
    """View a flat ``buffer`` as an array of shape ``sizes`` with element ``strides``.

    The view shares memory with ``buffer``; writes go through to it. Raises
    ValueError when the view would reach outside the buffer.
    """
    flat = np.asarray(buffer)
    if flat.ndim != 1:
        raise ValueError("buffer must be one-dimensional")
    sizes = tuple(int(s) for s in sizes)
    strides = tuple(int(s) for s in strides)
    if len(sizes) != len(strides):
        raise ValueError("sizes and strides must have the same length")
    if any(s < 0 for s in sizes) or any(s < 0 for s in strides):
        raise ValueError("sizes and strides must be non-negative")
    if all(s > 0 for s in sizes):
        last = sum((size - 1) * stride for size, stride in zip(sizes, strides))
        if last >= flat.size:
            raise ValueError(
                f"strided view needs {last + 1} elements, buffer has {flat.size}"
            )
    itemsize = flat.itemsize
    byte_strides = tuple(s * itemsize * (flat.strides[0] // itemsize) for s in strides)
    return as_strided(flat, shape=sizes, strides=byte_strides)


def tapply(fun, arg0, *args):
    """Apply ``fun`` key by key: ``{k: fun(arg0[k], *(a[k] for a in args))}``.

    The keys are those of ``arg0``; a key missing from another argument
    raises KeyError.
    """
    return {key: fun(value, *(other[key] for other in args)) for key, value in arg0.items()}


def tapply_op(op, arg0, *args):
    """Apply a per-key operator: ``{k: op[k](arg0[k], *(a[k] for a in args))}``.

    ``op`` maps each key to a callable (for instance an overlap operator
    restricted to one k-point).
    """
    return {
        key: op[key](value, *(other[key] for other in args)) for key, value in arg0.items()
    }