"""Diagonal (kinetic energy) preconditioners."""

from collections.abc import Mapping

import numpy as np


def teter_diagonal(ekin):
    """Teter-Payne-Allan preconditioner entries for kinetic energies ``ekin``.

    Each entry is ``1 / (1 + 16 T^4 / (27 + 18 T + 12 T^2 + 8 T^3))``.
    """
    t = np.asarray(ekin, dtype=float)
    t2 = t * t
    t3 = t2 * t
    t4 = t2 * t2
    tp = 16 * t4 / (27 + 18 * t + 12 * t2 + 8 * t3)
    return 1 / (1 + tp)


class DiagonalPreconditioner:
    """Scales each row of a matrix by one entry of a diagonal."""

    def __init__(self, entries):
        self.entries = np.asarray(entries, dtype=float)
        if self.entries.ndim != 1:
            raise ValueError("entries must be one-dimensional")

    def _check(self, x):
        if x.ndim != 2 or x.shape[0] != self.entries.shape[0]:
            raise ValueError(
                f"expected a matrix with {self.entries.shape[0]} rows, got shape {x.shape}"
            )

    def __call__(self, x):
        """Return a new matrix with row i of ``x`` scaled by entry i."""
        x = np.asarray(x)
        self._check(x)
        return np.asfortranarray(self.entries[:, np.newaxis] * x)

    def apply_in_place(self, x):
        """Scale the rows of the numpy array ``x`` in place."""
        self._check(x)
        x *= self.entries[:, np.newaxis]


class PreconditionerTeter(Mapping):
    """Teter preconditioner per (k-point, spin) key.

    ``ekin`` maps each key to the kinetic energies of its plane waves.
    Indexing with a key gives the DiagonalPreconditioner for that key.
    """

    def __init__(self, ekin):
        self._diagonals = {key: teter_diagonal(values) for key, values in ekin.items()}

    def __getitem__(self, key):
        return DiagonalPreconditioner(self._diagonals[key])

    def __iter__(self):
        return iter(self._diagonals)

    def __len__(self):
        return len(self._diagonals)