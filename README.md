# nlcg

`nlcg` holds building blocks for minimising the Kohn-Sham free energy of a
system with fractional occupations. It covers the smearing functions, dense
linear algebra on column-major matrices, and a kinetic-energy
preconditioner. Everything is built on numpy and scipy.

## Modules

- `nlcg.smearing_functions`: the occupation (`fn`), `delta`, `dxdelta` and
  `entropy` functions for five kinds of smearing. These are Fermi-Dirac
  (`FermiDirac`), Gaussian-spline (`GaussianSpline`), Gauss (`GaussSmearing`),
  cold (`ColdSmearing`) and first-order Methfessel-Paxton (`MethfesselPaxton`).
  Each function takes the scaled argument `x = (mu - e) / kT` and the maximal
  occupancy `mo`. The class methods `sum_fn`, `sum_delta`, `sum_dxdelta` and
  `sum_entropy` sum a function over a list of band energies at a given chemical
  potential and temperature in Kelvin. `kernel_for(SmearingType.X)` returns the
  class for a `SmearingType`. It raises `ValueError` for anything else.
  The module also defines the constants `KB` (the Boltzmann constant in
  Hartree/K) and `PI`.
- `nlcg.arrays`: helpers for multi-vectors, which are dictionaries keyed by
  `(k-point, spin)` tuples.
  - `tapply(fun, arg0, *args)` and `tapply_op(op, arg0, *args)` map a function
    or a per-key operator over the keys.
  - `empty_like`, `zeros_like` and `copy` allocate arrays or multi-vectors in
    column-major order.
  - `strided_view(buffer, sizes, strides)` views a flat buffer with element
    strides.
  - The module also has `flatten`, `linspace` and the `MemoryType` enum.
- `nlcg.blas`: BLAS/LAPACK-style kernels. These are `gemm`, `geam`
  (`Transpose.N`, `.T`, `.C`), `zheevd` (Hermitian eigenproblem), `potrf` and
  `potrs` (Cholesky factor and solve), and `getrf` and `getrs` (LU factor and
  solve). They return results and raise `numpy.linalg.LinAlgError` or
  `ValueError` instead of returning info codes.
- `nlcg.linalg`: higher-level operations.
  - `inner` / `inner_product` compute `a^H @ b`, `outer` computes
    `a @ b^H`, and `transform` / `transform_alloc` compute `a @ b`.
  - `scale` and `scale_alloc` scale matrices, with optional column factors.
    `add` combines two matrices.
  - `diag` and `make_diag` extract or build a diagonal.
  - `eigh`, `cholesky` and `solve_sym` decompose matrices and solve
    systems.
  - `innerh_tr`, `innerh_reduce` and `l2norm` are trace inner products and
    norms over matrices and multi-vectors.
  - `loewdin(x, sx=None)` performs Löwdin orthogonalisation, optionally with
    an applied overlap `sx`.
- `nlcg.preconditioner`: `teter_diagonal(ekin)` gives the Teter-Payne-Allan
  diagonal for kinetic energies. `DiagonalPreconditioner` scales the rows of a
  matrix, either into a new matrix or in place with `apply_in_place`.
  `PreconditionerTeter` is a read-only mapping from each key to the
  `DiagonalPreconditioner` for that key.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np
from nlcg.smearing_functions import SmearingType, kernel_for
from nlcg.linalg import inner_product, loewdin
from nlcg.preconditioner import PreconditionerTeter

# Number of electrons in 20 bands at mu = 0 Ha, T = 50000 K, mo = 1.
kernel = kernel_for(SmearingType.FERMI_DIRAC)
ek = np.linspace(-1.0, 1.0, 20)
n_electrons = kernel.sum_fn(ek, 0.0, 50000, 1.0)

# Orthonormalise the columns of a random complex matrix.
rng = np.random.default_rng(0)
x = rng.random((200, 20)) + 1j * rng.random((200, 20))
y = loewdin(x)
overlap = inner_product(y, y)          # close to the identity

# Precondition a block of coefficients for one k-point.
precond = PreconditionerTeter({(0, 0): np.linspace(0.0, 10.0, 200)})
px = precond[(0, 0)](x)
```

## What the package does not do

The package has no chemical-potential search that turns band energies into
occupations. It has no free-energy object that wraps an energy backend, no
line search, and no conjugate-gradient driver that ties these pieces into a
minimisation. There is no command-line program either. The package supplies
the kernels and linear algebra that such a minimiser is built from. It has
no minimiser itself.