import numpy as np
import pytest

from nlcg.linalg import (
    add,
    cholesky,
    diag,
    eigh,
    inner,
    inner_product,
    innerh_reduce,
    innerh_tr,
    l2norm,
    loewdin,
    make_diag,
    outer,
    scale,
    scale_alloc,
    solve_sym,
    transform,
    transform_alloc,
)

C_REF = [
    8555, 21605, 34655, 47705, 60755,
    21605, 61655, 101705, 141755, 181805,
    34655, 101705, 168755, 235805, 302855,
    47705, 141755, 235805, 329855, 423905,
    60755, 181805, 302855, 423905, 544955,
]


@pytest.fixture
def ab():
    m, n = 30, 5
    a = np.zeros((m, n), order="F")
    for j in range(n):
        for i in range(m):
            a[i, j] = j * m + i
    return a, a.copy(order="F")


def _random_complex(rows, cols, seed=0):
    rng = np.random.default_rng(seed)
    return np.asfortranarray(rng.uniform(0, 1, (rows, cols)).astype(complex))


def test_inner_product_cpu(ab):
    a, b = ab
    c = np.zeros((5, 5), order="F")
    inner(c, a, b)
    expected = np.array(C_REF, dtype=float).reshape(5, 5)
    np.testing.assert_allclose(c, expected, rtol=0, atol=1e-10)


def test_inner_product_alloc(ab):
    a, b = ab
    c = inner_product(a, b)
    assert c.shape == (5, 5)
    assert c[0, 0] == 8555
    assert c[4, 4] == 544955


def test_transform_identity_cpu(ab):
    a, _ = ab
    u = np.eye(5, order="F")
    c = np.zeros((30, 5), order="F")
    transform(c, 0.0, 1.0, a, u)
    np.testing.assert_allclose(c, a)


def test_transform_alloc_matches_matmul():
    a = _random_complex(7, 3, seed=1)
    b = _random_complex(3, 4, seed=2)
    c = transform_alloc(a, b, 2.0)
    np.testing.assert_allclose(c, 2.0 * (a @ b))


def test_transform_accumulates_with_beta():
    a = np.eye(2, order="F")
    b = np.full((2, 2), 3.0, order="F")
    c = np.ones((2, 2), order="F")
    transform(c, 2.0, 1.0, a, b)
    np.testing.assert_allclose(c, np.full((2, 2), 5.0))


def test_eig_hermitian():
    n = 5
    a = np.zeros((n, n), dtype=complex, order="F")
    for i in range(n):
        for j in range(n):
            if i == j:
                a[i, j] = 1
            elif abs(i - j) == 1:
                a[i, j] = -2
    w, v = eigh(a)
    eigs = [-2.46410162, -1.0, 1.0, 3.0, 4.46410162]
    np.testing.assert_allclose(w, eigs, atol=1e-8)
    np.testing.assert_allclose(a @ v, v * w[np.newaxis, :], atol=1e-10)


def test_solve_sym_recovers_identity():
    x = _random_complex(200, 20)
    h = inner_product(x, x)
    s = h.copy(order="F")
    sol = solve_sym(h, s)
    np.testing.assert_allclose(sol.real, np.eye(20), atol=1e-8)
    np.testing.assert_allclose(sol.imag, np.zeros((20, 20)), atol=1e-8)


def test_cholesky_reconstructs():
    x = _random_complex(50, 6, seed=3)
    h = inner_product(x, x)
    u = cholesky(h)
    np.testing.assert_allclose(np.triu(u), u)
    np.testing.assert_allclose(u.conj().T @ u, h, atol=1e-9)


def test_cholesky_rejects_indefinite():
    with pytest.raises(np.linalg.LinAlgError):
        cholesky(np.array([[1.0, 2.0], [2.0, 1.0]]))


def test_loewdin_orthonormal():
    x = _random_complex(400, 40, seed=0)
    y = loewdin(x)
    np.testing.assert_allclose(inner_product(y, y), np.eye(40), atol=1e-8)


def test_loewdin_with_overlap():
    x = _random_complex(30, 4, seed=5)
    s = np.diag(np.linspace(1.0, 2.0, 30))
    y = loewdin(x, s @ x)
    np.testing.assert_allclose(inner_product(y, s @ y), np.eye(4), atol=1e-9)


def test_diag_make_diag_round_trip():
    v = np.array([1.0, -2.0, 3.5])
    m = make_diag(v)
    assert m.flags.f_contiguous
    np.testing.assert_array_equal(diag(m), v)
    np.testing.assert_array_equal(m - np.diag(np.diag(m)), np.zeros((3, 3)))


def test_diag_of_rectangular():
    m = np.arange(6.0).reshape(2, 3)
    np.testing.assert_array_equal(diag(m), [0.0, 4.0])


def test_scale_columns():
    src = np.ones((3, 2), order="F")
    dst = np.empty((3, 2), order="F")
    out = scale(dst, src, np.array([2.0, 3.0]), 0.5)
    assert out is dst
    np.testing.assert_allclose(dst, [[1.0, 1.5]] * 3)


def test_scale_with_beta_and_scalar_only():
    src = np.ones((2, 2), order="F")
    dst = np.full((2, 2), 4.0, order="F")
    scale(dst, src, None, 2.0, 0.5)
    np.testing.assert_allclose(dst, np.full((2, 2), 4.0))


def test_scale_alloc_leaves_source():
    src = np.arange(4.0).reshape(2, 2)
    out = scale_alloc(src, np.array([1.0, -1.0]))
    np.testing.assert_allclose(out, src * np.array([1.0, -1.0]))
    np.testing.assert_allclose(src, np.arange(4.0).reshape(2, 2))


def test_scale_rejects_bad_factors():
    with pytest.raises(ValueError):
        scale(np.zeros((2, 2)), np.ones((2, 2)), np.ones(3), 1.0)


def test_add():
    dst = np.ones((2, 2), order="F")
    src = np.full((2, 2), 2.0)
    add(dst, src, -1.0, 3.0)
    np.testing.assert_allclose(dst, np.ones((2, 2)))
    add(dst, src, 1.0, 0.0)
    np.testing.assert_allclose(dst, src)


def test_add_shape_mismatch():
    with pytest.raises(ValueError):
        add(np.zeros((2, 2)), np.zeros((3, 2)), 1.0)


def test_outer_is_a_bh():
    a = _random_complex(4, 2, seed=7)
    b = _random_complex(3, 2, seed=8)
    c = np.zeros((4, 3), dtype=complex, order="F")
    outer(c, a, b)
    np.testing.assert_allclose(c, a @ b.conj().T)


def test_innerh_tr_conjugates_second():
    x = np.array([[1j, 2.0]])
    y = np.array([[1j, 1.0]])
    assert innerh_tr(x, y) == pytest.approx(3.0)
    assert innerh_tr(y, x) == pytest.approx(np.conj(innerh_tr(x, y)))


def test_l2norm_and_reduce_on_multivector():
    x = {(0, 0): _random_complex(5, 2, seed=1), (1, 0): _random_complex(5, 2, seed=2)}
    expected = np.sqrt(sum(np.linalg.norm(v) ** 2 for v in x.values()))
    assert l2norm(x) == pytest.approx(expected)
    assert innerh_reduce(x, x) == pytest.approx(expected**2)
    assert l2norm(x[(0, 0)]) == pytest.approx(np.linalg.norm(x[(0, 0)]))