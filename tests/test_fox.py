import numpy as np
import pytest

from foxgrid.fox import fox_multiply, format_matrix, local_matrix_multiply, main


def test_local_multiply_identity():
    eye = np.eye(3, dtype=np.float32)
    result = local_matrix_multiply(eye, eye, np.zeros((3, 3)))
    assert np.array_equal(result, eye)


def test_local_multiply_accumulates():
    rng = np.random.default_rng(1)
    a, b, c = (rng.random((4, 4), dtype=np.float32) for _ in range(3))
    result = local_matrix_multiply(a, b, c)
    assert np.allclose(result - c, a @ b, atol=1e-5)


def test_local_multiply_leaves_inputs_alone():
    c = np.ones((2, 2), dtype=np.float32)
    local_matrix_multiply(np.eye(2), np.eye(2), c)
    assert np.array_equal(c, np.ones((2, 2)))


def test_fox_identity_gives_identity():
    eye = np.eye(4, dtype=np.float32)
    assert np.array_equal(fox_multiply(eye, eye, 2), eye)


@pytest.mark.parametrize("n, p", [(4, 2), (6, 3), (6, 1), (8, 4), (3, 3)])
def test_fox_matches_plain_product(n, p):
    rng = np.random.default_rng(n * 10 + p)
    a = rng.random((n, n), dtype=np.float32)
    b = rng.random((n, n), dtype=np.float32)
    result = fox_multiply(a, b, p)
    assert result.shape == (n, n)
    assert np.allclose(result, a @ b, atol=1e-4)


def test_fox_is_not_symmetric_in_arguments():
    a = np.arange(16, dtype=np.float32).reshape(4, 4)
    b = np.tril(np.ones((4, 4), dtype=np.float32))
    assert np.allclose(fox_multiply(a, b, 2), a @ b)
    assert np.allclose(fox_multiply(b, a, 2), b @ a)


@pytest.mark.parametrize(
    "a, b, p",
    [
        (np.eye(5), np.eye(5), 2),
        (np.ones((2, 3)), np.ones((2, 3)), 1),
        (np.eye(4), np.eye(2), 2),
        (np.eye(4), np.eye(4), 0),
    ],
)
def test_fox_rejects_bad_input(a, b, p):
    with pytest.raises(ValueError):
        fox_multiply(a, b, p)


def test_format_matrix_identity():
    assert format_matrix(np.eye(2)) == "1 0 \n0 1 \n"


def test_format_matrix_fractions():
    assert format_matrix([[0.5, 2.25]]) == "0.5 2.25 \n"


def test_main_default(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out == "Result C matrix (N x N):\n" + format_matrix(np.eye(4))


def test_main_bad_grid(capsys):
    assert main(["--n", "5", "--p", "2"]) == 1
    assert "Error" in capsys.readouterr().err