"""Fox's block matrix multiplication on a simulated periodic process grid."""

from __future__ import annotations

import argparse
import sys
from itertools import product

import numpy as np

from foxgrid.topology import CartGrid


def local_matrix_multiply(a, b, c) -> np.ndarray:
    """Return ``c + a @ b`` in single precision."""
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    c = np.asarray(c, dtype=np.float32)
    return c + a @ b


def _split(matrix: np.ndarray, p: int) -> dict[tuple[int, int], np.ndarray]:
    k = matrix.shape[0] // p
    return {
        (i, j): matrix[i * k:(i + 1) * k, j * k:(j + 1) * k].copy()
        for i, j in product(range(p), repeat=2)
    }


def fox_multiply(a, b, p: int) -> np.ndarray:
    """Multiply two square matrices with Fox's algorithm on a ``p`` x ``p`` grid."""
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"matrix A must be square, got shape {a.shape}")
    if a.shape != b.shape:
        raise ValueError(f"matrix shapes differ: {a.shape} and {b.shape}")
    if p < 1:
        raise ValueError(f"grid dimension must be positive, got {p}")
    n = a.shape[0]
    if n % p:
        raise ValueError(f"matrix dimension {n} is not divisible by grid dimension {p}")

    grid = CartGrid((p, p), (True, True))
    home_a = _split(a, p)
    recv_b = _split(b, p)
    k = n // p
    local_c = {pos: np.zeros((k, k), dtype=np.float32) for pos in home_a}

    for stage in range(p):
        # The process on the stage-th wrapped diagonal broadcasts its A block along its row.
        local_c = {
            (row, col): local_matrix_multiply(
                home_a[(row, (row + stage) % p)], recv_b[(row, col)], block
            )
            for (row, col), block in local_c.items()
        }
        # Every B block moves one place up its column.
        shifted = {}
        for rank in range(grid.size):
            source, _dest = grid.shift(rank, 0, -1)
            shifted[grid.coords(rank)] = recv_b[grid.coords(source)]
        recv_b = shifted

    return np.block([[local_c[(i, j)] for j in range(p)] for i in range(p)])


def format_matrix(m) -> str:
    """Render a matrix one row per line, each value followed by a space."""
    return "".join(
        "".join(f"{float(value):g} " for value in row) + "\n" for row in np.asarray(m)
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="foxgrid-fox",
        description="Multiply two matrices with Fox's algorithm on a simulated process grid.",
    )
    parser.add_argument("--n", type=int, default=4, help="global matrix dimension")
    parser.add_argument("--p", type=int, default=2, help="process grid dimension")
    parser.add_argument("--random", action="store_true", help="use random inputs instead of identities")
    parser.add_argument("--seed", type=int, default=0, help="seed for random inputs")
    args = parser.parse_args(argv)

    if args.n < 1:
        print(f"Error: matrix dimension must be positive, got {args.n}", file=sys.stderr)
        return 1
    if args.random:
        rng = np.random.default_rng(args.seed)
        a = rng.random((args.n, args.n), dtype=np.float32)
        b = rng.random((args.n, args.n), dtype=np.float32)
    else:
        a = np.eye(args.n, dtype=np.float32)
        b = np.eye(args.n, dtype=np.float32)

    try:
        c = fox_multiply(a, b, args.p)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("Result C matrix (N x N):")
    print(format_matrix(c), end="")
    return 0