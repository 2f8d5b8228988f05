"""Row-block matrix multiplication, block gathering and timing reports."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass
from time import perf_counter

import numpy as np


@dataclass(frozen=True)
class Timing:
    """Wall-clock seconds spent overall and in computation."""

    total: float
    computation: float

    @property
    def communication(self) -> float:
        return self.total - self.computation


def rowblock_multiply(a, b, size: int) -> tuple[np.ndarray, Timing]:
    """Multiply ``a @ b`` by handing each of ``size`` workers a block of rows of ``a``.

    Returns the product and the time spent overall and in computation.
    """
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"matrix A must be square, got shape {a.shape}")
    if a.shape != b.shape:
        raise ValueError(f"matrix shapes differ: {a.shape} and {b.shape}")
    if size < 1:
        raise ValueError(f"number of workers must be positive, got {size}")
    n = a.shape[0]
    if n % size:
        raise ValueError(f"matrix dimension {n} is not divisible by {size} workers")

    start = perf_counter()
    computation = 0.0
    partials = []
    for rows in np.split(a, size):
        comp_start = perf_counter()
        partials.append(rows @ b)
        computation += perf_counter() - comp_start
    c = np.concatenate(partials)
    total = perf_counter() - start
    return c, Timing(total=total, computation=computation)


def gather_blocks(blocks, grid_dim) -> np.ndarray:
    """Assemble equally shaped blocks, given in row-major rank order, into one matrix."""
    rows, cols = grid_dim
    blocks = [np.asarray(block) for block in blocks]
    if rows < 1 or cols < 1:
        raise ValueError(f"grid dimensions must be positive, got {grid_dim}")
    if len(blocks) != rows * cols:
        raise ValueError(f"expected {rows * cols} blocks, got {len(blocks)}")
    shape = blocks[0].shape
    if len(shape) != 2 or any(block.shape != shape for block in blocks):
        raise ValueError("blocks must all be 2-D and of the same shape")
    return np.block([blocks[r * cols:(r + 1) * cols] for r in range(rows)])


def format_report(n: int, timing: Timing) -> str:
    """Summarise the time taken to multiply two ``n`` x ``n`` matrices."""
    total = timing.total
    communication = timing.communication
    flops = 2.0 * n * n * n
    gflops = flops / (total * 1e9) if total else math.inf
    overhead = communication * 100 / total if total else math.nan
    return (
        f"matrix dimensions  : {n}\n"
        f"total time elapsed : {total:f}\n"
        f"computation time elapsed : {timing.computation:f}\n"
        f"communication time elapsed : {communication:f}\n"
        f"GLOPS : {gflops:.6f}\n"
        f"communication overhead : {overhead:.6f}\n"
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="foxgrid-rowblock",
        description="Time a row-block distributed multiplication of two identity matrices.",
    )
    parser.add_argument("--n", type=int, default=1024, help="matrix dimension")
    parser.add_argument("--size", type=int, default=4, help="number of workers")
    args = parser.parse_args(argv)

    if args.n < 1:
        print(f"Error: matrix dimension must be positive, got {args.n}", file=sys.stderr)
        return 1
    eye = np.eye(args.n, dtype=np.float32)
    try:
        _c, timing = rowblock_multiply(eye, eye, args.size)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(format_report(args.n, timing), end="")
    return 0