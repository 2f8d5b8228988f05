"""Cartesian process-grid topology: balanced dimensions, coordinates, shifts and sub-grids."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from itertools import product
from math import prod

_SEPARATOR = "- - - - - - - - -"


def _prime_factors(n: int) -> list[int]:
    factors = []
    divisor = 2
    while divisor * divisor <= n:
        while n % divisor == 0:
            factors.append(divisor)
            n //= divisor
        divisor += 1
    if n > 1:
        factors.append(n)
    return factors


def dims_create(nnodes: int, ndims: int) -> tuple[int, ...]:
    """Split ``nnodes`` into ``ndims`` balanced factors, largest first."""
    if ndims < 1:
        raise ValueError(f"number of dimensions must be positive, got {ndims}")
    if nnodes < 1:
        raise ValueError(f"number of nodes must be positive, got {nnodes}")
    dims = [1] * ndims
    for factor in sorted(_prime_factors(nnodes), reverse=True):
        smallest = dims.index(min(dims))
        dims[smallest] *= factor
    return tuple(sorted(dims, reverse=True))


@dataclass(frozen=True)
class CartGrid:
    """A Cartesian grid of ranks laid out in row-major order."""

    dims: tuple[int, ...]
    periods: tuple[bool, ...] | None = None

    def __post_init__(self) -> None:
        dims = tuple(int(d) for d in self.dims)
        if any(d < 1 for d in dims):
            raise ValueError(f"grid dimensions must be positive, got {dims}")
        if self.periods is None:
            periods = (False,) * len(dims)
        else:
            periods = tuple(bool(p) for p in self.periods)
        if len(periods) != len(dims):
            raise ValueError("periods must have one entry per dimension")
        object.__setattr__(self, "dims", dims)
        object.__setattr__(self, "periods", periods)

    @property
    def ndims(self) -> int:
        return len(self.dims)

    @property
    def size(self) -> int:
        return prod(self.dims)

    def _check_rank(self, rank: int) -> None:
        if not 0 <= rank < self.size:
            raise ValueError(f"rank {rank} outside grid of size {self.size}")

    def coords(self, rank: int) -> tuple[int, ...]:
        """Return the coordinates of ``rank``."""
        self._check_rank(rank)
        out = []
        for extent in reversed(self.dims):
            rank, coord = divmod(rank, extent)
            out.append(coord)
        return tuple(reversed(out))

    def rank(self, coords) -> int:
        """Return the rank at ``coords``, wrapping along periodic dimensions."""
        coords = tuple(coords)
        if len(coords) != self.ndims:
            raise ValueError(f"expected {self.ndims} coordinates, got {len(coords)}")
        result = 0
        for coord, extent, periodic in zip(coords, self.dims, self.periods):
            if periodic:
                coord %= extent
            elif not 0 <= coord < extent:
                raise ValueError(f"coordinate {coord} outside non-periodic extent {extent}")
            result = result * extent + coord
        return result

    def _offset(self, coords: tuple[int, ...], direction: int, disp: int) -> int | None:
        moved = list(coords)
        moved[direction] += disp
        if not self.periods[direction] and not 0 <= moved[direction] < self.dims[direction]:
            return None
        return self.rank(moved)

    def shift(self, rank: int, direction: int, disp: int) -> tuple[int | None, int | None]:
        """Return ``(source, dest)`` for a shift of ``disp`` along ``direction``.

        ``None`` marks a neighbour that falls off a non-periodic edge.
        """
        if not 0 <= direction < self.ndims:
            raise ValueError(f"direction {direction} outside grid of {self.ndims} dimensions")
        here = self.coords(rank)
        return self._offset(here, direction, -disp), self._offset(here, direction, disp)

    def sub(self, rank: int, remain) -> tuple[CartGrid, int, tuple[int, ...]]:
        """Split off the sub-grid holding ``rank`` that varies the kept dimensions.

        Returns the sub-grid, the rank within it and the member ranks of this
        grid in sub-grid order.
        """
        remain = tuple(bool(r) for r in remain)
        if len(remain) != self.ndims:
            raise ValueError(f"expected {self.ndims} remain flags, got {len(remain)}")
        here = self.coords(rank)
        kept = [axis for axis, keep in enumerate(remain) if keep]
        sub_grid = CartGrid(
            tuple(self.dims[axis] for axis in kept),
            tuple(self.periods[axis] for axis in kept),
        )
        members = []
        for sub_coords in product(*(range(self.dims[axis]) for axis in kept)):
            full = list(here)
            for axis, coord in zip(kept, sub_coords):
                full[axis] = coord
            members.append(self.rank(full))
        sub_rank = sub_grid.rank(tuple(here[axis] for axis in kept))
        return sub_grid, sub_rank, tuple(members)


def neighbors(grid: CartGrid, rank: int) -> dict[str, int | None]:
    """Return the up, down, left and right neighbours of ``rank`` on a 2-D grid."""
    up, down = grid.shift(rank, 0, 1)
    left, right = grid.shift(rank, 1, 1)
    return {"up": up, "down": down, "left": left, "right": right}


def format_neighbors(grid: CartGrid, rank: int) -> str:
    """Describe the neighbours of ``rank``, one per line."""
    lines = [f"neighbors of {rank}"]
    for name, other in neighbors(grid, rank).items():
        lines.append("end" if other is None else f"{name} : {other}")
    lines.append(_SEPARATOR)
    return "\n".join(lines) + "\n"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="foxgrid-topology",
        description="Build a balanced 2-D process grid and list each rank's neighbours.",
    )
    parser.add_argument("-n", "--nprocs", type=int, default=4, help="number of processes")
    parser.add_argument(
        "--periodic",
        nargs=2,
        type=int,
        default=(0, 0),
        metavar=("ROWS", "COLS"),
        help="1 to wrap a dimension around, 0 otherwise",
    )
    args = parser.parse_args(argv)
    try:
        dims = dims_create(args.nprocs, 2)
    except ValueError as exc:
        parser.error(str(exc))
    print(f"grid determined : {dims[0]} {dims[1]} ")
    grid = CartGrid(dims, tuple(bool(p) for p in args.periodic))
    print("successfully created 2D Cartesian topology.")
    for rank in range(grid.size):
        print(format_neighbors(grid, rank), end="")
    return 0