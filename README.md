# foxgrid

foxgrid runs a grid of cooperating processes as a simulation inside one Python
process. It covers three parts of distributed matrix multiplication:

- **Cartesian process grids** (`foxgrid.topology`): balanced grid dimensions,
  conversion between ranks and coordinates, periodic and non-periodic shifts,
  row and column sub-grids, and the neighbours of each rank.
- **Fox's algorithm** (`foxgrid.fox`): block matrix multiplication on a
  `p x p` torus. In each stage the A block on the wrapped diagonal is broadcast
  along its row, and every B block moves one step up its column.
- **Row-block distribution** (`foxgrid.rowblock`): each worker takes one block
  of rows of A and multiplies it by all of B. The partial products are then
  stacked into the result. The run is timed and a report is produced.

## Installation

```
pip install .
```

Install the test extra to run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
foxgrid-topology [-n NPROCS] [--periodic ROWS COLS]
```
Prints the balanced 2-D grid for `NPROCS` processes (default 4), then the up,
down, left and right neighbours of every rank. A neighbour that falls off a
non-periodic edge is printed as `end`. `--periodic 1 1` wraps both dimensions.
The default is `0 0`, which wraps neither.

```
foxgrid-fox [--n N] [--p P] [--random] [--seed SEED]
```
Multiplies two `N x N` matrices (default 4) with Fox's algorithm on a `P x P`
grid (default 2) and prints the result. The inputs are identity matrices,
unless `--random` is given; then they are seeded random matrices. The command
exits with status 1 and an error message if `N` is not positive or is not
divisible by `P`.

```
foxgrid-rowblock [--n N] [--size SIZE]
```
Multiplies two `N x N` identity matrices (default 1024) split across `SIZE`
workers (default 4). It prints the matrix dimension, the total, computation and
communication times, the GFLOPS rate and the communication overhead as a
percentage.

## Library use

```python
import numpy as np
from foxgrid.topology import CartGrid, dims_create, neighbors, format_neighbors
from foxgrid.fox import fox_multiply, local_matrix_multiply, format_matrix
from foxgrid.rowblock import rowblock_multiply, gather_blocks, format_report

dims = dims_create(6, 2)            # (3, 2): balanced, largest first
grid = CartGrid(dims, periods=(False, True))
print(grid.coords(4), grid.rank(grid.coords(4)))
print(grid.shift(0, 1, 1))          # (source, dest) along dimension 1
print(neighbors(grid, 0))           # {'up': ..., 'down': ..., 'left': ..., 'right': ...}
sub_grid, sub_rank, members = grid.sub(4, (False, True))   # the row holding rank 4

a = np.eye(4, dtype=np.float32)
c = fox_multiply(a, a, 2)           # 2 x 2 process grid
print(format_matrix(c))

product, timing = rowblock_multiply(a, a, 4)
print(format_report(4, timing))
```

- `CartGrid(dims, periods=None)` is a row-major grid. `shift` returns `None`
  for a neighbour beyond a non-periodic edge. `rank` wraps coordinates along
  periodic dimensions and raises `ValueError` for coordinates outside a
  non-periodic one.
- `local_matrix_multiply(a, b, c)` returns a new array `c + a @ b` in single
  precision. It does not change `c`.
- `gather_blocks(blocks, grid_dim)` joins equally shaped blocks, given in
  row-major rank order, into one matrix.
- `Timing` holds `total` and `computation` seconds. Its `communication` is
  their difference.

Invalid input raises `ValueError`: non-square or mismatched matrices, sizes
that do not divide evenly, and ranks, directions or dimensions outside the
grid.

## What this package does not do

Nothing here starts processes or sends messages between machines. Every
"process" is a block of data in one Python process. Broadcasts and shifts are
done as moves in memory. In the row-block report, the "communication" time is
only the total time minus the time spent multiplying. It does not measure real
network traffic.