# coremark

The CoreMark benchmark in Python. It runs three workloads on simulated
fixed-width (16- and 32-bit) integers so that their checksums are exact:

- a linked-list workload (find, reverse, merge sort, remove and undo),
- a matrix workload (add, scale, vector, matrix and bit-extract products),
- a state-machine workload that classifies comma separated numeric tokens.

Each workload folds its results into a 16-bit CRC. For five known
combinations of seeds and data size the CRCs are checked against fixed
expected values, so a run reports whether the arithmetic is correct as
well as how long it took.

## Installation

```
pip install .
```

## Command line

```
coremark [seed1] [seed2] [seed3] [iterations] [execs]
```

Arguments accept decimal or `0x` hexadecimal values with an optional `K`
(×1024) or `M` (×1024×1024) suffix; parsing stops at the first character
that is not a digit. Missing arguments count as 0.

- `coremark` with no arguments uses the performance seeds (0, 0, 0x66) and
  runs 4000 iterations.
- With arguments, seeds 0, 0, 0 become 0, 0, 0x66 and seeds 1, 0, 0 become
  the validation seeds 0x3415, 0x3415, 0x66.
- An `iterations` value of 0 (also when it is left out after other
  arguments) picks a count that runs for about ten seconds.
- `execs` is a bit mask choosing the workloads: 1 = list, 2 = matrix,
  4 = state; 0 runs all three. The list workload drives the others, so a
  mask without bit 1 is rejected with a message on standard error and exit
  status 1.

Example: `coremark 0 0 0x66 10` runs exactly ten iterations.

The total data size is 2000 bytes, shared between the selected workloads.
The report lists the data size, ticks (microseconds), elapsed whole
seconds, iterations per second, the seed CRC and the per-workload CRCs,
followed by the verdict. A run shorter than ten seconds is counted as an
error.

## Library use

```python
from coremark.main import run_benchmark

report = run_benchmark(0x3415, 0x3415, 0x66, iterations=1, execs=0, total_data_size=2000)
print(report.results.crclist, report.results.crcmatrix, report.results.crcstate)
print("\n".join(report.lines))
```

`run_benchmark` returns a `BenchmarkReport` holding the `CoreResults`,
`total_ticks`, `seconds`, `seedcrc`, `known_id` (or `None` for unknown
parameters), `total_errors` and the report `lines`. It raises `ValueError`
for a mask that does not select the list workload or a non-positive data
size.

The building blocks are importable on their own:

- `coremark.crc`: `crcu8`, `crcu16`, `crcu32`, `crc16`, `parseval`,
  `get_seed_args`
- `coremark.results`: `Algorithm` (bit mask with `count()`), `ListData`,
  `MatrixParams`, `CoreResults`
- `coremark.listbench`: `ListNode`, `core_list_init`, `core_bench_list`,
  `calc_func`, `cmp_complex`, `cmp_idx` and the list primitives
  (`core_list_insert_new`, `core_list_find`, `core_list_reverse`,
  `core_list_remove`, `core_list_undo_remove`, `core_list_mergesort`)
- `coremark.matrix`: `core_init_matrix`, `core_bench_matrix`,
  `matrix_test` and the matrix operations
- `coremark.state`: `CoreState`, `core_init_state`,
  `core_state_transition`, `core_bench_state`
- `coremark.printf`: `ee_sprintf` and `ee_printf`, a small printf with
  32-bit integer semantics (`c s p a A o x X d i u f`)
- `coremark.cvt`: `ecvt` and `fcvt` digit conversion
- `coremark.timing`: `Timer`, `RunProfile`, `default_profile`,
  `default_seeds`

## What it does not do

- It runs a single context only; there is no parallel execution.
- Time is measured with the host's high-resolution counter in
  microseconds; the "Compiler version" line shows the Python version.

## Running the tests

```
pip install .[test]
pytest
```