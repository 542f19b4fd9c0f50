import random

import pytest

from numframe.commands import bench
from numframe.compute import ExecPolicy
from numframe.dtypes import DType


def test_random_series():
    s = bench.random_series(50, random.Random(3), policy=ExecPolicy.SEQ)
    assert len(s) == 50
    assert s.dtype is DType.FLOAT64
    assert s.policy is ExecPolicy.SEQ
    assert all(0.0 <= v < 1.0 for v in s)


def test_random_series_is_seeded():
    first = bench.random_series(10, random.Random(42))
    second = bench.random_series(10, random.Random(42))
    assert first.to_pylist() == second.to_pylist()


def test_run_benchmark():
    calls = []
    timings = bench.run_benchmark(lambda c1, c2: calls.append(1), None, None, 4)
    assert len(timings) == 4
    assert len(calls) == 4
    assert all(t >= 0 for t in timings)


def test_calc1_variants_agree():
    c1 = bench.random_series(8, random.Random(1))
    before = c1.to_pylist()
    fused = bench.calc1_loop(c1, c1)
    chained = bench.calc1_series(c1, c1)
    assert fused.to_pylist() == pytest.approx(chained.to_pylist())
    assert c1.to_pylist() == before


@pytest.mark.parametrize("name", sorted(bench.SCENARIOS))
def test_scenarios_leave_inputs_untouched(name):
    rng = random.Random(7)
    c1 = bench.random_series(6, rng, chunk_size=4)
    c2 = bench.random_series(6, rng, chunk_size=4)
    before = (c1.to_pylist(), c2.to_pylist())
    bench.SCENARIOS[name](c1, c2)
    assert (c1.to_pylist(), c2.to_pylist()) == before


def test_main_selected(capsys):
    bench.main(
        ["-n", "10", "-r", "1", "--seed", "1", "-p", "seq", "-s", "sum", "-s", "calc1_series"]
    )
    lines = capsys.readouterr().out.splitlines()
    assert [cell.strip() for cell in lines[0].split("|")] == [
        "scenario",
        "policy",
        "best (ms)",
        "average (ms)",
    ]
    rows = [[cell.strip() for cell in line.split("|")][:2] for line in lines[2:]]
    assert rows == [["sum", "seq"], ["calc1_series", "seq"]]


def test_main_defaults(capsys):
    bench.main(["-n", "5", "-r", "1", "--chunk-size", "2"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2 + len(ExecPolicy) * len(bench.SCENARIOS)


def test_main_invalid_policy():
    with pytest.raises(SystemExit):
        bench.main(["-p", "fast"])
