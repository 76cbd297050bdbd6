from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from pathlib import Path

import pytest

from satin import pipeline, sweep
from satin.errors import ReportWriteError
from satin.models import CarbonDioxideMode, LaserConfig, RuntimeCfg

# The fake kernel is patched into this process, so kernel calls stay on threads.
THREADED = RuntimeCfg(kernel_executor="thread")


def _laser(name: str, gain: float = 12.0) -> LaserConfig:
    mode = CarbonDioxideMode.MD if name.startswith("md") else CarbonDioxideMode.PI
    return LaserConfig(
        output_file=name, small_signal_gain=gain, discharge_pressure=20, carbon_dioxide=mode
    )


@pytest.fixture(autouse=True)
def fast_kernel(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake(input_power: int, small_signal_gain: float, saturation_intensity: int) -> float:
        return input_power * (1 + small_signal_gain / 100)

    monkeypatch.setattr(sweep, "compute_output_power", fake)


@pytest.mark.integration
def test_each_laser_gets_its_own_report(tmp_path: Path) -> None:
    lasers = [_laser("mdaa.out"), _laser("piaa.out", gain=13.5), _laser("mdab.out")]

    summary = pipeline.run([150, 200], lasers, output_dir=tmp_path, runtime=THREADED)

    assert summary.status == "success"
    assert [o.laser.output_file for o in summary.outcomes] == ["mdaa.out", "piaa.out", "mdab.out"]
    for outcome in summary.outcomes:
        assert outcome.path == tmp_path.resolve() / outcome.laser.output_file
        assert outcome.path.is_absolute()
        assert outcome.path.exists()
        assert len(outcome.results) == 32
    assert "Small-signal Gain = 13.5" in (tmp_path / "piaa.out").read_text(encoding="utf-8")


@pytest.mark.integration
def test_one_unwritable_report_does_not_abort_the_others(tmp_path: Path) -> None:
    (tmp_path / "piaa.out").mkdir()
    lasers = [_laser("mdaa.out"), _laser("piaa.out"), _laser("mdab.out")]

    summary = pipeline.run([150], lasers, output_dir=tmp_path, runtime=THREADED)

    assert summary.status == "partial"
    assert [o.laser.output_file for o in summary.succeeded] == ["mdaa.out", "mdab.out"]
    (failed,) = summary.failed
    assert failed.laser.output_file == "piaa.out"
    assert isinstance(failed.error, ReportWriteError)
    assert failed.path is None
    assert sorted(p.name for p in tmp_path.iterdir()) == ["mdaa.out", "mdab.out", "piaa.out"]


@pytest.mark.integration
def test_sweep_failure_is_scoped_to_its_laser(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def picky(input_power: int, small_signal_gain: float, saturation_intensity: int) -> float:
        if small_signal_gain == 99.9:
            raise ArithmeticError("diverged")
        return float(input_power)

    monkeypatch.setattr(sweep, "compute_output_power", picky)
    lasers = [_laser("mdaa.out", gain=99.9), _laser("mdab.out")]

    runtime = RuntimeCfg(laser_workers=1, kernel_executor="thread")
    summary = pipeline.run([150], lasers, output_dir=tmp_path, runtime=runtime)

    assert summary.status == "partial"
    assert isinstance(summary.outcomes[0].error, ArithmeticError)
    assert not (tmp_path / "mdaa.out").exists()
    assert summary.outcomes[1].ok


@pytest.mark.integration
def test_duplicate_output_file_is_rejected_for_later_laser(tmp_path: Path) -> None:
    lasers = [_laser("mdaa.out", gain=10.0), _laser("mdaa.out", gain=11.0)]

    summary = pipeline.run([150], lasers, output_dir=tmp_path, runtime=THREADED)

    assert summary.outcomes[0].ok
    assert "already claimed" in str(summary.outcomes[1].error)
    assert "Small-signal Gain = 10.0" in (tmp_path / "mdaa.out").read_text(encoding="utf-8")


@pytest.mark.integration
def test_all_failures_is_total_failure(tmp_path: Path) -> None:
    summary = pipeline.run(
        [150], [_laser("mdaa.out")], output_dir=tmp_path / "missing", runtime=THREADED
    )

    assert summary.status == "failure"


@pytest.mark.integration
def test_reports_default_to_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    summary = pipeline.run([150], [_laser("mdaa.out")], runtime=THREADED)

    assert summary.outcomes[0].path == tmp_path.resolve() / "mdaa.out"


@pytest.mark.integration
def test_one_kernel_pool_is_shared_by_the_whole_run(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    built: list[RuntimeCfg | None] = []

    def counting_executor(runtime: RuntimeCfg | None = None) -> Executor:
        built.append(runtime)
        return ThreadPoolExecutor(max_workers=4)

    def no_nested_pool(runtime: RuntimeCfg | None = None) -> Executor:
        raise AssertionError("sweeps must reuse the run's kernel pool")

    monkeypatch.setattr(pipeline, "kernel_executor", counting_executor)
    monkeypatch.setattr(sweep, "kernel_executor", no_nested_pool)
    lasers = [_laser("mdaa.out"), _laser("piaa.out"), _laser("mdab.out")]

    summary = pipeline.run([150, 200, 250], lasers, output_dir=tmp_path, runtime=THREADED)

    assert summary.status == "success"
    assert built == [THREADED]

