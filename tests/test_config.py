"""Tests for StrassenConfig."""

from __future__ import annotations

import pytest

from strassen import DEFAULT_CONFIG, StrassenConfig


class TestDefaults:
    def test_values(self) -> None:
        assert DEFAULT_CONFIG.base_case_threshold == 64
        assert DEFAULT_CONFIG.parallel_depth == 1
        assert DEFAULT_CONFIG.workers == 7
        assert DEFAULT_CONFIG.executor == "thread"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.workers = 3


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"base_case_threshold": 1},
            {"base_case_threshold": 0},
            {"parallel_depth": 0},
            {"workers": 0},
            {"executor": "mpi"},
        ],
    )
    def test_rejected(self, kwargs) -> None:
        with pytest.raises(ValueError):
            StrassenConfig(**kwargs)

    def test_smallest_threshold(self) -> None:
        assert StrassenConfig(base_case_threshold=2).base_case_threshold == 2

    @pytest.mark.parametrize("executor", ["thread", "process", "mpi"])
    def test_executors(self, executor) -> None:
        assert StrassenConfig(executor=executor).executor == executor


class TestFromEnv:
    def test_empty_environment(self) -> None:
        assert StrassenConfig.from_env({}) == DEFAULT_CONFIG

    def test_overrides(self) -> None:
        config = StrassenConfig.from_env(
            {
                "STRASSEN_THRESHOLD": "16",
                "STRASSEN_PARALLEL_DEPTH": "2",
                "STRASSEN_WORKERS": "4",
                "STRASSEN_EXECUTOR": "PROCESS",
            }
        )
        assert config == StrassenConfig(16, 2, 4, "process")

    def test_not_a_number(self) -> None:
        with pytest.raises(ValueError):
            StrassenConfig.from_env({"STRASSEN_WORKERS": "many"})

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("STRASSEN_THRESHOLD", "32")
        assert StrassenConfig.from_env().base_case_threshold == 32


class TestReplace:
    def test_none_is_ignored(self) -> None:
        config = StrassenConfig(base_case_threshold=16)
        assert config.replace(base_case_threshold=None, workers=None) is not config
        assert config.replace(base_case_threshold=None, workers=None) == config

    def test_changes(self) -> None:
        config = DEFAULT_CONFIG.replace(workers=2, executor=None)
        assert config.workers == 2
        assert config.executor == "thread"

    def test_changes_are_validated(self) -> None:
        with pytest.raises(ValueError):
            DEFAULT_CONFIG.replace(parallel_depth=0)
