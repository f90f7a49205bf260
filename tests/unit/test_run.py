"""Tests for the scenario runner."""

from pathlib import Path
from typing import Iterator

import pytest

import run
from src import config as config_module

REPO_ROOT = Path(__file__).parent.parent.parent


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    config_module.load_config(config_module.DEFAULT_CONFIG_PATH)
    yield
    config_module.reset_config()


class TestResolve:
    """Tests for relative time expressions."""

    def test_now(self) -> None:
        assert run._resolve("now", 100) == 100

    def test_offsets(self) -> None:
        assert run._resolve("now+60", 100) == 160
        assert run._resolve("now - 10", 100) == 90

    def test_passthrough(self) -> None:
        assert run._resolve(5, 100) == 5
        assert run._resolve("LP", 100) == "LP"


class TestExampleScenario:
    """Replays scenarios/example.yaml."""

    def test_outcomes(self) -> None:
        results = run.run_scenario(str(REPO_ROOT / "scenarios" / "example.yaml"), verbose=False)
        outcomes = [(r["kind"], r["result"].get("success"), r["result"].get("code")) for r in results]

        assert outcomes == [
            ("invoke", True, None),
            ("invoke", False, "identifier_collision"),
            ("invoke", False, "unauthorized"),
            ("advance", True, None),
            ("invoke", True, None),
            ("query", True, None),
            ("send", True, None),
            ("invoke", True, None),
            ("query", True, None),
        ]
        assert results[5]["result"]["total"] == 2
        assert results[7]["result"]["amount"] == 250

    def test_unknown_step(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("steps:\n  - dance: true\n")
        with pytest.raises(ValueError):
            run.run_scenario(str(path), verbose=False)


class TestMain:
    """Exit status of the command-line entry point."""

    def test_clean_scenario_exits_zero(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "clean.yaml"
        path.write_text("assets:\n  - id: LP\nsteps:\n  - query: offering_count\n")
        monkeypatch.setattr(
            "sys.argv",
            ["run.py", str(path), "--config", str(config_module.DEFAULT_CONFIG_PATH), "--quiet"],
        )
        run.main()

    def test_failed_step_exits_nonzero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "sys.argv",
            [
                "run.py",
                str(REPO_ROOT / "scenarios" / "example.yaml"),
                "--config",
                str(config_module.DEFAULT_CONFIG_PATH),
                "--quiet",
            ],
        )
        with pytest.raises(SystemExit) as exc_info:
            run.main()
        assert exc_info.value.code == 1
