from pathlib import Path

from pslab.main import _parse_args, build_params, build_run_settings, main


def test_cli_runs_configured_steps(tmp_path: Path, capsys):
    config = tmp_path / "lab.yaml"
    config.write_text(
        "seed: 3\n"
        "grid:\n  width: 6\n  height: 6\n  preset: two-rooms\n"
        "params:\n  epsilon: 0.2\n  tau: 0.5\n"
        "run:\n  steps: 50\n",
        encoding="utf-8",
    )
    main(["--config", str(config), "--render", "--log-level", "WARNING"])
    out = capsys.readouterr().out.strip().splitlines()
    assert len(out) == 6
    assert all(len(line.split()) == 6 for line in out)
    assert sum(line.count("A") for line in out) == 1


def test_cli_falls_back_to_defaults_for_missing_config(tmp_path: Path, capsys):
    main(["--config", str(tmp_path / "missing.yaml"), "--steps", "10", "--width", "4", "--render"])
    out = capsys.readouterr().out.strip().splitlines()
    assert len(out) == 5
    assert all(len(line.split()) == 4 for line in out)


def test_wind_flag_overrides_config_both_ways():
    cfg = {"params": {"wind": True}}
    assert build_params(cfg, _parse_args([])).wind is True
    assert build_params(cfg, _parse_args(["--no-wind"])).wind is False
    assert build_params({}, _parse_args(["--wind"])).wind is True


def test_run_settings_coerce_non_numeric_values():
    cfg = {"run": {"steps": "lots", "seconds": "soon"}}
    assert build_run_settings(cfg, _parse_args([])) == (1000, 5.0)
    assert build_run_settings({"run": None}, _parse_args(["--steps", "0", "--seconds", "1.5"])) == (0, 1.5)
    assert build_run_settings({"run": {"steps": "25"}}, _parse_args([])) == (25, 5.0)
