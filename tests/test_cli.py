from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from helpers import load_model_path
from railpath.cli import app

runner = CliRunner()


@pytest.mark.cli
def test_example_models_build(examples_dir: Path, project_root: Path):
    models = [
        examples_dir / "paths" / "path_example.py",
        examples_dir / "paths" / "bezier_path_example.py",
        examples_dir / "transforms" / "transform_example.py",
        project_root / "examples" / "hello_path.py",
    ]
    for model in models:
        path = load_model_path(model)
        assert len(path) > 0
        assert path.exclusive_length > 0


@pytest.mark.cli
def test_transform_example_is_contiguous(examples_dir: Path):
    path = load_model_path(examples_dir / "transforms" / "transform_example.py")
    assert path.inclusive_length == pytest.approx(path.exclusive_length)


@pytest.mark.cli
def test_info_reports_lengths(examples_dir: Path):
    result = runner.invoke(app, ["info", str(examples_dir / "paths" / "path_example.py")])
    assert result.exit_code == 0, result.output
    assert "Exclusive length: 20.0000 mm" in result.output
    assert "Inclusive length: 20.0000 mm" in result.output


@pytest.mark.cli
def test_info_uses_configured_units(examples_dir: Path, isolated_config):
    isolated_config.parent.mkdir(parents=True, exist_ok=True)
    isolated_config.write_text(json.dumps({"units": "meters"}))
    result = runner.invoke(app, ["info", str(examples_dir / "paths" / "path_example.py")])
    assert result.exit_code == 0, result.output
    assert "20.0000 m" in result.output
    assert "20.0000 mm" not in result.output


@pytest.mark.cli
def test_sample_lists_requested_count(examples_dir: Path):
    result = runner.invoke(app, ["sample", str(examples_dir / "paths" / "path_example.py"), "--count", "4"])
    assert result.exit_code == 0, result.output
    assert "5 samples" in result.output
    assert "(10, 5, 0)" in result.output


@pytest.mark.cli
def test_nearest_reports_parameter(examples_dir: Path):
    result = runner.invoke(app, ["nearest", str(examples_dir / "paths" / "path_example.py"), "5", "1", "0"])
    assert result.exit_code == 0, result.output
    assert "t: 0.250000" in result.output
    assert "Point: (5, 0, 0)" in result.output


@pytest.mark.cli
def test_missing_model_is_rejected(tmp_path: Path):
    result = runner.invoke(app, ["info", str(tmp_path / "missing.py")])
    assert result.exit_code != 0


@pytest.mark.cli
def test_model_without_build_is_rejected(tmp_path: Path):
    model = tmp_path / "no_build.py"
    model.write_text("VALUE = 1\n")
    result = runner.invoke(app, ["info", str(model)])
    assert result.exit_code != 0


@pytest.mark.cli
def test_model_returning_wrong_type_is_rejected(tmp_path: Path):
    model = tmp_path / "wrong.py"
    model.write_text("def build():\n    return [1, 2, 3]\n")
    result = runner.invoke(app, ["nearest", str(model), "0", "0", "0"])
    assert result.exit_code != 0
