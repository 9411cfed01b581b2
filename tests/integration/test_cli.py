"""
Integration tests for the compose_layout CLI.
Tests: stored document on disk → typer command → printed plan, zones and validation.
"""

import importlib.util
import shutil
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from vellum.contexts.content.persistence import load_document

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "compose_layout.py"

runner = CliRunner()


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("compose_layout", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def app(cli):
    return cli.app


@pytest.mark.integration
def test_no_command_shows_help(app):
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "plan" in result.output
    assert "zones" in result.output


@pytest.mark.integration
def test_plan_command(app, sample_document_path):
    """Test the printed page plan of the sample document."""
    result = runner.invoke(app, ["plan", str(sample_document_path)])

    assert result.exit_code == 0
    assert "2 page(s) on A4" in result.output
    assert "Page 1 [full]: summary, experience, education" in result.output
    assert "Page 2 [mini]: skills, languages" in result.output


@pytest.mark.integration
def test_plan_unknown_paper(app, sample_document_path):
    result = runner.invoke(app, ["plan", str(sample_document_path), "--paper", "A3"])
    assert result.exit_code == 1


@pytest.mark.integration
def test_zones_command(app, sample_document_path):
    """Test the zone listing and page filter."""
    result = runner.invoke(app, ["zones", str(sample_document_path)])
    assert result.exit_code == 0
    assert "experience:exp-acme:role" in result.output
    assert "experiences.0.role" in result.output

    page_two = runner.invoke(app, ["zones", str(sample_document_path), "--page", "2"])
    assert page_two.exit_code == 0
    assert "skills" in page_two.output
    assert "experience:exp-acme:role" not in page_two.output


@pytest.mark.integration
def test_validate_command(app, sample_document_path):
    result = runner.invoke(app, ["validate", str(sample_document_path)])
    assert result.exit_code == 0
    assert "Validation passed" in result.output


@pytest.mark.integration
def test_validate_missing_document(app, tmp_path):
    result = runner.invoke(app, ["validate", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


@pytest.mark.integration
def test_presets_command(app):
    """Test listing all presets and one category."""
    result = runner.invoke(app, ["presets"])
    assert result.exit_code == 0
    assert "style" in result.output
    assert "compact" in result.output

    colors = runner.invoke(app, ["presets", "colors"])
    assert colors.exit_code == 0
    assert "colors_ocean" in colors.output

    unknown = runner.invoke(app, ["presets", "fonts"])
    assert unknown.exit_code == 1


@pytest.mark.integration
def test_apply_command(app, sample_document_path, tmp_path):
    """Test applying presets to a copy of the sample document."""
    document = tmp_path / "cv.yaml"
    shutil.copy(sample_document_path, document)
    output = tmp_path / "cv_compact.yaml"

    result = runner.invoke(app, ["apply", str(document), "style_compact", "colors_ocean", "-o", str(output)])

    assert result.exit_code == 0
    design = load_document(output)["design"]
    assert design["density"] == "compact"
    assert design["accentColor"] == "#0e7490"


@pytest.mark.integration
def test_apply_unknown_preset(app, sample_document_path, tmp_path):
    document = tmp_path / "cv.yaml"
    shutil.copy(sample_document_path, document)

    result = runner.invoke(app, ["apply", str(document), "style_brutalist"])

    assert result.exit_code == 1
    assert load_document(document) == load_document(sample_document_path)


@pytest.mark.integration
def test_plan_writes_session_log(cli, sample_document_path, tmp_path, monkeypatch):
    """Test --log: a layout log under the logs directory."""
    monkeypatch.setattr(cli, "LOGS_PATH", tmp_path)

    result = runner.invoke(cli.app, ["plan", str(sample_document_path), "--log"])
    logger.remove()

    assert result.exit_code == 0
    log_files = list(tmp_path.glob("plan_*/layout.log"))
    assert len(log_files) == 1
    assert "[layout] Paginated into 2 page(s) (A4)" in log_files[0].read_text()
