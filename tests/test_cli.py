from pathlib import Path

import pytest
from typer.testing import CliRunner

from styleguide_loader.cli import app
from styleguide_loader.validation import EXPECTED_ENTRY_COUNT

runner = CliRunner()


@pytest.fixture
def project_args(tmp_path: Path) -> list[str]:
    """Options pointing the CLI at an empty project and user directory."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return ["--project", str(project_dir), "--user-dir", str(tmp_path / "no_user_guides")]


def test_validate_bundled_guide() -> None:
    """Test that validating with no paths checks the bundled guide."""
    result = runner.invoke(app, ["validate"])

    assert result.exit_code == 0
    assert "examples" in result.stdout


def test_validate_reports_invalid_file(tmp_path: Path) -> None:
    """Test that an invalid file makes the command fail."""
    bad = tmp_path / "bad.yaml"
    bad.write_text('- :rule: "No reason"\n')

    result = runner.invoke(app, ["validate", str(bad)])

    assert result.exit_code == 1


def test_validate_expected_count(tmp_path: Path) -> None:
    """Test the --expected option."""
    good = tmp_path / "good.yaml"
    good.write_text('- :rule: "Rule"\n  :why: "Reason"\n')

    assert runner.invoke(app, ["validate", str(good), "--expected", "1"]).exit_code == 0
    assert runner.invoke(app, ["validate", str(good), "--expected", "2"]).exit_code == 1


def test_list_entries(project_args: list[str]) -> None:
    """Test listing the guide."""
    result = runner.invoke(app, ["list", *project_args])

    assert result.exit_code == 0
    assert "Style guide" in result.stdout


def test_list_entries_no_match(project_args: list[str]) -> None:
    """Test listing with a search that matches nothing."""
    result = runner.invoke(app, ["list", *project_args, "--search", "no such text anywhere"])

    assert result.exit_code == 0
    assert "No entries found" in result.stdout


def test_show_entry(project_args: list[str]) -> None:
    """Test showing one entry."""
    result = runner.invoke(app, ["show", "1", *project_args])

    assert result.exit_code == 0
    assert "Avoid 1.9-style hash syntax" in result.stdout


def test_show_entry_out_of_range(project_args: list[str]) -> None:
    """Test that an unknown entry number fails."""
    result = runner.invoke(app, ["show", str(EXPECTED_ENTRY_COUNT + 1), *project_args])

    assert result.exit_code == 1


def test_render_to_stdout(project_args: list[str]) -> None:
    """Test rendering Markdown to stdout."""
    result = runner.invoke(app, ["render", *project_args, "--title", "House Style"])

    assert result.exit_code == 0
    assert result.stdout.startswith("# House Style\n")
    assert "## 1. Avoid 1.9-style hash syntax" in result.stdout


def test_render_to_file(project_args: list[str], tmp_path: Path) -> None:
    """Test rendering Markdown to a file."""
    output = tmp_path / "GUIDE.md"

    result = runner.invoke(app, ["render", *project_args, "--output", str(output)])

    assert result.exit_code == 0
    assert output.read_text().startswith("# Ruby Style Guide\n")


def test_malformed_project_guide_fails(tmp_path: Path) -> None:
    """Test that project guide errors are reported, not raised."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    (project_dir / "styleguide.local.yaml").write_text("[unclosed\n")

    result = runner.invoke(
        app,
        ["list", "--project", str(project_dir), "--user-dir", str(tmp_path / "none")],
    )

    # Non-strict loading skips the broken file and still lists the bundled guide
    assert result.exit_code == 0


def test_validate_not_utf8(tmp_path: Path) -> None:
    """Test that an undecodable file fails validation without a traceback."""
    bad = tmp_path / "latin1.yaml"
    bad.write_bytes(b"\xff\xfe")

    result = runner.invoke(app, ["validate", str(bad)])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_render_to_missing_directory(project_args: list[str], tmp_path: Path) -> None:
    """Test that an unwritable output path is reported as an error."""
    output = tmp_path / "no" / "such" / "dir" / "GUIDE.md"

    result = runner.invoke(app, ["render", *project_args, "--output", str(output)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert not output.exists()
