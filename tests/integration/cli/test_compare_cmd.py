"""Integration tests for the compare command"""

import json

import pytest
from typer.testing import CliRunner

from pkgdiff.cli.cli import app


@pytest.fixture(name="trees")
def trees_fixture(tmp_path):
    """Two package versions: one file changed, one added, one removed, one untouched."""
    old, new = tmp_path / "v1", tmp_path / "v2"
    (old / "lib").mkdir(parents=True)
    (new / "lib").mkdir(parents=True)
    (old / "index.js").write_text("module.exports = 1;\n")
    (new / "index.js").write_text("module.exports = 2;\n")
    (old / "lib" / "old.js").write_text("a\nb\n")
    (new / "lib" / "new.js").write_text("c\n")
    (old / "README.md").write_text("readme\n")
    (new / "README.md").write_text("readme\n")
    return old, new


def test_compare_cmd_summary(trees):
    """compare lists each changed file with its presence and prints the total."""
    old, new = trees
    result = CliRunner().invoke(app, ["compare", str(old), str(new)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("modified  index.js")
    assert any(l.startswith("added     lib/new.js") for l in lines)
    assert any(l.startswith("removed   lib/old.js") for l in lines)
    assert lines[-1] == "3 changed, 1 unchanged, +2 -3"


def test_compare_cmd_json(trees):
    """--json prints the CompareResult with per-file presence and change type."""
    old, new = trees
    result = CliRunner().invoke(app, ["compare", str(old), str(new), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    by_path = {f["path"]: f for f in data["files"]}
    assert by_path["lib/old.js"]["presence"] == "removed"
    assert by_path["lib/old.js"]["diff"]["change_type"] == "delete"
    assert data["stats"] == {"additions": 2, "deletions": 3}


def test_compare_cmd_no_directories(tmp_path):
    """Two missing directories are an error."""
    result = CliRunner().invoke(app, ["compare", str(tmp_path / "x"), str(tmp_path / "y")])
    assert result.exit_code == 1
