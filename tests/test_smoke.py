"""Smoke tests for end-to-end CLI functionality.

These tests actually invoke the CLI and verify it produces valid output.
"""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

FIXTURES = Path(__file__).parent / "fixtures"


def run_cli(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "docnav.cli", *args],
        capture_output=True,
        text=True,
        timeout=30,
    )


def test_smoke_cli_sidebar_json() -> None:
    """End-to-end test: run docnav as subprocess and verify the sidebar."""
    result = run_cli(
        "sidebar", "/guides/setup/", "--config", str(FIXTURES / "docnav.yml"), "--json"
    )

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    sidebar = json.loads(result.stdout)
    guides = sidebar[1]
    assert guides["type"] == "group"
    assert guides["entries"][1]["isCurrent"] is True
    assert guides["entries"][1]["badge"] == {"text": "Updated", "variant": "tip"}


def test_smoke_cli_pagination() -> None:
    result = run_cli(
        "pagination", "/guides/setup", "--config", str(FIXTURES / "docnav.yml")
    )

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "Previous: Intro -> /guides/intro/" in result.stdout
    assert "Next: API -> /reference/api/" in result.stdout


def test_smoke_cli_verbose() -> None:
    """Verbose progress goes to stderr so JSON output stays clean."""
    result = run_cli(
        "sidebar",
        "/",
        "--config",
        str(FIXTURES / "docnav_auto.yml"),
        "--json",
        "--verbose",
    )

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "Site: Test Site" in result.stderr
    assert "Sidebar: auto" in result.stderr
    json.loads(result.stdout)


def test_smoke_cli_version() -> None:
    """Test CLI version flag works."""
    result = run_cli("--version")

    assert result.returncode == 0
    assert "docnav" in result.stdout


def test_smoke_cli_errors_on_bad_config(tmp_path: Path) -> None:
    config_path = tmp_path / "docnav.yml"
    config_path.write_text("sidebar: not-a-list\n", encoding="utf-8")

    result = run_cli("sidebar", "/", "--config", str(config_path))

    assert result.returncode == 1
    assert "Error loading config" in result.stderr
    assert "'sidebar' must be a list" in result.stderr
