from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def test_depcheck_fails_on_forbidden_import(tmp_path: Path) -> None:
    domain_dir = tmp_path / "domain"
    domain_dir.mkdir(parents=True, exist_ok=True)

    violating_file = domain_dir / "model.py"
    violating_file.write_text("import fastapi\n", encoding="utf-8")

    script_path = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"
    result = subprocess.run(
        [sys.executable, str(script_path), "--path", str(domain_dir)],
        capture_output=True,
        text=True,
        check=False,
    )

    combined_output = f"{result.stdout}\n{result.stderr}"
    assert result.returncode != 0
    assert "fastapi" in combined_output
    assert str(violating_file) in combined_output


def test_depcheck_passes_on_domain_package() -> None:
    script_path = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"
    result = subprocess.run(
        [sys.executable, str(script_path)],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stdout + result.stderr


def test_depcheck_application_layer_rejects_infrastructure(tmp_path: Path) -> None:
    application_dir = tmp_path / "application"
    application_dir.mkdir(parents=True, exist_ok=True)
    (application_dir / "service.py").write_text(
        "from hotcoffee.infrastructure.storage.json_store import JsonFileRecordStore\n",
        encoding="utf-8",
    )

    script_path = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"
    result = subprocess.run(
        [
            sys.executable,
            str(script_path),
            "--layer",
            "application",
            "--path",
            str(application_dir),
        ],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 1
    assert "[application]" in result.stdout
