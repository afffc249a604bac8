"""Shared fixtures for typecov-report tests."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from typecov_report.models.coverage import Annotation, CoverageDataset, FileCounts

FIXED_TIME = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)

SOURCE_A = "export const a: number = 1;\nexport const b: string = 'b';\n"
SOURCE_B = "\n".join(
    [
        "import { helper } from './a';",
        "",
        "export function run(): void {",
        "  const value = 1;",
        "  console.log(value);",
        "  const data = JSON.parse('{}');",
        "}",
    ]
)


def fixed_clock() -> datetime:
    return FIXED_TIME


def dataset_dict() -> dict[str, Any]:
    """Return the JSON form of the two-file example dataset."""
    return {
        "percentage": 75,
        "total": 4,
        "covered": 3,
        "uncovered": 1,
        "fileCounts": {
            "src/a.ts": {"totalCount": 2, "correctCount": 2},
            "src/b.ts": {"totalCount": 2, "correctCount": 1},
        },
        "anys": [{"file": "src/b.ts", "line": 5, "character": 8, "text": "data"}],
    }


@pytest.fixture
def sample_dataset() -> CoverageDataset:
    return CoverageDataset(
        percentage=75.0,
        total=4,
        covered=3,
        uncovered=1,
        file_counts={
            "src/a.ts": FileCounts(total_count=2, correct_count=2),
            "src/b.ts": FileCounts(total_count=2, correct_count=1),
        },
        anys=(Annotation(file="src/b.ts", line=5, character=8, text="data"),),
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a project with the sources referenced by ``sample_dataset``."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "a.ts").write_text(SOURCE_A, encoding="utf-8")
    (root / "src" / "b.ts").write_text(SOURCE_B, encoding="utf-8")
    return root


@pytest.fixture
def dataset_file(project_root: Path) -> Path:
    path = project_root / "coverage.json"
    path.write_text(json.dumps(dataset_dict()), encoding="utf-8")
    return path
