"""Tests for mapping file keys into the report tree."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from typecov_report.errors import ConfigurationError
from typecov_report.reporters.html.paths import (
    assets_folder,
    detail_page_href,
    detail_page_path,
    mirrored_parts,
    root_prefix,
)


@pytest.mark.parametrize(
    ("file_path", "expected"),
    [
        ("a.ts", "files/a.ts.html"),
        ("src/a.ts", "files/src/a.ts.html"),
        ("./src/lib/x.tsx", "files/src/lib/x.tsx.html"),
        ("/home/dev/app/src/a.ts", "files/home/dev/app/src/a.ts.html"),
        ("../shared/util.ts", "files/__/shared/util.ts.html"),
    ],
)
def test_detail_page_path(file_path: str, expected: str) -> None:
    assert detail_page_path(file_path) == PurePosixPath(expected)


@pytest.mark.parametrize(
    ("file_path", "expected"),
    [
        ("src/a.ts", "files/src/a.ts.html"),
        ("src/100%#1.ts", "files/src/100%25%231.ts.html"),
        ("src/what?.ts", "files/src/what%3F.ts.html"),
        ("src/my file.ts", "files/src/my%20file.ts.html"),
    ],
)
def test_detail_page_href(file_path: str, expected: str) -> None:
    assert detail_page_href(file_path) == expected


def test_assets_folder_depends_on_depth() -> None:
    assert assets_folder("a.ts") == "../assets"
    assert assets_folder("src/a.ts") == "../../assets"
    assert assets_folder("src/deep/a.ts") == "../../../assets"


def test_root_prefix_matches_assets_folder() -> None:
    assert root_prefix("src/a.ts") + "assets" == assets_folder("src/a.ts")


def test_distinct_keys_map_to_distinct_pages() -> None:
    keys = ["src/a.ts", "src/a.tsx", "a.ts", "src/a/ts", "lib/a.ts"]
    assert len({detail_page_path(k) for k in keys}) == len(keys)


@pytest.mark.parametrize("file_path", ["", ".", "/"])
def test_unmappable_keys(file_path: str) -> None:
    with pytest.raises(ConfigurationError):
        mirrored_parts(file_path)
