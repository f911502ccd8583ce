# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

import pytest

from issuetriage.features import build_pipeline
from issuetriage.training.dataset import load_issues
from issuetriage.training.trainer import train_model

AREA_TEMPLATES = {
    "area-System.Data": [
        ("SqlClient connection fails", "Opening a database connection with SqlClient throws a timeout"),
        ("DataTable merge loses rows", "Merging two DataTable instances from the database drops rows"),
        ("Entity query crashes", "Running a query against the SQL database crashes the process"),
    ],
    "area-System.Net": [
        ("HttpClient hangs on redirect", "HttpClient never returns when the server sends a redirect"),
        ("Socket connect timeout ignored", "The socket keeps trying to connect after the timeout elapsed"),
        ("SslStream handshake error", "TLS handshake with the remote host fails over the network"),
    ],
    "area-System.IO": [
        ("FileStream flush is slow", "Writing a large file with FileStream and Flush takes seconds"),
        ("Directory enumeration misses files", "EnumerateFiles skips entries in nested directory trees"),
        ("Path combine with rooted path", "Path.Combine drops the first segment for a rooted file path"),
    ],
    "area-Infrastructure": [
        ("CI build fails on arm64", "The build pipeline breaks on arm64 agents during restore"),
        ("Update build tools version", "Bump the build tooling and the CI scripts to the new version"),
        ("Test run timeout in CI", "The CI test run hits the global timeout on the build machines"),
    ],
}


def issue_rows(repeat: int = 3) -> list[tuple[str, str, str]]:
    rows = []
    for index in range(repeat):
        for area, samples in AREA_TEMPLATES.items():
            for title, description in samples:
                rows.append((f"{title} #{index}", description, area))
    return rows


def write_tsv(path: Path, rows, header: list[str] | None) -> Path:
    lines = []
    if header is not None:
        lines.append("\t".join(header))
    lines.extend("\t".join(row) for row in rows)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def train_tsv(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return write_tsv(tmp_path_factory.mktemp("data") / "issues_train.tsv", issue_rows(repeat=3), ["Title", "Description", "Area"])


@pytest.fixture
def test_tsv(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return write_tsv(tmp_path_factory.mktemp("data") / "issues_test.tsv", issue_rows(repeat=1), ["Title", "Description", "Area"])


@pytest.fixture
def train_frame(train_tsv: Path):
    return load_issues(train_tsv)


@pytest.fixture
def trained_model(train_frame):
    return train_model(build_pipeline(), train_frame, seed=0)
