# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from ..errors import ArtifactIOError, DatasetNotFoundError, SchemaMismatchError
from ..schemas import AREA_COLUMN, INPUT_COLUMNS, TRAINING_COLUMNS, IssueRecord

log = logging.getLogger(__name__)


def _safe_text(value: object) -> str:
    return str(value or "")


def _expected_columns(require_label: bool) -> tuple[str, ...]:
    return TRAINING_COLUMNS if require_label else INPUT_COLUMNS


def _check_field_counts(path: Path, text: str) -> None:
    # pandas pads short rows with empty cells; catch them before parsing
    lines = [(number, raw) for number, raw in enumerate(text.split("\n"), start=1) if raw.strip("\r")]
    if not lines:
        return
    width = lines[0][1].count("\t") + 1
    short = [number for number, raw in lines if raw.count("\t") + 1 < width]
    if short:
        shown = ", ".join(str(number) for number in short[:5])
        raise SchemaMismatchError(f"{path} has row(s) with fewer than {width} fields at line(s) {shown}")


def _read_tsv(path: Path, *, has_header: bool) -> pd.DataFrame:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaMismatchError(f"{path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ArtifactIOError(f"cannot read dataset {path}: {exc}") from exc
    _check_field_counts(path, text)
    try:
        return pd.read_csv(
            io.StringIO(text),
            sep="\t",
            header=0 if has_header else None,
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
        )
    except pd.errors.EmptyDataError as exc:
        raise SchemaMismatchError(f"{path} is empty, expected columns {list(TRAINING_COLUMNS)}") from exc
    except pd.errors.ParserError as exc:
        raise SchemaMismatchError(f"{path} has rows with inconsistent column counts: {exc}") from exc


def load_issues(path: Path, *, has_header: bool = True, require_label: bool = True) -> pd.DataFrame:
    """Read an issues TSV into a frame with the Title/Description[/Area] schema.

    With a header, columns are matched by name (extra columns such as ``ID``
    are dropped). Without one, the file must have exactly the expected
    number of columns, in order.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetNotFoundError(f"dataset not found: {path}")

    expected = _expected_columns(require_label)
    raw = _read_tsv(path, has_header=has_header)

    if has_header:
        raw.columns = [str(column).strip() for column in raw.columns]
        missing = [column for column in expected if column not in raw.columns]
        if missing:
            raise SchemaMismatchError(f"{path} is missing column(s) {missing}; found {list(raw.columns)}")
        keep = [column for column in TRAINING_COLUMNS if column in raw.columns]
        frame = raw[keep].copy()
    else:
        if raw.shape[1] != len(expected):
            raise SchemaMismatchError(
                f"{path} has {raw.shape[1]} column(s), expected {len(expected)} ({', '.join(expected)})"
            )
        frame = raw.copy()
        frame.columns = list(expected)

    for column in frame.columns:
        frame[column] = frame[column].map(_safe_text)
    if require_label:
        unlabeled = frame[AREA_COLUMN].str.strip() == ""
        if unlabeled.any():
            log.warning("dropping %d row(s) of %s with an empty %s", int(unlabeled.sum()), path, AREA_COLUMN)
            frame = frame.loc[~unlabeled]
    frame = frame.reset_index(drop=True)
    log.debug("loaded %d issue rows from %s", len(frame), path)
    return frame


def records_to_frame(records: Iterable[IssueRecord]) -> pd.DataFrame:
    rows = [record.as_row() for record in records]
    columns = list(TRAINING_COLUMNS) if any(AREA_COLUMN in row for row in rows) else list(INPUT_COLUMNS)
    frame = pd.DataFrame(rows, columns=columns)
    return frame.fillna("")
