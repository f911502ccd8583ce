# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
import warnings
from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, balanced_accuracy_score, log_loss

from ..errors import SchemaMismatchError
from ..model import IssueModel
from ..schemas import AREA_COLUMN, PREDICTED_LABEL_COLUMN, SCORE_COLUMN, Metrics
from ..storage import load_model
from ..training.dataset import load_issues

log = logging.getLogger(__name__)


def _prior_log_loss(y_true: np.ndarray) -> float:
    _values, counts = np.unique(y_true, return_counts=True)
    prior = counts / counts.sum()
    return float(-(prior * np.log(prior)).sum())


def evaluate_model(model: IssueModel, frame: pd.DataFrame) -> Metrics:
    if AREA_COLUMN not in frame.columns:
        raise SchemaMismatchError(f"evaluation data is missing column {AREA_COLUMN!r}")

    known = frame[AREA_COLUMN].astype(str).isin(model.classes)
    skipped = int((~known).sum())
    if skipped:
        log.warning("skipping %d evaluation row(s) whose %s was never seen in training", skipped, AREA_COLUMN)
    usable = frame.loc[known]
    if usable.empty:
        raise SchemaMismatchError("no evaluation rows carry a label known to the model")

    scored = model.transform(usable)
    y_true = usable[AREA_COLUMN].astype(str).to_numpy()
    y_pred = scored[PREDICTED_LABEL_COLUMN].astype(str).to_numpy()
    probs = np.vstack(scored[SCORE_COLUMN].to_list())

    with warnings.catch_warnings():
        # predictions may cover classes absent from the held-out labels
        warnings.filterwarnings("ignore", message="y_pred contains classes not in y_true")
        macro = float(balanced_accuracy_score(y_true, y_pred))
    loss = float(log_loss(y_true, probs, labels=model.classes))
    prior = _prior_log_loss(y_true)
    reduction = 1.0 - loss / prior if prior > 0 else 0.0

    return Metrics(
        micro_accuracy=float(accuracy_score(y_true, y_pred)),
        macro_accuracy=macro,
        log_loss=loss,
        log_loss_reduction=float(reduction),
    )


def evaluate_saved_model(*, model_path: Path, eval_dataset_path: Path, has_header: bool = True) -> Metrics:
    model = load_model(model_path)
    frame = load_issues(eval_dataset_path, has_header=has_header)
    return evaluate_model(model, frame)
