# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
import sklearn
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline

from ..errors import TrainingError
from ..features import (
    MAP_KEY_TO_VALUE,
    MULTICLASS_CLASSIFIER,
    PipelineDescriptor,
    PipelineStep,
    build_feature_union,
    build_label_encoder,
    checkpoint_memory,
)
from ..model import ARTIFACT_VERSION, IssueModel
from ..schemas import (
    AREA_COLUMN,
    FEATURES_COLUMN,
    INPUT_COLUMNS,
    LABEL_COLUMN,
    PREDICTED_LABEL_COLUMN,
    TRAINING_COLUMNS,
)

log = logging.getLogger(__name__)


def append_trainer_steps(descriptor: PipelineDescriptor) -> PipelineDescriptor:
    return descriptor.append(
        PipelineStep("multiclass_classifier", MULTICLASS_CLASSIFIER, (LABEL_COLUMN, FEATURES_COLUMN), PREDICTED_LABEL_COLUMN)
    ).append(
        PipelineStep("key_to_value", MAP_KEY_TO_VALUE, (PREDICTED_LABEL_COLUMN,), PREDICTED_LABEL_COLUMN)
    )


def _build_classifier(seed: int) -> LogisticRegression:
    # multinomial max-entropy objective, solved with a seeded stochastic solver
    return LogisticRegression(solver="saga", C=1.0, max_iter=1000, tol=1e-4, random_state=seed)


def _check_training_frame(frame: pd.DataFrame) -> None:
    missing = [column for column in TRAINING_COLUMNS if column not in frame.columns]
    if missing:
        raise TrainingError(f"training data is missing column(s) {missing}")
    if frame.empty:
        raise TrainingError("training data is empty")
    if frame[AREA_COLUMN].nunique() < 2:
        raise TrainingError(f"training data needs at least 2 distinct {AREA_COLUMN} labels")


def train_model(
    descriptor: PipelineDescriptor,
    frame: pd.DataFrame,
    *,
    seed: int = 0,
    cache_dir: Path | None = None,
) -> IssueModel:
    _check_training_frame(frame)
    full = append_trainer_steps(descriptor)
    full.validate()

    label_encoder = build_label_encoder(full)
    y = label_encoder.fit_transform(frame[AREA_COLUMN].astype(str))
    x = frame[list(INPUT_COLUMNS)].fillna("").astype(str)

    pipeline = Pipeline(
        steps=[
            ("features", build_feature_union(full)),
            ("classifier", _build_classifier(seed)),
        ],
        memory=checkpoint_memory(full, cache_dir),
    )
    log.info("fitting %s on %d rows, %d classes", " -> ".join(full.names), len(frame), len(label_encoder.classes_))
    try:
        pipeline.fit(x, y)
    except ValueError as exc:
        raise TrainingError(f"fit failed: {exc}") from exc
    # the checkpoint only matters while fitting; keep the artifact independent of the cache location
    pipeline.set_params(memory=None)

    metadata: dict[str, Any] = {
        "artifact_version": ARTIFACT_VERSION,
        "seed": int(seed),
        "rows": int(len(frame)),
        "classes": [str(label) for label in label_encoder.classes_],
        "steps": full.names,
        "sklearn_version": sklearn.__version__,
    }
    return IssueModel(pipeline=pipeline, label_encoder=label_encoder, metadata=metadata)
