# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from conftest import write_tsv, issue_rows
from issuetriage.errors import SchemaMismatchError, TrainingError
from issuetriage.features import build_pipeline
from issuetriage.training import trainer as trainer_module
from issuetriage.training.dataset import load_issues
from issuetriage.training.trainer import train_model


def test_trained_model_knows_training_labels(trained_model, train_frame):
    assert trained_model.classes == sorted(train_frame["Area"].unique())
    assert trained_model.metadata["steps"][-2:] == ["multiclass_classifier", "key_to_value"]
    assert trained_model.metadata["rows"] == len(train_frame)


def test_transform_adds_prediction_columns(trained_model, train_frame):
    scored = trained_model.transform(train_frame)
    assert "PredictedLabel" in scored.columns and "Score" in scored.columns
    assert "PredictedLabel" not in train_frame.columns
    assert set(scored["PredictedLabel"]) <= set(trained_model.classes)
    probs = np.vstack(scored["Score"].to_list())
    assert probs.shape == (len(train_frame), len(trained_model.classes))
    assert np.allclose(probs.sum(axis=1), 1.0)


def test_transform_requires_text_columns(trained_model):
    with pytest.raises(SchemaMismatchError):
        trained_model.transform(pd.DataFrame({"Title": ["only a title"]}))


def test_empty_dataset_raises_training_error():
    empty = pd.DataFrame(columns=["Title", "Description", "Area"])
    with pytest.raises(TrainingError):
        train_model(build_pipeline(), empty)


def test_single_label_raises_training_error():
    frame = pd.DataFrame({"Title": ["a", "b"], "Description": ["c", "d"], "Area": ["x", "x"]})
    with pytest.raises(TrainingError):
        train_model(build_pipeline(), frame)


def test_missing_column_fails_before_fitting(tmp_path, monkeypatch):
    rows = [(title, desc) for title, desc, _area in issue_rows(repeat=1)]
    path = write_tsv(tmp_path / "bad.tsv", rows, ["Title", "Description"])
    calls = []
    monkeypatch.setattr(trainer_module, "_build_classifier", lambda seed: calls.append(seed))
    with pytest.raises(SchemaMismatchError):
        train_model(build_pipeline(), load_issues(path))
    assert calls == []


def test_same_seed_gives_identical_artifacts(train_frame):
    first = train_model(build_pipeline(), train_frame, seed=0)
    second = train_model(build_pipeline(), train_frame, seed=0)
    assert first.to_bytes() == second.to_bytes()


def test_cache_checkpoint_does_not_change_output(train_frame, tmp_path):
    plain = train_model(build_pipeline(), train_frame, seed=0)
    cached = train_model(build_pipeline(), train_frame, seed=0, cache_dir=tmp_path / "cache")
    left = np.vstack(plain.transform(train_frame)["Score"].to_list())
    right = np.vstack(cached.transform(train_frame)["Score"].to_list())
    assert np.allclose(left, right)
    assert cached.pipeline.memory is None
