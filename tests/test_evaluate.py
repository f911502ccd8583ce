# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import pandas as pd
import pytest

from issuetriage.errors import SchemaMismatchError
from issuetriage.evaluation.evaluate import evaluate_model, evaluate_saved_model
from issuetriage.storage import save_model
from issuetriage.training.dataset import load_issues


def test_metrics_are_within_bounds(trained_model, test_tsv):
    metrics = evaluate_model(trained_model, load_issues(test_tsv))
    assert 0.0 <= metrics.micro_accuracy <= 1.0
    assert 0.0 <= metrics.macro_accuracy <= 1.0
    assert metrics.log_loss >= 0.0
    assert metrics.log_loss_reduction <= 1.0
    assert set(metrics.as_dict()) == {"micro_accuracy", "macro_accuracy", "log_loss", "log_loss_reduction"}


def test_separable_data_is_learned(trained_model, test_tsv):
    metrics = evaluate_model(trained_model, load_issues(test_tsv))
    assert metrics.micro_accuracy >= 0.75
    assert metrics.log_loss_reduction > 0.0


def test_evaluation_does_not_mutate_input(trained_model, test_tsv):
    frame = load_issues(test_tsv)
    before = frame.copy()
    evaluate_model(trained_model, frame)
    pd.testing.assert_frame_equal(frame, before)


def test_unseen_labels_are_skipped(trained_model, test_tsv):
    frame = load_issues(test_tsv)
    extra = pd.DataFrame({"Title": ["Brand new thing"], "Description": ["Never seen"], "Area": ["area-Unknown"]})
    with_unseen = pd.concat([frame, extra], ignore_index=True)
    assert evaluate_model(trained_model, with_unseen) == evaluate_model(trained_model, frame)


def test_only_unseen_labels_raise(trained_model):
    frame = pd.DataFrame({"Title": ["x"], "Description": ["y"], "Area": ["area-Unknown"]})
    with pytest.raises(SchemaMismatchError):
        evaluate_model(trained_model, frame)


def test_missing_label_column_raises(trained_model):
    with pytest.raises(SchemaMismatchError):
        evaluate_model(trained_model, pd.DataFrame({"Title": ["x"], "Description": ["y"]}))


def test_evaluate_saved_model(trained_model, test_tsv, tmp_path):
    path = save_model(trained_model, tmp_path / "model.joblib")
    metrics = evaluate_saved_model(model_path=path, eval_dataset_path=test_tsv)
    assert metrics == evaluate_model(trained_model, load_issues(test_tsv))
