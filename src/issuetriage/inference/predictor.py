# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

from ..model import TrainedModel
from ..schemas import IssueRecord, PredictionResult
from ..storage import load_model

SAMPLE_ISSUE = IssueRecord(
    title="Entity Framework crashes",
    description="When connecting to the database, EF is crashing",
)


class IssuePredictor:
    def __init__(self, model: TrainedModel) -> None:
        self.model = model

    def predict(self, record: IssueRecord) -> PredictionResult:
        # area is ignored at inference time
        query = IssueRecord(title=record.title, description=record.description)
        return self.model.predict_single(query)


def load_predictor(model_path: Path) -> IssuePredictor:
    return IssuePredictor(load_model(model_path))
