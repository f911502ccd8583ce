# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import asdict, dataclass, field

TITLE_COLUMN = "Title"
DESCRIPTION_COLUMN = "Description"
AREA_COLUMN = "Area"
LABEL_COLUMN = "Label"
FEATURES_COLUMN = "Features"
PREDICTED_LABEL_COLUMN = "PredictedLabel"
SCORE_COLUMN = "Score"

INPUT_COLUMNS = (TITLE_COLUMN, DESCRIPTION_COLUMN)
TRAINING_COLUMNS = (TITLE_COLUMN, DESCRIPTION_COLUMN, AREA_COLUMN)


@dataclass(frozen=True, slots=True)
class IssueRecord:
    title: str
    description: str
    area: str | None = None

    def as_row(self) -> dict[str, str]:
        row = {TITLE_COLUMN: self.title, DESCRIPTION_COLUMN: self.description}
        if self.area is not None:
            row[AREA_COLUMN] = self.area
        return row


@dataclass(slots=True)
class PredictionResult:
    area: str
    scores: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Metrics:
    micro_accuracy: float
    macro_accuracy: float
    log_loss: float
    log_loss_reduction: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)
