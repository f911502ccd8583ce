# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""GitHub issue Area classifier."""

from .features import PipelineDescriptor, PipelineStep, build_pipeline
from .inference.predictor import IssuePredictor, load_predictor
from .model import IssueModel, TrainedModel
from .schemas import IssueRecord, Metrics, PredictionResult

__all__ = [
    "IssueRecord",
    "PredictionResult",
    "Metrics",
    "PipelineStep",
    "PipelineDescriptor",
    "build_pipeline",
    "IssueModel",
    "TrainedModel",
    "IssuePredictor",
    "load_predictor",
]
