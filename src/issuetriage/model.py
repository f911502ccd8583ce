# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import io
import pickle
from typing import IO, Any, Protocol

import joblib
import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.pipeline import FeatureUnion, Pipeline
from sklearn.preprocessing import LabelEncoder

from .errors import CorruptArtifactError, SchemaMismatchError
from .schemas import INPUT_COLUMNS, PREDICTED_LABEL_COLUMN, SCORE_COLUMN, IssueRecord, PredictionResult
from .training.dataset import records_to_frame

ARTIFACT_FORMAT = "issuetriage-model"
ARTIFACT_VERSION = 1
_LOAD_ERRORS = (
    EOFError,
    pickle.UnpicklingError,
    ValueError,
    TypeError,
    AttributeError,
    ImportError,
    IndexError,
    KeyError,
)


class TrainedModel(Protocol):
    def transform(self, frame: pd.DataFrame) -> pd.DataFrame: ...

    def predict_single(self, record: IssueRecord) -> PredictionResult: ...

    def to_bytes(self) -> bytes: ...

    @classmethod
    def from_bytes(cls, data: bytes) -> "TrainedModel": ...


def iter_vectorizers(estimator: Any):
    """Yield every text vectorizer nested in pipelines, unions and column transformers."""
    if isinstance(estimator, CountVectorizer):
        yield estimator
        return
    if isinstance(estimator, Pipeline):
        children = [step for _name, step in estimator.steps]
    elif isinstance(estimator, ColumnTransformer):
        children = [item[1] for item in estimator.transformers + getattr(estimator, "transformers_", [])]
    elif isinstance(estimator, FeatureUnion):
        children = [step for _name, step in estimator.transformer_list]
    else:
        children = []
    for child in children:
        yield from iter_vectorizers(child)


class IssueModel:
    """Fitted featurizer + classifier with the label encoder used to decode keys."""

    def __init__(self, *, pipeline: Pipeline, label_encoder: LabelEncoder, metadata: dict[str, Any] | None = None) -> None:
        self.pipeline = pipeline
        self.label_encoder = label_encoder
        self.metadata: dict[str, Any] = dict(metadata or {})

    @property
    def classes(self) -> list[str]:
        return [str(label) for label in self.label_encoder.classes_]

    def transform(self, frame: pd.DataFrame) -> pd.DataFrame:
        missing = [column for column in INPUT_COLUMNS if column not in frame.columns]
        if missing:
            raise SchemaMismatchError(f"input is missing column(s) {missing}")
        x = frame[list(INPUT_COLUMNS)].fillna("").astype(str)
        probs = self.pipeline.predict_proba(x)
        classifier_keys = self.pipeline.classes_
        keys = classifier_keys[np.argmax(probs, axis=1)]
        out = frame.copy()
        out[PREDICTED_LABEL_COLUMN] = self.label_encoder.inverse_transform(keys)
        # reorder columns so Score[i] always lines up with self.classes[i]
        ordered = np.zeros((len(frame), len(self.label_encoder.classes_)), dtype=float)
        ordered[:, classifier_keys] = probs
        out[SCORE_COLUMN] = list(ordered)
        return out

    def predict_single(self, record: IssueRecord) -> PredictionResult:
        frame = records_to_frame([IssueRecord(title=record.title, description=record.description)])
        row = self.transform(frame).iloc[0]
        scores = {label: float(value) for label, value in zip(self.classes, row[SCORE_COLUMN])}
        return PredictionResult(area=str(row[PREDICTED_LABEL_COLUMN]), scores=scores)

    def write_to(self, handle: IO[bytes]) -> None:
        # vectorizers cache id(stop_words), a per-process address that would leak into the artifact
        for vectorizer in iter_vectorizers(self.pipeline):
            vectorizer.__dict__.pop("_stop_words_id", None)
        envelope = {"format": ARTIFACT_FORMAT, "version": ARTIFACT_VERSION, "model": self}
        joblib.dump(envelope, handle)

    @classmethod
    def read_from(cls, handle: IO[bytes], *, source: str = "<bytes>") -> "IssueModel":
        try:
            envelope = joblib.load(handle)
        except _LOAD_ERRORS as exc:
            raise CorruptArtifactError(f"cannot deserialize model from {source}: {exc}") from exc
        if not isinstance(envelope, dict) or envelope.get("format") != ARTIFACT_FORMAT:
            raise CorruptArtifactError(f"{source} is not an issuetriage model artifact")
        if envelope.get("version") != ARTIFACT_VERSION:
            raise CorruptArtifactError(
                f"{source} has artifact version {envelope.get('version')!r}, expected {ARTIFACT_VERSION}"
            )
        model = envelope.get("model")
        if not isinstance(model, cls):
            raise CorruptArtifactError(f"{source} does not contain an IssueModel")
        return model

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.write_to(buffer)
        return buffer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> "IssueModel":
        return cls.read_from(io.BytesIO(data))
