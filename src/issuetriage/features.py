# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from joblib import Memory
from sklearn.compose import ColumnTransformer
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.pipeline import FeatureUnion
from sklearn.preprocessing import LabelEncoder

from .errors import SchemaMismatchError
from .schemas import (
    AREA_COLUMN,
    DESCRIPTION_COLUMN,
    FEATURES_COLUMN,
    LABEL_COLUMN,
    TITLE_COLUMN,
    TRAINING_COLUMNS,
)

MAP_VALUE_TO_KEY = "map_value_to_key"
FEATURIZE_TEXT = "featurize_text"
CONCATENATE = "concatenate"
CACHE_CHECKPOINT = "cache_checkpoint"
MULTICLASS_CLASSIFIER = "multiclass_classifier"
MAP_KEY_TO_VALUE = "map_key_to_value"

TITLE_FEATURIZED_COLUMN = "TitleFeaturized"
DESCRIPTION_FEATURIZED_COLUMN = "DescriptionFeaturized"


@dataclass(frozen=True, slots=True)
class PipelineStep:
    name: str
    kind: str
    inputs: tuple[str, ...]
    output: str


@dataclass(frozen=True, slots=True)
class PipelineDescriptor:
    steps: tuple[PipelineStep, ...]

    @property
    def names(self) -> list[str]:
        return [step.name for step in self.steps]

    def append(self, step: PipelineStep) -> "PipelineDescriptor":
        return PipelineDescriptor(steps=self.steps + (step,))

    def of_kind(self, kind: str) -> list[PipelineStep]:
        return [step for step in self.steps if step.kind == kind]

    def validate(self, source_columns: tuple[str, ...] = TRAINING_COLUMNS) -> None:
        """Check that every step only reads raw columns or outputs of earlier steps."""
        available = set(source_columns)
        for step in self.steps:
            missing = [column for column in step.inputs if column not in available]
            if missing:
                raise SchemaMismatchError(
                    f"step {step.name!r} reads unknown column(s) {missing}; available: {sorted(available)}"
                )
            available.add(step.output)


def build_pipeline() -> PipelineDescriptor:
    return PipelineDescriptor(
        steps=(
            PipelineStep("label_encoding", MAP_VALUE_TO_KEY, (AREA_COLUMN,), LABEL_COLUMN),
            PipelineStep("title_featurization", FEATURIZE_TEXT, (TITLE_COLUMN,), TITLE_FEATURIZED_COLUMN),
            PipelineStep(
                "description_featurization",
                FEATURIZE_TEXT,
                (DESCRIPTION_COLUMN,),
                DESCRIPTION_FEATURIZED_COLUMN,
            ),
            PipelineStep(
                "feature_concatenation",
                CONCATENATE,
                (TITLE_FEATURIZED_COLUMN, DESCRIPTION_FEATURIZED_COLUMN),
                FEATURES_COLUMN,
            ),
            PipelineStep("cache_checkpoint", CACHE_CHECKPOINT, (FEATURES_COLUMN,), FEATURES_COLUMN),
        )
    )


def _text_featurizer() -> FeatureUnion:
    # word uni/bigrams plus char trigrams, each block L2-normalized
    return FeatureUnion(
        transformer_list=[
            ("word_tfidf", TfidfVectorizer(analyzer="word", lowercase=True, ngram_range=(1, 2))),
            ("char_tfidf", TfidfVectorizer(analyzer="char", lowercase=True, ngram_range=(3, 3))),
        ]
    )


def build_feature_union(descriptor: PipelineDescriptor) -> ColumnTransformer:
    """Realize the featurize + concatenate steps as a single ColumnTransformer.

    Each featurize step becomes one transformer branch reading its raw text
    column; the concatenate step fixes which featurized outputs are stacked
    into ``Features`` and in what order.
    """
    featurizers = {step.output: step for step in descriptor.of_kind(FEATURIZE_TEXT)}
    concat = descriptor.of_kind(CONCATENATE)
    if len(concat) != 1:
        raise SchemaMismatchError(f"expected exactly one {CONCATENATE} step, found {len(concat)}")

    transformers = []
    for column in concat[0].inputs:
        step = featurizers.get(column)
        if step is None:
            raise SchemaMismatchError(f"concatenated column {column!r} is not produced by a {FEATURIZE_TEXT} step")
        if len(step.inputs) != 1:
            raise SchemaMismatchError(f"step {step.name!r} must featurize exactly one text column")
        transformers.append((step.output, _text_featurizer(), step.inputs[0]))

    return ColumnTransformer(transformers=transformers, remainder="drop", sparse_threshold=1.0)


def build_label_encoder(descriptor: PipelineDescriptor) -> LabelEncoder:
    if len(descriptor.of_kind(MAP_VALUE_TO_KEY)) != 1:
        raise SchemaMismatchError(f"expected exactly one {MAP_VALUE_TO_KEY} step")
    return LabelEncoder()


def checkpoint_memory(descriptor: PipelineDescriptor, cache_dir: Path | None) -> Memory | None:
    """Map the cache checkpoint to the ``memory`` argument of a scikit-learn Pipeline."""
    if not descriptor.of_kind(CACHE_CHECKPOINT) or cache_dir is None:
        return None
    cache_dir.mkdir(parents=True, exist_ok=True)
    return Memory(location=str(cache_dir), verbose=0)
