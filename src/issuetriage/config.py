# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .env import get_bool_env, get_env, get_int_env

DEFAULT_TRAIN_PATH = Path("Data") / "issues_train.tsv"
DEFAULT_TEST_PATH = Path("Data") / "issues_test.tsv"
DEFAULT_MODEL_PATH = Path("Models") / "model.joblib"


@dataclass(frozen=True, slots=True)
class TriageConfig:
    train_path: Path
    test_path: Path
    model_path: Path
    seed: int = 0
    has_header: bool = True
    cache_dir: Path | None = None

    @classmethod
    def from_env(cls, base_dir: Path | None = None) -> "TriageConfig":
        """Build the configuration from ``ISSUES_*`` variables.

        Relative paths are resolved against ``base_dir`` (current directory by default).
        """
        root = base_dir or Path.cwd()

        def _path(name: str, default: Path) -> Path:
            path = Path(get_env(name, str(default)) or str(default))
            return path if path.is_absolute() else root / path

        cache_raw = get_env("ISSUES_CACHE_DIR")
        cache_dir = _path("ISSUES_CACHE_DIR", Path(cache_raw)) if cache_raw else None
        return cls(
            train_path=_path("ISSUES_TRAIN_PATH", DEFAULT_TRAIN_PATH),
            test_path=_path("ISSUES_TEST_PATH", DEFAULT_TEST_PATH),
            model_path=_path("ISSUES_MODEL_PATH", DEFAULT_MODEL_PATH),
            seed=get_int_env("ISSUES_SEED", 0),
            has_header=get_bool_env("ISSUES_HAS_HEADER", True),
            cache_dir=cache_dir,
        )

    def with_overrides(self, **overrides: Any) -> "TriageConfig":
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)
