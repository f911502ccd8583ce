# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .errors import ArtifactIOError, ModelNotFoundError
from .model import IssueModel

log = logging.getLogger(__name__)


def save_model(model: IssueModel, path: Path) -> Path:
    """Write ``model`` to ``path``, replacing any previous artifact atomically."""
    path = Path(path)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "wb") as handle:
            model.write_to(handle)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise ArtifactIOError(f"cannot write model to {path}: {exc}") from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    log.info("model saved to %s", path)
    return path


def load_model(path: Path) -> IssueModel:
    path = Path(path)
    if not path.is_file():
        raise ModelNotFoundError(f"model artifact not found: {path}")
    try:
        with path.open("rb") as handle:
            return IssueModel.read_from(handle, source=str(path))
    except OSError as exc:
        raise ArtifactIOError(f"cannot read model from {path}: {exc}") from exc
