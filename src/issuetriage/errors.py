# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations


class IssueTriageError(Exception):
    """Base class for every failure surfaced to the command line."""


class DatasetNotFoundError(IssueTriageError, FileNotFoundError):
    pass


class SchemaMismatchError(IssueTriageError, ValueError):
    pass


class TrainingError(IssueTriageError, RuntimeError):
    pass


class CorruptArtifactError(IssueTriageError):
    pass


class ModelNotFoundError(CorruptArtifactError, FileNotFoundError):
    pass


class ArtifactIOError(IssueTriageError, OSError):
    pass
