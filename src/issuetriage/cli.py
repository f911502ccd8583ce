# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import TriageConfig
from .console import MLConsole, configure_logging
from .errors import IssueTriageError
from .evaluation.evaluate import evaluate_model
from .features import build_pipeline
from .inference.predictor import SAMPLE_ISSUE, IssuePredictor, load_predictor
from .model import IssueModel
from .schemas import IssueRecord
from .storage import load_model, save_model
from .training.dataset import load_issues
from .training.trainer import train_model

log = logging.getLogger(__name__)


def _train(config: TriageConfig, ui: MLConsole) -> IssueModel:
    training_data = load_issues(config.train_path, has_header=config.has_header)
    ui.info(f"loaded {len(training_data)} training issues from {config.train_path}")
    model = train_model(build_pipeline(), training_data, seed=config.seed, cache_dir=config.cache_dir)
    save_model(model, config.model_path)
    ui.success(f"The model is saved to {config.model_path}")
    return model


def _evaluate(config: TriageConfig, model: IssueModel, ui: MLConsole) -> None:
    test_data = load_issues(config.test_path, has_header=config.has_header)
    metrics = evaluate_model(model, test_data)
    ui.metrics_table(metrics.as_dict(), title="Metrics for Multi-class Classification model - Test Data")


def _predict(predictor: IssuePredictor, record: IssueRecord, ui: MLConsole) -> None:
    result = predictor.predict(record)
    ui.prediction(result.area)


def cmd_run(config: TriageConfig, args: argparse.Namespace, ui: MLConsole) -> int:
    model = _train(config, ui)
    _evaluate(config, model, ui)
    _predict(load_predictor(config.model_path), SAMPLE_ISSUE, ui)
    return 0


def cmd_train(config: TriageConfig, args: argparse.Namespace, ui: MLConsole) -> int:
    _train(config, ui)
    return 0


def cmd_evaluate(config: TriageConfig, args: argparse.Namespace, ui: MLConsole) -> int:
    _evaluate(config, load_model(config.model_path), ui)
    return 0


def cmd_predict(config: TriageConfig, args: argparse.Namespace, ui: MLConsole) -> int:
    record = IssueRecord(
        title=args.title if args.title is not None else SAMPLE_ISSUE.title,
        description=args.description if args.description is not None else SAMPLE_ISSUE.description,
    )
    _predict(load_predictor(config.model_path), record, ui)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issuetriage",
        description="Train and apply a GitHub issue Area classifier.",
    )
    parser.add_argument("--train", type=Path, help="Training TSV (env ISSUES_TRAIN_PATH)")
    parser.add_argument("--test", type=Path, help="Held-out TSV (env ISSUES_TEST_PATH)")
    parser.add_argument("--model", type=Path, help="Model artifact path (env ISSUES_MODEL_PATH)")
    parser.add_argument("--seed", type=int, help="Random seed (env ISSUES_SEED)")
    parser.add_argument("--cache-dir", type=Path, help="On-disk feature cache (env ISSUES_CACHE_DIR)")
    parser.add_argument("--no-header", action="store_true", help="Input TSV files have no header line")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="No console output")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("run", help="Train, save, evaluate and predict the sample issue (default)")
    sub.add_parser("train", help="Train and save the model")
    sub.add_parser("evaluate", help="Evaluate the saved model on the test set")
    predict = sub.add_parser("predict", help="Predict the Area of one issue with the saved model")
    predict.add_argument("--title", help="Issue title")
    predict.add_argument("--description", help="Issue description")
    return parser


COMMANDS = {
    "run": cmd_run,
    "train": cmd_train,
    "evaluate": cmd_evaluate,
    "predict": cmd_predict,
}


def main(argv: list[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        # argparse exits 2 on usage errors and 0 after --help
        return exc.code if isinstance(exc.code, int) else 2
    configure_logging(args.verbose)
    ui = MLConsole(enabled=not args.quiet)

    config = TriageConfig.from_env().with_overrides(
        train_path=args.train,
        test_path=args.test,
        model_path=args.model,
        seed=args.seed,
        cache_dir=args.cache_dir,
        has_header=False if args.no_header else None,
    )
    command = args.command or "run"
    if command == "run":
        ui.banner()
    try:
        return COMMANDS[command](config, args, ui)
    except IssueTriageError as exc:
        log.debug("command %s failed", command, exc_info=True)
        ui.error(str(exc))
        return 1
