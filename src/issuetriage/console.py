# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

ASCII_BANNER = r"""
 ___                        _____     _
|_ _|___ ___ _   _  ___    |_   _| __(_) __ _  __ _  ___
 | |/ __/ __| | | |/ _ \     | || '__| |/ _` |/ _` |/ _ \
 | |\__ \__ \ |_| |  __/     | || |  | | (_| | (_| |  __/
|___|___/___/\__,_|\___|     |_||_|  |_|\__,_|\__, |\___|
                                              |___/
"""

METRIC_LABELS = {
    "micro_accuracy": "MicroAccuracy",
    "macro_accuracy": "MacroAccuracy",
    "log_loss": "LogLoss",
    "log_loss_reduction": "LogLossReduction",
}


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@dataclass
class MLConsole:
    enabled: bool = True
    console: Console | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.console is None:
            self.console = Console(color_system="auto", soft_wrap=True, quiet=not self.enabled)

    def banner(self) -> None:
        self.console.print(Panel.fit(ASCII_BANNER.strip("\n"), title="Issue Triage", border_style="cyan"))

    def info(self, text: str) -> None:
        self.console.print(f"[bold cyan]INFO[/bold cyan] {escape(text)}")

    def warn(self, text: str) -> None:
        self.console.print(f"[bold yellow]WARN[/bold yellow] {escape(text)}")

    def error(self, text: str) -> None:
        self.console.print(f"[bold red]ERROR[/bold red] {escape(text)}")

    def success(self, text: str) -> None:
        self.console.print(f"[bold green]OK[/bold green] {escape(text)}")

    def metrics_table(self, metrics: dict[str, float], *, title: str) -> None:
        table = Table(title=title, show_lines=True)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        for key, value in metrics.items():
            table.add_row(METRIC_LABELS.get(key, key), f"{float(value):.3f}")
        self.console.print(table)

    def prediction(self, area: str) -> None:
        self.console.print(f"=============== Single Prediction - Result: [bold]{escape(area)}[/bold] ===============")
