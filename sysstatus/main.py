"""Entry point — report system status."""

from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.markup import escape

from sysstatus.config import settings
from sysstatus.health.monitor import HealthMonitor, RunResult
from sysstatus.notifications import Output, get_channel

console = Console(stderr=True)


def parse_output(value: str) -> Output:
    try:
        return Output(value)
    except ValueError:
        raise argparse.ArgumentTypeError("valid outputs are `mail` and `stdout`") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sysstatus", description="Report system status.")
    parser.add_argument(
        "--output",
        type=parse_output,
        required=True,
        metavar="{mail,stdout}",
        help="where to report the status to",
    )
    return parser


def print_summary(result: RunResult) -> None:
    if result.alert is None:
        console.print(f"[green]no escalation since last run[/green] [dim]({len(result.reports)} checks)[/dim]")
        return
    style = "bold red" if result.alert.critical else "yellow"
    console.print(f"[{style}]{escape(result.alert.subject)}[/{style}]")
    if not result.delivered:
        console.print("[red]alert could not be delivered[/red]")


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    monitor = HealthMonitor(channel=get_channel(args.output))
    result = monitor.run_once()
    print_summary(result)


if __name__ == "__main__":
    main()
