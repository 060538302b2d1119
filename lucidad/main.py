"""Command-line client for fact-checking advertisement images."""

import argparse
import asyncio
import base64
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .domain.errors import LucidAdError
from .domain.models.fact_check_result import AnalyzedFactCheck
from .domain.services.error_mapping import map_error
from .infrastructure.dependencies import ServiceContainer

CLI_CLIENT_KEY = "cli"

console = Console()


def image_to_data_url(path: Path) -> str:
    """Encode an image file as a base64 data URL.

    Raises:
        ValueError: If the file extension is not a known image type
    """
    mime, _ = mimetypes.guess_type(path.name)
    if not mime or not mime.startswith("image/"):
        raise ValueError(f"Not an image file: {path}")
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def render_result(path: Path, result: AnalyzedFactCheck) -> None:
    """Print one fact-check result."""
    score = "n/a" if result.truth_score is None else f"{result.truth_score}/100"
    console.rule(f"[bold]{path.name}")
    console.print(f"[bold]Product:[/bold] {result.product_name or '-'}")
    console.print(f"[bold]Company:[/bold] {result.company or '-'}")
    console.print(f"[bold]Category:[/bold] {result.category or '-'}")
    console.print(f"[bold]Truth score:[/bold] {score}")
    if result.brief_context:
        console.print(f"[bold]Context:[/bold] {result.brief_context}")
    for label, items in (("Key numbers", result.key_numbers), ("Measurable facts", result.measurable_facts)):
        if items:
            console.print(f"[bold]{label}:[/bold] " + "; ".join(items))
    console.print(f"\n{result.report}\n")

    if result.sources:
        table = Table("Source", "URL")
        for source in result.sources:
            table.add_row(source.title or "-", source.url)
        console.print(table)

    console.print(f"[dim]{result.model} · {result.analyzed_at.isoformat()} · {result.processing_time}ms[/dim]")


async def run(paths: List[Path]) -> int:
    """Fact-check each image in turn; return the process exit code."""
    try:
        container = ServiceContainer()
    except LucidAdError as e:
        console.print(f"[red]Configuration error:[/red] {e.detail}")
        return 2

    service = await container.get_fact_checking_service()
    exit_code = 0
    try:
        for path in paths:
            try:
                payload = {"image": image_to_data_url(path)}
            except (OSError, ValueError) as e:
                console.print(f"[red]{path}:[/red] {e}")
                exit_code = 1
                continue

            try:
                result = await service.analyze(payload, CLI_CLIENT_KEY)
            except Exception as e:
                status_code, body = map_error(e)
                console.print(f"[red]{path.name}: {body.error} ({status_code})[/red]")
                if body.details:
                    console.print(body.details)
                exit_code = 1
                continue

            render_result(path, result)
    finally:
        await container.shutdown()

    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command-line client."""
    parser = argparse.ArgumentParser(description="Fact-check advertisement images")
    parser.add_argument("images", nargs="+", type=Path, help="Image files to analyze")
    args = parser.parse_args(argv)
    return asyncio.run(run(args.images))


if __name__ == "__main__":
    sys.exit(main())
