"""Main CLI entry point for the review sentiment pipeline."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from config.settings import settings
from config.logging_config import setup_logging

# Initialize
app = typer.Typer(
    name="review-sentiment",
    help="Normalize app reviews, score their sentiment and export CSV files.",
    add_completion=False,
)
console = Console()


@app.callback()
def callback():
    """Review Sentiment - score and export user reviews."""
    pass


def _load_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _print_stats(stats: dict) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Label")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")

    for label in ("positive", "negative", "neutral"):
        table.add_row(label.capitalize(), str(stats[label]), f"{stats['distribution'][label]}%")

    console.print(table)
    console.print(
        f"Total: [bold]{stats['total']}[/bold]  "
        f"Avg score: [cyan]{stats['avgScore']}[/cyan]  "
        f"Avg confidence: [cyan]{stats['avgConfidence']}[/cyan]"
    )


@app.command()
def analyze(
    texts: list[str] = typer.Argument(..., help="One or more texts to score"),
):
    """
    Score the sentiment of one or more texts.

    Examples:
        review-sentiment analyze "Aplikasi ini bagus sekali" "Aplikasi ini buruk"
    """
    from review_sentiment.service import analyze_texts

    setup_logging()
    result = analyze_texts(texts)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Text")
    table.add_column("Label")
    table.add_column("Score", justify="right")
    table.add_column("Confidence", justify="right")

    for text, item in zip(texts, result["results"]):
        table.add_row(text[:60], item["label"], str(item["score"]), f"{item['confidence']:.2f}")

    console.print(table)
    _print_stats(result["stats"])


@app.command()
def predict(
    text: str = typer.Argument(..., help="Text to score"),
    no_preprocess: bool = typer.Option(False, "--no-preprocess", help="Score the raw text"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Stopword locale (id or en)"),
):
    """Preprocess a text and predict its sentiment."""
    from review_sentiment.exceptions import ReviewPipelineError
    from review_sentiment.service import predict as predict_text

    setup_logging()
    try:
        result = predict_text(text, preprocess=not no_preprocess, locale=locale or settings.default_locale)
    except ReviewPipelineError as e:
        _fail(str(e))

    prediction = result["prediction"]
    console.print(f"Processed: [cyan]{result['input']['processed']}[/cyan]")
    console.print(
        f"Sentiment: [bold]{prediction['label']}[/bold] "
        f"(score {prediction['score']}, confidence {prediction['confidence']:.2f})"
    )


@app.command()
def reviews(
    input_file: str = typer.Argument(..., help="JSON file with a list of review objects"),
    text_field: str = typer.Option("reviewText", "--text-field", "-t", help="Field holding the review text"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write analyzed reviews to this file"),
):
    """Attach sentiment to a JSON list of reviews."""
    from review_sentiment.exceptions import ReviewPipelineError
    from review_sentiment.service import analyze_review_batch

    setup_logging()
    try:
        result = analyze_review_batch(_load_json(input_file), text_field=text_field)
    except ReviewPipelineError as e:
        _fail(str(e))

    console.print(f"[green]✓[/green] Analyzed [bold]{result['count']}[/bold] reviews")
    _print_stats(result["stats"])

    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result["reviews"], f, ensure_ascii=False, indent=2)
        console.print(f"[green]✓[/green] Saved to [cyan]{output}[/cyan]")


@app.command()
def export(
    source: str = typer.Argument(..., help="Source of the records: playstore, appstore, twitter"),
    input_file: str = typer.Argument(..., help="JSON file with raw scraped records"),
    app_id: str = typer.Option(..., "--app-id", "-a", help="App ID (or query slug for twitter)"),
    app_name: str = typer.Option("", "--app-name", "-n", help="App name (or search query for twitter)"),
    rating: Optional[int] = typer.Option(None, "--rating", "-r", help="Keep only this star rating"),
    limit: Optional[int] = typer.Option(None, "--limit", "-m", help="Maximum records to export"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Also write the CSV here"),
):
    """
    Normalize raw records, score them and export a CSV.

    Examples:
        review-sentiment export playstore reviews.json --app-id com.whatsapp --app-name WhatsApp
    """
    from review_sentiment.exceptions import ReviewPipelineError
    from review_sentiment.models.source import AppInfo
    from review_sentiment.service import export_reviews
    from review_sentiment.storage import ExportSinkCoordinator, create_blob_storage

    setup_logging()
    settings.ensure_directories()

    coordinator = ExportSinkCoordinator(
        scratch_dir=settings.scratch_dir,
        storage=create_blob_storage(settings),
    )

    try:
        result = asyncio.run(export_reviews(
            source,
            _load_json(input_file),
            AppInfo(title=app_name, app_id=app_id),
            coordinator,
            rating_filter=rating,
            limit=limit,
            preview_size=settings.preview_size,
        ))
    except ReviewPipelineError as e:
        _fail(str(e))

    console.print(f"\n[bold blue]Review Export[/bold blue] - {result['source']}")
    console.print("=" * 50)
    console.print(f"[green]✓[/green] Exported [bold]{result['count']}[/bold] reviews (job {result['jobId']})")
    if result["errors"]:
        console.print(f"[yellow]Warning:[/yellow] Skipped {len(result['errors'])} malformed records")

    _print_stats(result["sentimentStats"])

    csv_info = result["csv"]
    if csv_info["uploaded"]:
        console.print(f"[green]✓[/green] Uploaded: [cyan]{csv_info['downloadUrl']}[/cyan]")
    elif csv_info["error"]:
        console.print(f"[yellow]Warning:[/yellow] Upload failed: {csv_info['error']}")

    if output and csv_info["content"] is not None:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(csv_info["content"])
        console.print(f"[green]✓[/green] Saved CSV to [cyan]{output}[/cyan]")


@app.command()
def info():
    """Show configuration and system information."""
    from review_sentiment.adapters import list_sources

    console.print("\n[bold blue]Review Sentiment Configuration[/bold blue]")
    console.print("=" * 50)

    table = Table(show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug", str(settings.debug))
    table.add_row("Scratch Dir", str(settings.scratch_dir))
    table.add_row("Default Locale", settings.default_locale)
    table.add_row("Sources", ", ".join(list_sources()))
    table.add_row("Upload", "Enabled" if settings.upload_enabled else "Disabled")
    table.add_row("Upload Timeout", f"{settings.upload_timeout}s")
    table.add_row("Upload Retries", str(settings.upload_max_retries))

    console.print(table)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
