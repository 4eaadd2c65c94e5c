"""Command line interface for DocInsight."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from docinsight.analysis.service import DocumentAnalyzer
from docinsight.config import AppConfig
from docinsight.ingestion.extractors import load_document
from docinsight.llm.client import GeminiClient, GenerationError
from docinsight.retrieval.search import query_terms, score_chunk, select_best_chunk
from docinsight.utils.files import UploadError
from docinsight.utils.text import chunk_words
from docinsight.web.app import app as web_app


console = Console()
app = typer.Typer(help="DocInsight - AI summaries, Q&A and compliance checks for documents")

SEVERITY_STYLES = {"critical": "bold red", "warning": "yellow", "info": "cyan"}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _read_document(path: Path) -> str:
    try:
        document = load_document(path.name, path.read_bytes())
    except UploadError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return document.text


def _build_analyzer(model: Optional[str]) -> DocumentAnalyzer:
    config = AppConfig.from_env()
    if model:
        config.model_id = model
    return DocumentAnalyzer(GeminiClient(config.generation_config()), config)


def _fail(exc: GenerationError) -> NoReturn:
    console.print(f"[red]{exc}[/red]")
    raise typer.Exit(code=1)


@app.command()
def chunks(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to split."),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Question to score chunks against"),
    chunk_tokens: int = typer.Option(AppConfig().chunk_tokens, help="Words per chunk"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show how a document is chunked and which chunk a question selects."""
    _setup_logging(verbose)
    if chunk_tokens <= 0:
        raise typer.BadParameter("--chunk-tokens must be a positive integer")

    parts = chunk_words(_read_document(document), max_tokens=chunk_tokens)
    terms = query_terms(query) if query else []
    best = select_best_chunk(parts, query) if query else None

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Chunk")
    table.add_column("Words")
    if query:
        table.add_column("Matches")
    table.add_column("Snippet")

    for chunk in parts:
        marker = " *" if best is not None and chunk.index == best.index else ""
        row = [f"{chunk.index}{marker}", str(chunk.token_count)]
        if query:
            row.append(str(score_chunk(chunk, terms)))
        row.append(chunk.text[:120])
        table.add_row(*row)

    console.print(table)
    if best is not None:
        console.print(f"Selected chunk: [bold]{best.index}[/bold] (terms: {', '.join(terms) or 'none'})")


@app.command()
def summarize(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to summarize."),
    model: Optional[str] = typer.Option(None, help="Gemini model name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Summarize a document."""
    _setup_logging(verbose)
    text = _read_document(document)
    try:
        summary = _build_analyzer(model).summarize(text)
    except GenerationError as exc:
        _fail(exc)
    console.print(summary)


@app.command()
def ask(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to query."),
    question: str = typer.Argument(..., help="Question text"),
    model: Optional[str] = typer.Option(None, help="Gemini model name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Answer a question using the most relevant part of a document."""
    _setup_logging(verbose)
    if not question.strip():
        raise typer.BadParameter("Question is required")
    text = _read_document(document)
    try:
        result = _build_analyzer(model).answer_question(text, question.strip())
    except GenerationError as exc:
        _fail(exc)
    console.print(result.answer)
    console.print(f"[dim]Source: {result.source}[/dim]")


@app.command()
def insights(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to analyze."),
    model: Optional[str] = typer.Option(None, help="Gemini model name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Extract dates, people, organizations, action items and key numbers."""
    _setup_logging(verbose)
    text = _read_document(document)
    try:
        result = _build_analyzer(model).extract_insights(text)
    except GenerationError as exc:
        _fail(exc)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Field")
    table.add_column("Values")
    for field, values in result.to_dict().items():
        table.add_row(field, "\n".join(values) or "-")
    console.print(table)


@app.command()
def compliance(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to check."),
    jurisdiction: str = typer.Option("switzerland", help="Jurisdiction to check against"),
    model: Optional[str] = typer.Option(None, help="Gemini model name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Check a document against the laws of a jurisdiction."""
    _setup_logging(verbose)
    text = _read_document(document)
    try:
        report = _build_analyzer(model).check_compliance(text, jurisdiction)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except GenerationError as exc:
        _fail(exc)

    console.print(f"Overall: [bold]{report.overall_compliance}[/bold]")
    console.print(report.summary)
    if report.issues:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Severity")
        table.add_column("Category")
        table.add_column("Description")
        table.add_column("Law")
        for issue in report.issues:
            style = SEVERITY_STYLES.get(issue.severity, "")
            table.add_row(
                f"[{style}]{issue.severity}[/{style}]" if style else issue.severity,
                issue.category,
                issue.description,
                issue.relevant_law or "",
            )
        console.print(table)
    if report.applicable_laws:
        console.print("Applicable laws: " + ", ".join(report.applicable_laws))


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install it with \"python -m pip install uvicorn\""
        ) from exc

    if not AppConfig.from_env().generation_config().has_api_key:
        console.print("[yellow]Warning: GEMINI_API_KEY is not set, AI features will fail.[/yellow]")

    console.print(f"Starting web interface on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
