"""Typer CLI application."""

from pathlib import Path
from typing import Optional

import typer

from modelseed.config.settings import get_settings
from modelseed.config.logging import setup_logging
from modelseed.generation.dependencies import analyze_model_dependencies, topological_sort
from modelseed.generation.pipeline import generate_sequential_records, summarize_counts
from modelseed.generation.writer import write_model_csvs
from modelseed.ir.validators import validate_models
from modelseed.llm.client import set_forced_provider
from modelseed.utils.io import load_agent_schema, save_records_to_json

app = typer.Typer(help="modelseed: dependency-aware synthetic records for agent data models")


def _load_schema(schema_json: Path):
    try:
        return load_agent_schema(schema_json)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def generate(
    schema_json: Path,
    out_dir: Optional[Path] = typer.Argument(None, help="Output directory (defaults to OUTPUT_DIR)"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Records per model"),
    csv: bool = typer.Option(False, "--csv", help="Also write one CSV per model"),
    provider: Optional[str] = typer.Option(
        None, "--provider", help="Force an LLM provider: openai, gemini or local"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for fallback values"),
):
    """
    Generate records for every model of an agent schema.

    Args:
        schema_json: Path to the agent schema JSON file
        out_dir: Output directory for records.json (and CSVs)
    """
    setup_logging()
    settings = get_settings()
    if provider:
        set_forced_provider(provider)

    typer.echo(f"Loading schema from {schema_json}")
    schema = _load_schema(schema_json)

    records = generate_sequential_records(
        schema.models,
        schema.actions,
        schema.schedules,
        schema.agent.name,
        schema.agent.description,
        count=count if count is not None else settings.default_record_count,
        seed=seed,
    )

    out_dir = Path(out_dir or settings.output_dir)
    json_path = save_records_to_json(records, out_dir / "records.json")
    typer.echo(f"Wrote records to {json_path}")
    if csv:
        write_model_csvs(schema.models, records, out_dir)
        typer.echo(f"Wrote {len(schema.models)} CSV file(s) to {out_dir}")

    for model_name, n in summarize_counts(records).items():
        typer.echo(f"  {model_name}: {n} records")
    typer.echo("✓ Complete!")


@app.command()
def order(schema_json: Path):
    """
    Print dependency edges and the generation order of a schema's models.

    Args:
        schema_json: Path to the agent schema JSON file
    """
    schema = _load_schema(schema_json)
    edges = analyze_model_dependencies(schema.models)

    typer.echo("Dependencies:")
    if not edges:
        typer.echo("  (none)")
    for edge in edges:
        typer.echo(f"  {edge.dependent} -> {edge.depends_on} via {edge.field} ({edge.type})")

    typer.echo("Generation order:")
    for idx, model in enumerate(topological_sort(schema.models, edges), 1):
        typer.echo(f"  {idx}. {model.name}")


@app.command()
def check(schema_json: Path):
    """
    Report schema problems; exits with status 1 if any are found.

    Args:
        schema_json: Path to the agent schema JSON file
    """
    schema = _load_schema(schema_json)
    issues = validate_models(schema.models)
    if not issues:
        typer.echo("✓ No issues found")
        return
    for issue in issues:
        typer.echo(f"[{issue.code}] {issue.message}")
    raise typer.Exit(1)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
