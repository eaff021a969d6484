#!/usr/bin/env python3
"""
TheraBot CLI

Command-line interface for looking up diseases and writing prescription PDFs.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

EXIT_NOT_FOUND = 1
EXIT_RENDERING = 2


def setup_paths():
    """Add the project root to sys.path for imports."""
    root = Path(__file__).parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


setup_paths()


def _load_knowledge_base(knowledge: Optional[str]):
    from knowledge import KnowledgeBase, get_knowledge_base

    if knowledge:
        return KnowledgeBase.from_yaml(Path(knowledge))
    return get_knowledge_base()


@click.group()
@click.version_option(version="0.1.0", prog_name="therabot")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default=None, help="Logging level (defaults to THERABOT_LOG_LEVEL)")
def cli(log_level: Optional[str]):
    """
    TheraBot - Diagnosis ChatBot

    Turn a confirmed diagnosis into a printable prescription with
    treatment and recommendation text.
    """
    from therabot.config import get_settings
    from therabot.log import configure_logging

    configure_logging(log_level or get_settings().log_level)


@cli.command()
@click.argument("disease", nargs=-1, required=True)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file path")
@click.option("--assets", type=click.Path(file_okay=False), help="Directory with logo and signature images")
@click.option("--knowledge", type=click.Path(exists=True, dir_okay=False), help="Alternative knowledge base YAML")
@click.option("--quiet", "-q", is_flag=True, help="Only print the output path")
def prescribe(
    disease: tuple,
    output: Optional[str],
    assets: Optional[str],
    knowledge: Optional[str],
    quiet: bool,
):
    """
    Write a prescription PDF for a confirmed disease.

    Examples:

        therabot prescribe gastritis

        therabot prescribe acute pancreatitis -o ./pancreatitis.pdf
    """
    from therabot.config import get_settings
    from therabot.errors import DiseaseNotFound, MalformedInput, RenderingFailure
    from therabot.prescription import prescribe as build_prescription

    kb = _load_knowledge_base(knowledge)
    assets_dir = Path(assets) if assets else get_settings().assets_dir

    try:
        prescription = build_prescription(" ".join(disease), knowledge_base=kb, assets_dir=assets_dir)
    except (MalformedInput, DiseaseNotFound) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(EXIT_NOT_FOUND)
    except RenderingFailure as e:
        console.print(f"[red]Could not render prescription: {e}[/red]")
        sys.exit(EXIT_RENDERING)

    out_path = Path(output) if output else Path.cwd() / prescription.filename
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(prescription.content)

    if quiet:
        console.print(str(out_path))
        return

    console.print(Panel(
        f"[bold green]✓ Prescription written[/bold green]\n\n"
        f"Disease: [bold]{prescription.request.disease_label}[/bold]\n"
        f"File: {out_path}",
        title="TheraBot",
        border_style="green",
    ))


@cli.command()
@click.option("--knowledge", type=click.Path(exists=True, dir_okay=False), help="Alternative knowledge base YAML")
def diseases(knowledge: Optional[str]):
    """
    List diseases with a prescription.
    """
    from knowledge import disease_label

    kb = _load_knowledge_base(knowledge)

    table = Table(title=f"Known Diseases ({len(kb)})")
    table.add_column("Identifier", style="cyan")
    table.add_column("Name", style="green")

    for identifier in kb.identifiers():
        table.add_row(identifier, disease_label(identifier))

    console.print(table)


@cli.command()
@click.argument("disease", nargs=-1, required=True)
@click.option("--knowledge", type=click.Path(exists=True, dir_okay=False), help="Alternative knowledge base YAML")
def show(disease: tuple, knowledge: Optional[str]):
    """
    Show treatment and recommendation for a disease.

    Example:

        therabot show gastric ulcer
    """
    from knowledge import disease_label, normalize_disease_name
    from therabot.errors import DiseaseNotFound, MalformedInput

    kb = _load_knowledge_base(knowledge)
    name = " ".join(disease)

    try:
        recommendation, treatment = kb.lookup(name)
    except (MalformedInput, DiseaseNotFound) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(EXIT_NOT_FOUND)

    console.print(f"\n[bold]{disease_label(normalize_disease_name(name))}[/bold]\n")
    console.print(Panel(treatment, title="Treatment", border_style="blue"))
    console.print(Panel(recommendation, title="Recommendation", border_style="magenta"))


@cli.command()
@click.option("--host", type=str, default=None, help="Bind address (defaults to THERABOT_HOST)")
@click.option("--port", type=int, default=None, help="Port (defaults to THERABOT_PORT)")
def serve(host: Optional[str], port: Optional[int]):
    """
    Run the prescription HTTP server.
    """
    from server import run_server

    run_server(host=host, port=port)


@cli.command()
def info():
    """
    Show information about TheraBot.
    """
    console.print(Panel(
        "[bold]TheraBot[/bold]\n\n"
        "Prescription documents for confirmed digestive system diagnoses.\n\n"
        "[dim]Looks up treatment and recommendation text for a disease[/dim]\n"
        "[dim]and lays it out on a single printable PDF page.[/dim]",
        title="About",
        border_style="blue",
    ))

    console.print("\n[bold]Quick Start:[/bold]")
    console.print("  therabot diseases")
    console.print("  therabot show gastritis")
    console.print("  therabot prescribe acute pancreatitis -o ./Prescription.pdf")
    console.print("  therabot serve --port 3003")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
