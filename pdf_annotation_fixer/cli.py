"""
Command-line interface for PDF Annotation Fixer.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.table import Table

from pdf_annotation_fixer import __version__
from pdf_annotation_fixer.fixer import default_output_path, fix_pdf_file, inspect_pdf
from pdf_annotation_fixer.utils import set_log_level

console = Console()

NO_RECOVERY_REASONS = (
    "The PDF contains no annotations",
    "The PDF contains no lost annotations",
    "The annotations are lost in such a way that they can't be recovered",
)


def _repairs_table(repairs, title):
    table = Table(title=title)
    table.add_column("Page", style="cyan", justify="right")
    table.add_column("Page Object", style="dim")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    table.add_column("Source Array", style="dim")
    table.add_column("Recovered", style="green", justify="right")
    for page_repair in repairs:
        table.add_row(
            str(page_repair.page_number),
            str(page_repair.page_ref),
            str(len(page_repair.current)),
            str(len(page_repair.replacement.references)),
            str(page_repair.replacement.source),
            str(page_repair.added),
        )
    return table


def _print_no_recovery():
    console.print("\n[bold yellow]! No annotations recovered.[/bold yellow] This can have several reasons:")
    for reason in NO_RECOVERY_REASONS:
        console.print(f"  • {reason}")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    PDF Annotation Fixer - recover annotations lost from PDF pages.

    Use at your own risk: always keep the original file.
    """
    if verbose:
        set_log_level(logging.DEBUG)


@cli.command(name="recover")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_pdf', required=False, type=click.Path(dir_okay=False))
@click.option(
    '--overwrite',
    is_flag=True,
    help='Replace the output file if it already exists'
)
@click.option(
    '--dry-run',
    is_flag=True,
    help='Report the repairs without writing any file'
)
def recover(input_pdf, output_pdf, overwrite, dry_run):
    """
    Recover lost annotations and write a repaired copy.

    OUTPUT_PDF defaults to INPUT_recovered.pdf next to the input file.

    Examples:

        pdf-annotation-fixer recover notes.pdf

        pdf-annotation-fixer recover notes.pdf fixed.pdf --overwrite

        pdf-annotation-fixer recover notes.pdf --dry-run
    """
    try:
        if dry_run:
            report = inspect_pdf(input_pdf)
            if not report.repairs:
                _print_no_recovery()
                return
            console.print()
            console.print(_repairs_table(report.repairs, "Planned Repairs"))
            console.print(
                f"\n[bold cyan]Would recover {report.recoverable} annotation(s)[/bold cyan] "
                "[dim](dry run, nothing written)[/dim]"
            )
            return

        destination = output_pdf or default_output_path(input_pdf)
        console.print(f"\n[bold cyan]Recovering annotations of {os.path.basename(input_pdf)}...[/bold cyan]")
        output_path, result = fix_pdf_file(input_pdf, destination, overwrite=overwrite)

        if not result.success:
            _print_no_recovery()
        else:
            console.print()
            console.print(_repairs_table(result.repairs, "Repaired Pages"))
            console.print(f"\n[bold green]✓ Recovered {result.recovered} annotation(s)[/bold green]")
        console.print(f"[dim]Output file: {output_path}[/dim]\n")

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="inspect")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def inspect(input_pdf):
    """
    Display the annotations of each page and the repairs that would apply.

    Example:

        pdf-annotation-fixer inspect notes.pdf
    """
    try:
        report = inspect_pdf(input_pdf)

        table = Table(title=f"Annotations: {os.path.basename(input_pdf)}")
        table.add_column("Page", style="cyan", justify="right")
        table.add_column("Page Object", style="dim")
        table.add_column("Annotations", style="green", justify="right")
        for page in report.pages:
            count = "-" if page.annotation_count is None else str(page.annotation_count)
            table.add_row(str(page.page_number), str(page.page_ref), count)

        console.print()
        console.print(table)
        console.print(f"\nPages: {report.page_count}")
        console.print(f"Reference arrays: {report.candidate_count}")

        if report.repairs:
            console.print()
            console.print(_repairs_table(report.repairs, "Planned Repairs"))
            console.print(f"\n[bold cyan]Recoverable annotations: {report.recoverable}[/bold cyan]\n")
        else:
            console.print("\n[dim]No recoverable annotations found.[/dim]\n")

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
