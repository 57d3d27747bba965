"""
Command Line Interface for Lead Enricher.
Runs enrichments for single companies or CSV batches and renders the results.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from .config import get_config, reload_config
from .enrichment.orchestrator import Enricher, EnrichmentInputError, EnrichmentResult


NOT_AVAILABLE = "not available"

console = Console()
err_console = Console(stderr=True)


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging configuration."""
    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def present_result(result: EnrichmentResult) -> Dict[str, Any]:
    """Result as shown to users: empty contact lists become a placeholder."""
    data = result.to_dict()
    if not data['emails']:
        data['emails'] = [NOT_AVAILABLE]
    if not data['phones']:
        data['phones'] = [NOT_AVAILABLE]
    return data


@click.group()
@click.option('--config', '-c', help='Configuration file path')
@click.option('--log-level', default=None, help='Logging level (defaults to app.log_level)')
@click.option('--log-file', default=None, help='Also write logs to this file')
@click.pass_context
def cli(ctx, config, log_level, log_file):
    """Lead Enricher - find contacts and likely problems for a company"""
    ctx.ensure_object(dict)

    if config:
        ctx.obj['config'] = reload_config(config)
    else:
        ctx.obj['config'] = get_config()

    setup_logging(log_level or ctx.obj['config'].app.log_level, log_file)


@cli.command()
@click.option('--domain', '-d', default=None, help='Company website domain')
@click.option('--name', '-n', default=None, help='Company name')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.pass_context
def enrich(ctx, domain, name, as_json):
    """Enrich a single company"""
    config = ctx.obj['config']

    with Enricher(config) as enricher:
        try:
            if as_json:
                result = enricher.enrich(domain, name)
            else:
                with console.status(f"Enriching {domain or name}..."):
                    result = enricher.enrich(domain, name)
        except EnrichmentInputError as e:
            raise click.UsageError(str(e))

    data = present_result(result)
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title=f"Enrichment: {data['domain'] or name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Domain", data['domain'] or NOT_AVAILABLE)
    table.add_row("Found via", data['resolution_stage'] or "not resolved")
    table.add_row("Emails", "\n".join(data['emails']))
    table.add_row("Phones", "\n".join(data['phones']))
    table.add_row("Sources", "\n".join(data['sources']) or "none")

    console.print(table)
    console.print(Panel.fit(data['problem_summary'], title="Likely problems", border_style="blue"))


@cli.command()
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True, dir_okay=False),
              help='CSV file with "domain" and/or "name" columns')
@click.option('--output', '-o', required=True, help='Output CSV file path')
@click.pass_context
def batch(ctx, input_file, output):
    """Enrich every company listed in a CSV file"""
    config = ctx.obj['config']

    with open(input_file, newline='', encoding='utf-8-sig') as f:
        rows = list(csv.DictReader(f))

    results = []
    with Enricher(config) as enricher, Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console
    ) as progress:
        task = progress.add_task("Enriching companies...", total=len(rows))

        for row in rows:
            domain = row.get('domain') or None
            name = row.get('name') or None
            progress.update(task, description=f"Enriching: {domain or name}")

            try:
                results.append((name or '', enricher.enrich(domain, name)))
            except EnrichmentInputError:
                err_console.print(f"  [yellow]Skipping row without domain or name: {row}[/yellow]")

            progress.advance(task)

    export_results_to_csv(results, output)
    err_console.print(f"[green]Enriched {len(results)} companies, results written to: {output}[/green]")


def export_results_to_csv(results, output_file):
    """Export (name, EnrichmentResult) pairs to a CSV file."""
    with open(output_file, 'w', newline='', encoding='utf-8') as csvfile:
        fieldnames = [
            'name', 'domain', 'emails', 'phones', 'sources',
            'inferred_problems', 'problem_summary', 'resolution_stage'
        ]

        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()

        for name, result in results:
            data = present_result(result)
            writer.writerow({
                'name': name,
                'domain': data['domain'],
                'emails': '; '.join(data['emails']),
                'phones': '; '.join(data['phones']),
                'sources': '; '.join(data['sources']),
                'inferred_problems': '; '.join(data['inferred_problems']),
                'problem_summary': data['problem_summary'],
                'resolution_stage': data['resolution_stage'] or '',
            })


if __name__ == '__main__':
    cli()
