"""Command-line interface for parsing expense and task utterances."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from tqdm import tqdm

from .classify import CategoryClassifier
from .export import ExcelExporter
from .parsers import DateResolver, ExpenseParser, TaskParser

# Set up logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)


def _echo_json(payload: dict):
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@click.group()
@click.option('--today', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
              help='Reference date (YYYY-MM-DD) for relative date words')
@click.option('--rules', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help='Path to category rules file')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.pass_context
def cli(ctx, today, rules: Optional[Path], debug: bool):
    """Quick entry - turn free-text utterances into expenses and tasks."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['today'] = today.date() if today else None
    ctx.obj['rules'] = rules


@cli.command()
@click.argument('text')
@click.pass_context
def expense(ctx, text: str):
    """
    Parse TEXT as an expense and print it as JSON.

    Example:
        quickentry --today 2024-03-15 expense "昨天午餐花了120元"
    """
    parser = ExpenseParser(today=ctx.obj['today'], rules_path=ctx.obj['rules'])
    parsed = parser.parse(text)
    if parsed is None:
        click.echo("Error: no amount found in the text", err=True)
        sys.exit(1)
    _echo_json(parsed.to_dict())


@cli.command()
@click.argument('text')
@click.pass_context
def task(ctx, text: str):
    """Parse TEXT as a task and print it as JSON."""
    parsed = TaskParser(today=ctx.obj['today']).parse(text)
    if parsed is None:
        click.echo("Error: empty task text", err=True)
        sys.exit(1)
    _echo_json(parsed.to_dict())


@cli.command()
@click.argument('text')
@click.pass_context
def date(ctx, text: str):
    """Resolve the date referenced by TEXT and print it as JSON."""
    _echo_json(DateResolver(today=ctx.obj['today']).resolve(text).to_dict())


@cli.command()
@click.option('--in', 'input_file', required=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Text file with one utterance per line')
@click.option('--kind', type=click.Choice(['expense', 'task']), default='expense',
              help='Which parser to apply to every line')
@click.option('--out', 'output_file', required=True, type=click.Path(path_type=Path),
              help='Output Excel file')
@click.option('--summary', is_flag=True, help='Include summary section in Excel output')
@click.option('--encoding', default='utf-8', help='Text encoding of the input file')
@click.pass_context
def batch(ctx, input_file: Path, kind: str, output_file: Path, summary: bool, encoding: str):
    """
    Parse every line of a text file and export the results to Excel.

    Example:
        quickentry batch --in notes.txt --kind expense --out out/expenses.xlsx --summary
    """
    try:
        lines = [line.strip() for line in input_file.read_text(encoding=encoding).splitlines()]
        lines = [line for line in lines if line]
        logger.info(f"Read {len(lines)} utterances from {input_file}")

        classifier = CategoryClassifier(ctx.obj['rules'])
        if kind == 'expense':
            parser = ExpenseParser(today=ctx.obj['today'], classifier=classifier)
        else:
            parser = TaskParser(today=ctx.obj['today'])

        results = []
        rejected = []
        for line in tqdm(lines, desc=f"Parsing {kind}s", file=sys.stderr):
            parsed = parser.parse(line)
            if parsed is None:
                rejected.append(line)
            else:
                results.append(parsed)

        exporter = ExcelExporter(output_file, classifier=classifier)
        if kind == 'expense':
            exporter.export_expenses(results, include_summary=summary)
        else:
            exporter.export_tasks(results)

        click.echo("=" * 50)
        click.echo("PROCESSING SUMMARY")
        click.echo("=" * 50)
        click.echo(f"Lines read: {len(lines)}")
        click.echo(f"Parsed: {len(results)}")
        click.echo(f"Rejected: {len(rejected)}")
        for line in rejected[:10]:
            click.echo(f"  - {line}")
        if len(rejected) > 10:
            click.echo(f"  ... and {len(rejected) - 10} more")
        click.echo(f"Excel: {output_file}")

    except Exception as e:
        logger.error(f"Batch processing failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
