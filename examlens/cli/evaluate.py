import asyncio
import typing as t

import examlens.lib.cli as click
import examlens.lib.json as json
from examlens.core import di
from examlens.llm.evaluation import EvaluationError, EvaluationPipeline


def _read(f: t.TextIO | None) -> str:
    return f.read() if f is not None else ""


@click.command(name="evaluate")
@click.option(
    "-q",
    "--questions",
    "questions_file",
    type=click.File("r", encoding="utf8"),
    default="-",
    help="question block, one question per paragraph; defaults to stdin",
)
@click.option("--outcomes", "outcomes_file", type=click.File("r", encoding="utf8"), default=None)
@click.option("--syllabus", "syllabus_file", type=click.File("r", encoding="utf8"), default=None)
@click.option("--indent", type=click.IntRange(min=0), default=2)
@di.inject
def evaluate(
    questions_file: t.TextIO,
    outcomes_file: t.TextIO | None,
    syllabus_file: t.TextIO | None,
    indent: int,
    pipeline: EvaluationPipeline = di.Provide["pipeline"],
) -> int:
    """Evaluate a batch of exam questions and print the report as JSON."""
    payload = {
        "outcomes": _read(outcomes_file),
        "syllabus": _read(syllabus_file),
        "set1": _read(questions_file),
    }
    try:
        report = asyncio.run(pipeline.evaluate(payload))
    except EvaluationError as e:
        message = e.message if e.detail is None else f"{e.message} ({e.detail})"
        raise click.ClickException(message) from e

    click.echo(json.dumps(report, indent=indent or None))
    return 0
