"""CLI entry point for panda-docs."""

import json
import logging
from pathlib import Path

import click
import yaml

from panda_docs.errors import PandaDocsError
from panda_docs.index.assembler import ApiIndex


def _dump(data, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    return json.dumps(data, ensure_ascii=False, indent=2)


def _load_index(ctx: click.Context, workers: int = 1) -> ApiIndex:
    try:
        return ApiIndex.load(ctx.obj["root"], workers=workers)
    except PandaDocsError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--root",
    default=".",
    envvar="PANDA_DOCS_ROOT",
    show_default=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root holding the api documents.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug diagnostics.")
@click.pass_context
def main(ctx: click.Context, root: Path, verbose: bool):
    """Panda Docs: compose api documents and resolve their $ref fragments."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["root"] = root


@main.command()
@click.option("--workers", default=1, show_default=True, type=click.IntRange(min=1), help="Documents aggregated in parallel.")
@click.pass_context
def build(ctx: click.Context, workers: int):
    """Load every document and print a summary."""
    index = _load_index(ctx, workers)
    click.echo(f"{index.settings.project_name}")
    for doc in index.ordered_documents():
        click.echo(f"{doc.filename}: {doc.name} ({len(doc.apis)} endpoints)")
        for api in doc.apis:
            click.echo(f"  {api.method:<7} {api.url}  {api.name}")
    total = sum(len(methods) for methods in index.endpoints.values())
    click.echo(f"Loaded {len(index.docs)} documents, {total} endpoints.")


@main.command()
@click.argument("url")
@click.option("-m", "--method", default="GET", show_default=True, help="HTTP method of the endpoint.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.pass_context
def show(ctx: click.Context, url: str, method: str, fmt: str):
    """Print one resolved endpoint."""
    index = _load_index(ctx)
    endpoint = index.lookup(url, method)
    if endpoint is None:
        raise click.ClickException(f"No endpoint {method.upper()} {url}")
    click.echo(_dump(endpoint.model_dump(), fmt))


@main.command()
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.pass_context
def dump(ctx: click.Context, fmt: str):
    """Print the whole endpoint table, keyed by url then method."""
    index = _load_index(ctx)
    click.echo(_dump(index.endpoints_to_dict(), fmt))


@main.command()
@click.argument("file", required=False)
@click.pass_context
def deps(ctx: click.Context, file: str | None):
    """Print the dependency index, or the documents affected by FILE."""
    index = _load_index(ctx)
    if file is None:
        for source_path, documents in index.dependencies.to_dict().items():
            click.echo(f"{source_path}: {', '.join(documents)}")
        return
    for document in sorted(index.affected_documents(file)):
        click.echo(document)
