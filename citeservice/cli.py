"""Citeproc service CLI - serve the API or render documents from files."""

from __future__ import annotations

import json
from pathlib import Path

import click

from citeservice.config import ServiceConfig, load_config
from citeservice.log import configure_logging


def _load(config_path: str | None) -> ServiceConfig:
    config = load_config(config_path)
    configure_logging(config.logging)
    return config


def _read_json(path: str) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a JSON object keyed by item id")
    return data


def _emit(payload: dict, output: str | None) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"✓ Wrote {output}", err=True)
    else:
        click.echo(text)


@click.group()
def cli():
    """Citeproc service CLI - CSL citations and bibliographies."""
    pass


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", type=int, default=None, help="Port (overrides config and PORT)")
def serve(config: str | None, host: str | None, port: int | None):
    """Run the HTTP API."""
    import uvicorn

    from citeservice.api.app import create_app

    cfg = _load(config)
    app = create_app(cfg)
    uvicorn.run(
        app,
        host=host or cfg.api.host,
        port=port or cfg.api.port,
        log_level=cfg.logging.level.lower(),
    )


@cli.command()
@click.option("--catalog", required=True, type=click.Path(exists=True), help="JSON catalog keyed by id")
@click.option("--style", required=True, type=click.Path(exists=True), help="CSL style file")
@click.option("--document", required=True, type=click.Path(exists=True), help="HTML document")
@click.option("--locale", default=None, help="Locale override")
@click.option("--output", "-o", default=None, help="Write JSON here instead of stdout")
@click.option("--config", "-c", default=None, help="Configuration file path")
def annotate(catalog: str, style: str, document: str, locale: str | None, output: str | None, config: str | None):
    """Annotate citation markers in a document and print its sections."""
    from citeservice.annotate.pipeline import AnnotationPipeline

    try:
        cfg = _load(config)
        pipeline = AnnotationPipeline(cfg)
        result = pipeline.annotate(
            document=Path(document).read_text(encoding="utf-8"),
            records=_read_json(catalog),
            style_xml=Path(style).read_text(encoding="utf-8"),
            locale=locale,
        )
    except Exception as e:
        click.echo(f"✗ Annotation failed: {e}", err=True)
        raise click.Abort()

    _emit(result.to_dict(), output)
    click.echo(
        f"  Markers annotated: {result.annotated_count}, "
        f"unannotated: {result.unannotated_count}, "
        f"sections: {len(result.sections)}",
        err=True,
    )


@cli.command()
@click.option("--items", required=True, type=click.Path(exists=True), help="JSON items keyed by id")
@click.option("--style", required=True, type=click.Path(exists=True), help="CSL style file")
@click.option("--output", "-o", default=None, help="Write JSON here instead of stdout")
@click.option("--config", "-c", default=None, help="Configuration file path")
def bibliography(items: str, style: str, output: str | None, config: str | None):
    """Render a bibliography for a set of items."""
    from citeservice.bibliography import BibliographyRenderer

    try:
        cfg = _load(config)
        entries = BibliographyRenderer(cfg).render(
            _read_json(items),
            Path(style).read_text(encoding="utf-8"),
        )
    except Exception as e:
        click.echo(f"✗ Bibliography failed: {e}", err=True)
        raise click.Abort()

    _emit({"entries": entries}, output)


@cli.command()
@click.option("--config", "-c", required=True, help="Configuration file path")
def validate(config: str):
    """Validate configuration file."""
    try:
        cfg = load_config(config)
    except Exception as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    click.echo("✓ Configuration is valid")
    click.echo(f"  Marker: <{cfg.markup.marker_tag} {cfg.markup.ref_ids_attr}=...>")
    click.echo(f"  Default locale: {cfg.engine.default_locale}")
    click.echo(f"  Listen: {cfg.api.host}:{cfg.api.port}")


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
