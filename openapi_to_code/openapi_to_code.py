import logging
from pathlib import Path

import click

from .loader import get_spec_summary, load_spec
from .pipeline import AtomicWriter, CodegenError, CodeGeneratorConfig, PipelineGenerator, load_config

logger = logging.getLogger(__name__)


def _fail(message: str, hint: str | None = None) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    if hint:
        click.secho(hint, dim=True, err=True)
    raise SystemExit(1)


def _print_summary(summary: dict) -> None:
    click.secho(f"Parsed: {summary['title']} v{summary['version']}", fg="green")
    click.echo(f"  OpenAPI: {summary['openapi_version']}")
    click.echo(f"  Paths: {summary['path_count']}")
    click.echo(f"  Operations: {summary['operation_count']}")
    click.echo(f"  Schemas: {summary['schema_count']}")
    if summary["tags"]:
        click.echo(f"  Tags: {', '.join(summary['tags'])}")


@click.command()
@click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--date-type", default=None, type=click.Choice(["string", "Date"]), help="Type of date and date-time strings")
@click.option("--enum-type", default=None, type=click.Choice(["constObject", "union", "enum"]), help="Representation of named enums")
@click.option("--property-name-style", default=None, type=click.Choice(["original", "camelCase"]))
@click.option("--nullable-type", default=None, type=click.Choice(["null", "undefined"]))
@click.option("--client-suffix", default=None, type=click.Choice(["Client", "Api"]))
@click.option("--no-generation-comment", is_flag=True, default=False, help="Omit the 'do not edit' header")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("source", required=False, default=None, type=str)
@click.argument("target", required=False, default=None, type=click.Path(file_okay=False, resolve_path=True))
def openapi_to_code(
    config_path,
    date_type,
    enum_type,
    property_name_style,
    nullable_type,
    client_suffix,
    no_generation_comment,
    verbose,
    source,
    target,
):
    """Generate a TypeScript client from the OpenAPI document SOURCE into directory TARGET.

    SOURCE may be a file path or an http(s) URL. With --config, SOURCE and
    TARGET default to the values of the config file.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        if config_path is not None:
            logger.debug("Loading config from %s", config_path)
            project = load_config(config_path)
            config = project.codegen
            source = source or project.source
            target = target or project.target
        else:
            config = CodeGeneratorConfig()

        if not source or not target:
            _fail("Missing SOURCE or TARGET", "Pass both arguments or use --config with 'source' and 'target' set")

        # Command line options override the config file
        overrides = {
            "date_type": date_type,
            "enum_type": enum_type,
            "property_name_style": property_name_style,
            "nullable_type": nullable_type,
            "client_suffix": client_suffix,
        }
        if no_generation_comment:
            overrides["add_generation_comment"] = False
        merged = config.to_dict()
        merged.update({k: v for k, v in overrides.items() if v is not None})
        config = CodeGeneratorConfig.from_dict(merged)

        document = load_spec(source)
        _print_summary(get_spec_summary(document))

        result = PipelineGenerator(document, config).generate()
        written = AtomicWriter().write_all(Path(target), result.files)
    except CodegenError as exc:
        _fail(exc.message, exc.hint)
    except OSError as exc:
        _fail(f"Failed to write generated files: {exc}")

    for path in written:
        click.echo(f"  {path.name}")
    if result.diagnostics:
        click.secho(f"{len(result.diagnostics)} warning(s) during generation", fg="yellow")
    click.secho(f"Generated {len(written)} file(s) in {target}", fg="green")
