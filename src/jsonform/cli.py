"""CLI main entry point."""

import json
import logging

import click

from .config import Config
from .errors import JsonFormException
from .log import setup as setup_log
from .render import Form, FormRenderer, Page
from .repository import Repository
from .utils import import_string

logger = logging.getLogger(__name__)


def load_config(config_path):
    if config_path:
        return Config.load_from_file(config_path)
    return Config()


def load_model(target: str):
    try:
        return import_string(target)
    except ImportError as e:
        raise click.BadParameter(str(e), param_hint="TARGET") from e


@click.group()
@click.option(
    "--config", "-c", "config_path", type=click.Path(dir_okay=False), help="Path to TOML config file"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Derive JSON Schemas and JSON Form descriptors from pydantic models."""
    try:
        cfg = load_config(config_path)
    except JsonFormException as e:
        raise click.ClickException(str(e)) from e

    setup_log(cfg.log_file, verbose=verbose)
    ctx.obj = cfg


@cli.command()
@click.argument("target")
@click.option("--name", "-n", default=None, help="Schema name (default: lower-cased class name)")
@click.option("--submit/--no-submit", default=None, help="Append a submit button to the form")
@click.option("--indent", default=2, show_default=True, type=int, help="JSON indentation")
@click.pass_obj
def schema(cfg, target, name, submit, indent):
    """Print the form schema of TARGET (module:Class) as JSON."""
    repository = Repository.from_config(cfg)
    if submit is not None:
        repository.submit_button = submit

    model = load_model(target)
    try:
        name = repository.add(model, name)
    except JsonFormException as e:
        raise click.ClickException(str(e)) from e

    logger.debug(f"Printing schema {name}")
    click.echo(json.dumps(repository.get_schema_by_name(name).to_dict(), indent=indent))


@cli.command()
@click.argument("target")
@click.option("--title", default="", help="Form title")
@click.option("--submit-url", default="", help="URL to submit the form to")
@click.option("--submit-method", default="POST", show_default=True, help="HTTP method used on submit")
@click.option(
    "--success-status", default=200, show_default=True, type=int, help="Expected HTTP status on submit"
)
@click.option(
    "--output", "-o", type=click.File("w", encoding="utf-8"), default="-", help="Output file"
)
@click.pass_obj
def render(cfg, target, title, submit_url, submit_method, success_status, output):
    """Render an HTML page with the form of TARGET (module:Class)."""
    repository = Repository.from_config(cfg)
    renderer = FormRenderer(repository, base_url=cfg.base_url)

    form = Form(
        title=title,
        submit_url=submit_url,
        submit_method=submit_method,
        success_status=success_status,
        value=load_model(target),
    )
    try:
        renderer.render_to(output, Page(title=title), form)
    except JsonFormException as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument("targets", nargs=-1, required=True)
@click.option("--host", default=None, help="Bind host (default from config)")
@click.option("--port", default=None, type=int, help="Bind port (default from config)")
@click.pass_obj
def serve(cfg, targets, host, port):
    """Serve form schemas of TARGETS (module:Class) over HTTP."""
    import uvicorn

    from .api import create_app

    repository = Repository.from_config(cfg)
    try:
        repository.add_all(*(load_model(t) for t in targets))
    except JsonFormException as e:
        raise click.ClickException(str(e)) from e

    host = host or cfg.web.host
    port = port or cfg.web.port

    logger.info(f"Serving {len(targets)} schema(s) on http://{host}:{port}{cfg.base_url}")
    uvicorn.run(create_app(repository, prefix=cfg.base_url), host=host, port=port)


def main():
    cli()


if __name__ == "__main__":
    main()
