"""Shot CLI interface.

Commands:
- render: Render a template to stdout or a file
- check: Validate template syntax
- init: Initialize shot configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import sys
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from shot import __version__
from shot.config import ShotConfig, create_default_config, load_config
from shot.errors import TemplateError
from shot.utils.logging import configure_from_cli, get_logger, log_template_error

app = typer.Typer(
    name="shot",
    help="Render line-oriented text templates",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: ShotConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"shot {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Shot - render line-oriented text templates.

    Lines starting with % are directives (if/elif/else/for/end, # comments);
    all other lines are output with {{ expr }} markers substituted.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


# =============================================================================
# Helpers
# =============================================================================


def _parse_var(assignment: str) -> tuple[str, Any]:
    """Parse a NAME=VALUE assignment; VALUE is read as YAML."""
    name, sep, raw_value = assignment.partition("=")
    name = name.strip()
    if not sep or not name.isidentifier():
        raise typer.BadParameter(
            f"Expected NAME=VALUE, got {assignment!r}", param_hint="--var"
        )

    try:
        value = yaml.safe_load(raw_value) if raw_value.strip() else ""
    except yaml.YAMLError:
        value = raw_value

    return name, value


def _load_vars_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping of locals."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Vars file must contain a mapping: {path}")

    return data


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    source: Annotated[
        str,
        typer.Argument(
            help="Template text, or a template file name ending with the template suffix",
        ),
    ],
    var: Annotated[
        list[str] | None,
        typer.Option(
            "--var",
            "-V",
            help="Local as NAME=VALUE (VALUE parsed as YAML); repeatable",
        ),
    ] = None,
    vars_file: Annotated[
        Path | None,
        typer.Option(
            "--vars",
            help="YAML file with a mapping of locals",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    block_file: Annotated[
        str | None,
        typer.Option(
            "--block",
            "-b",
            help="File whose contents are inlined at {{ yield }} ('-' reads stdin)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path (overrides config)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Preview output without writing files",
        ),
    ] = False,
) -> None:
    """Render a template.

    Locals come from the config file, then --vars, then --var (last wins).

    Exit codes:
        0: Template rendered successfully
        1: Error loading or rendering the template
        2: Invalid command line usage (e.g. a malformed --var)
    """
    from shot.templates import TemplateRenderer

    try:
        variables: dict[str, Any] = {}
        if vars_file is not None:
            variables.update(_load_vars_file(vars_file))
        for assignment in var or []:
            name, value = _parse_var(assignment)
            variables[name] = value
    except (OSError, ValueError, yaml.YAMLError) as e:
        _logger.error(f"Invalid locals: {e}")
        raise typer.Exit(1)

    block = None
    if block_file is not None:
        if block_file == "-":
            block_text = sys.stdin.read()
        else:
            try:
                block_text = Path(block_file).read_text(encoding="utf-8")
            except OSError as e:
                _logger.error(f"Cannot read block file: {e}")
                raise typer.Exit(1)
        block = lambda: block_text.rstrip("\n")  # noqa: E731

    config = _config or ShotConfig()
    output_path = output or (Path(config.output.path) if config.output.path else None)

    renderer = TemplateRenderer(config=config)
    _logger.debug(f"Rendering with locals: {sorted(variables)}")

    try:
        if dry_run:
            preview = renderer.preview(source, variables, block, max_lines=100)
            typer.echo("\n--- Render Preview ---\n")
            typer.echo(preview)
            typer.echo("\n--- End Preview ---")
            _logger.info("Dry run complete - no files written")
        elif output_path is not None:
            written = renderer.render_to_file(source, output_path, variables, block)
            _logger.info(f"Output written to: {written}")
        else:
            typer.echo(renderer.render(source, variables, block))

    except TemplateError as e:
        log_template_error(_logger, e)
        raise typer.Exit(1)
    except OSError as e:
        _logger.error(f"Rendering failed: {e}")
        raise typer.Exit(1)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    source: Annotated[
        str,
        typer.Argument(
            help="Template text, or a template file name ending with the template suffix",
        ),
    ],
) -> None:
    """Validate template syntax.

    Parses every directive and inline expression without rendering.
    """
    from shot.templates import TemplateRenderer

    renderer = TemplateRenderer(config=_config)

    try:
        template = renderer.load(source)
        template.check()
    except TemplateError as e:
        log_template_error(_logger, e)
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    _logger.info("Template syntax is valid")
    typer.echo(f"✅ Template is valid: {template.name or 'literal template'}")
    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize shot configuration.

    Creates .shot/config.yaml and a .shot/templates/ directory with an
    example template.
    """
    shot_dir = Path(".shot")
    shot_dir.mkdir(exist_ok=True)

    templates_dir = shot_dir / "templates"
    templates_dir.mkdir(exist_ok=True)

    config_file = shot_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    example_file = templates_dir / "hello.shot"
    if not example_file.exists():
        example_file.write_text(
            "% # Render with: shot render hello.shot --var name=World\n"
            "Hello, {{ name }}!\n",
            encoding="utf-8",
        )
        _logger.info(f"Created example template: {example_file}")

    typer.echo("\n✅ Shot configuration initialized")
    typer.echo(f"   Config: {config_file}")
    typer.echo(f"   Templates: {templates_dir}/")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
