"""
envsubst command line tool.

Reads a template from stdin (or a file), expands every `${...}` substitution
against the process environment plus any `--var` overrides, and writes the
result to stdout (or a file).

Examples:
    Expand a manifest against the environment:
        $ envsubst < deployment.yaml.tpl > deployment.yaml

    Provide or override variables explicitly:
        $ envsubst --var CLUSTER=prod --var REPLICAS=3 -i app.tpl

    Refuse templates that reference unset variables:
        $ envsubst --no-unset -i app.tpl

Note:
    Strict-mode flags default from ENVSUBST_NO_UNSET and ENVSUBST_NO_EMPTY.
"""

import sys
from typing import Final, Optional, TextIO

import click
from rich.markup import escape

from envsubst.commands.base import RichCommand, rich_help
from envsubst.config.settings import appsettings, console
from envsubst.lib.errors import EnvsubstError
from envsubst.lib.expand.resolvers import EnvironmentResolver, VariableResolver
from envsubst.lib.expand.template import execute
from envsubst.lib.log import LOG
from envsubst.lib.parse.parser import parse
from envsubst.models.dataModel import Restrictions, SubstResult

__version__: Final[str] = "0.1.0"


def variables_parse(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Turn repeated `--var KEY=VALUE` options into a dict.

    Raises:
        click.BadParameter: if an entry has no `=` or an empty key
    """
    variables: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        variables[key] = value
    return variables


def resolver_build(
    variables: dict[str, str], use_environ: bool = True
) -> VariableResolver:
    """Resolver over the environment (unless disabled) with `variables` on top."""
    environ: Optional[dict[str, str]] = None if use_environ else {}
    return EnvironmentResolver(environ=environ, overrides=variables)


def template_read(source: TextIO) -> str:
    """Read a template, enforcing the configured size limit.

    Raises:
        ValueError: if the template is larger than `max_input_size`
    """
    text: str = source.read(appsettings.max_input_size + 1)
    if len(text) > appsettings.max_input_size:
        raise ValueError(
            f"input exceeds the maximum size of {appsettings.max_input_size} characters"
        )
    return text


def template_process(
    text: str, resolver: VariableResolver, restrictions: Restrictions
) -> SubstResult:
    """Parse and expand one template.

    Args:
        text: Template text
        resolver: Where variable values come from
        restrictions: Strict-mode checks

    Returns:
        SubstResult with the expanded text, or the error and exit code
    """
    try:
        tree = parse(text)
        return SubstResult(text=execute(tree, resolver, restrictions))
    except EnvsubstError as e:
        LOG(f"Template processing failed: {e}")
        return SubstResult(text="", error=str(e), success=False, exit_code=1)


@click.command(
    cls=RichCommand,
    help=rich_help(
        description="Substitute shell-style ${...} expressions in a template.",
        usage="envsubst OPTIONS < template",
        args={
            "-i, --input FILE": "Read the template from FILE instead of stdin.",
            "-o, --output FILE": "Write the result to FILE instead of stdout.",
            "--var KEY=VALUE": "Set a variable; may be repeated, overrides the environment.",
            "--no-environ": "Ignore the process environment.",
            "--no-unset": "Fail if a referenced variable is unset.",
            "--no-empty": "Fail if a referenced variable is empty.",
            "-V, --version": "Show the version and exit.",
        },
    ),
)
@click.option("-i", "--input", "source", type=click.File("r"), default="-")
@click.option("-o", "--output", "sink", type=click.File("w"), default="-")
@click.option(
    "--var", "variables", multiple=True, callback=variables_parse, metavar="KEY=VALUE"
)
@click.option("--no-environ", is_flag=True, default=False)
@click.option("--no-unset", is_flag=True, default=False)
@click.option("--no-empty", is_flag=True, default=False)
@click.version_option(__version__, "-V", "--version", prog_name="envsubst")
def main(
    source: TextIO,
    sink: TextIO,
    variables: dict[str, str],
    no_environ: bool,
    no_unset: bool,
    no_empty: bool,
) -> None:
    """Entry point for the `envsubst` console script."""
    restrictions = Restrictions(
        no_unset=no_unset or appsettings.no_unset,
        no_empty=no_empty or appsettings.no_empty,
    )
    LOG(f"Expanding with {len(variables)} override(s), {restrictions}")

    try:
        text: str = template_read(source)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    result: SubstResult = template_process(
        text, resolver_build(variables, use_environ=not no_environ), restrictions
    )
    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {escape(result.error or '')}")
        sys.exit(result.exit_code)

    sink.write(result.text)


if __name__ == "__main__":
    main()
