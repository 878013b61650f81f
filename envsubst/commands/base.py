"""
Rich-enhanced Click command base.

This module defines:
- `rich_help`: builds the colourised help text for a command.
- `RichCommand`: a Click command that renders its help inside a Rich panel.
"""

from rich.console import Console
from rich.panel import Panel
import click
from envsubst.lib.log import LOG

console: Console = Console()


def rich_help(description: str, usage: str, args: dict[str, str]) -> str:
    """
    Generate Rich-enhanced help text for a command.

    :param description: Description of the command.
    :param usage: Usage syntax for the command.
    :param args: Dictionary of options and their descriptions.
    :return: Formatted Rich help string.
    """
    help_text = f"[bold cyan]{description}[/bold cyan]\n\n"
    help_text += f"[bold yellow]Usage:[/bold yellow]\n    [green]{usage}[/green]\n\n"
    help_text += "[bold yellow]Options:[/bold yellow]\n"
    for arg, desc in args.items():
        help_text += f"    [green]{arg}[/green]: {desc}\n"
    return help_text


class RichCommand(click.Command):
    """
    A Click Command that uses Rich for rendering help messages.

    Methods:
        format_help(ctx, formatter): Renders the help message in a Rich panel.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the help message for the command using Rich.

        :param ctx: The Click context for the command.
        :param formatter: The Click help formatter.
        """
        help_text = self.help or "No help text available."
        panel_width = max(len(line) for line in help_text.splitlines()) + 10
        panel_width = min(panel_width, 100)
        LOG(f"Rendering help for {ctx.info_name}")
        console.print(Panel(help_text, expand=False, width=panel_width, border_style="cyan"))
