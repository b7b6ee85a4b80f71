"""Daybook CLI: add, list, edit, delete, export and import journal entries."""

import click

from daybook import __version__


@click.group()
@click.version_option(version=__version__, package_name="daybook")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="YAML or JSON config file.")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Override the data directory.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None) -> None:
    """Daybook: a small local journal."""
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["data_dir"] = data_dir


# Register subcommands
from .entries_cmd import add, delete, edit, list_entries, show
from .transfer_cmd import export, import_entries

main.add_command(add)
main.add_command(list_entries)
main.add_command(show)
main.add_command(edit)
main.add_command(delete)
main.add_command(export)
main.add_command(import_entries)
