"""Main CLI entry point for Kit."""

import logging

import click
from colorama import init

from kit import __version__
from kit.cli.output import BANNER
from kit.cli.commands import (init_cmd, add_cmd, commit_cmd, log_cmd, branch_cmd,
                              tag_cmd, show_ref_cmd, cat_object_cmd, count_objects_cmd,
                              fsck_cmd, clone_cmd, push_cmd, pull_cmd, remote_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class KitGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=KitGroup)
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def cli(verbose):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(branch_cmd)
cli.add_command(tag_cmd)
cli.add_command(show_ref_cmd)
cli.add_command(cat_object_cmd)
cli.add_command(count_objects_cmd)
cli.add_command(fsck_cmd)
cli.add_command(clone_cmd)
cli.add_command(push_cmd)
cli.add_command(pull_cmd)
cli.add_command(remote_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
