"""Clone command - clone a repository into a new directory."""

import click
from pathlib import Path
from kit.core.errors import KitError
from kit.core.remote import clone_repo
from kit.cli.output import success, error, info, short


@click.command('clone')
@click.argument('repository')
@click.argument('directory', required=False)
def clone_cmd(repository, directory):
    """
    Clone a repository into a new directory.

    Copies the full history: every object, every ref and the repository
    config. The source is recorded as remote 'origin'.

    REPOSITORY: Path or file:// URL of the source repository
    DIRECTORY: Destination directory (defaults to the source's name)

    Examples:
        kit clone /path/to/source my-project
        kit clone file:///path/to/source
    """
    if not directory:
        directory = Path(repository.rstrip('/')).name

    click.echo(info(f"Cloning into '{directory}'..."))

    try:
        cloned = clone_repo(repository, directory)
    except KitError as e:
        click.echo(error(f"Failed to clone repository: {e}"))
        raise click.Abort()

    click.echo(success(f"Cloned repository with {len(cloned.objects)} objects"))
    click.echo(info(f"HEAD at {short(cloned.refs.get_head())}"))
