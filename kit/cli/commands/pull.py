"""Pull command - copy remote objects and refs into the local repository."""

import click
from kit.core.errors import KitError
from kit.core.repository import Repository
from kit.cli.output import success, error, info, short


@click.command('pull')
@click.argument('remote', default='origin')
def pull_cmd(remote):
    """
    Fetch objects and refs from a remote and move HEAD to the remote HEAD.

    REMOTE: Configured remote name or path (default: origin)

    Examples:
        kit pull
        kit pull ../upstream
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    try:
        result = repo.remote.pull(remote)
    except KitError as e:
        click.echo(error(f"Pull failed: {e}"))
        raise click.Abort()

    if result.up_to_date:
        click.echo(info("No new changes to pull"))
        return

    click.echo(success(f"Pulled from '{remote}'"))
    click.echo(info(f"{len(result.objects_copied)} object(s), {len(result.refs_copied)} ref(s) copied"))
    click.echo(info(f"HEAD -> {short(result.head)}"))
