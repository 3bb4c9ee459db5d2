"""Push command - copy local objects and refs to a remote."""

import click
from kit.core.errors import KitError
from kit.core.repository import Repository
from kit.cli.output import success, error, info, warning, short


@click.command('push')
@click.argument('remote', default='origin')
def push_cmd(remote):
    """
    Update a remote repository with local objects and refs.

    Copies every object and ref the remote lacks, then moves the remote
    HEAD to the local HEAD. Divergent remote history is overwritten.

    REMOTE: Configured remote name or path (default: origin)

    Examples:
        kit push
        kit push ../backup
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    try:
        result = repo.remote.push(remote)
    except KitError as e:
        click.echo(error(f"Push failed: {e}"))
        raise click.Abort()

    if result.up_to_date:
        click.echo(info("Everything up-to-date"))
        return

    click.echo(success(f"Pushed to '{remote}'"))
    click.echo(info(f"{len(result.objects_copied)} object(s), {len(result.refs_copied)} ref(s) copied"))
    click.echo(info(f"Remote HEAD -> {short(result.head)}"))
    click.echo(warning("Remote HEAD overwritten; divergent history is not checked"))
