"""Remote command - manage named remotes."""

import click
from kit.core.repository import Repository
from kit.cli.output import success, error, info


def _require_repository() -> Repository:
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()
    return repo


@click.group('remote', invoke_without_command=True)
@click.pass_context
def remote_cmd(ctx):
    """
    Manage named remotes.

    Examples:
        kit remote
        kit remote add origin /path/to/repo
        kit remote remove origin
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_remotes)


@remote_cmd.command('list')
def list_remotes():
    """List remotes."""
    repo = _require_repository()
    remotes = repo.remote.list_remotes()
    if not remotes:
        click.echo(info("No remotes configured"))
        return
    for name, url in sorted(remotes.items()):
        click.echo(f"{name}\t{url}")


@remote_cmd.command('add')
@click.argument('name')
@click.argument('url')
def add_remote(name, url):
    """Add a remote."""
    repo = _require_repository()
    if repo.remote.get_remote_url(name):
        click.echo(error(f"Remote '{name}' already exists"))
        raise click.Abort()
    repo.remote.add_remote(name, url)
    click.echo(success(f"Added remote '{name}' -> {url}"))


@remote_cmd.command('remove')
@click.argument('name')
def remove_remote(name):
    """Remove a remote."""
    repo = _require_repository()
    if not repo.remote.remove_remote(name):
        click.echo(error(f"Remote '{name}' not found"))
        raise click.Abort()
    click.echo(success(f"Removed remote '{name}'"))
