"""Object database inspection commands."""

import click
from kit.core.errors import KitError
from kit.core.objects import Commit
from kit.core.repository import Repository
from kit.cli.output import success, error, warning


def _require_repository() -> Repository:
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()
    return repo


@click.command('cat-object')
@click.argument('object_hash')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print commit objects')
def cat_object_cmd(object_hash, pretty):
    """
    Print the content of an object.

    Examples:
        kit cat-object 3b18e512dba79e4c8300dd08aeb37f8e728b8dad
        kit cat-object -p <commit-hash>
    """
    repo = _require_repository()

    try:
        data = repo.objects.retrieve(object_hash)
    except KitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if pretty:
        try:
            commit = repo.objects.deserialize_metadata(data, Commit)
        except KitError:
            commit = None
        if commit is not None:
            click.echo(f"parent {commit.parent or '(root)'}")
            click.echo(f"author {commit.author}")
            click.echo(f"date {commit.metadata.timestamp}")
            click.echo()
            click.echo(commit.message)
            click.echo()
            for entry in commit.snapshot:
                click.echo(f"{entry.hash} {entry.path}")
            return

    click.echo(data.decode('utf-8', errors='replace'), nl=False)


@click.command('count-objects')
def count_objects_cmd():
    """Count objects in the object database."""
    repo = _require_repository()
    click.echo(f"{len(repo.objects)} objects")


@click.command('fsck')
def fsck_cmd():
    """
    Verify that every object still matches its hash.

    Exits non-zero if any object is corrupt.
    """
    repo = _require_repository()

    corrupt = list(repo.objects.iter_corrupt())
    for object_hash in corrupt:
        click.echo(warning(f"corrupt object {object_hash}"))

    if corrupt:
        click.echo(error(f"{len(corrupt)} corrupt object(s)"))
        raise click.Abort()

    click.echo(success(f"{len(repo.objects)} objects verified"))
