"""Tag command - list or create tags."""

import click
from kit.core.errors import KitError
from kit.core.objects import RefType
from kit.core.repository import Repository
from kit.cli.output import success, error, short


@click.command('tag')
@click.argument('name', required=False)
@click.argument('commit', required=False)
@click.option('-d', '--delete', is_flag=True, help='Delete a tag')
def tag_cmd(name, commit, delete):
    """
    List, create or delete tags.

    Examples:
        kit tag                     # List tags
        kit tag v1.0                # Tag HEAD
        kit tag v0.9 abc1234        # Tag a commit
        kit tag -d v1.0             # Delete a tag
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    if not name:
        for tag_name, commit_hash in repo.refs.list_tags():
            click.echo(f"{tag_name} {short(commit_hash)}")
        return

    try:
        if delete:
            repo.refs.delete_ref(name, RefType.TAG)
            click.echo(success(f"Deleted tag '{name}'"))
            return

        target = repo.refs.get_head()
        if commit:
            target = repo.refs.get_ref(commit).commit_hash or commit
        repo.revisions.read_commit(target)
        repo.refs.create_ref(RefType.TAG, name, target)
    except KitError as e:
        click.echo(error(f"Cannot update tag '{name}': {e}"))
        raise click.Abort()

    click.echo(success(f"Created tag '{name}' at {short(target)}"))
