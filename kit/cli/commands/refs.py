"""Show-ref command - list references."""

import click
from kit.core.repository import Repository
from kit.cli.output import error


@click.command('show-ref')
@click.option('--head', is_flag=True, help='Show HEAD as well')
def show_ref_cmd(head):
    """
    List branches and tags with the commits they point to.

    Examples:
        kit show-ref
        kit show-ref --head
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    for ref in repo.refs.list_refs():
        if ref.name == 'HEAD' and not head:
            continue
        prefix = {'branch': 'refs/heads/', 'tag': 'refs/tags/'}.get(ref.type.value, '')
        click.echo(f"{ref.commit_hash or '-' * 40} {prefix}{ref.name}")
