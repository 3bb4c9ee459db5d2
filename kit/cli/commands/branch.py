"""Branch command - list or create branches."""

import click
from colorama import Fore, Style
from kit.core.errors import KitError
from kit.core.objects import RefType
from kit.core.repository import Repository
from kit.cli.output import success, error, short


@click.command('branch')
@click.argument('name', required=False)
@click.argument('start_point', required=False)
@click.option('-d', '--delete', is_flag=True, help='Delete a branch')
def branch_cmd(name, start_point, delete):
    """
    List, create or delete branches.

    Examples:
        kit branch                  # List branches
        kit branch feature          # Create 'feature' at HEAD
        kit branch fix abc1234      # Create 'fix' at a commit
        kit branch -d feature       # Delete 'feature'
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    if not name:
        head = repo.refs.get_head()
        for branch_name, commit_hash in repo.refs.list_branches():
            if commit_hash == head:
                click.echo(f"* {Fore.GREEN}{branch_name}{Style.RESET_ALL} {short(commit_hash)}")
            else:
                click.echo(f"  {branch_name} {short(commit_hash)}")
        return

    try:
        if delete:
            repo.refs.delete_ref(name, RefType.BRANCH)
            click.echo(success(f"Deleted branch '{name}'"))
            return

        target = repo.refs.get_head()
        if start_point:
            target = repo.refs.get_ref(start_point).commit_hash or start_point
        # Write-before-publish: only point at commits that exist
        repo.revisions.read_commit(target)
        repo.refs.create_ref(RefType.BRANCH, name, target)
    except KitError as e:
        click.echo(error(f"Cannot update branch '{name}': {e}"))
        raise click.Abort()

    click.echo(success(f"Created branch '{name}' at {short(target)}"))
