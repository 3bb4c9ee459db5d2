"""Commit command - create a commit from staged changes."""

import click
from kit.core.errors import KitError
from kit.core.objects import CommitMetadata
from kit.core.repository import Repository
from kit.cli.output import success, error, info


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('--author', help='Override the commit author ("Name <email>")')
def commit_cmd(message, author):
    """
    Record the staged files as a new commit.

    The author is taken from KIT_AUTHOR_NAME/KIT_AUTHOR_EMAIL, then from
    user.name/user.email in the repository or global config.

    Examples:
        kit commit -m "Add parser"
        kit commit -m "Fix" --author "Jo <jo@example.com>"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    if not len(repo.index):
        click.echo(error("Nothing staged to commit"))
        click.echo(info("Use 'kit add <file>' to stage files"))
        raise click.Abort()

    metadata = CommitMetadata(author=author or repo.config.get_author(), message=message)

    try:
        commit_hash = repo.commit(metadata)
    except KitError as e:
        click.echo(error(f"Commit failed: {e}"))
        raise click.Abort()

    commit = repo.revisions.read_commit(commit_hash)
    click.echo(success(f"[{commit_hash[:7]}] {message}"))
    click.echo(info(f"{len(commit.snapshot)} file(s) in snapshot"))
