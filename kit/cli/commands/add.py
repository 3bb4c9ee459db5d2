"""Add command - stage files for commit."""

import click
from pathlib import Path
from kit.core.errors import KitError
from kit.core.repository import Repository
from kit.cli.output import success, error, info, warning


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stores each file's content in the object database and records its
    path in the index. Directories are added recursively.

    Examples:
        kit add file.txt
        kit add src/
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    added_files = []
    failed_files = []

    for path_pattern in paths:
        path = Path(path_pattern).resolve()

        if path.is_dir():
            candidates = sorted(p for p in path.rglob('*')
                                if p.is_file() and repo.kit_dir not in p.parents)
        else:
            candidates = [path]

        for candidate in candidates:
            try:
                content_hash = repo.store_file(candidate)
                added_files.append((repo.index.relative_path(candidate), content_hash))
            except KitError as e:
                failed_files.append((path_pattern, str(e)))

    for rel_path, content_hash in added_files:
        click.echo(success(f"Added {rel_path} ({content_hash[:7]})"))

    for path_pattern, reason in failed_files:
        click.echo(warning(f"Skipped {path_pattern}: {reason}"))

    if not added_files:
        click.echo(error("No files added"))
        raise click.Abort()

    click.echo(info(f"{len(repo.index)} file(s) staged"))
