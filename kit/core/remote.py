"""Repository lifecycle and synchronization for Kit.

Supports local file system remotes (plain paths or file:// URLs).
Synchronization is a set-difference copy: objects and ref entries present
on the source but absent on the destination are copied, existing files are
never overwritten, and the destination HEAD is moved last. A pull whose
HEADs already match copies nothing; a push still sends any objects the
remote lacks, such as freshly staged content.

Callers must not run concurrent synchronization operations against the
same repository; no locking is performed.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .config import write_repository_config
from .errors import AlreadyExistsError, InvalidRemoteError, IoFailureError, NotFoundError
from .objects import RepositoryConfig
from .refs import RefStore
from .repository import Repository
from .store import ObjectStore, write_atomic

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = 'origin'


@dataclass
class SyncResult:
    """Outcome of a push or pull."""
    objects_copied: List[str] = field(default_factory=list)
    refs_copied: List[str] = field(default_factory=list)
    head: Optional[str] = None
    up_to_date: bool = False


def parse_url(url: str) -> Tuple[str, str]:
    """
    Parse remote URL to determine protocol and path.

    Examples:
        file:///path/to/repo -> ('file', '/path/to/repo')
        /path/to/repo -> ('file', '/path/to/repo')
        https://example.com/repo -> ('https', 'example.com/repo')
    """
    if url.startswith('file://'):
        return ('file', url[7:])
    elif url.startswith('https://'):
        return ('https', url[8:])
    elif url.startswith('http://'):
        return ('http', url[7:])
    elif url.startswith('ssh://'):
        return ('ssh', url[6:])
    else:
        # Assume local file path
        return ('file', url)


def _local_path(url: Union[str, Path]) -> Path:
    protocol, path = parse_url(str(url))
    if protocol != 'file':
        raise InvalidRemoteError(
            f"Protocol '{protocol}' not supported; only local paths and file:// URLs are"
        )
    return Path(path).resolve()


def validate_remote_repo(remote_path: Union[str, Path]) -> Repository:
    """
    Open a remote repository.

    Raises:
        InvalidRemoteError: If the path holds no repository
    """
    repo = Repository(_local_path(remote_path))
    if not repo.is_initialized():
        raise InvalidRemoteError(f"Invalid remote repository: {repo.kit_dir} not found")
    return repo


def _copy_file(src: Path, dest: Path) -> None:
    """Copy a file into place atomically."""
    write_atomic(dest, src.read_bytes())


def copy_missing_objects(source: ObjectStore, dest: ObjectStore) -> List[str]:
    """
    Copy objects present in source but absent in dest.

    Returns:
        Hashes of the copied objects
    """
    missing = sorted(set(source.list()) - set(dest.list()))
    for obj_hash in missing:
        src_file = source.object_path(obj_hash)
        try:
            _copy_file(src_file, dest.object_path(obj_hash))
        except OSError as e:
            raise IoFailureError(f"sync: cannot copy object {obj_hash} from {src_file}: {e}") from e
        logger.debug("Copied new object: %s", obj_hash)
    return missing


def copy_missing_refs(source: RefStore, dest: RefStore) -> List[str]:
    """
    Copy ref entries present in source but absent in dest.

    Returns:
        Relative names of the copied entries
    """
    missing = sorted(set(source.iter_entries()) - set(dest.iter_entries()))
    for entry in missing:
        src_file = source.refs_dir / entry
        try:
            _copy_file(src_file, dest.refs_dir / entry)
        except OSError as e:
            raise IoFailureError(f"sync: cannot copy ref {entry} from {src_file}: {e}") from e
        logger.debug("Copied new ref: %s", entry)
    return [str(entry) for entry in missing]


def _synchronize(source: Repository, dest: Repository, always_copy: bool) -> SyncResult:
    """
    Objects first, then refs, then HEAD.

    With matching HEADs the call returns at once unless always_copy is set,
    in which case missing objects and refs are still transferred and only
    the HEAD move is skipped.
    """
    source_head = source.refs.get_head()
    dest_head = dest.refs.get_head()
    same_head = source_head == dest_head

    if same_head and not always_copy:
        logger.info("No new changes: HEAD already at %s", dest_head)
        return SyncResult(head=dest_head, up_to_date=True)

    objects_copied = copy_missing_objects(source.objects, dest.objects)
    refs_copied = copy_missing_refs(source.refs, dest.refs)
    if not same_head:
        dest.refs.update_head(source_head)

    logger.info(
        "Synchronized %s -> %s: %d objects, %d refs, HEAD %s",
        source.work_tree, dest.work_tree, len(objects_copied), len(refs_copied), source_head,
    )
    return SyncResult(
        objects_copied=objects_copied,
        refs_copied=refs_copied,
        head=source_head,
        up_to_date=same_head and not objects_copied and not refs_copied,
    )


def init_repo(name: str, path: Union[str, Path], default_branch: str = 'main') -> RepositoryConfig:
    """
    Initialize a repository at path.

    Raises:
        AlreadyExistsError: If a repository already exists at path
    """
    return Repository(path).init(name, default_branch)


def clone_repo(remote_path: Union[str, Path], local_path: Union[str, Path]) -> Repository:
    """
    Clone a repository into a new directory.

    Copies the remote's full object store and ref store plus its [core]
    identity, creates an empty index, points the local HEAD at the remote
    HEAD and records the remote as 'origin'. The remote's own named
    remotes are not carried over.

    Returns:
        Repository: The cloned repository

    Raises:
        InvalidRemoteError: If remote_path holds no repository or no HEAD
        AlreadyExistsError: If local_path already exists
    """
    remote = validate_remote_repo(remote_path)

    dest = Path(local_path).resolve()
    if dest.exists():
        raise AlreadyExistsError(f"Destination already exists: {dest}")

    remote_head = remote.refs.get_head()
    if remote_head is None:
        raise InvalidRemoteError(f"Remote HEAD is missing in {remote.work_tree}")
    remote_config = remote.repository_config

    local = Repository(dest)
    try:
        local.kit_dir.mkdir(parents=True)
        shutil.copytree(remote.objects_dir, local.objects_dir)
        shutil.copytree(remote.refs_dir, local.refs_dir)
        local.index_file.touch()
    except OSError as e:
        raise IoFailureError(f"clone: cannot copy {remote.kit_dir} to {local.kit_dir}: {e}") from e

    write_repository_config(local.config_file, remote_config)

    local.refs.update_head(remote_head)
    local.remote.add_remote(DEFAULT_REMOTE, str(remote.work_tree))

    logger.info("Cloned %s into %s", remote.work_tree, dest)
    return local


def pull_repo(remote_path: Union[str, Path], local_path: Union[str, Path]) -> SyncResult:
    """
    Pull objects and refs from a remote and move the local HEAD to the remote HEAD.

    Divergent history is not detected; the local HEAD is overwritten.

    Raises:
        InvalidRemoteError: If the remote is not a repository or has no HEAD
        NotFoundError: If local_path is not a repository
    """
    remote = validate_remote_repo(remote_path)
    local = Repository.open(local_path)

    if remote.refs.get_head() is None:
        raise InvalidRemoteError(f"Remote HEAD is missing in {remote.work_tree}")

    return _synchronize(remote, local, always_copy=False)


def push_repo(local_path: Union[str, Path], remote_path: Union[str, Path]) -> SyncResult:
    """
    Push objects and refs to a remote and move the remote HEAD to the local HEAD.

    Divergent history is not detected; the remote HEAD is overwritten.
    Missing objects and refs are copied even when both HEADs already match.

    Raises:
        InvalidRemoteError: If the remote is not a repository or has no HEAD
        NotFoundError: If local_path is not a repository or has no HEAD
    """
    remote = validate_remote_repo(remote_path)
    local = Repository.open(local_path)

    if local.refs.get_head() is None:
        raise NotFoundError(f"Local HEAD is missing in {local.work_tree}")
    if remote.refs.get_head() is None:
        raise InvalidRemoteError(f"Remote HEAD is missing in {remote.work_tree}")

    return _synchronize(local, remote, always_copy=True)


class RemoteManager:
    """
    Manages named remotes of a repository.

    Remotes are stored in the repository config as [remote "<name>"]
    sections with a url key.
    """

    def __init__(self, repo: Repository):
        """Initialize remote manager."""
        self.repo = repo

    @staticmethod
    def _section(name: str) -> str:
        return f'remote "{name}"'

    def add_remote(self, name: str, url: str) -> None:
        """
        Add or replace a remote.

        Args:
            name: Remote name (e.g., 'origin')
            url: Local path or file:// URL
        """
        self.repo.config.set(self._section(name), 'url', url)

    def list_remotes(self) -> Dict[str, str]:
        """
        List all configured remotes.

        Returns:
            Dict mapping remote names to URLs
        """
        remotes = {}
        for section, values in self.repo.config.sections('remote "').items():
            if section.endswith('"') and 'url' in values:
                remotes[section[8:-1]] = values['url']
        return remotes

    def get_remote_url(self, name: str) -> Optional[str]:
        """Get URL for a remote."""
        return self.list_remotes().get(name)

    def remove_remote(self, name: str) -> bool:
        """Remove a remote."""
        return self.repo.config.remove_section(self._section(name))

    def resolve(self, remote: str) -> Path:
        """
        Turn a remote name or path into a repository path.

        Raises:
            InvalidRemoteError: If remote is neither a configured name nor a path
        """
        url = self.get_remote_url(remote)
        if url is None:
            url = remote
        path = _local_path(url)
        if not path.exists():
            raise InvalidRemoteError(f"Remote '{remote}' is not configured and is not a path")
        return path

    def push(self, remote: str = DEFAULT_REMOTE) -> SyncResult:
        """Push this repository to a remote."""
        return push_repo(self.repo.work_tree, self.resolve(remote))

    def pull(self, remote: str = DEFAULT_REMOTE) -> SyncResult:
        """Pull a remote into this repository."""
        return pull_repo(self.resolve(remote), self.repo.work_tree)
