"""Repository management for Kit."""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import Config, read_repository_config, write_repository_config
from .errors import AlreadyExistsError, IoFailureError, NotFoundError
from .index import Index
from .objects import CommitMetadata, RefType, RepositoryConfig
from .refs import RefStore, validate_ref_name
from .revision import RevisionGraph
from .store import ObjectStore

logger = logging.getLogger(__name__)

KIT_DIR = '.kit'
SYSTEM_AUTHOR = 'System'
INITIAL_MESSAGE = 'Initial commit'


class Repository:
    """
    Represents a Kit repository.

    A repository manages the .kit directory structure and hands out the
    stores that operate on it. Every store is rooted at this repository,
    so any number of repositories can be open in one process.
    """

    def __init__(self, path: Union[str, Path] = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.kit_dir = self.work_tree / KIT_DIR
        self.objects_dir = self.kit_dir / 'objects'
        self.refs_dir = self.kit_dir / 'refs'
        self.index_file = self.kit_dir / 'index'
        self.config_file = self.kit_dir / 'config'

        self._objects = None
        self._refs = None
        self._index = None
        self._revisions = None
        self._remote_manager = None

    @property
    def objects(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._objects is None:
            self._objects = ObjectStore(self.objects_dir)
        return self._objects

    @property
    def refs(self) -> RefStore:
        """Get RefStore instance."""
        if self._refs is None:
            self._refs = RefStore(self.refs_dir)
        return self._refs

    @property
    def index(self) -> Index:
        """Get Index instance."""
        if self._index is None:
            self._index = Index(self.index_file, self.work_tree)
        return self._index

    @property
    def revisions(self) -> RevisionGraph:
        """Get RevisionGraph instance."""
        if self._revisions is None:
            self._revisions = RevisionGraph(self.objects, self.refs, self.index)
        return self._revisions

    @property
    def remote(self):
        """Get RemoteManager instance."""
        if self._remote_manager is None:
            from .remote import RemoteManager
            self._remote_manager = RemoteManager(self)
        return self._remote_manager

    @property
    def config(self) -> Config:
        return Config(self.config_file)

    @property
    def repository_config(self) -> RepositoryConfig:
        """Identity recorded at init time."""
        return read_repository_config(self.config_file)

    def is_initialized(self) -> bool:
        return self.kit_dir.is_dir()

    def init(self, name: Optional[str] = None, default_branch: str = 'main') -> RepositoryConfig:
        """
        Initialize a new repository.

        Creates the .kit directory structure:
        .kit/
        ├── objects/       # Object database
        ├── refs/          # HEAD, heads/, tags/
        ├── index          # Staging area
        └── config         # Repository configuration

        then records an empty initial commit authored by the system
        identity, points the default branch and HEAD at it, and persists
        the repository config.

        Args:
            name: Repository name (defaults to the directory name)
            default_branch: Name of the first branch

        Returns:
            RepositoryConfig: The persisted identity

        Raises:
            AlreadyExistsError: If a repository already exists here
            InvalidKeyError: If default_branch is not a valid branch name
            IoFailureError: If the layout cannot be created
        """
        if self.kit_dir.exists():
            raise AlreadyExistsError(f"Repository already exists at {self.kit_dir}")
        validate_ref_name(default_branch)

        try:
            self.work_tree.mkdir(parents=True, exist_ok=True)
            self.kit_dir.mkdir()
            self.objects_dir.mkdir()
            self.refs_dir.mkdir()
            self.index_file.touch()
        except OSError as e:
            raise IoFailureError(f"init: cannot create repository at {self.kit_dir}: {e}") from e

        metadata = CommitMetadata(author=SYSTEM_AUTHOR, message=INITIAL_MESSAGE)
        initial_hash = self.revisions.create_revision(metadata)

        self.refs.create_ref(RefType.BRANCH, default_branch, initial_hash)
        self.refs.create_head()
        self.refs.update_head(initial_hash)

        repo_config = RepositoryConfig(name=name or self.work_tree.name, default_branch=default_branch)
        write_repository_config(self.config_file, repo_config)

        logger.info("Initialized repository %s at %s", repo_config.name, self.kit_dir)
        return repo_config

    @classmethod
    def open(cls, path: Union[str, Path]) -> 'Repository':
        """
        Open an existing repository.

        Raises:
            NotFoundError: If path holds no repository
        """
        repo = cls(path)
        if not repo.is_initialized():
            raise NotFoundError(f"Not a kit repository: {repo.work_tree}")
        return repo

    @classmethod
    def find_repository(cls, path: Union[str, Path] = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / KIT_DIR).is_dir():
                return cls(current)

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    def store_file(self, path: Union[str, Path]) -> str:
        """
        Store one file's content and stage it.

        Returns:
            str: Hash of the stored content

        Raises:
            NotFoundError: If the file does not exist
        """
        rel_path = self.index.relative_path(path)
        file_path = self.work_tree / rel_path
        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise IoFailureError(f"store_file: cannot read {file_path}: {e}") from e

        content_hash = self.objects.store(data)
        self.index.add_to_index(rel_path)
        return content_hash

    def commit(self, metadata: CommitMetadata) -> str:
        """
        Record the staged files as a new commit and publish it.

        The commit object is stored before any ref moves. The default
        branch follows HEAD while they point at the same commit.

        Returns:
            str: Hash of the new commit
        """
        previous_head = self.refs.get_head()
        commit_hash = self.revisions.create_revision(metadata)

        branch = self.repository_config.default_branch
        branch_ref = self.refs.get_ref(branch, RefType.BRANCH)
        if branch_ref.is_bound and branch_ref.commit_hash == previous_head:
            self.refs.update_ref(branch, commit_hash, RefType.BRANCH)
        self.refs.update_head(commit_hash)

        return commit_hash

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
