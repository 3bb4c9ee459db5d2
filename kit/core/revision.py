"""Revision graph: building and walking commits."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Set

from .errors import IoFailureError, NotFoundError
from .index import Index
from .objects import Commit, CommitMetadata, SnapshotEntry
from .refs import RefStore
from .store import ObjectStore

logger = logging.getLogger(__name__)


class RevisionGraph:
    """
    Creates immutable commits and walks their history.

    The graph owns no state of its own: commits are written through to the
    object store and the parent is read from HEAD. History is append-only.
    """

    def __init__(self, store: ObjectStore, refs: RefStore, index: Index):
        self.store = store
        self.refs = refs
        self.index = index

    def _read_staged(self) -> List[SnapshotEntry]:
        """Store every staged file's content and bind it to its path."""
        snapshot = []
        for path in self.index.get_staged_files():
            file_path = self.index.work_tree / path
            if not file_path.is_file():
                raise NotFoundError(f"create_revision: staged file missing: {file_path}")
            try:
                data = file_path.read_bytes()
            except OSError as e:
                raise IoFailureError(f"create_revision: cannot read {file_path}: {e}") from e
            snapshot.append(SnapshotEntry(path=path, hash=self.store.store(data)))
        return snapshot

    def create_revision(self, metadata: CommitMetadata) -> str:
        """
        Create a commit from the staged files.

        Content objects are stored before the commit that references them.
        No ref is moved; publishing the commit is the caller's job.

        Args:
            metadata: Author, message and timestamp; the parent is taken
                      from the current HEAD

        Returns:
            str: Hash of the new commit
        """
        snapshot = self._read_staged()
        commit = Commit(metadata=metadata.with_parent(self.refs.get_head()), snapshot=snapshot)
        commit_hash = self.store.store_metadata(commit)
        logger.info("Created revision %s (%d files)", commit_hash, len(snapshot))
        return commit_hash

    def read_commit(self, commit_hash: str) -> Commit:
        """
        Load a commit.

        Raises:
            NotFoundError: If no object exists under the hash
            SerializationError: If the object is not a commit
        """
        return self.store.retrieve_metadata(commit_hash, Commit)

    def iter_history(self, start: Optional[str] = None) -> Iterator[tuple]:
        """
        Walk first-parent history.

        Args:
            start: Commit to start from (defaults to HEAD)

        Yields:
            (commit_hash, Commit) tuples, newest first
        """
        commit_hash = start if start is not None else self.refs.get_head()
        seen: Set[str] = set()
        while commit_hash and commit_hash not in seen:
            seen.add(commit_hash)
            commit = self.read_commit(commit_hash)
            yield commit_hash, commit
            commit_hash = commit.parent

    def reachable_objects(self, start: Optional[str] = None) -> Set[str]:
        """
        Collect every object reachable from a commit.

        Returns:
            Set of commit and content hashes
        """
        reachable: Set[str] = set()
        for commit_hash, commit in self.iter_history(start):
            reachable.add(commit_hash)
            reachable.update(commit.content_hashes())
        return reachable

    def read_file(self, commit_hash: str, path: str) -> bytes:
        """
        Read one path's content as of a commit.

        Raises:
            NotFoundError: If the path is not in the commit's snapshot
        """
        commit = self.read_commit(commit_hash)
        for entry in commit.snapshot:
            if entry.path == Path(path).as_posix():
                return self.store.retrieve(entry.hash)
        raise NotFoundError(f"Path '{path}' not in commit {commit_hash[:7]}")
