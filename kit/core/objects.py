"""Data model for Kit objects and references."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

COMMIT_KIND = 'commit'


def utc_timestamp() -> str:
    """Return the current time as an ISO-8601 string in UTC."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class CommitMetadata:
    """
    Provenance of one revision.

    Attributes:
        author: Author identity (e.g., "Name <email>")
        message: Commit message
        timestamp: ISO-8601 timestamp
        parent: Hash of the parent commit, None for a root commit
    """
    author: str
    message: str
    timestamp: str = field(default_factory=utc_timestamp)
    parent: Optional[str] = None

    def with_parent(self, parent: Optional[str]) -> 'CommitMetadata':
        """Return a copy bound to the given parent."""
        return replace(self, parent=parent)


@dataclass(frozen=True)
class SnapshotEntry:
    """A staged path and the hash of its content."""
    path: str
    hash: str

    def __repr__(self) -> str:
        return f"SnapshotEntry({self.hash[:7]} {self.path})"


@dataclass(frozen=True)
class Commit:
    """
    Immutable node in the revision graph.

    A commit captures:
    - Metadata (author, message, timestamp, parent)
    - Snapshot of staged paths bound to content hashes

    The serialized form is canonical, so the same metadata and snapshot
    always produce the same commit hash.
    """
    metadata: CommitMetadata
    snapshot: List[SnapshotEntry] = field(default_factory=list)
    kind: str = COMMIT_KIND

    @property
    def parent(self) -> Optional[str]:
        """Hash of the parent commit."""
        return self.metadata.parent

    @property
    def message(self) -> str:
        return self.metadata.message

    @property
    def author(self) -> str:
        return self.metadata.author

    def content_hashes(self) -> List[str]:
        """Hashes of every content object referenced by the snapshot."""
        return [entry.hash for entry in self.snapshot]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Commit':
        """
        Build a commit from its decoded form.

        Raises:
            ValueError: If the payload is not a commit
        """
        if data.get('kind') != COMMIT_KIND:
            raise ValueError(f"Not a commit object (kind={data.get('kind')!r})")
        metadata = CommitMetadata(**data['metadata'])
        snapshot = [SnapshotEntry(**entry) for entry in data.get('snapshot', [])]
        return cls(metadata=metadata, snapshot=snapshot)

    def __repr__(self) -> str:
        msg_preview = self.message.split('\n')[0][:50]
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        return f"Commit(files={len(self.snapshot)}{parent_info}, msg='{msg_preview}')"


class RefType(Enum):
    """Kinds of named pointers."""
    BRANCH = 'branch'
    TAG = 'tag'
    HEAD = 'head'


@dataclass
class Ref:
    """A mutable named pointer into the commit graph."""
    name: str
    type: RefType
    commit_hash: Optional[str] = None

    @property
    def is_bound(self) -> bool:
        return self.commit_hash is not None


@dataclass(frozen=True)
class RepositoryConfig:
    """Repository identity, written once at init time."""
    name: str
    default_branch: str = 'main'
