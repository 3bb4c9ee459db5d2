"""Core functionality for Kit.

This module contains the core data structures:
- Object store (content-addressed blobs)
- Reference store (branches, tags, HEAD)
- Revision graph (commits)
- Repository lifecycle and synchronization
- Index/staging area
- Configuration management
- Hashing utilities
"""

from kit.core.errors import (
    KitError,
    AlreadyExistsError,
    NotFoundError,
    InvalidRemoteError,
    InvalidKeyError,
    IoFailureError,
    SerializationError,
)
from kit.core.hash import hash_object, hash_file
from kit.core.objects import Commit, CommitMetadata, SnapshotEntry, Ref, RefType, RepositoryConfig
from kit.core.store import ObjectStore
from kit.core.refs import RefStore
from kit.core.index import Index
from kit.core.revision import RevisionGraph
from kit.core.repository import Repository
from kit.core.config import Config, get_config
from kit.core.remote import (
    RemoteManager,
    SyncResult,
    init_repo,
    clone_repo,
    push_repo,
    pull_repo,
)

__all__ = [
    'KitError',
    'AlreadyExistsError',
    'NotFoundError',
    'InvalidRemoteError',
    'InvalidKeyError',
    'IoFailureError',
    'SerializationError',
    'hash_object',
    'hash_file',
    'Commit',
    'CommitMetadata',
    'SnapshotEntry',
    'Ref',
    'RefType',
    'RepositoryConfig',
    'ObjectStore',
    'RefStore',
    'Index',
    'RevisionGraph',
    'Repository',
    'Config',
    'get_config',
    'RemoteManager',
    'SyncResult',
    'init_repo',
    'clone_repo',
    'push_repo',
    'pull_repo',
]
