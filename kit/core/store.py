"""Content-addressed object storage for Kit."""

import dataclasses
import json
import logging
import os
import tempfile
import zlib
from pathlib import Path
from typing import Any, Iterator, List, Optional, Type, TypeVar

from .errors import InvalidKeyError, IoFailureError, NotFoundError, SerializationError
from .hash import SHARD_PREFIX_LENGTH, hash_object, is_valid_key

logger = logging.getLogger(__name__)

T = TypeVar('T')

TEMP_PREFIX = '.tmp_'


def write_atomic(path: Path, data: bytes) -> None:
    """
    Write data to path through a temporary file in the same directory.

    The file is fsynced and renamed over path, so readers see either the
    old content or the new content, never a partial write.

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=TEMP_PREFIX)
    try:
        with os.fdopen(tmp_fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


class ObjectStore:
    """
    Content-addressed storage for immutable byte blobs.

    Objects are keyed by the SHA-1 hash of their content and sharded into
    subdirectories named by the first two characters of the hash:

        objects/<hash[:2]>/<hash>

    Content is stored zlib-compressed; retrieval always returns the exact
    bytes that were stored. Identical content collapses to one object.
    """

    def __init__(self, objects_dir: Path):
        """
        Initialize object store.

        Args:
            objects_dir: Root directory of the object database
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, hash: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            hash: Object hash

        Returns:
            Path: objects/<hash[:2]>/<hash>

        Raises:
            InvalidKeyError: If hash is malformed
        """
        if not is_valid_key(hash):
            raise InvalidKeyError(f"Invalid object key: {hash!r}")
        return self.objects_dir / hash[:SHARD_PREFIX_LENGTH] / hash

    def store(self, content: bytes) -> str:
        """
        Store content and return its hash.

        Storing content that is already present is a no-op. New objects are
        written to a temporary file in the shard directory and renamed into
        place, so readers never observe a partial object.

        Args:
            content: Bytes to store

        Returns:
            str: 40-character SHA-1 hash

        Raises:
            IoFailureError: If the object cannot be written
        """
        hash = hash_object(content)
        path = self.object_path(hash)

        # Object already exists
        if path.exists():
            return hash

        try:
            write_atomic(path, zlib.compress(content))
        except OSError as e:
            raise IoFailureError(f"store: cannot write object {hash} to {path}: {e}") from e

        logger.debug("Stored object %s (%d bytes)", hash, len(content))
        return hash

    def retrieve(self, hash: str) -> bytes:
        """
        Read an object's content.

        Args:
            hash: Object hash

        Returns:
            bytes: Exactly the bytes that were stored

        Raises:
            InvalidKeyError: If hash is malformed
            NotFoundError: If no object exists under hash
            IoFailureError: If the object cannot be read or decoded
        """
        path = self.object_path(hash)

        if not path.is_file():
            raise NotFoundError(f"Object {hash} not found in {self.objects_dir}")

        try:
            return zlib.decompress(path.read_bytes())
        except OSError as e:
            raise IoFailureError(f"retrieve: cannot read object {hash} at {path}: {e}") from e
        except zlib.error as e:
            raise IoFailureError(f"retrieve: object {hash} at {path} is corrupt: {e}") from e

    def exists(self, hash: str) -> bool:
        """Check if object exists in the store."""
        if not is_valid_key(hash):
            return False
        return self.object_path(hash).is_file()

    def delete(self, hash: str) -> None:
        """
        Remove an object from the store.

        The shard directory is removed once it is empty.

        Raises:
            InvalidKeyError: If hash is malformed
            NotFoundError: If no object exists under hash
            IoFailureError: If the object cannot be removed
        """
        path = self.object_path(hash)

        if not path.is_file():
            raise NotFoundError(f"Object {hash} not found in {self.objects_dir}")

        try:
            path.unlink()
            if not any(path.parent.iterdir()):
                path.parent.rmdir()
        except OSError as e:
            raise IoFailureError(f"delete: cannot remove object {hash} at {path}: {e}") from e

        logger.debug("Deleted object %s", hash)

    def list(self, prefix: str = '') -> List[str]:
        """
        List object hashes.

        Args:
            prefix: Only return hashes starting with this prefix

        Returns:
            Sorted list of hashes
        """
        return sorted(self._iter_hashes(prefix))

    def _iter_hashes(self, prefix: str = '') -> Iterator[str]:
        if not self.objects_dir.is_dir():
            return

        shard = prefix[:SHARD_PREFIX_LENGTH]
        for shard_dir in self.objects_dir.iterdir():
            if not shard_dir.is_dir() or len(shard_dir.name) != SHARD_PREFIX_LENGTH:
                continue
            if not shard_dir.name.startswith(shard):
                continue
            for obj_file in shard_dir.iterdir():
                name = obj_file.name
                if obj_file.is_file() and name.startswith(prefix) and is_valid_key(name):
                    yield name

    def verify(self, hash: str) -> bool:
        """
        Check that an object's content still matches its hash.

        Returns:
            bool: True if the stored bytes hash to the object's key
        """
        try:
            return hash_object(self.retrieve(hash)) == hash
        except IoFailureError:
            return False

    def iter_corrupt(self) -> Iterator[str]:
        """Yield hashes of objects that fail verification."""
        for hash in self.list():
            if not self.verify(hash):
                yield hash

    def serialize_metadata(self, metadata: Any) -> bytes:
        """
        Encode a dataclass record or plain mapping as canonical JSON.

        Keys are sorted and separators fixed, so equal records always encode
        to equal bytes and therefore to the same hash.

        Raises:
            SerializationError: If the value cannot be encoded
        """
        if dataclasses.is_dataclass(metadata) and not isinstance(metadata, type):
            payload = dataclasses.asdict(metadata)
        else:
            payload = metadata

        try:
            return json.dumps(payload, sort_keys=True, separators=(',', ':')).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise SerializationError(f"serialize_metadata: cannot encode {type(metadata).__name__}: {e}") from e

    def deserialize_metadata(self, data: bytes, cls: Optional[Type[T]] = None) -> Any:
        """
        Decode bytes produced by serialize_metadata.

        Args:
            data: Encoded record
            cls: Target type; uses cls.from_dict when defined, otherwise
                 cls(**payload). Returns the decoded mapping when omitted.

        Raises:
            SerializationError: If data is not a valid encoding of cls
        """
        try:
            payload = json.loads(data.decode('utf-8'))
            if cls is None:
                return payload
            if hasattr(cls, 'from_dict'):
                return cls.from_dict(payload)
            return cls(**payload)
        except (UnicodeDecodeError, ValueError, TypeError, KeyError, AttributeError) as e:
            target = cls.__name__ if cls is not None else 'metadata'
            raise SerializationError(f"deserialize_metadata: cannot decode {target}: {e}") from e

    def store_metadata(self, metadata: Any) -> str:
        """Serialize a record and store it as an object."""
        return self.store(self.serialize_metadata(metadata))

    def retrieve_metadata(self, hash: str, cls: Optional[Type[T]] = None) -> Any:
        """Retrieve an object and decode it as a record."""
        return self.deserialize_metadata(self.retrieve(hash), cls)

    def __len__(self) -> int:
        return sum(1 for _ in self._iter_hashes())

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
