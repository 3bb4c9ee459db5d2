"""Reference management for Kit."""

import logging
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

from .errors import AlreadyExistsError, InvalidKeyError, IoFailureError, NotFoundError
from .hash import is_valid_key
from .objects import Ref, RefType
from .store import TEMP_PREFIX, write_atomic

logger = logging.getLogger(__name__)

HEAD = 'HEAD'


def validate_ref_name(name: str) -> None:
    """
    Reject branch and tag names that cannot map to a file under refs/.

    Raises:
        InvalidKeyError: If name is empty, reserved or escapes its directory
    """
    if not name or name == HEAD:
        raise InvalidKeyError(f"Invalid ref name: {name!r}")
    if '\\' in name or '\0' in name or name.startswith('/') or name.endswith('/'):
        raise InvalidKeyError(f"Invalid ref name: {name!r}")
    if any(part in ('', '.', '..') for part in name.split('/')):
        raise InvalidKeyError(f"Invalid ref name: {name!r}")


class RefStore:
    """
    Manages references (branches, tags, HEAD).

    Each ref is one file holding a commit hash, or nothing when the ref
    exists but is unbound:

        refs/HEAD
        refs/heads/<branch>
        refs/tags/<tag>

    The store never dereferences the hash it is given. Callers must store
    a commit before pointing a ref at it.
    """

    def __init__(self, refs_dir: Path):
        """
        Initialize reference store.

        Args:
            refs_dir: Root directory of the reference store
        """
        self.refs_dir = Path(refs_dir)
        self.heads_dir = self.refs_dir / 'heads'
        self.tags_dir = self.refs_dir / 'tags'
        self.head_file = self.refs_dir / HEAD

    def ref_path(self, ref_type: RefType, name: str) -> Path:
        """
        Get filesystem path for a reference.

        Raises:
            InvalidKeyError: If the name is structurally invalid
        """
        if ref_type is RefType.HEAD:
            if name != HEAD:
                raise InvalidKeyError(f"HEAD ref must be named {HEAD!r}, got {name!r}")
            return self.head_file

        validate_ref_name(name)
        base = self.heads_dir if ref_type is RefType.BRANCH else self.tags_dir
        return base / name

    @staticmethod
    def _validate_hash(commit_hash: Optional[str]) -> None:
        if commit_hash is not None and not is_valid_key(commit_hash):
            raise InvalidKeyError(f"Invalid commit hash: {commit_hash!r}")

    def _read(self, path: Path) -> Optional[str]:
        try:
            content = path.read_text().strip()
        except OSError as e:
            raise IoFailureError(f"get_ref: cannot read {path}: {e}") from e
        return content or None

    def _write(self, path: Path, commit_hash: Optional[str]) -> None:
        try:
            write_atomic(path, f"{commit_hash}\n".encode() if commit_hash else b'')
        except OSError as e:
            raise IoFailureError(f"cannot write ref {path}: {e}") from e

    def _resolve_type(self, name: str, ref_type: Optional[RefType]) -> Optional[RefType]:
        """Find which kind of ref a bare name refers to."""
        if ref_type is not None:
            return ref_type
        if name == HEAD:
            return RefType.HEAD
        for candidate in (RefType.BRANCH, RefType.TAG):
            if self.ref_path(candidate, name).is_file():
                return candidate
        return None

    def create_ref(self, ref_type: RefType, name: str,
                   initial_hash: Optional[str] = None) -> Ref:
        """
        Create a new reference.

        Args:
            ref_type: Branch, tag or HEAD
            name: Reference name
            initial_hash: Commit hash to point to, or None to leave unbound

        Returns:
            Ref: The created reference

        Raises:
            AlreadyExistsError: If the name is already bound for that type
        """
        self._validate_hash(initial_hash)
        path = self.ref_path(ref_type, name)

        if path.exists():
            raise AlreadyExistsError(f"{ref_type.value} '{name}' already exists")

        self._write(path, initial_hash)
        logger.debug("Created %s %s -> %s", ref_type.value, name, initial_hash)
        return Ref(name=name, type=ref_type, commit_hash=initial_hash)

    def update_ref(self, name: str, commit_hash: str,
                   ref_type: Optional[RefType] = None) -> Ref:
        """
        Rebind an existing reference.

        Without an explicit type, 'HEAD' addresses HEAD and any other name is
        looked up as a branch, then as a tag.

        Raises:
            NotFoundError: If the reference does not exist
        """
        self._validate_hash(commit_hash)
        resolved = self._resolve_type(name, ref_type)
        if resolved is None or not self.ref_path(resolved, name).is_file():
            raise NotFoundError(f"Reference '{name}' not found")

        self._write(self.ref_path(resolved, name), commit_hash)
        logger.debug("Updated %s %s -> %s", resolved.value, name, commit_hash)
        return Ref(name=name, type=resolved, commit_hash=commit_hash)

    def get_ref(self, name: str, ref_type: Optional[RefType] = None) -> Ref:
        """
        Read a reference.

        Returns:
            Ref: The current binding; commit_hash is None if the ref was
            never bound
        """
        resolved = self._resolve_type(name, ref_type)
        if resolved is None:
            validate_ref_name(name)
            return Ref(name=name, type=RefType.BRANCH)

        path = self.ref_path(resolved, name)
        commit_hash = self._read(path) if path.is_file() else None
        return Ref(name=name, type=resolved, commit_hash=commit_hash)

    def ref_exists(self, name: str, ref_type: Optional[RefType] = None) -> bool:
        resolved = self._resolve_type(name, ref_type)
        return resolved is not None and self.ref_path(resolved, name).is_file()

    def delete_ref(self, name: str, ref_type: RefType = RefType.BRANCH) -> None:
        """
        Delete a reference.

        Raises:
            NotFoundError: If the reference does not exist
        """
        path = self.ref_path(ref_type, name)
        if not path.is_file():
            raise NotFoundError(f"{ref_type.value} '{name}' not found")

        try:
            path.unlink()
        except OSError as e:
            raise IoFailureError(f"delete_ref: cannot remove {path}: {e}") from e

    def create_head(self) -> Ref:
        """Create an unbound HEAD."""
        return self.create_ref(RefType.HEAD, HEAD)

    def update_head(self, commit_hash: str) -> Ref:
        """Point HEAD at a commit, creating HEAD if needed."""
        if not self.head_file.exists():
            return self.create_ref(RefType.HEAD, HEAD, commit_hash)
        return self.update_ref(HEAD, commit_hash, RefType.HEAD)

    def get_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit hash.

        Returns:
            Commit hash or None if HEAD is missing or unbound
        """
        return self.get_ref(HEAD, RefType.HEAD).commit_hash

    def _list(self, base: Path) -> List[Tuple[str, str]]:
        if not base.exists():
            return []

        entries = []
        for ref_file in base.rglob('*'):
            if ref_file.is_file() and not ref_file.name.startswith(TEMP_PREFIX):
                name = ref_file.relative_to(base).as_posix()
                entries.append((name, self._read(ref_file) or ''))

        return sorted(entries, key=lambda x: x[0])

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples
        """
        return self._list(self.heads_dir)

    def list_tags(self) -> List[Tuple[str, str]]:
        """
        List all tags.

        Returns:
            List of (tag_name, commit_hash) tuples
        """
        return self._list(self.tags_dir)

    def list_refs(self, ref_type: Optional[RefType] = None) -> List[Ref]:
        """List references of one type, or all of them."""
        refs = []
        if ref_type in (None, RefType.HEAD) and self.head_file.is_file():
            refs.append(self.get_ref(HEAD, RefType.HEAD))
        if ref_type in (None, RefType.BRANCH):
            refs.extend(Ref(name, RefType.BRANCH, h or None) for name, h in self.list_branches())
        if ref_type in (None, RefType.TAG):
            refs.extend(Ref(name, RefType.TAG, h or None) for name, h in self.list_tags())
        return refs

    def iter_entries(self) -> List[PurePosixPath]:
        """
        List every persisted ref file relative to the store root.

        Returns:
            Sorted relative paths such as HEAD, heads/main, tags/v1
        """
        if not self.refs_dir.exists():
            return []
        return sorted(
            PurePosixPath(path.relative_to(self.refs_dir).as_posix())
            for path in self.refs_dir.rglob('*')
            if path.is_file() and not path.name.startswith(TEMP_PREFIX)
        )

    def __repr__(self) -> str:
        return f"RefStore(path={self.refs_dir})"
