"""Index (staging area) implementation."""

from pathlib import Path
from typing import List, Union

from .errors import IoFailureError, NotFoundError


class Index:
    """
    Kit index (staging area).

    The index is the ordered set of working-tree paths to include in the
    next commit. It is persisted as one repository-relative path per line;
    file content is read from the working tree when a revision is created.
    """

    def __init__(self, index_file: Path, work_tree: Path):
        """
        Initialize index.

        Args:
            index_file: Path of the persisted index
            work_tree: Repository root that staged paths are relative to
        """
        self.index_file = Path(index_file)
        self.work_tree = Path(work_tree)

    def _read(self) -> List[str]:
        if not self.index_file.exists():
            return []
        try:
            lines = self.index_file.read_text(encoding='utf-8').splitlines()
        except OSError as e:
            raise IoFailureError(f"index: cannot read {self.index_file}: {e}") from e
        return [line for line in lines if line]

    def _write(self, paths: List[str]) -> None:
        content = ''.join(f"{path}\n" for path in paths)
        try:
            self.index_file.write_text(content, encoding='utf-8')
        except OSError as e:
            raise IoFailureError(f"index: cannot write {self.index_file}: {e}") from e

    def relative_path(self, filepath: Union[str, Path]) -> str:
        """
        Normalize a path to its repository-relative POSIX form.

        Raises:
            NotFoundError: If the path is not an existing file
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = self.work_tree / file_path

        if not file_path.is_file():
            raise NotFoundError(f"File not found: {filepath}")

        try:
            rel_path = file_path.resolve().relative_to(self.work_tree.resolve())
        except ValueError:
            raise NotFoundError(f"File is outside the repository: {filepath}")
        return rel_path.as_posix()

    def get_staged_files(self) -> List[str]:
        """
        Get staged paths in the order they were first added.

        Returns:
            List of repository-relative paths
        """
        return self._read()

    def add_to_index(self, filepath: Union[str, Path]) -> str:
        """
        Stage a file for commit.

        Adding a path that is already staged keeps its original position.

        Returns:
            str: Repository-relative path that was staged
        """
        rel_path = self.relative_path(filepath)
        paths = self._read()
        if rel_path not in paths:
            paths.append(rel_path)
            self._write(paths)
        return rel_path

    def remove_from_index(self, filepath: str) -> bool:
        """
        Unstage a path.

        Returns:
            True if the path was staged
        """
        paths = self._read()
        if filepath not in paths:
            return False
        paths.remove(filepath)
        self._write(paths)
        return True

    def clear(self) -> None:
        """Empty the index."""
        self._write([])

    def __len__(self) -> int:
        return len(self._read())

    def __repr__(self) -> str:
        return f"Index(path={self.index_file})"
