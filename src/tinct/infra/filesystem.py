"""Infrastructure: local filesystem access.

Implements :class:`~tinct.core.protocols.FileStore` and the small set
of path helpers the CLI needs.  Every ``OSError`` is translated into a
tagged :class:`~tinct.exceptions.ReadError` or
:class:`~tinct.exceptions.WriteError` here.
"""

from __future__ import annotations

from pathlib import Path

from tinct.exceptions import ReadError, ReadErrorKind, WriteError, WriteErrorKind


def resolve_path(text: str) -> Path:
    """Expand a leading ``~`` to the user's home directory."""
    return Path(text).expanduser()


def read_error(exc: OSError) -> ReadError:
    if isinstance(exc, FileNotFoundError):
        return ReadError(ReadErrorKind.NOT_FOUND)
    if isinstance(exc, PermissionError):
        return ReadError(ReadErrorKind.PERMISSION_DENIED)
    return ReadError(ReadErrorKind.OTHER, exc.strerror or str(exc))


class LocalFileStore:
    """:class:`FileStore` backed by the local filesystem.

    Contents are read and written as UTF-8 bytes so line endings are
    preserved exactly.  Parent directories are never created.
    """

    def read_text(self, path: Path) -> str:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise read_error(exc) from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ReadError(ReadErrorKind.INVALID_ENCODING) from exc

    def write_text(self, path: Path, contents: str) -> None:
        try:
            path.write_bytes(contents.encode("utf-8"))
        except FileNotFoundError as exc:
            raise WriteError(WriteErrorKind.DIRECTORY_MISSING) from exc
        except PermissionError as exc:
            raise WriteError(WriteErrorKind.PERMISSION_DENIED) from exc
        except OSError as exc:
            raise WriteError(WriteErrorKind.OTHER, exc.strerror or str(exc)) from exc

    def list_dir(self, path: Path) -> list[Path]:
        """Return the entries of *path*.

        Raises
        ------
        ReadError
            When the directory is missing or unreadable.
        """
        try:
            return list(path.iterdir())
        except OSError as exc:
            raise read_error(exc) from exc
