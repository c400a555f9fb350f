"""Single-slot storage handles for the state and credential records.

Both records this tool keeps are singletons: there is exactly one pending
authorization and exactly one credential file. :class:`Storage` models such
a slot explicitly (read, overwrite, delete) so that the stores built on top
of it never touch paths directly and can be exercised without a real
filesystem.

Implementations:

* :class:`FileStorage` -- a JSON file on disk, written atomically via
  :func:`tempfile.NamedTemporaryFile` and ``os.replace`` with ``0o600``
  permissions.
* :class:`MemoryStorage` -- an in-process slot, optionally configured to
  fail writes or deletes.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class Storage(ABC):
    """Abstract single-slot text record.

    Implementations raise :class:`OSError` for I/O failures; the stores
    decide whether such a failure is fatal.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the record lives."""

    @abstractmethod
    def read(self) -> Optional[str]:
        """Return the stored text, or ``None`` if the slot is empty.

        Raises:
            OSError: If the slot exists but cannot be read.
        """

    @abstractmethod
    def write(self, text: str) -> None:
        """Replace the slot's content with *text*.

        Raises:
            OSError: If the content cannot be written.
        """

    @abstractmethod
    def delete(self) -> bool:
        """Empty the slot.

        Returns:
            ``True`` if a record was removed, ``False`` if the slot was
            already empty.

        Raises:
            OSError: If the record exists but cannot be removed.
        """


class FileStorage(Storage):
    """A single file on disk.

    All writes are atomic: content is written to a temporary file in the
    same directory, fsynced, then renamed into place. This prevents partial
    writes from leaving a truncated record behind.

    Args:
        path: Target file path. Parent directories are created on write.
        mode: Permission bits applied to the file before content is written.

    Example::

        storage = FileStorage(Path("credentials.json"))
        storage.write('{"ok": true}\\n')
        assert storage.read() == '{"ok": true}\\n'
    """

    def __init__(self, path: Path | str, mode: int = 0o600) -> None:
        self._path = Path(path)
        self._mode = mode

    @property
    def path(self) -> Path:
        """The filesystem path of the record."""
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def read(self) -> Optional[str]:
        if not self._path.exists():
            return None
        return self._path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd = None
        tmp_path: Optional[str] = None
        try:
            fd = tempfile.NamedTemporaryFile(
                mode="w",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            )
            tmp_path = fd.name
            # Set restrictive permissions before writing content
            os.chmod(tmp_path, self._mode)
            fd.write(text)
            fd.flush()
            os.fsync(fd.fileno())
            fd.close()
            fd = None
            os.replace(tmp_path, self._path)
        except BaseException:
            if fd is not None:
                fd.close()
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            raise

    def delete(self) -> bool:
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        return True


class MemoryStorage(Storage):
    """An in-memory slot.

    Args:
        text: Initial content, or ``None`` for an empty slot.
        write_error: If set, :meth:`write` raises this exception.
        delete_error: If set, :meth:`delete` raises this exception.
    """

    def __init__(
        self,
        text: Optional[str] = None,
        write_error: Optional[OSError] = None,
        delete_error: Optional[OSError] = None,
    ) -> None:
        self.text = text
        self.write_error = write_error
        self.delete_error = delete_error

    @property
    def location(self) -> str:
        return "<memory>"

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.text = text

    def delete(self) -> bool:
        if self.delete_error is not None:
            raise self.delete_error
        existed = self.text is not None
        self.text = None
        return existed
