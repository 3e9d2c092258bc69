"""
Storage Backend Module

Abstract backing store for the serialized ledger, with a flat-file
implementation for persistence and an in-memory one for testing. The whole
store is replaced on every write.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union
from pathlib import Path
import os
import tempfile
import threading

from .exceptions import PersistenceError


class StorageInterface(ABC):
    """Abstract interface for storage backends"""

    @abstractmethod
    def read(self) -> Optional[str]:
        """Return the stored text, or None if nothing has been stored yet"""
        pass

    @abstractmethod
    def write(self, data: str) -> None:
        """Replace the stored text"""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Check if anything has been stored"""
        pass


class InMemoryStorage(StorageInterface):
    """In-memory storage implementation for testing"""

    def __init__(self, data: Optional[str] = None):
        self._data = data
        self._lock = threading.RLock()
        self.write_count = 0

    def read(self) -> Optional[str]:
        with self._lock:
            return self._data

    def write(self, data: str) -> None:
        with self._lock:
            self._data = data
            self.write_count += 1

    def exists(self) -> bool:
        with self._lock:
            return self._data is not None


class FlatFileStorage(StorageInterface):
    """
    Single text file store

    Writes go to a temporary file in the same directory which is then renamed
    over the store, so a reader never sees a half-written file.
    """

    def __init__(self, path: Union[str, Path] = "bank_data.txt"):
        self.path = Path(path)
        self._lock = threading.RLock()

    def read(self) -> Optional[str]:
        with self._lock:
            try:
                return self.path.read_text(encoding="utf-8")
            except FileNotFoundError:
                return None
            except (OSError, UnicodeDecodeError) as e:
                raise PersistenceError(f"Unable to read ledger ({e})", str(self.path)) from e

    def write(self, data: str) -> None:
        with self._lock:
            directory = self.path.parent
            try:
                fd, temp_path = tempfile.mkstemp(
                    prefix=f".{self.path.name}.", suffix=".tmp", dir=str(directory)
                )
            except OSError as e:
                raise PersistenceError(f"Unable to save ledger ({e})", str(self.path)) from e

            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                    handle.write(data)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(temp_path, self.path)
            except OSError as e:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise PersistenceError(f"Unable to save ledger ({e})", str(self.path)) from e

    def exists(self) -> bool:
        return self.path.exists()
