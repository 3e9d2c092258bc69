"""
Tests for storage backends
"""

import os
import tempfile
import pytest
from pathlib import Path

from home_banking.exceptions import PersistenceError
from home_banking.storage import InMemoryStorage, FlatFileStorage, StorageInterface


class TestInMemoryStorage:
    """Test the in-memory backend"""

    def test_basic_operations(self):
        """Test read before and after write"""
        storage = InMemoryStorage()

        assert isinstance(storage, StorageInterface)
        assert storage.read() is None
        assert not storage.exists()

        storage.write("1001\n0\n")
        assert storage.read() == "1001\n0\n"
        assert storage.exists()
        assert storage.write_count == 1

    def test_initial_data(self):
        """Test seeding the store"""
        assert InMemoryStorage("1001\n0\n").read() == "1001\n0\n"


class TestFlatFileStorage:
    """Test the flat-file backend"""

    def test_missing_file(self):
        """Test a missing file reads as None"""
        with tempfile.TemporaryDirectory() as temp_dir:
            storage = FlatFileStorage(Path(temp_dir) / "bank_data.txt")

            assert storage.read() is None
            assert not storage.exists()

    def test_write_and_read(self):
        """Test full overwrite on every write"""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "bank_data.txt"
            storage = FlatFileStorage(path)

            storage.write("first\n")
            storage.write("second\n")

            assert storage.exists()
            assert storage.read() == "second\n"
            assert path.read_text() == "second\n"

    def test_no_temporary_files_left(self):
        """Test the temporary file is renamed into place"""
        with tempfile.TemporaryDirectory() as temp_dir:
            storage = FlatFileStorage(Path(temp_dir) / "bank_data.txt")
            storage.write("1001\n0\n")

            assert os.listdir(temp_dir) == ["bank_data.txt"]

    def test_write_to_missing_directory(self):
        """Test write failures surface as PersistenceError"""
        with tempfile.TemporaryDirectory() as temp_dir:
            storage = FlatFileStorage(Path(temp_dir) / "missing" / "bank_data.txt")

            with pytest.raises(PersistenceError, match="Unable to save ledger"):
                storage.write("1001\n0\n")

    def test_unreadable_path(self):
        """Test read failures surface as PersistenceError"""
        with tempfile.TemporaryDirectory() as temp_dir:
            # A directory where the file should be
            storage = FlatFileStorage(temp_dir)

            with pytest.raises(PersistenceError, match="Unable to read ledger"):
                storage.read()
