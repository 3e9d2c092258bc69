"""
Banking Exceptions

Validation failures are reported as return values; exceptions are reserved
for failures of the backing store.
"""


class BankingError(Exception):
    """Base class for home banking errors"""
    pass


class PersistenceError(BankingError):
    """Backing store could not be read or written"""

    def __init__(self, message: str, path: str = None):
        self.path = path
        super().__init__(f"{message}: {path}" if path else message)
