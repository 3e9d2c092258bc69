#!/usr/bin/env python3
"""Main entry point for the home banking menu"""

import sys

from .cli import BankingShell
from .config import get_config
from .ledger import Ledger
from .logging_config import setup_logging


def main() -> int:
    """Run the interactive menu against the configured data file"""
    config = get_config()
    setup_logging(
        level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file
    )

    with Ledger.open(config) as ledger:
        return BankingShell(ledger).run()


if __name__ == "__main__":
    sys.exit(main())
