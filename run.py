#!/usr/bin/env python3
"""
Home Banking Entry Point

Starts the interactive menu against the configured data file.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from home_banking.__main__ import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nGoodbye!")
        sys.exit(0)
