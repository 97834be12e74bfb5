#!/usr/bin/env python3
"""
Session Notes CLI.

Entry script for running the CLI from a source checkout.

Usage:
    python cli.py --help
    python cli.py list
    python cli.py add -c "Jane Doe" -D 2024-01-15 -n "Discussed coping strategies." -m 50
    python cli.py delete <id>
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from session_notes.cli.main import app  # noqa: E402

if __name__ == "__main__":
    app()
