#!/usr/bin/env python3
"""TUI Entry Point for Solfège Piano"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from solfege_piano.tui import run_tui


def main():
    """Main entry point for the TUI application"""
    try:
        return run_tui()
    except KeyboardInterrupt:
        print("\n👋 See you at the next lesson!")
        return 130
    except Exception as e:
        print(f"💥 Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
