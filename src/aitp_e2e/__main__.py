#!/usr/bin/env python3
"""
Allow running aitp-e2e as a module: python -m aitp_e2e

This enables the following usage:
    python -m aitp_e2e login main

Which is equivalent to:
    aitp-e2e login main
"""

from aitp_e2e.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
