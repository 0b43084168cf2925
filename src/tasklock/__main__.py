#!/usr/bin/env python3
"""
Main entry point for the TaskLock module.
This allows running the module with: python -m tasklock
"""

from tasklock.cli import main

if __name__ == "__main__":
    main()
