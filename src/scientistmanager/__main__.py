"""
Run with: python -m scientistmanager
"""
import sys

from scientistmanager.main import main

if __name__ == "__main__":
    sys.exit(main())
