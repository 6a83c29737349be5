"""
Run with: python -m gantryscan
"""
import sys

from gantryscan.main import main

if __name__ == "__main__":
    sys.exit(main())
