"""
Development launcher
====================
Runs the simulator straight from a source checkout.

`src/` is put at the front of the import path, so `gantryscan` resolves
without `pip install -e .`. Installed copies use the `gantryscan` console
script instead.

Usage:
    $ python run.py --log-level DEBUG
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from gantryscan.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
