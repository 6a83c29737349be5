"""
Application Initialization
==========================
This module constructs the Model-View-Controller objects and starts the Qt
Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Machine Store (Model owner) and the Auto Scanner.
2. Instantiates the Main Window (View).
3. Passes the store and the scanner into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
from __future__ import annotations

import argparse
import logging
import sys

from gantryscan.logging_config import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gantryscan", description="5-axis gantry scanner simulator")
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for the gantryscan namespace."
    )
    parser.add_argument("--log-file", default=None, help="Optional path to save logs to a file.")
    # Qt consumes its own options (-style, -platform, ...)
    args, _unknown = parser.parse_known_args(argv)
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(
        level=getattr(logging, args.log_level),
        log_file=args.log_file,
        namespace=__package__ or "gantryscan",
    )

    # Qt imports are deferred so --help works without a display
    from gantryscan.application import create_app
    from gantryscan.controller.scanner import AutoScanner
    from gantryscan.controller.store import MachineStore
    from gantryscan.view.main_window import MainWindow

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Data Model and the scan driver
    store = MachineStore()
    scanner = AutoScanner(store)

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(store, scanner)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
