"""Run the daily attendance report worker.

By default it blocks and lets the scheduler fire at REPORT_HOUR:REPORT_MINUTE.
``--now`` sends today's report immediately (with retries) and exits.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from digital_id.container import build_container
from digital_id.main import configure_logging, load_settings


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--now", action="store_true", help="send today's report right away and exit")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(bool(getattr(settings, "DEBUG", False)))
    worker = build_container(settings).report_worker

    if args.now:
        return 0 if worker.send_with_retry() else 1

    worker.start()
    try:
        while True:
            time.sleep(60)
    except (KeyboardInterrupt, SystemExit):
        worker.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
