from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from digital_id.database.bootstrap import ensure_demo_admin
from digital_id.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or reset the demo admin account.")
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", default="admin123")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(settings.DB_CONFIG)

    ensure_demo_admin(DatabaseConnection.get_instance(config), email=args.email, password=args.password)
    print(f"OK: Demo admin {args.email} ready -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
