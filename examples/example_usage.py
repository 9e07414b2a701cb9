"""Example: verify a receipt through the service layer (no Flask).

    APP_ENV=development python -m examples.example_usage "0a1b2c3d 4e5f6a7b ..."
"""

import importlib
import sys

from config import get_settings_module

from src.muster_sheets.muster_sheets.container import build_container
from src.muster_sheets.muster_sheets.core.exceptions import MalformedReceiptError


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, public_base_url=settings.PUBLIC_BASE_URL)

    raw = " ".join(sys.argv[1:])
    try:
        result = container.receipt_service.verify_receipt(raw)
    except MalformedReceiptError as e:
        print(e)
        raise SystemExit(2)
    print(result.to_dict())


if __name__ == "__main__":
    main()
