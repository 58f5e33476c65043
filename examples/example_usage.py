"""Example: drive the payout engine through the service layer (no Flask).

Usage: python -m examples.example_usage <user_id> <month> <year>
"""

import importlib
import json
import sys

from config import get_settings_module

from src.courier_hrms.courier_hrms.container import build_container


def main():
    user_id, month, year = (int(a) for a in sys.argv[1:4])
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    payout = container.payroll_service.compute_monthly_payout(user_id, month, year)
    print(json.dumps(payout.to_record(), indent=2))


if __name__ == "__main__":
    main()
