"""Example: run payroll through the service layer (no Flask).

Usage: python -m examples.example_usage <employee_id> <year> <month> <period>
"""

import importlib
import sys

from config import get_settings_module

from src.hr_payroll.hr_payroll.container import build_container
from src.hr_payroll.hr_payroll.payroll.serializers import assemble_result_to_dict, draft_to_dict


def main(argv: list[str]) -> None:
    employee_id, year, month, period = argv[0], int(argv[1]), int(argv[2]), int(argv[3])

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, payroll_config=getattr(settings, "PAYROLL", {}))
    service = container.payroll_service

    print(draft_to_dict(service.preview(employee_id, year=year, month=month, period=period)))
    print(assemble_result_to_dict(service.finalize(employee_id, year=year, month=month, period=period)))


if __name__ == "__main__":
    main(sys.argv[1:])
