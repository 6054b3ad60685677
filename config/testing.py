import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

PAYROLL = {
    "HOUSING_FUND_CEILING": "100",
    "INCOME_TAX_POLICY": "withhold",
    "REFRESH_GENERATED_AT_ON_UPDATE": False,
    "LOCK_TIMEOUT_SECONDS": 0.5,
}
