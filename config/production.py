import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

PAYROLL = {
    "HOUSING_FUND_CEILING": os.getenv("HOUSING_FUND_CEILING", "100"),
    "INCOME_TAX_POLICY": os.getenv("INCOME_TAX_POLICY", "withhold"),
    "REFRESH_GENERATED_AT_ON_UPDATE": bool(int(os.getenv("REFRESH_GENERATED_AT_ON_UPDATE", "0"))),
    "LOCK_TIMEOUT_SECONDS": float(os.getenv("PAYROLL_LOCK_TIMEOUT_SECONDS", "5")),
}
