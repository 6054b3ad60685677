import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

PAYROLL = {
    # Major currency units.
    "HOUSING_FUND_CEILING": os.getenv("HOUSING_FUND_CEILING", "100"),
    # "withhold" or "defer_at_payout" (tax computed but zeroed on the payslip)
    "INCOME_TAX_POLICY": os.getenv("INCOME_TAX_POLICY", "withhold"),
    "REFRESH_GENERATED_AT_ON_UPDATE": bool(int(os.getenv("REFRESH_GENERATED_AT_ON_UPDATE", "0"))),
    "LOCK_TIMEOUT_SECONDS": float(os.getenv("PAYROLL_LOCK_TIMEOUT_SECONDS", "5")),
}
