"""
Runtime configuration for Legal Publication Alerts.

Values come from the environment (or a .env file in the backend/ directory).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
SUPABASE_TIMEOUT_SECONDS = int(os.getenv("SUPABASE_TIMEOUT_SECONDS", "10"))

PUBLICATIONS_TABLE = os.getenv("PUBLICATIONS_TABLE", "publications")
PREFERENCES_TABLE = os.getenv("PREFERENCES_TABLE", "user_preferences")
PREFERENCES_PAGE_SIZE = int(os.getenv("PREFERENCES_PAGE_SIZE", "500"))

# Matching sweep
ENABLE_NOTIFICATIONS = _env_bool("ENABLE_NOTIFICATIONS")
NOTIFICATION_WORKERS = int(os.getenv("NOTIFICATION_WORKERS", "8"))
DISPATCH_TIMEOUT_SECONDS = float(os.getenv("DISPATCH_TIMEOUT_SECONDS", "60"))

# Subscribers without a timezone get their timestamps in this zone
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "America/Sao_Paulo")

# Email (Resend)
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
NOTIFICATION_FROM_EMAIL = os.getenv(
    "NOTIFICATION_FROM_EMAIL", "alertas@publicacoes.example.com"
)

# SMS (Twilio REST API)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_FROM_NUMBER = os.getenv("TWILIO_FROM_NUMBER")
SMS_TIMEOUT_SECONDS = float(os.getenv("SMS_TIMEOUT_SECONDS", "10"))
