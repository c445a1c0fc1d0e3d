import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "digital_id_db"),
}

DEBUG = True

# Public URL of the web client; used inside the universal attendance QR.
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:5173")
COMPANY_NAME = os.getenv("COMPANY_NAME", "Your Company Name")

LATE_HOUR = int(os.getenv("LATE_HOUR", "9"))
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "0"))
STANDARD_WORK_HOURS = float(os.getenv("STANDARD_WORK_HOURS", "8"))

REPORT_HOUR = int(os.getenv("REPORT_HOUR", "18"))
REPORT_MINUTE = int(os.getenv("REPORT_MINUTE", "0"))
REPORT_MAX_RETRIES = int(os.getenv("REPORT_MAX_RETRIES", "3"))
REPORT_RETRY_DELAY = int(os.getenv("REPORT_RETRY_DELAY", "300"))

SMS_API_URL = os.getenv("SMS_API_URL", "https://freesmsapi.com/send")
SMS_SENDER_ID = os.getenv("SMS_SENDER_ID", "DigitalID")
# In dev mode SMS sends are simulated and only logged.
NOTIFY_DEV_MODE = bool(int(os.getenv("NOTIFY_DEV_MODE", "1")))
MESSAGE_RATE_LIMIT = int(os.getenv("MESSAGE_RATE_LIMIT", "10"))

TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID", "")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN", "")
TWILIO_PHONE_NUMBER = os.getenv("TWILIO_PHONE_NUMBER", "")
TWILIO_WHATSAPP_NUMBER = os.getenv("TWILIO_WHATSAPP_NUMBER", "")

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo admin on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
# Run the daily report scheduler inside the web process.
RUN_REPORT_WORKER = bool(int(os.getenv("RUN_REPORT_WORKER", "0")))
