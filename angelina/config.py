import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")

PORT = int(os.getenv("PORT", "3000"))

# Database Configuration
# DATABASE_URL wins; otherwise the URL is assembled from the individual DB_* settings
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", "5432"))
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_NAME = os.getenv("DB_NAME", "angelina_db")
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# Outbound Mail Configuration (Gmail app password by default)
EMAIL_USER = os.getenv("EMAIL_USER", "")
EMAIL_PASS = os.getenv("EMAIL_PASS", "")
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))

# Resend Email Configuration (fallback)
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv(
    "EMAIL_FROM_ADDRESS", f"Angelina <{EMAIL_USER}>" if EMAIL_USER else "Angelina <noreply@angelina.dev>"
)

# Administrator inbox for appointment alerts and contact form messages
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", EMAIL_USER or "admin@angelina.dev")

# Contact details shown to clients in confirmation emails
BUSINESS_NAME = os.getenv("BUSINESS_NAME", "Angelina")
BUSINESS_PHONE = os.getenv("BUSINESS_PHONE", "+234 912 955 2644")
BUSINESS_WHATSAPP = os.getenv("BUSINESS_WHATSAPP", BUSINESS_PHONE)

# Landing page directory served at "/"
PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", str(PROJECT_ROOT / "public")))

# Rate limiting for the public form endpoints
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
FORM_RATE_LIMIT = int(os.getenv("FORM_RATE_LIMIT", "10"))
FORM_RATE_WINDOW_SECONDS = int(os.getenv("FORM_RATE_WINDOW_SECONDS", "60"))

# CORS - the public site and local dev servers
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
