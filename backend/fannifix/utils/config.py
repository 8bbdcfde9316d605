# backend/fannifix/utils/config.py
import os

_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))

# Core paths
DATA_DIR = os.getenv("DATA_DIR", os.path.join(_REPO_ROOT, "data", "json"))

# Site
SITE_URL = os.getenv("SITE_URL", "https://fannifix.com").rstrip("/")
DEFAULT_COUNTRY = os.getenv("DEFAULT_COUNTRY", "kw").lower()
# Technicians onboarded before countries were tracked belong to the launch market
LEGACY_COUNTRY = os.getenv("LEGACY_COUNTRY", "kw").lower()
# Number used by the "add your listing" WhatsApp link
ONBOARDING_WHATSAPP = os.getenv("ONBOARDING_WHATSAPP", "965")

# Service
DEBUG = os.getenv("DEBUG", "false").lower() == "true" # Set to 'false' in production
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",") # Restrict origins in production
