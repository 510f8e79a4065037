"""
Configuration for the Robusta café API.

Every setting is read from the environment (a local .env file is loaded first).
"""
import os
from dotenv import load_dotenv

from logger import get_logger

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)


class Config:
    """Configuration class for the application."""

    ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
    PORT = int(os.getenv("PORT", 8000))

    # Document store
    DATABASE_URL = os.getenv("DATABASE_URL")
    DATABASE_NAME = os.getenv("DATABASE_NAME")

    # Session tokens
    JWT_SECRET = os.getenv("JWT_SECRET")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", 7))
    ADMIN_EMAILS = [e.strip().lower() for e in os.getenv("ADMIN_EMAILS", "").split(",") if e.strip()]

    # Firebase (identity tokens)
    FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")
    FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH")

    # Razorpay
    RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY_ID")
    RAZORPAY_KEY_SECRET = os.getenv("RAZORPAY_KEY_SECRET")
    PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "INR")

    # Gemini
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Email
    EMAIL_USER = os.getenv("EMAIL_USER")
    EMAIL_PASS = os.getenv("EMAIL_PASS")
    SMTP_SERVER = os.getenv("SMTP_SERVER", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", 587))
    EMAIL_BATCH_SIZE = int(os.getenv("EMAIL_BATCH_SIZE", 50))

    # ImageKit (uploaded images)
    IMAGEKIT_PRIVATE_KEY = os.getenv("IMAGEKIT_PRIVATE_KEY")
    IMAGEKIT_UPLOAD_URL = os.getenv("IMAGEKIT_UPLOAD_URL", "https://upload.imagekit.io/api/v1/files/upload")
    IMAGEKIT_FOLDER = os.getenv("IMAGEKIT_FOLDER", "/robusta")

    # Google Places
    GOOGLE_PLACE_ID = os.getenv("GOOGLE_PLACE_ID")
    GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == "production"

    @classmethod
    def debug_print(cls):
        logger.info("ENVIRONMENT=%s", cls.ENVIRONMENT)
        logger.info("DATABASE set=%s", bool(cls.DATABASE_URL and cls.DATABASE_NAME))
        logger.info("JWT_SECRET set=%s", bool(cls.JWT_SECRET))
        logger.info("FIREBASE set=%s", bool(cls.FIREBASE_CREDENTIALS or cls.FIREBASE_CREDENTIALS_PATH))
        logger.info("RAZORPAY set=%s currency=%s", bool(cls.RAZORPAY_KEY_ID and cls.RAZORPAY_KEY_SECRET), cls.PAYMENT_CURRENCY)
        logger.info("GEMINI_MODEL=%s set=%s", cls.GEMINI_MODEL, bool(cls.GEMINI_API_KEY))
        logger.info("EMAIL set=%s server=%s:%s", bool(cls.EMAIL_USER and cls.EMAIL_PASS), cls.SMTP_SERVER, cls.SMTP_PORT)
        logger.info("IMAGEKIT set=%s", bool(cls.IMAGEKIT_PRIVATE_KEY))
        logger.info("GOOGLE_PLACES set=%s", bool(cls.GOOGLE_PLACE_ID and cls.GOOGLE_API_KEY))
