"""
storefront/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment,
and initializes the Firebase Admin SDK (Firestore DB) on demand, only when the Firestore
storage backend is selected. The in-memory (demo) backend never touches Firebase.
"""
from typing import Literal, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    # Storage: "firestore" is durable, "memory" is the demo/offline mode
    storage_backend: Literal["firestore", "memory"] = Field("memory", alias="STORAGE_BACKEND")
    firebase_collection_prefix: str = Field("", alias="FIREBASE_COLLECTION_PREFIX")

    firebase_cred_file: str = Field("firebase_service_account.json", alias="FIREBASE_CRED_FILE")
    firebase_project_id: Optional[str] = Field(None, alias="FIREBASE_PROJECT_ID")

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = Field(None, alias="FIREBASE_PRIVATE_KEY_ID")
    firebase_private_key: Optional[str] = Field(None, alias="FIREBASE_PRIVATE_KEY")
    firebase_client_email: Optional[str] = Field(None, alias="FIREBASE_CLIENT_EMAIL")
    firebase_client_id: Optional[str] = Field(None, alias="FIREBASE_CLIENT_ID")
    firebase_auth_uri: Optional[str] = Field(None, alias="FIREBASE_AUTH_URI")
    firebase_token_uri: Optional[str] = Field(None, alias="FIREBASE_TOKEN_URI")
    firebase_auth_provider_x509_cert_url: Optional[str] = Field(None, alias="FIREBASE_AUTH_PROVIDER_X509_CERT_URL")
    firebase_client_x509_cert_url: Optional[str] = Field(None, alias="FIREBASE_CLIENT_X509_CERT_URL")

    debug: bool = Field(False, alias="DEBUG")
    allowed_origins: str = Field("*", alias="ALLOWED_ORIGINS")  # Comma-separated list or '*' for all

    # Single admin record, compared in plaintext
    admin_username: str = Field("sujal", alias="ADMIN_USERNAME")
    admin_password: str = Field("pass123", alias="ADMIN_PASSWORD")
    seed_defaults: bool = Field(True, alias="SEED_DEFAULTS")
    orders_list_limit: int = Field(50, alias="ORDERS_LIST_LIMIT")

    # Storefront core (client side)
    api_base_url: str = Field("http://localhost:8000", alias="API_BASE_URL")
    http_timeout: float = Field(10.0, alias="HTTP_TIMEOUT")
    cart_file: str = Field(".storefront/local_storage.json", alias="CART_FILE")
    cart_storage_key: str = Field("cart", alias="CART_STORAGE_KEY")
    operator_phone: str = Field("8830440336", alias="OPERATOR_PHONE")
    whatsapp_country_code: str = Field("91", alias="WHATSAPP_COUNTRY_CODE")
    notify_delay_seconds: float = Field(1.0, alias="NOTIFY_DELAY_SECONDS")

    @property
    def demo_mode(self) -> bool:
        return self.storage_backend == "memory"

    @property
    def origins(self) -> list:
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


def _credential(settings: Settings):
    # Check if we have environment variables for Firebase credentials (Cloud Run)
    if all([
        settings.firebase_private_key_id,
        settings.firebase_private_key,
        settings.firebase_client_email,
        settings.firebase_client_id,
        settings.firebase_auth_uri,
        settings.firebase_token_uri,
        settings.firebase_auth_provider_x509_cert_url,
        settings.firebase_client_x509_cert_url,
    ]):
        cred_dict = {
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "private_key_id": settings.firebase_private_key_id,
            "private_key": settings.firebase_private_key.replace("\\n", "\n"),
            "client_email": settings.firebase_client_email,
            "client_id": settings.firebase_client_id,
            "auth_uri": settings.firebase_auth_uri,
            "token_uri": settings.firebase_token_uri,
            "auth_provider_x509_cert_url": settings.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": settings.firebase_client_x509_cert_url,
        }
        return credentials.Certificate(cred_dict)
    # Use service account file (local development)
    return credentials.Certificate(settings.firebase_cred_file)


def init_firestore(settings: Settings):
    """Initialize the Firebase Admin SDK once and return a Firestore client."""
    try:
        options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
        firebase_app = firebase_admin.initialize_app(_credential(settings), options)
    except ValueError as e:
        if "already exists" in str(e):
            # Firebase app already initialized, get the default app
            firebase_app = firebase_admin.get_app()
        else:
            raise
    return firestore.client(app=firebase_app)


# Load settings from environment (.env file, etc.)
settings = Settings()
