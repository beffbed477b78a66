"""Configuration settings for the IMIS patient and quarantine service."""

import os


def get_postgres_uri():
    """Get PostgreSQL connection URI from environment variables."""
    host = os.environ.get("DB_HOST", "localhost")
    port = 5433 if host == "localhost" else 5432
    password = os.environ.get("DB_PASSWORD", "imis_pass")
    user = os.environ.get("DB_USER", "imis_user")
    db_name = os.environ.get("DB_NAME", "imis_db")
    return f"postgresql://{user}:{password}@{host}:{port}/{db_name}"


def get_redis_host_and_port():
    """Get Redis connection details from environment variables."""
    host = os.environ.get("REDIS_HOST", "localhost")
    port = int(os.environ.get("REDIS_PORT", 6379))
    return dict(host=host, port=port)


def get_api_host_and_port():
    """Get the interface and port the API server binds to."""
    host = os.environ.get("API_HOST", "0.0.0.0")
    port = int(os.environ.get("API_PORT", 8000))
    return dict(host=host, port=port)


def get_log_level():
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def get_quarantine_policy_name():
    """Name of the rule deciding which incidents are selected for quarantine."""
    return os.environ.get("IMIS_QUARANTINE_POLICY", "active").lower()
