# config.py
import os
BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _database_url():
    url = os.environ.get("DATABASE_URL")
    if not url:
        return f"sqlite:///{os.path.join(BASE_DIR, 'progress.db')}"
    # Hosted Postgres still hands out the old scheme
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


class Config:
    # --- Server ---
    PORT = int(os.environ.get("PORT", 3000))

    # --- Database ---
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- Flask-WTF CSRF / Sessions ---
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")  # change in production

    # --- Logging ---
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # --- Progress monitoring constants ---
    MASTERY_THRESHOLD = 80.0  # >= 80 → On Track
    SHORT_DESCRIPTION_MAX = 60  # class report truncates longer goal descriptions

    GOAL_AREAS = [
        "Reading",
        "Writing",
        "Math",
        "Behavior",
        "Communication",
        "Other",
    ]


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = "WARNING"
