import importlib
import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown means development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def get_db_config() -> dict:
    return dict(importlib.import_module(get_settings_module()).DB_CONFIG)
