import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; anything unrecognised means development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "ip_attendance.settings.production"

    if env in {"test", "testing"}:
        return "ip_attendance.settings.testing"

    return "ip_attendance.settings.development"
