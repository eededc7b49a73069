import os

_ENV_MODULES = {
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
    "development": "config.development",
    "dev": "config.development",
}


def get_settings_module() -> str:
    """Dotted path of the settings module to load.

    ATTENDANCE_SETTINGS_MODULE names a module outright (e.g. a site-specific
    payroll setup); otherwise APP_ENV picks one of the bundled modules, and
    anything unrecognised falls back to development.
    """
    explicit = os.getenv("ATTENDANCE_SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENV_MODULES.get(env, "config.development")
