#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import os
import sys
from pathlib import Path

from dotenv import load_dotenv


def _ensure_env_file():
    """
    Points DJANGO_ENV_FILE at the first `.env` found next to the project so
    management commands pick up the same configuration as the web process.
    """
    explicit = os.environ.get("DJANGO_ENV_FILE")
    if explicit:
        if Path(explicit).exists():
            load_dotenv(explicit)
        return

    base_dir = Path(__file__).resolve().parent
    for candidate in (base_dir / ".env", base_dir.parent / ".env"):
        if candidate.exists():
            os.environ["DJANGO_ENV_FILE"] = str(candidate)
            load_dotenv(candidate)
            break


def main():
    """Run administrative tasks."""
    _ensure_env_file()
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'sareesutra.settings')
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
