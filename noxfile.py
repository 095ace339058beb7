import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration"]

# Install the project with its test extra
COMMON_DEPS = ["-e", ".[test]"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "SECRET_KEY",
    "ADMIN_PASSWORD",
    "DATABASE_URL",
    "TIMEZONE",
    "INGEST_API_SECRET_KEY",
]


def _set_env(session):
    """
    Propagate configuration into the session and put the project root on
    PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    session.env["ENVIRONMENT"] = "development"
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "campusvibe/", "tests/")
    session.run("black", "campusvibe/", "tests/")
    session.run("flake8", "campusvibe/", "tests/")
    session.run("mypy", "campusvibe/")


@nox.session(name="unit")
def unit(session):
    """
    Run unit tests with coverage.
    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_vibe.py
    """
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/unit"]
    session.run(
        "pytest",
        *tests,
        "-m", "unit",
        "-vv",
        "--tb=short",
        "--cov=campusvibe",
        "--cov-report=term-missing",
        "--cov-report=html:.nox/htmlcov",
        "--cov-report=xml",
    )


@nox.session(name="integration")
def integration(session):
    """
    Run the HTTP API tests against an in-memory SQLite database.
    Usage:
      nox -s integration
      nox -s integration -- tests/integration/test_api/test_checkins.py
    """
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "-vv",
        "--tb=short",
    )
