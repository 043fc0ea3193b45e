"""Nox sessions for the http-base-client test matrix."""

import nox

nox.options.sessions = ["tests", "tests_minimal"]
nox.options.default_venv_backend = "uv"

PYTHONS = ["3.10", "3.11", "3.12", "3.13"]


@nox.session(python=PYTHONS)
def tests(session):
    """Run the unit tests with the Prometheus extra installed."""
    session.install(".[full,dev]")
    session.run("pytest", "tests/", "-q", "--no-cov", *session.posargs)


@nox.session(python=PYTHONS[-1])
def tests_minimal(session):
    """Run the unit tests without optional extras (Prometheus tests skip)."""
    session.install(".[dev]")
    session.run("pytest", "tests/", "-q", "--no-cov", *session.posargs)


@nox.session(python=PYTHONS[-1])
def coverage(session):
    """Run the unit tests with a coverage report."""
    session.install(".[full,dev]")
    session.run("pytest", "tests/", "--cov-fail-under=90", *session.posargs)


@nox.session(python=PYTHONS)
def type_check(session):
    """Run mypy type checking."""
    session.install(".[full,dev]")
    session.install("mypy")
    session.run("mypy", "src/http_base_client", *session.posargs)
