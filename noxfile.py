"""Nox sessions for testing, linting and architecture checks."""

import nox

# Oldest supported interpreter first; it matches requires-python in pyproject.toml
PYTHON_VERSIONS = ["3.13", "3.14"]
LINT_PYTHON = PYTHON_VERSIONS[0]

nox.options.sessions = ["tests", "lint", "typecheck", "check_layering"]


def _sync(session: nox.Session) -> None:
    session.run("uv", "sync", "--active", external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite with coverage on every supported interpreter.

    Args:
        session: The nox session object.
    """
    _sync(session)
    session.run(
        "pytest",
        "--cov=split_or_die",
        "--cov-report=term-missing:skip-covered",
        "--cov-fail-under=80",
        *session.posargs,
    )


@nox.session(python=LINT_PYTHON)
def lint(session: nox.Session) -> None:
    """Check ruff lint rules and formatting without changing files."""
    _sync(session)
    session.run("ruff", "check", "src", "tests", "scripts")
    session.run("ruff", "format", "--check", "src", "tests", "scripts")


@nox.session(python=LINT_PYTHON)
def typecheck(session: nox.Session) -> None:
    """Run basedpyright against the interpreter floor."""
    _sync(session)
    session.run("uvx", "basedpyright@latest", "--pythonversion", LINT_PYTHON, external=True)


@nox.session(python=LINT_PYTHON, name="format")
def format_code(session: nox.Session) -> None:
    """Apply ruff fixes and formatting in place."""
    _sync(session)
    session.run("ruff", "check", "src", "tests", "scripts", "--fix")
    session.run("ruff", "format", "src", "tests", "scripts")


@nox.session(python=LINT_PYTHON)
def check_layering(session: nox.Session) -> None:
    """Check that config/, core/, types/ and utils/ never depend on the CLI layer.

    Args:
        session: The nox session object.
    """
    session.run("python", "scripts/check_layering.py")
