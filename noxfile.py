# pylint: disable=missing-docstring
import nox


@nox.session(python=("3.12", "3.13", "3.14"))
def tests(session: nox.Session) -> None:
    dev_dependencies = nox.project.load_toml("pyproject.toml")["dependency-groups"][
        "dev"
    ]
    session.install(".[test]", *dev_dependencies)

    session.run("coverage", "run", "-m", "tests")
    session.run("coverage", "report", "-m")


@nox.session(python="3.12")
def lint(session: nox.Session) -> None:
    dev_dependencies = nox.project.load_toml("pyproject.toml")["dependency-groups"][
        "dev"
    ]
    session.install(".[test]", *dev_dependencies)

    session.run("black", "--check", "src", "tests")
    session.run("isort", "--check", "src", "tests")
    session.run("pylint", "src/todo_gateway", "tests")
    session.run("mypy")
