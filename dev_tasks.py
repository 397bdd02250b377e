#!/usr/bin/env python3
"""
Development tasks for declql.

Run from the repository root: ``python dev_tasks.py <command>``.
Tools come from the ``dev`` and ``test`` extras (``pip install -e .[dev,test]``).
"""

import os
import shutil
import subprocess
import sys

SOURCES = ["declql", "tests", "examples"]
ARTIFACTS = ["build", "dist", ".pytest_cache", ".mypy_cache", "htmlcov", ".coverage"]


def run(*args):
    print("Running:", " ".join(args))
    return subprocess.run([sys.executable, "-m", *args]).returncode == 0


def clean():
    for path in ARTIFACTS:
        if os.path.isdir(path):
            shutil.rmtree(path)
        elif os.path.exists(path):
            os.remove(path)
    for root, dirs, _ in os.walk("."):
        for name in list(dirs):
            if name == "__pycache__" or name.endswith(".egg-info"):
                shutil.rmtree(os.path.join(root, name))
                dirs.remove(name)
    return True


def format_code():
    return run("isort", *SOURCES) and run("black", *SOURCES)


def lint():
    typed = run("mypy", "declql")
    styled = run("flake8", *SOURCES)
    return typed and styled


def test():
    return run("pytest", "--cov=declql", "--cov-report=term-missing")


COMMANDS = {
    "clean": clean,
    "format": format_code,
    "lint": lint,
    "test": test,
    "all": lambda: format_code() and lint() and test(),
}


def main(argv):
    if len(argv) != 1 or argv[0] not in COMMANDS:
        print(f"Usage: python dev_tasks.py <{'|'.join(COMMANDS)}>")
        return 2
    return 0 if COMMANDS[argv[0]]() else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
