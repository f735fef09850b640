"""Syntax checks for rendered project files.

Each check parses a file's text and reports the first error; nothing
here imports or executes generated code. Files are matched to checks by
suffix, and files with no check (README.md, .gitignore) pass through.
"""

import ast
import tomllib

import yaml


def _check_python(filename: str, content: str) -> str | None:
    if not content.strip():
        return None
    try:
        ast.parse(content, filename=filename)
    except SyntaxError as e:
        return f"SyntaxError: {e.msg} (line {e.lineno})"
    return None


def _check_yaml(filename: str, content: str) -> str | None:
    # JSON documents are YAML too, so the copied API document is checked here.
    try:
        yaml.safe_load(content)
    except yaml.YAMLError as e:
        return f"YAMLError: {e}"
    return None


def _check_toml(filename: str, content: str) -> str | None:
    try:
        tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        return f"TOMLDecodeError: {e}"
    return None


CHECKS = {
    ".py": _check_python,
    ".yaml": _check_yaml,
    ".yml": _check_yaml,
    ".json": _check_yaml,
    ".toml": _check_toml,
}


def _validate(files: dict[str, str], suffixes) -> dict[str, str]:
    errors = {}
    for filename, content in files.items():
        suffix = next((s for s in suffixes if filename.endswith(s)), None)
        if suffix is None:
            continue
        error = CHECKS[suffix](filename, content)
        if error:
            errors[filename] = error
    return errors


def validate_python(files: dict[str, str]) -> dict[str, str]:
    return _validate(files, (".py",))


def validate_yaml(files: dict[str, str]) -> dict[str, str]:
    return _validate(files, (".yaml", ".yml", ".json"))


def validate_toml(files: dict[str, str]) -> dict[str, str]:
    return _validate(files, (".toml",))


def validate_files(files: dict[str, str]) -> dict[str, str]:
    """Run every check that applies to each rendered file.

    Returns {filename: error message} for the files that fail.
    """
    return _validate(files, CHECKS)
