"""Artifact names for generated handlers, models and tests.

Examples:
  handler_name("pets/{id}")           -> pets_id
  handler_name("")                    -> root
  handler_name("import")              -> import_
  file_name_for_test("/pets/")        -> test_pets_.py
  file_name_for_test("/pets/{petId}") -> test_pets_petId.py
  model_module_name("PetCategory")    -> petcategory
  function_name(get /pets/{id}, "")   -> get_pets_id
  function_name(..., "listPets")      -> list_pets
"""

import keyword
import re

from swagger_scaffold.generator.paths import normalize
from swagger_scaffold.parser.base import Operation


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def _sanitize(name: str) -> str:
    """Drop template braces and replace anything not valid in an identifier."""
    name = name.replace("{", "").replace("}", "")
    return re.sub(r"[^A-Za-z0-9_]", "_", name)


def _not_keyword(name: str) -> str:
    return f"{name}_" if keyword.iskeyword(name) else name


def deduplicate(names: list[str]) -> list[str]:
    """Suffix repeated names with _2, _3, ... keeping first-seen order.

    A suffixed name never reuses one already handed out, so
    ["a", "a", "a_2"] gives ["a", "a_2", "a_2_2"].
    """
    seen: set[str] = set()
    result = []
    for name in names:
        candidate, n = name, 1
        while candidate in seen:
            n += 1
            candidate = f"{name}_{n}"
        seen.add(candidate)
        result.append(candidate)
    return result


def handler_name(pathname: str) -> str:
    """Module name for the handler of a canonical path."""
    segments = normalize(pathname).segments
    if not segments:
        return "root"
    name = _sanitize("_".join(segments))
    if name[0].isdigit():
        name = f"_{name}"
    return _not_keyword(name)


def handler_modules(pathnames) -> dict[str, str]:
    """Map each canonical path to a unique handler module name."""
    pathnames = list(pathnames)
    return dict(zip(pathnames, deduplicate([handler_name(p) for p in pathnames])))


def file_name_for_test(raw_path: str) -> str:
    """Test module file name, one per raw path: slashes become underscores."""
    return _sanitize("test" + raw_path.replace("/", "_")) + ".py"


def file_names_for_tests(raw_paths) -> list[str]:
    """Unique test file names for raw paths, in order."""
    stems = deduplicate([file_name_for_test(p)[: -len(".py")] for p in raw_paths])
    return [f"{stem}.py" for stem in stems]


def model_module_name(model_name: str) -> str:
    return _sanitize(model_name.lower())


def class_name(model_name: str) -> str:
    """PascalCase class name for a model definition."""
    parts = [p for p in re.split(r"[^A-Za-z0-9]+", model_name) if p]
    name = "".join(p[0].upper() + p[1:] for p in parts) or "Model"
    if name[0].isdigit() or keyword.iskeyword(name):
        name = f"Model{name}"
    return name


def function_name(operation: Operation) -> str:
    """Python function name for an operation's handler and test."""
    if operation.operation_id:
        name = re.sub(r"_+", "_", _sanitize(_camel_to_snake(operation.operation_id)))
        name = name.strip("_")
        if name:
            return _not_keyword(name if not name[0].isdigit() else f"op_{name}")
    return f"{operation.method}_{handler_name(operation.path)}"
