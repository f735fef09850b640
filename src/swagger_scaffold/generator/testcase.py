"""Test scaffold assembler: one TestDescriptor per raw path in the document."""

import posixpath

from swagger_scaffold.generator.naming import file_names_for_tests, handler_modules as module_names
from swagger_scaffold.generator.paths import normalize
from swagger_scaffold.generator.routes import read_operations
from swagger_scaffold.parser.base import Route, TestDescriptor

TESTS_DIR = "tests"


def relative_to_tests(project_path: str) -> str:
    """Path from the generated tests directory to a project-relative path."""
    # Anchor both sides at a fake root so relpath never consults the cwd.
    return posixpath.relpath(posixpath.join("/", project_path), posixpath.join("/", TESTS_DIR))


def assemble(
    document: dict,
    routes: dict[str, Route],
    models: dict[str, dict],
    handlers_path: str,
    api_path: str,
    handler_modules: dict[str, str] | None = None,
) -> list[TestDescriptor]:
    """Build the test descriptors for every raw path of the document.

    `handlers_path` and `api_path` are relative to the project root; the
    descriptors carry them relative to the tests directory. Each
    descriptor gets every synthesized model, not only the ones its
    operations reference.

    `handler_modules` maps canonical paths to handler module names and
    defaults to the names derived from `routes`. Raw paths whose test
    file names collide get _2, _3, ... suffixes.
    """
    if handler_modules is None:
        handler_modules = module_names(routes)
    api_rel = relative_to_tests(api_path)
    handlers_rel = relative_to_tests(handlers_path)
    resource_path = document.get("basePath") or ""

    raw_paths = list(document["paths"])
    descriptors = []
    for raw_path, file_name in zip(raw_paths, file_names_for_tests(raw_paths)):
        pathname = normalize(raw_path).pathname
        descriptors.append(
            TestDescriptor(
                path=raw_path,
                pathname=pathname,
                file_name=file_name,
                handler_module=handler_modules[pathname],
                api_path=api_rel,
                handlers=handlers_rel,
                resource_path=resource_path,
                operations=read_operations(raw_path, document["paths"][raw_path]),
                models=models,
            )
        )
    return descriptors
