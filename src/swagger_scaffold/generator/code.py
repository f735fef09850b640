"""Code generator: renders routes, models and test descriptors into project files."""

import keyword
import re
from pathlib import Path
from typing import Any

import jinja2

from swagger_scaffold.config import GenerationConfig, check_framework
from swagger_scaffold.generator import naming
from swagger_scaffold.generator.models import DEFAULT_VALUES, load_definitions, synthesize_all
from swagger_scaffold.generator.paths import normalize
from swagger_scaffold.generator.routes import aggregate
from swagger_scaffold.generator.testcase import TESTS_DIR, assemble
from swagger_scaffold.parser.base import ModelDefinition, Operation, PropertySchema, Route

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

HANDLERS_DIR = "handlers"
MODELS_DIR = "models"
CONFIG_DIR = "config"

_PY_TYPES = {
    "integer": "int",
    "number": "float",
    "byte": "int",
    "string": "str",
    "boolean": "bool",
    "array": "list",
    "object": "dict",
}

_PARAM_RE = re.compile(r"\{([^}]*)\}")


def attr_name(name: str) -> str:
    """Python attribute name for a schema property."""
    attr = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if not attr or attr[0].isdigit() or keyword.iskeyword(attr):
        attr = f"{attr}_"
    return attr


def py_type(prop: PropertySchema) -> str:
    if prop.ref:
        return "dict"
    if prop.type == "array" and prop.items_ref:
        return "list[dict]"
    return _PY_TYPES.get(prop.type, "Any")


def _path_param_types(operation: Operation) -> dict[str, str]:
    return {
        p.get("name", ""): p.get("type", "string")
        for p in operation.parameters
        if p.get("in") == "path"
    }


def route_path(operation: Operation, framework: str) -> str:
    """The operation's URL rule in the target framework's syntax."""
    types = _path_param_types(operation)

    def replace(match: re.Match) -> str:
        name = attr_name(match.group(1))
        if framework == "flask":
            converter = "int:" if types.get(match.group(1)) == "integer" else ""
            return f"<{converter}{name}>"
        return f"{{{name}}}"

    return "/" + _PARAM_RE.sub(replace, normalize(operation.path).pathname)


def path_args(operation: Operation, framework: str) -> str:
    """Signature for the handler function of an operation."""
    types = _path_param_types(operation)
    args = []
    for raw in _PARAM_RE.findall(operation.path):
        name = attr_name(raw)
        if framework == "fastapi":
            annotation = "int" if types.get(raw) == "integer" else "str"
            args.append(f"{name}: {annotation}")
        else:
            args.append(name)
    return ", ".join(args)


def sample_url(operation: Operation, resource_path: str) -> str:
    """A concrete URL for the operation with path parameters filled in."""
    types = _path_param_types(operation)

    def replace(match: re.Match) -> str:
        value = DEFAULT_VALUES.get(types.get(match.group(1), "string"), "helloworld")
        return str(value)

    base = normalize(resource_path).pathname
    path = _PARAM_RE.sub(replace, normalize(operation.path).pathname)
    return "/" + "/".join(part for part in (base, path) if part)


def sample_query(operation: Operation) -> dict[str, Any]:
    """Values for the operation's required query parameters."""
    query = {}
    for param in operation.parameters:
        if param.get("in") != "query" or not param.get("required"):
            continue
        value = DEFAULT_VALUES.get(param.get("type", ""))
        if value is not None:
            query[param["name"]] = value
    return query


def sample_body(operation: Operation, models: dict[str, dict]) -> str:
    """Python expression for the request body, built from MODELS."""
    for param in operation.parameters:
        if param.get("in") != "body":
            continue
        schema = param.get("schema") or {}
        ref = schema.get("$ref") or (schema.get("items") or {}).get("$ref", "")
        name = ref.rsplit("/", 1)[-1]
        item = f"MODELS[{name!r}]" if name in models else "{}"
        return f"[{item}]" if schema.get("type") == "array" else item
    return ""


def expected_status(operation: Operation) -> int:
    """First declared 2xx response code, 200 when none is declared."""
    for code in operation.responses:
        code = str(code)
        if code.isdigit() and code.startswith("2"):
            return int(code)
    return 200


def docstring_text(text: str) -> str:
    """Flatten text so it can sit between triple double quotes."""
    text = " ".join(str(text).split())
    return text.replace("\\", "\\\\").replace('"', "'")


def docstring(operation: Operation) -> str:
    text = operation.summary or operation.description or f"{operation.method.upper()} {operation.path}"
    return docstring_text(text)


class CodeGenerator:
    """Renders a scaffolded project for one target framework.

    `generate` returns {relative file path: content}; writing the files
    is left to the caller.
    """

    def __init__(self, framework: str):
        self.framework = check_framework(framework)
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATES_DIR)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.env.filters.update(
            pyrepr=repr,
            attr_name=attr_name,
            py_type=py_type,
            class_name=naming.class_name,
            doc=docstring_text,
            docstring=docstring,
            expected_status=expected_status,
            sample_query=sample_query,
        )

    def _render(self, template: str, **context) -> str:
        return self.env.get_template(template).render(framework=self.framework, **context)

    def generate(self, document: dict, config: GenerationConfig, api_text: str) -> dict[str, str]:
        """Derive routes, models and tests from `document` and render them all."""
        api_path = f"{CONFIG_DIR}/{config.api_file_name}"
        routes = aggregate(document["paths"])
        definitions = load_definitions(document)
        models = synthesize_all(definitions)
        handler_modules = naming.handler_modules(routes)
        descriptors = assemble(document, routes, models, HANDLERS_DIR, api_path, handler_modules)
        modules = list(handler_modules.values())
        model_modules = naming.deduplicate([naming.model_module_name(name) for name in definitions])
        info = document.get("info") or {}

        files: dict[str, str] = {}
        files[".gitignore"] = self._render("common/gitignore.j2")
        files["README.md"] = self._render(
            "common/README.md.j2",
            config=config,
            info=info,
            handlers=list(zip(modules, routes.values())),
        )
        files["pyproject.toml"] = self._render("common/pyproject.toml.j2", config=config, info=info)
        files[api_path] = api_text

        files["app.py"] = self._render(
            f"{self.framework}/app.py.j2",
            config=config,
            info=info,
            handler_modules=modules,
        )

        files[f"{HANDLERS_DIR}/__init__.py"] = ""
        for module, route in zip(modules, routes.values()):
            files[f"{HANDLERS_DIR}/{module}.py"] = self._render_handler(module, route)

        files[f"{MODELS_DIR}/__init__.py"] = ""
        for module, definition in zip(model_modules, definitions.values()):
            files[f"{MODELS_DIR}/{module}.py"] = self._render_model(definition)

        files[f"{TESTS_DIR}/__init__.py"] = ""
        for descriptor in descriptors:
            functions = naming.deduplicate([naming.function_name(op) for op in descriptor.operations])
            cases = [
                {
                    "operation": op,
                    "function": function,
                    "url": sample_url(op, descriptor.resource_path),
                    "body": sample_body(op, descriptor.models),
                }
                for op, function in zip(descriptor.operations, functions)
            ]
            files[f"{TESTS_DIR}/{descriptor.file_name}"] = self._render(
                f"{self.framework}/test.py.j2",
                descriptor=descriptor,
                cases=cases,
            )

        return files

    def _render_handler(self, module: str, route: Route) -> str:
        functions = naming.deduplicate([naming.function_name(op) for op in route.methods])
        handlers = [
            {
                "operation": op,
                "function": function,
                "rule": route_path(op, self.framework),
                "args": path_args(op, self.framework),
            }
            for op, function in zip(route.methods, functions)
        ]
        return self._render(
            f"{self.framework}/handler.py.j2",
            module=module,
            route=route,
            handlers=handlers,
        )

    def _render_model(self, definition: ModelDefinition) -> str:
        fields = [
            {
                "prop": prop,
                "attr": attr_name(prop.name),
                "type": py_type(prop),
            }
            for prop in definition.properties
        ]
        return self._render(
            "common/model.py.j2",
            model=definition,
            fields=fields,
            needs_any=any(f["type"] == "Any" for f in fields),
            needs_alias=any(f["attr"] != f["prop"].name for f in fields),
        )
