"""Model definitions and minimal instance synthesis."""

from typing import Any

from swagger_scaffold.parser.base import ModelDefinition, PropertySchema

# Declared property type -> value written into a synthesized instance.
# Types missing from this table get no value at all.
DEFAULT_VALUES: dict[str, Any] = {
    "integer": 1,
    "number": 1,
    "byte": 1,
    "string": "helloworld",
    "boolean": True,
}

_MISSING = object()


def _ref_name(ref: str) -> str:
    """`#/definitions/Pet` -> `Pet`."""
    return ref.rsplit("/", 1)[-1] if ref else ""


def read_definition(name: str, schema: dict) -> ModelDefinition:
    """Build a ModelDefinition from one entry of the definitions section."""
    required = list(schema.get("required") or [])
    properties = []
    for prop_name, prop in schema["properties"].items():
        prop = prop or {}
        properties.append(
            PropertySchema(
                name=prop_name,
                type=prop.get("type") or "",
                required=prop_name in required,
                format=prop.get("format") or "",
                ref=_ref_name(prop.get("$ref", "")),
                items_ref=_ref_name((prop.get("items") or {}).get("$ref", "")),
                description=prop.get("description") or "",
            )
        )

    return ModelDefinition(
        name=name,
        id=schema.get("id") or name,
        properties=properties,
        required=required,
        description=schema.get("description") or "",
    )


def load_definitions(document: dict) -> dict[str, ModelDefinition]:
    """Read every model definition, keyed by definition name."""
    definitions = document.get("definitions") or {}
    return {name: read_definition(name, schema) for name, schema in definitions.items()}


def default_for(prop: PropertySchema) -> Any:
    return DEFAULT_VALUES.get(prop.type, _MISSING)


def synthesize(definition: ModelDefinition) -> dict[str, Any]:
    """Build the smallest instance of a model the generated tests can send.

    Only required properties are filled in, and only when their type has
    a default. Optional properties are left out even when a default
    exists, so the result may be incomplete for required objects/arrays.
    """
    instance = {}
    for prop in definition.properties:
        value = default_for(prop)
        if prop.name in definition.required and value is not _MISSING:
            instance[prop.name] = value
    return instance


def synthesize_all(definitions: dict[str, ModelDefinition]) -> dict[str, dict[str, Any]]:
    return {name: synthesize(definition) for name, definition in definitions.items()}
