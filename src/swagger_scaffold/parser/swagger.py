"""Swagger 2.0 document loader.

Reads JSON or YAML, checks the structure the generator relies on and
returns the document as a plain dict. Anything the generator cannot
consume is rejected here, before any artifacts are derived.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from swagger_scaffold.errors import InvalidDocumentStructure

SUPPORTED_VERSION = "2.0"


class _Definition(BaseModel):
    model_config = ConfigDict(extra="allow")

    properties: dict[str, dict]
    required: list[str] = []


class _Document(BaseModel):
    model_config = ConfigDict(extra="allow")

    swagger: str | float
    basePath: str = ""
    paths: dict[str, dict]
    definitions: dict[str, _Definition] = {}


def load_document(file_path: Path) -> dict:
    """Load and structurally check a Swagger document from disk."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidDocumentStructure(f"{file_path.name}: not valid JSON or YAML ({e})") from e
    return check_document(doc)


def check_document(doc) -> dict:
    """Validate the parts of the document the generator reads.

    Returns the document unchanged. Raises InvalidDocumentStructure when
    `paths` is missing, a definition has no `properties`, or the
    document does not declare Swagger 2.0.
    """
    if not isinstance(doc, dict):
        raise InvalidDocumentStructure("API document must be a mapping")

    try:
        parsed = _Document.model_validate(doc)
    except ValidationError as e:
        raise InvalidDocumentStructure(_describe(e)) from e

    if str(parsed.swagger) != SUPPORTED_VERSION:
        raise InvalidDocumentStructure(
            f"Unsupported swagger version {parsed.swagger!r}, expected {SUPPORTED_VERSION!r}"
        )

    return doc


def _describe(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        problems.append(f"{location}: {err['msg']}")
    return "Invalid API document: " + "; ".join(problems)
