"""Data models shared by the derivation pipeline.

The loader turns a Swagger document into these records, and the
generator stages hand them downstream without mutating them.
"""

from pydantic import BaseModel, ConfigDict


class Operation(BaseModel):
    """One HTTP verb bound to a path."""

    model_config = ConfigDict(frozen=True)

    method: str  # get / post / put / delete / head / options / patch
    path: str  # raw path the operation was declared under, e.g. /pets/{id}/
    operation_id: str = ""
    summary: str = ""
    description: str = ""
    parameters: list[dict] = []
    produces: list[str] = []
    responses: dict = {}


class Route(BaseModel):
    """All operations that share one canonical path."""

    model_config = ConfigDict(frozen=True)

    pathname: str  # canonical path, e.g. pets/{id}
    path: str  # first raw path seen for this pathname
    methods: list[Operation] = []


class PropertySchema(BaseModel):
    """A single named field of a model definition."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""  # integer / number / byte / string / boolean / object / array
    required: bool = False
    format: str = ""
    ref: str = ""  # definition name when the property is a $ref
    items_ref: str = ""  # definition name for arrays of $ref items
    description: str = ""


class ModelDefinition(BaseModel):
    """A named schema from the document's definitions section."""

    model_config = ConfigDict(frozen=True)

    name: str
    id: str
    properties: list[PropertySchema] = []
    required: list[str] = []
    description: str = ""


class TestDescriptor(BaseModel):
    """Everything needed to render one generated test module."""

    __test__ = False  # keep pytest from collecting this as a test class

    model_config = ConfigDict(frozen=True)

    path: str
    pathname: str
    file_name: str
    handler_module: str
    api_path: str  # relative to the tests directory
    handlers: str  # relative to the tests directory
    resource_path: str = ""
    operations: list[Operation] = []
    models: dict[str, dict] = {}
