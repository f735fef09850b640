from pathlib import Path

import pytest

from swagger_scaffold.config import GenerationConfig
from swagger_scaffold.errors import UnsupportedFrameworkSelection
from swagger_scaffold.generator.code import (
    CodeGenerator,
    attr_name,
    docstring_text,
    expected_status,
    route_path,
    sample_body,
    sample_query,
    sample_url,
)
from swagger_scaffold.generator.validator import validate_files
from swagger_scaffold.parser.base import Operation
from swagger_scaffold.parser.swagger import load_document

FIXTURES = Path(__file__).parent / "fixtures"
PETSTORE = FIXTURES / "petstore.yaml"


def _generate(framework: str, doc_path: Path = PETSTORE) -> dict[str, str]:
    config = GenerationConfig.create(
        appname="petstore",
        api_path=doc_path,
        framework=framework,
        creator_name="Jane Doe",
        github_user="janedoe",
        email="jane@example.com",
    )
    document = load_document(doc_path)
    return CodeGenerator(framework).generate(document, config, doc_path.read_text(encoding="utf-8"))


SHOW_PET = Operation(
    method="get",
    path="/pets/{petId}",
    parameters=[{"name": "petId", "in": "path", "required": True, "type": "integer"}],
    responses={"200": {"description": "ok"}},
)


class TestHelpers:
    def test_route_path_flask_uses_converters(self):
        assert route_path(SHOW_PET, "flask") == "/pets/<int:petId>"

    def test_route_path_fastapi_keeps_braces(self):
        assert route_path(SHOW_PET, "fastapi") == "/pets/{petId}"

    def test_sample_url_fills_path_params(self):
        assert sample_url(SHOW_PET, "/v1") == "/v1/pets/1"
        op = Operation(method="get", path="/users/{name}/")
        assert sample_url(op, "") == "/users/helloworld"

    def test_sample_url_root_base_path(self):
        assert sample_url(Operation(method="get", path="/"), "/") == "/"

    def test_sample_body_from_ref(self):
        op = Operation(
            method="post",
            path="/pets",
            parameters=[{"name": "pet", "in": "body", "schema": {"$ref": "#/definitions/Pet"}}],
        )
        assert sample_body(op, {"Pet": {"id": 1}}) == "MODELS['Pet']"
        assert sample_body(op, {}) == "{}"

    def test_sample_body_array(self):
        op = Operation(
            method="post",
            path="/pets",
            parameters=[{
                "name": "pets",
                "in": "body",
                "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
            }],
        )
        assert sample_body(op, {"Pet": {}}) == "[MODELS['Pet']]"

    def test_sample_body_absent(self):
        assert sample_body(SHOW_PET, {"Pet": {}}) == ""

    def test_sample_query_required_only(self):
        op = Operation(method="get", path="/pets", parameters=[
            {"name": "limit", "in": "query", "type": "integer", "required": True},
            {"name": "tag", "in": "query", "type": "string"},
        ])
        assert sample_query(op) == {"limit": 1}

    def test_expected_status(self):
        assert expected_status(SHOW_PET) == 200
        assert expected_status(Operation(method="delete", path="/x", responses={"default": {}, 204: {}})) == 204
        assert expected_status(Operation(method="get", path="/x")) == 200

    def test_attr_name(self):
        assert attr_name("class") == "class_"
        assert attr_name("x-rate") == "x_rate"
        assert attr_name("name") == "name"

    def test_docstring_text_escapes_quotes_and_backslashes(self):
        assert docstring_text('A pet like "Rex"') == "A pet like 'Rex'"
        assert docstring_text("ends with \\") == "ends with \\\\"
        assert docstring_text("two\n  lines") == "two lines"


class TestCodeGeneratorFlask:
    def test_unsupported_framework(self):
        with pytest.raises(UnsupportedFrameworkSelection):
            CodeGenerator("express")

    def test_file_layout(self):
        files = _generate("flask")
        assert set(files) == {
            ".gitignore",
            "README.md",
            "pyproject.toml",
            "config/petstore.yaml",
            "app.py",
            "handlers/__init__.py",
            "handlers/pets.py",
            "handlers/pets_petId.py",
            "models/__init__.py",
            "models/pet.py",
            "models/error.py",
            "tests/__init__.py",
            "tests/test_pets.py",
            "tests/test_pets_petId.py",
        }

    def test_all_files_valid(self):
        assert validate_files(_generate("flask")) == {}

    def test_api_document_copied_verbatim(self):
        files = _generate("flask")
        assert files["config/petstore.yaml"] == PETSTORE.read_text(encoding="utf-8")

    def test_handler_routes(self):
        handler = _generate("flask")["handlers/pets_petId.py"]
        assert "@blueprint.route('/pets/<int:petId>', methods=['GET'])" in handler
        assert "def show_pet_by_id(petId):" in handler
        assert "def delete_pets_petId(petId):" in handler
        assert "# produces: application/json" in handler

    def test_app_registers_handlers(self):
        app = _generate("flask")["app.py"]
        assert "from handlers import pets, pets_petId" in app
        assert "HANDLERS = [pets, pets_petId]" in app

    def test_model_file(self):
        model = _generate("flask")["models/pet.py"]
        assert "class Pet(BaseModel):" in model
        assert "    id: int\n" in model
        assert "    name: str\n" in model
        assert "    tag: str | None = None\n" in model

    def test_test_file_uses_synthesized_models(self):
        test = _generate("flask")["tests/test_pets.py"]
        assert "MODELS = {'Pet': {'id': 1, 'name': 'helloworld'}, 'Error': {'code': 1, 'message': 'helloworld'}}" in test
        assert "json=MODELS['Pet']," in test
        assert "assert response.status_code == 201" in test
        assert "API_PATH = Path(__file__).parent / '../config/petstore.yaml'" in test
        assert "HANDLERS_PATH = Path(__file__).parent / '../handlers'" in test

    def test_test_file_urls(self):
        test = _generate("flask")["tests/test_pets_petId.py"]
        assert "'/v1/pets/1'," in test
        assert "def test_show_pet_by_id(client):" in test
        assert "assert response.status_code == 204" in test

    def test_manifest(self):
        manifest = _generate("flask")["pyproject.toml"]
        assert 'name = "petstore"' in manifest
        assert '"flask>=3.0",' in manifest
        assert 'Repository = "https://github.com/janedoe/petstore"' in manifest
        assert 'email = "jane@example.com"' in manifest

    def test_deterministic(self):
        assert _generate("flask") == _generate("flask")


class TestCodeGeneratorFastapi:
    def test_all_files_valid(self):
        assert validate_files(_generate("fastapi")) == {}

    def test_handler_routes(self):
        handler = _generate("fastapi")["handlers/pets_petId.py"]
        assert "@router.get('/pets/{petId}')" in handler
        assert "def show_pet_by_id(petId: int):" in handler
        assert "@router.delete('/pets/{petId}')" in handler

    def test_tests_use_test_client(self):
        test = _generate("fastapi")["tests/test_pets.py"]
        assert "from fastapi.testclient import TestClient" in test
        assert "client.request(" in test

    def test_manifest_has_fastapi(self):
        manifest = _generate("fastapi")["pyproject.toml"]
        assert '"fastapi>=0.110",' in manifest
        assert '"httpx>=0.27",' in manifest


class TestDuplicatePaths:
    def test_merged_handler_and_separate_tests(self):
        files = _generate("flask", FIXTURES / "duplicate_paths.json")
        assert "handlers/pets.py" in files
        assert not any(name.startswith("handlers/pets_") for name in files)
        assert "tests/test_pets_.py" in files
        assert "tests/test_pets.py" in files

        handler = files["handlers/pets.py"]
        assert handler.index("def list_pets(") < handler.index("def create_pet(")

        for name in ("tests/test_pets_.py", "tests/test_pets.py"):
            assert "MODELS = {'Pet': {'id': 1, 'name': 'helloworld'}}" in files[name]

    def test_files_valid(self):
        assert validate_files(_generate("flask", FIXTURES / "duplicate_paths.json")) == {}


AWKWARD = FIXTURES / "awkward_names.yaml"


class TestAwkwardNames:
    @pytest.mark.parametrize("framework", ["flask", "fastapi"])
    def test_all_files_valid(self, framework):
        assert validate_files(_generate(framework, AWKWARD)) == {}

    def test_keyword_path_module(self):
        files = _generate("flask", AWKWARD)
        assert "handlers/import_.py" in files
        assert "from handlers import import_, pets_id, pets_id_2, class_def" in files["app.py"]

    def test_keyword_operation_ids(self):
        files = _generate("flask", AWKWARD)
        assert "def pass_():" in files["handlers/import_.py"]
        assert "def return_():" in files["handlers/pets_id_2.py"]
        assert "def test_pass_(client):" in files["tests/test_import.py"]

    def test_keyword_path_parameter(self):
        handler = _generate("fastapi", AWKWARD)["handlers/class_def.py"]
        assert "@router.delete('/class/{def_}')" in handler
        assert "def delete_class_def(def_: str):" in handler

    def test_quotes_and_backslashes_in_docstrings(self):
        files = _generate("flask", AWKWARD)
        assert files["models/pet.py"].startswith('"""A pet like \'Rex\'"""\n')
        assert files["models/none.py"].startswith('"""Ends with a backslash \\\\"""\n')
        assert files["app.py"].startswith('"""The \'Awkward\' API \\\\N with a trailing backslash \\\\ application."""\n')
        assert '"""Lists \'imports\' \\\\ ending in a quote\'"""' in files["handlers/import_.py"]

    def test_keyword_model_names(self):
        model = _generate("flask", AWKWARD)["models/none.py"]
        assert "class ModelNone(BaseModel):" in model
        assert "x_rate: float | None = Field(None, alias='x-rate')" in model

    def test_colliding_paths_keep_both_tests(self):
        files = _generate("flask", AWKWARD)
        assert "tests/test_pets_id.py" in files
        assert "tests/test_pets_id_2.py" in files
        assert "HANDLERS_PATH / 'pets_id.py'" in files["tests/test_pets_id.py"]
        assert "HANDLERS_PATH / 'pets_id_2.py'" in files["tests/test_pets_id_2.py"]

    def test_shared_path_parameters_typed(self):
        files = _generate("flask", AWKWARD)
        assert "@blueprint.route('/pets/<int:id>', methods=['GET'])" in files["handlers/pets_id.py"]
        assert "'/api/pets/1'," in files["tests/test_pets_id.py"]
