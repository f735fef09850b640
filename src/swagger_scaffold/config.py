"""Generation settings collected from the command line."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from swagger_scaffold.errors import UnsupportedFrameworkSelection

FRAMEWORKS = ("flask", "fastapi")
DEFAULT_FRAMEWORK = "flask"


def check_framework(framework: str) -> str:
    """Normalize a framework name, or raise if we cannot generate for it."""
    name = (framework or "").strip().lower()
    if name not in FRAMEWORKS:
        raise UnsupportedFrameworkSelection(framework, FRAMEWORKS)
    return name


class GenerationConfig(BaseModel):
    """Project metadata and inputs for one scaffolding run."""

    model_config = ConfigDict(frozen=True)

    appname: str
    api_path: Path
    framework: str = DEFAULT_FRAMEWORK
    creator_name: str = ""
    github_user: str = ""
    email: str = ""

    @classmethod
    def create(cls, **values) -> "GenerationConfig":
        """Build a config, checking the framework before anything else runs."""
        values["framework"] = check_framework(values.get("framework") or DEFAULT_FRAMEWORK)
        return cls(**values)

    @property
    def api_file_name(self) -> str:
        return self.api_path.name

    @property
    def package_name(self) -> str:
        return self.appname.strip().lower().replace("-", "_").replace(" ", "_")
