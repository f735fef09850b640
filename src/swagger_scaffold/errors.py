"""Errors raised at the scaffolding boundary.

The derivation core never raises on a well-formed document; everything
here is raised before generation starts.
"""


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class InvalidDocumentStructure(ScaffoldError):
    """The API document is missing structure the generator needs."""


class UnsupportedFrameworkSelection(ScaffoldError):
    """The requested target framework is not one we can generate."""

    def __init__(self, framework: str, supported: tuple[str, ...]):
        self.framework = framework
        self.supported = supported
        super().__init__(
            f"Framework must be one of {', '.join(supported)} (got {framework!r})"
        )
