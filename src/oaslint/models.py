"""Canonical Pydantic models shared across all oaslint modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`FetchConfig`, :class:`OutputConfig` and :class:`GlobalConfig`.

**Input models** -- describe where a document comes from:
    :class:`FileSource`, :class:`UrlSource` and the discriminated union
    :data:`SpecSource`.

**Report models** -- produced by the validation pipeline:
    :class:`SpecVersion`, :class:`ResolvedVersion`, :class:`ValidationError`,
    :class:`ValidationStats`, :class:`ValidationResult`, plus the listing rows
    :class:`EndpointSummary` and :class:`SchemaSummary`.

Report models are frozen: a result is built once per validation run and
handed to the caller as-is.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Config ---


class FetchConfig(BaseModel):
    """HTTP settings used when a document is fetched from a URL."""

    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")
    user_agent: Optional[str] = Field(
        default=None, description="Override the User-Agent header"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/oaslint/config.json``.

    Loaded and saved by :func:`~oaslint.config.load_global_config` and
    :func:`~oaslint.config.save_global_config`. See
    :func:`~oaslint.config.resolve_config` for how project config,
    environment variables and CLI flags layer on top of it.
    """

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Sources ---


class FileSource(BaseModel):
    """Document content supplied as a file.

    Either ``content`` (the uploaded bytes or text, already in memory) or
    ``path`` (a local file read by the loader) is set, never both.

    Example::

        FileSource(content=b'{"openapi": "3.0.0"}', filename="api.json")
        FileSource(path=Path("openapi.yaml"))
    """

    kind: Literal["file"] = "file"
    content: Optional[Union[bytes, str]] = None
    path: Optional[Path] = None
    filename: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_origin(self) -> FileSource:
        if (self.content is None) == (self.path is None):
            raise ValueError("FileSource needs exactly one of 'content' or 'path'")
        return self

    @property
    def label(self) -> str:
        if self.path is not None:
            return str(self.path)
        return self.filename or "<upload>"


class UrlSource(BaseModel):
    """Document fetched with a single HTTP GET."""

    kind: Literal["url"] = "url"
    url: str

    @property
    def label(self) -> str:
        return self.url


SpecSource = Annotated[Union[FileSource, UrlSource], Field(discriminator="kind")]
"""Where a document comes from: a file buffer/path or a URL."""


def source_from_argument(argument: str) -> Union[FileSource, UrlSource]:
    """Build a source from a CLI argument: URLs for ``http(s)://``, file paths otherwise."""
    if argument.startswith(("http://", "https://")):
        return UrlSource(url=argument)
    return FileSource(path=Path(argument))


# --- Report ---


class SpecVersion(str, enum.Enum):
    """Specification family a document declares."""

    OPENAPI_3_0 = "openapi-3.0"
    OPENAPI_3_1 = "openapi-3.1"
    SWAGGER_2_0 = "swagger-2.0"
    UNKNOWN = "unknown"


class ResolvedVersion(BaseModel):
    """Result of inspecting a document's ``openapi`` / ``swagger`` key.

    ``literal`` is the declared value rendered as text, or ``None`` when the
    document declares no version at all.
    """

    model_config = ConfigDict(frozen=True)

    kind: SpecVersion
    literal: Optional[str] = None

    @property
    def detected(self) -> bool:
        """Whether the document declares a version key at all."""
        return self.literal is not None

    @property
    def supported(self) -> bool:
        """Whether a meta-model exists for this version."""
        return self.kind is not SpecVersion.UNKNOWN

    @property
    def display(self) -> str:
        return self.literal if self.literal is not None else "unknown"


class ValidationError(BaseModel):
    """One finding: a slash-delimited pointer into the document and a message.

    ``path`` may be empty for document-level findings.
    """

    model_config = ConfigDict(frozen=True)

    path: str = ""
    message: str


class ValidationStats(BaseModel):
    """Summary counts, computed whether or not the document is valid."""

    model_config = ConfigDict(frozen=True)

    endpoints: int = Field(default=0, ge=0)
    schemas: int = Field(default=0, ge=0)
    version: str = "unknown"


class ValidationResult(BaseModel):
    """Terminal artifact of one validation run.

    ``document`` is present whenever parsing succeeded, even if validation
    failed later; it is ``None`` only when loading or parsing failed.
    Errors keep their emission order (schema findings first, then structural
    findings) and are not deduplicated.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: list[ValidationError] = Field(default_factory=list)
    stats: ValidationStats = Field(default_factory=ValidationStats)
    document: Optional[dict[Any, Any]] = None

    @model_validator(mode="after")
    def _valid_iff_no_errors(self) -> ValidationResult:
        if self.valid == bool(self.errors):
            raise ValueError("'valid' must be true exactly when 'errors' is empty")
        return self

    @classmethod
    def build(
        cls,
        errors: list[ValidationError],
        stats: ValidationStats,
        document: Optional[dict[Any, Any]] = None,
    ) -> ValidationResult:
        """Assemble a result, deriving ``valid`` from the error list."""
        return cls(valid=not errors, errors=errors, stats=stats, document=document)

    @classmethod
    def failure(cls, path: str, message: str) -> ValidationResult:
        """Result for a run that stopped before a document was available."""
        return cls(
            valid=False,
            errors=[ValidationError(path=path, message=message)],
            stats=ValidationStats(),
        )


class EndpointSummary(BaseModel):
    """One row of the endpoint listing (``oaslint inspect paths``)."""

    method: str
    path: str
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    deprecated: bool = False


class SchemaSummary(BaseModel):
    """One row of the schema listing (``oaslint inspect schemas``)."""

    name: str
    type: str = "object"
    properties: list[str] = Field(default_factory=list)
    required: list[str] = Field(default_factory=list)
