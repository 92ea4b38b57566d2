"""Typed argument models for every tool.

Each model decodes the raw ``arguments`` object of a ``tools/call`` request.
Fields use snake_case in Python and camelCase on the wire.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from ..errors import InvalidParamsError
from ..sessions import DEFAULT_SESSION_KEY

Text = Annotated[str, Field(min_length=1)]

SafetyCategory = Literal["harassment", "hate", "sexual", "dangerous", "medical", "deception"]

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000


class ToolArguments(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


ArgsT = TypeVar("ArgsT", bound=ToolArguments)


def decode_arguments(model: type[ArgsT], tool_name: str, arguments: dict[str, Any]) -> ArgsT:
    try:
        return model.model_validate(arguments)
    except ValidationError as exc:
        raise InvalidParamsError(
            f"Invalid arguments for {tool_name}: {_describe(exc)}",
            data=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors(include_url=False):
        where = ".".join(str(part) for part in error["loc"]) or "arguments"
        problems.append(f"{where}: {error['msg']}")
    return "; ".join(problems)


# ---------------------------------------------------------------------------
# Text generation
# ---------------------------------------------------------------------------

class GenerateTextArgs(ToolArguments):
    prompt: Text
    temperature: float = Field(DEFAULT_TEMPERATURE, ge=0, le=1)
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, gt=0)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

class ImageSourceArgs(ToolArguments):
    image_path: str | None = None
    image_base64: str | None = None

    @model_validator(mode="after")
    def _require_image(self) -> "ImageSourceArgs":
        if not self.image_path and not self.image_base64:
            raise ValueError("Missing image data: provide imagePath or imageBase64")
        return self


class AnalyzeImageArgs(ImageSourceArgs):
    prompt: Text = "Describe this image in detail"


class ExtractTextArgs(ImageSourceArgs):
    pass


class ImageRef(ToolArguments):
    path: str | None = None
    base64: str | None = None

    @model_validator(mode="after")
    def _require_source(self) -> "ImageRef":
        if not self.path and not self.base64:
            raise ValueError("each image needs a path or base64 value")
        return self


class CompareImagesArgs(ToolArguments):
    images: list[ImageRef] = Field(min_length=2, max_length=5)
    prompt: Text = "Compare these images and describe their similarities and differences"


# ---------------------------------------------------------------------------
# Code
# ---------------------------------------------------------------------------

class GenerateCodeArgs(ToolArguments):
    prompt: Text
    language: Text = "python"
    framework: str | None = None


class ExplainCodeArgs(ToolArguments):
    code: Text
    language: str | None = None


class RefactorCodeArgs(ToolArguments):
    code: Text
    language: str | None = None
    goals: list[str] = Field(default_factory=list)


class ConvertCodeArgs(ToolArguments):
    code: Text
    target_language: Text
    source_language: str | None = None


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------

class ChatArgs(ToolArguments):
    message: Text
    session_id: Text = DEFAULT_SESSION_KEY
    system_prompt: str | None = None


class SessionArgs(ToolArguments):
    session_id: Text = DEFAULT_SESSION_KEY


# ---------------------------------------------------------------------------
# Content creation
# ---------------------------------------------------------------------------

class TranslateTextArgs(ToolArguments):
    text: Text
    target_language: Text
    source_language: str | None = None


class SummarizeTextArgs(ToolArguments):
    text: Text
    style: Literal["brief", "detailed", "bullet-points", "executive"] = "brief"
    max_length: int | None = Field(None, gt=0)


class RewriteTextArgs(ToolArguments):
    text: Text
    style: Text
    target_audience: str | None = None


class StructuredDataArgs(ToolArguments):
    prompt: Text
    format: Literal["json", "yaml", "csv", "xml", "toml"] = "json"
    # "schema" clashes with a BaseModel attribute name.
    data_schema: dict[str, Any] | None = Field(None, alias="schema")


# ---------------------------------------------------------------------------
# Safety & moderation
# ---------------------------------------------------------------------------

class ContentSafetyArgs(ToolArguments):
    content: Text
    categories: list[SafetyCategory] = Field(
        default_factory=lambda: ["harassment", "hate", "sexual", "dangerous"],
    )


class ModerateTextArgs(ToolArguments):
    text: Text
    level: Literal["strict", "moderate", "lenient"] = "moderate"
