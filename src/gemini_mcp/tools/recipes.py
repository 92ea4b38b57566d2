"""
Declarative prompt recipes for the single-shot tools.

A recipe pairs an argument model with a renderer that turns decoded arguments
into prompt parts. Tools that differ only in wording are separate recipes over
the same submit path in :mod:`gemini_mcp.tools.handlers`.
"""
from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from ..content import GenerationConfig, Part
from . import arguments as a
from .images import load_image
from .structured import normalize_structured

OCR_PROMPT = (
    "Extract all text from this image. "
    "Provide only the extracted text without any additional commentary."
)

_TEXT_DEFAULTS = GenerationConfig(temperature=a.DEFAULT_TEMPERATURE, max_output_tokens=a.DEFAULT_MAX_TOKENS)

_SUMMARY_STYLES = {
    "brief": "Provide a brief summary in 2-3 sentences",
    "detailed": "Provide a detailed summary covering all main points",
    "bullet-points": "Provide a summary using bullet points",
    "executive": "Provide an executive summary suitable for business readers",
}

_MODERATION_LEVELS = {
    "strict": "Remove or modify any potentially inappropriate content",
    "moderate": "Clean up obviously inappropriate content while preserving meaning",
    "lenient": "Only remove explicit inappropriate content",
}


@dataclass(frozen=True)
class PromptRecipe:
    arguments: type[a.ToolArguments]
    render: Callable[[Any], Awaitable[list[Part]]]
    generation: Callable[[Any], GenerationConfig | None] = lambda args: _TEXT_DEFAULTS
    finish: Callable[[Any, str], str] | None = None


def _text(build: Callable[[Any], str]) -> Callable[[Any], Awaitable[list[Part]]]:
    async def render(args: Any) -> list[Part]:
        return [Part.from_text(build(args))]

    return render


def _no_generation_config(args: Any) -> None:
    return None


def _fenced(code: str, language: str | None) -> str:
    return f"```{language or ''}\n{code}\n```"


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

async def _render_analyze_image(args: a.AnalyzeImageArgs) -> list[Part]:
    image = await load_image(args.image_path, args.image_base64)
    return [Part.from_text(args.prompt), image]


async def _render_extract_text(args: a.ExtractTextArgs) -> list[Part]:
    image = await load_image(args.image_path, args.image_base64)
    return [Part.from_text(OCR_PROMPT), image]


async def _render_compare_images(args: a.CompareImagesArgs) -> list[Part]:
    images = await asyncio.gather(*(load_image(ref.path, ref.base64) for ref in args.images))
    return [Part.from_text(args.prompt), *images]


def _generate_code(args: a.GenerateCodeArgs) -> str:
    using = f" using {args.framework}" if args.framework else ""
    return (
        f"Generate {args.language} code{using} for the following requirement:\n\n"
        f"{args.prompt}\n\n"
        "Provide only the code with appropriate comments. "
        "Use best practices and proper error handling."
    )


def _explain_code(args: a.ExplainCodeArgs) -> str:
    lang = f" {args.language}" if args.language else ""
    return (
        f"Explain the following{lang} code in detail:\n\n"
        f"{_fenced(args.code, args.language)}\n\n"
        "Provide a comprehensive explanation including what it does, how it works, "
        "and any important considerations."
    )


def _refactor_code(args: a.RefactorCodeArgs) -> str:
    lang = f" {args.language}" if args.language else ""
    goals = f"\nRefactoring goals: {', '.join(args.goals)}" if args.goals else ""
    return (
        f"Refactor the following{lang} code{goals}:\n\n"
        f"{_fenced(args.code, args.language)}\n\n"
        "Provide the refactored code with explanations of the changes made."
    )


def _convert_code(args: a.ConvertCodeArgs) -> str:
    source = args.source_language or "the source language"
    return (
        f"Convert the following code from {source} to {args.target_language}:\n\n"
        f"{_fenced(args.code, args.source_language)}\n\n"
        "Provide the converted code maintaining the same functionality and using "
        f"idiomatic {args.target_language} patterns."
    )


def _translate_text(args: a.TranslateTextArgs) -> str:
    source = f" from {args.source_language}" if args.source_language else ""
    return (
        f"Translate the following text{source} to {args.target_language}. "
        f"Provide only the translation without any additional explanation:\n\n{args.text}"
    )


def _summarize_text(args: a.SummarizeTextArgs) -> str:
    length = f" in no more than {args.max_length} words" if args.max_length else ""
    return f"{_SUMMARY_STYLES[args.style]}{length} of the following text:\n\n{args.text}"


def _rewrite_text(args: a.RewriteTextArgs) -> str:
    audience = f" for {args.target_audience}" if args.target_audience else ""
    return f"Rewrite the following text in a {args.style} style{audience}:\n\n{args.text}"


def _structured_data(args: a.StructuredDataArgs) -> str:
    schema = ""
    if args.data_schema:
        schema = f"\n\nFollow this schema:\n{json.dumps(args.data_schema, indent=2)}"
    return (
        f"Generate {args.format.upper()} data for: {args.prompt}{schema}\n\n"
        f"Provide only the {args.format} data without any markdown code blocks "
        "or additional explanation."
    )


def _content_safety(args: a.ContentSafetyArgs) -> str:
    return (
        "Analyze the following content for safety issues in these categories: "
        f"{', '.join(args.categories)}.\n\n"
        f'Content: "{args.content}"\n\n'
        "Provide a safety assessment with:\n"
        "1. Overall safety rating (safe/caution/unsafe)\n"
        "2. Specific concerns for each category\n"
        "3. Recommendations if any issues are found\n\n"
        "Format as JSON."
    )


def _moderate_text(args: a.ModerateTextArgs) -> str:
    return (
        f"{_MODERATION_LEVELS[args.level]} in the following text. "
        f"Return the cleaned version:\n\n{args.text}"
    )


# ---------------------------------------------------------------------------
# Recipe table
# ---------------------------------------------------------------------------

RECIPES: dict[str, PromptRecipe] = {
    "generate_text": PromptRecipe(
        a.GenerateTextArgs,
        _text(lambda args: args.prompt),
        generation=lambda args: GenerationConfig(
            temperature=args.temperature, max_output_tokens=args.max_tokens
        ),
    ),
    "analyze_image": PromptRecipe(a.AnalyzeImageArgs, _render_analyze_image, _no_generation_config),
    "extract_text_from_image": PromptRecipe(a.ExtractTextArgs, _render_extract_text, _no_generation_config),
    "compare_images": PromptRecipe(a.CompareImagesArgs, _render_compare_images, _no_generation_config),
    "generate_code": PromptRecipe(a.GenerateCodeArgs, _text(_generate_code)),
    "explain_code": PromptRecipe(a.ExplainCodeArgs, _text(_explain_code)),
    "refactor_code": PromptRecipe(a.RefactorCodeArgs, _text(_refactor_code)),
    "convert_code": PromptRecipe(a.ConvertCodeArgs, _text(_convert_code)),
    "translate_text": PromptRecipe(a.TranslateTextArgs, _text(_translate_text)),
    "summarize_text": PromptRecipe(a.SummarizeTextArgs, _text(_summarize_text)),
    "rewrite_text": PromptRecipe(a.RewriteTextArgs, _text(_rewrite_text)),
    "generate_structured_data": PromptRecipe(
        a.StructuredDataArgs,
        _text(_structured_data),
        finish=lambda args, text: normalize_structured(text, args.format),
    ),
    "check_content_safety": PromptRecipe(a.ContentSafetyArgs, _text(_content_safety)),
    "moderate_text": PromptRecipe(a.ModerateTextArgs, _text(_moderate_text)),
}
