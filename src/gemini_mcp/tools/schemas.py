"""Tool catalog advertised by ``tools/list``, in declaration order."""
from __future__ import annotations

from typing import Any

SAFETY_CATEGORIES = ["harassment", "hate", "sexual", "dangerous", "medical", "deception"]
SUMMARY_STYLES = ["brief", "detailed", "bullet-points", "executive"]
STRUCTURED_FORMATS = ["json", "yaml", "csv", "xml", "toml"]
MODERATION_LEVELS = ["strict", "moderate", "lenient"]

_IMAGE_PATH = {"type": "string", "description": "Path to the image file"}
_IMAGE_BASE64 = {"type": "string", "description": "Base64 encoded image data (alternative to imagePath)"}

TOOL_SCHEMAS: list[dict[str, Any]] = [
    # ------------------------------------------------------------------
    # Text generation
    # ------------------------------------------------------------------
    {
        "name": "generate_text",
        "description": "Generate text using Google Gemini",
        "inputSchema": {
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "The prompt for text generation"},
                "temperature": {
                    "type": "number",
                    "description": "Temperature for generation (0.0 to 1.0)",
                    "minimum": 0,
                    "maximum": 1,
                    "default": 0.7,
                },
                "maxTokens": {
                    "type": "number",
                    "description": "Maximum number of tokens to generate",
                    "default": 1000,
                },
            },
            "required": ["prompt"],
        },
    },
    # ------------------------------------------------------------------
    # Image analysis
    # ------------------------------------------------------------------
    {
        "name": "analyze_image",
        "description": "Analyze an image and answer questions about it",
        "inputSchema": {
            "type": "object",
            "properties": {
                "imagePath": _IMAGE_PATH,
                "imageBase64": _IMAGE_BASE64,
                "prompt": {
                    "type": "string",
                    "description": "Question or instruction about the image",
                    "default": "Describe this image in detail",
                },
            },
            "oneOf": [
                {"required": ["imagePath", "prompt"]},
                {"required": ["imageBase64", "prompt"]},
            ],
        },
    },
    {
        "name": "extract_text_from_image",
        "description": "Extract text (OCR) from an image",
        "inputSchema": {
            "type": "object",
            "properties": {
                "imagePath": _IMAGE_PATH,
                "imageBase64": _IMAGE_BASE64,
            },
            "oneOf": [
                {"required": ["imagePath"]},
                {"required": ["imageBase64"]},
            ],
        },
    },
    {
        "name": "compare_images",
        "description": "Compare multiple images and describe differences/similarities",
        "inputSchema": {
            "type": "object",
            "properties": {
                "images": {
                    "type": "array",
                    "description": "Array of image paths or base64 strings",
                    "items": {
                        "type": "object",
                        "properties": {
                            "path": {"type": "string"},
                            "base64": {"type": "string"},
                        },
                    },
                    "minItems": 2,
                    "maxItems": 5,
                },
                "prompt": {
                    "type": "string",
                    "description": "Specific comparison instruction",
                    "default": "Compare these images and describe their similarities and differences",
                },
            },
            "required": ["images"],
        },
    },
    # ------------------------------------------------------------------
    # Code
    # ------------------------------------------------------------------
    {
        "name": "generate_code",
        "description": "Generate code in a specific programming language",
        "inputSchema": {
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "Description of what the code should do"},
                "language": {
                    "type": "string",
                    "description": "Programming language (e.g., python, javascript, typescript, java, go, rust)",
                    "default": "python",
                },
                "framework": {
                    "type": "string",
                    "description": "Optional framework/library to use (e.g., react, django, express)",
                },
            },
            "required": ["prompt"],
        },
    },
    {
        "name": "explain_code",
        "description": "Analyze and explain code",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "The code to analyze"},
                "language": {
                    "type": "string",
                    "description": "Programming language (optional, will be detected if not provided)",
                },
            },
            "required": ["code"],
        },
    },
    {
        "name": "refactor_code",
        "description": "Suggest improvements and refactor code",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "The code to refactor"},
                "language": {"type": "string", "description": "Programming language"},
                "goals": {
                    "type": "array",
                    "description": (
                        'Refactoring goals (e.g., "improve readability", '
                        '"optimize performance", "add type safety")'
                    ),
                    "items": {"type": "string"},
                },
            },
            "required": ["code"],
        },
    },
    {
        "name": "convert_code",
        "description": "Convert code from one language to another",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "The source code"},
                "sourceLanguage": {"type": "string", "description": "Source programming language"},
                "targetLanguage": {"type": "string", "description": "Target programming language"},
            },
            "required": ["code", "targetLanguage"],
        },
    },
    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------
    {
        "name": "chat",
        "description": "Have a conversation with context memory",
        "inputSchema": {
            "type": "object",
            "properties": {
                "message": {"type": "string", "description": "Your message"},
                "sessionId": {
                    "type": "string",
                    "description": 'Session ID to maintain context (defaults to "default")',
                    "default": "default",
                },
                "systemPrompt": {
                    "type": "string",
                    "description": "Optional system prompt to set context (only used on first message)",
                },
            },
            "required": ["message"],
        },
    },
    {
        "name": "clear_chat_history",
        "description": "Clear conversation history for a session",
        "inputSchema": {
            "type": "object",
            "properties": {
                "sessionId": {
                    "type": "string",
                    "description": 'Session ID to clear (defaults to "default")',
                    "default": "default",
                },
            },
            "required": [],
        },
    },
    {
        "name": "summarize_conversation",
        "description": "Get a summary of the conversation",
        "inputSchema": {
            "type": "object",
            "properties": {
                "sessionId": {
                    "type": "string",
                    "description": 'Session ID to summarize (defaults to "default")',
                    "default": "default",
                },
            },
            "required": [],
        },
    },
    # ------------------------------------------------------------------
    # Content creation
    # ------------------------------------------------------------------
    {
        "name": "translate_text",
        "description": "Translate text between languages",
        "inputSchema": {
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "Text to translate"},
                "targetLanguage": {
                    "type": "string",
                    "description": 'Target language (e.g., "Spanish", "French", "Japanese", "zh-CN")',
                },
                "sourceLanguage": {
                    "type": "string",
                    "description": "Source language (optional, will be detected if not provided)",
                },
            },
            "required": ["text", "targetLanguage"],
        },
    },
    {
        "name": "summarize_text",
        "description": "Create a summary of text",
        "inputSchema": {
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "Text to summarize"},
                "style": {
                    "type": "string",
                    "enum": SUMMARY_STYLES,
                    "description": "Summary style",
                    "default": "brief",
                },
                "maxLength": {"type": "number", "description": "Maximum length in words (optional)"},
            },
            "required": ["text"],
        },
    },
    {
        "name": "rewrite_text",
        "description": "Rewrite text in a different style or tone",
        "inputSchema": {
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "Text to rewrite"},
                "style": {
                    "type": "string",
                    "description": 'Target style (e.g., "formal", "casual", "technical", "simple", "creative")',
                },
                "targetAudience": {
                    "type": "string",
                    "description": 'Target audience (e.g., "children", "professionals", "academics")',
                },
            },
            "required": ["text", "style"],
        },
    },
    {
        "name": "generate_structured_data",
        "description": "Generate structured data (JSON, YAML, CSV, etc.)",
        "inputSchema": {
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "Description of the data to generate"},
                "format": {
                    "type": "string",
                    "enum": STRUCTURED_FORMATS,
                    "description": "Output format",
                    "default": "json",
                },
                "schema": {"type": "object", "description": "Optional schema or example structure"},
            },
            "required": ["prompt"],
        },
    },
    # ------------------------------------------------------------------
    # Safety & moderation
    # ------------------------------------------------------------------
    {
        "name": "check_content_safety",
        "description": "Analyze content for safety issues",
        "inputSchema": {
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "Content to analyze"},
                "categories": {
                    "type": "array",
                    "description": "Specific categories to check",
                    "items": {"type": "string", "enum": SAFETY_CATEGORIES},
                },
            },
            "required": ["content"],
        },
    },
    {
        "name": "moderate_text",
        "description": "Filter and clean inappropriate content",
        "inputSchema": {
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "Text to moderate"},
                "level": {
                    "type": "string",
                    "enum": MODERATION_LEVELS,
                    "description": "Moderation level",
                    "default": "moderate",
                },
            },
            "required": ["text"],
        },
    },
]
