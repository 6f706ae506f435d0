"""Prompt templates for the built-in capabilities.

Templates are Chinese by default because the dashboard's primary audience
reads Chinese; ``language=en-US`` switches the requested output language, not
the instructions.
"""

from __future__ import annotations

from typing import Mapping

from ..config.defaults import (
    CONTENT_DEFAULT_DIFFICULTY,
    CONTENT_DEFAULT_LANGUAGE,
    CONTENT_DEFAULT_LENGTH,
    CONTENT_DEFAULT_STYLE,
)

RESPONSE_STYLE_PROMPTS = {
    "detailed": "提供详细、全面的回答，包含背景信息、详细解释和相关例子",
    "concise": "提供简洁、直接的回答，重点突出核心信息",
    "step-by-step": "提供分步骤的回答，按逻辑顺序组织内容",
    "examples": "通过具体例子和案例来解释概念和方法",
}
DEFAULT_RESPONSE_STYLE_PROMPT = "提供平衡的回答，既有深度又保持清晰"

CONTENT_TYPE_PROMPTS = {
    "article": "你是一个专业的文章写作专家，擅长创作结构清晰、内容丰富的文章。",
    "summary": "你是一个专业的摘要写作专家，擅长提取核心信息并简洁表达。",
    "quiz": "你是一个专业的测验设计专家，擅长创建有效的学习评估工具。",
    "flashcards": "你是一个专业的学习卡片设计专家，擅长创建便于记忆的学习材料。",
    "outline": "你是一个专业的内容大纲设计专家，擅长创建逻辑清晰的结构框架。",
    "explanation": "你是一个专业的概念解释专家，擅长用简单易懂的方式解释复杂概念。",
}

_QA_REQUIREMENTS = """要求：
1. 回答要准确、有用、结构清晰
2. 根据问题复杂度调整回答深度
3. 提供相关的后续问题建议
4. 如果需要引用，请提供可靠来源
5. 使用中文回答"""


def response_style_prompt(style: str | None) -> str:
    """Instruction for a response style; unknown styles get the balanced default."""
    normalized = (style or "").strip().lower().replace("_", "-")
    return RESPONSE_STYLE_PROMPTS.get(normalized, DEFAULT_RESPONSE_STYLE_PROMPT)


def qa_system_prompt(options: Mapping[str, str], default_style: str | None = None) -> str:
    lines = [
        "你是一个专业的AI助手，专门回答用户的问题。请根据以下要求回答：",
        "",
        f"响应风格: {response_style_prompt(options.get('response_style') or default_style)}",
    ]
    if options.get("domain"):
        lines.append(f"专业领域: {options['domain']}")
    if options.get("context"):
        lines.append(f"上下文信息: {options['context']}")
    lines.extend(["", _QA_REQUIREMENTS])
    return "\n".join(lines)


def content_system_prompt(content_type: str | None) -> str:
    return CONTENT_TYPE_PROMPTS.get(content_type or "article", CONTENT_TYPE_PROMPTS["article"])


def content_user_prompt(topic: str, content_type: str, options: Mapping[str, str]) -> str:
    language = options.get("language") or CONTENT_DEFAULT_LANGUAGE
    lines = [
        f'请为主题"{topic}"生成{content_type}内容。',
        "",
        "要求：",
        f"- 难度级别：{options.get('difficulty') or CONTENT_DEFAULT_DIFFICULTY}",
        f"- 内容长度：{options.get('length') or CONTENT_DEFAULT_LENGTH}",
        f"- 写作风格：{options.get('style') or CONTENT_DEFAULT_STYLE}",
        f"- 语言：{'中文' if language == 'zh-CN' else '英文'}",
    ]
    if options.get("additional_requirements"):
        lines.append(f"- 额外要求：{options['additional_requirements']}")
    return "\n".join(lines)


__all__ = [
    "CONTENT_TYPE_PROMPTS",
    "DEFAULT_RESPONSE_STYLE_PROMPT",
    "RESPONSE_STYLE_PROMPTS",
    "content_system_prompt",
    "content_user_prompt",
    "qa_system_prompt",
    "response_style_prompt",
]
