"""Template rendering engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError as JinjaTemplateError

from ..core.exceptions import TemplateError
from ..core.logging import get_logger

logger = get_logger(__name__)

# Only {{ }} placeholders are active. Block and comment tags are moved to
# delimiters that do not occur in file content, so shell like ${#ARGS[@]} or
# literal {% ... %} text passes through unchanged.
_env = Environment(
    block_start_string="\x00{%",
    block_end_string="%}\x00",
    comment_start_string="\x00{#",
    comment_end_string="#}\x00",
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)


def _as_mapping(context: Any) -> Mapping:
    if context is None:
        return {}
    if isinstance(context, Mapping):
        return context
    # Plain objects expose their attributes as template variables
    try:
        attrs = vars(context)
    except TypeError as e:
        raise TemplateError(
            f"Template context must be a mapping or an object with attributes, got {type(context).__name__}"
        ) from e
    return {k: v for k, v in attrs.items() if not k.startswith("_")}


def render(text: str, context: Any = None) -> str:
    """Render ``{{ }}`` placeholders in text against context.

    Args:
        text: Template text
        context: Mapping or object whose attributes are the template variables

    Returns:
        Rendered text

    Raises:
        TemplateError: On undefined variables, malformed placeholders or an
            unusable context
    """
    if not text:
        return text

    variables = _as_mapping(context)
    try:
        return _env.from_string(text).render(variables)
    except JinjaTemplateError as e:
        logger.debug(f"Template rendering failed: {text!r}")
        raise TemplateError(f"Failed to render template {text!r}: {e}") from e
