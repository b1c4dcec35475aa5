"""Placeholder rendering and render-context mapping.

Templates use ``{{path.to.field}}`` placeholders. Unlike the Django template
language, an unresolved placeholder is left in the output verbatim so missing
data is visible in previews instead of silently disappearing.
"""

import json
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from .constants import EMAIL_LAYOUT_TEMPLATE

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+(?:\.\w+)*)\}\}", re.ASCII)
TEMPLATE_EXPRESSION_MARKER = "{{"

_MISSING = object()


def stringify(value: Any) -> str:
    """Coerce a document value to text for rendering and string comparisons.

    ``None`` becomes ``""``, booleans become ``"true"``/``"false"``, integral
    floats drop their fraction, dates use ISO 8601 and containers become
    compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, cls=DjangoJSONEncoder, separators=(",", ":"))
    return str(value)


def resolve_path(context: Any, path: str) -> Any:
    """Walk a dotted path through nested mappings and sequences.

    Returns the private ``_MISSING`` sentinel when any step cannot be resolved.
    """
    value = context
    for key in path.split("."):
        if isinstance(value, Mapping):
            if key not in value:
                return _MISSING
            value = value[key]
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if not key.isdigit() or int(key) >= len(value):
                return _MISSING
            value = value[int(key)]
        else:
            return _MISSING
    return value


def render_template(template: str, context: Mapping[str, Any] | None) -> str:
    """Substitute ``{{path}}`` placeholders from ``context``.

    Pure function: placeholders that cannot be resolved, or resolve to ``None``,
    are kept as their original text.
    """
    if not template:
        return template or ""

    data = context or {}

    def _replace(match: re.Match) -> str:
        value = resolve_path(data, match.group(1))
        if value is _MISSING or value is None:
            return match.group(0)
        return stringify(value)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def build_email_data(document: Mapping[str, Any], data_mapping: Mapping[str, str] | None) -> dict[str, Any]:
    """Build a template render context from a document.

    Each mapping value is either a document field name, copied as-is (missing
    or ``None`` becomes ``""``), or a template expression containing ``{{``
    that is rendered against the document first.
    """
    result: dict[str, Any] = {}
    for template_var, source_expr in (data_mapping or {}).items():
        source = source_expr if isinstance(source_expr, str) else str(source_expr)
        if TEMPLATE_EXPRESSION_MARKER in source:
            result[template_var] = render_template(source, document)
        else:
            value = document.get(source)
            result[template_var] = "" if value is None else value
    return result


def wrap_in_email_layout(body_html: str) -> str:
    """Wrap a rendered body in the branded HTML header/footer layout."""
    return render_to_string(
        EMAIL_LAYOUT_TEMPLATE,
        {
            "body": mark_safe(body_html),  # nosec B308 - body is admin-authored template HTML
            "title": settings.EMAIL_LAYOUT_TITLE,
            "subtitle": settings.EMAIL_LAYOUT_SUBTITLE,
        },
    )
