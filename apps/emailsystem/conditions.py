"""Trigger condition evaluation.

Conditions are stored as ``{"field", "operator", "value"}`` dicts whose value is
always text. ``parse_condition`` turns each one into a typed variant so every
operator applies an explicit coercion rule:

=============  ==========================================================
operator       rule
=============  ==========================================================
``==``/``!=``  field coerced with ``stringify`` and compared as text
``>``/``<``    both sides coerced with ``to_number``; if either side is
               not a finite number the condition fails
``contains``   ``value`` must be a substring of the stringified field
``exists``     ``"true"``: field present and not ``None``;
               ``"false"``: field absent or ``None``. ``0``, ``""`` and
               ``False`` count as present.
anything else  never matches
=============  ==========================================================

Fields are looked up with a single-level key; dotted paths are not walked.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar

from .constants import ConditionOperator
from .rendering import stringify

logger = logging.getLogger(__name__)


def to_number(value: Any) -> float | None:
    """Coerce a value to a finite float, or ``None`` when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Condition:
    field: str
    value: str

    operator: ClassVar[str] = ""

    def evaluate(self, document: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def field_value(self, document: Mapping[str, Any]) -> Any:
        return document.get(self.field)


@dataclass(frozen=True)
class EqualsCondition(Condition):
    operator: ClassVar[str] = ConditionOperator.EQUALS

    def evaluate(self, document):
        # Absent fields stringify to "", so `== ""` matches a missing field
        return stringify(self.field_value(document)) == self.value


@dataclass(frozen=True)
class NotEqualsCondition(Condition):
    operator: ClassVar[str] = ConditionOperator.NOT_EQUALS

    def evaluate(self, document):
        return stringify(self.field_value(document)) != self.value


@dataclass(frozen=True)
class GreaterThanCondition(Condition):
    operator: ClassVar[str] = ConditionOperator.GREATER_THAN

    def evaluate(self, document):
        left, right = to_number(self.field_value(document)), to_number(self.value)
        if left is None or right is None:
            return False
        return left > right


@dataclass(frozen=True)
class LessThanCondition(Condition):
    operator: ClassVar[str] = ConditionOperator.LESS_THAN

    def evaluate(self, document):
        left, right = to_number(self.field_value(document)), to_number(self.value)
        if left is None or right is None:
            return False
        return left < right


@dataclass(frozen=True)
class ContainsCondition(Condition):
    operator: ClassVar[str] = ConditionOperator.CONTAINS

    def evaluate(self, document):
        return self.value in stringify(self.field_value(document))


@dataclass(frozen=True)
class ExistsCondition(Condition):
    operator: ClassVar[str] = ConditionOperator.EXISTS

    def evaluate(self, document):
        present = self.field_value(document) is not None
        if self.value == "true":
            return present
        if self.value == "false":
            return not present
        return False


@dataclass(frozen=True)
class UnsupportedCondition(Condition):
    """Placeholder for an unknown operator or malformed entry; never matches."""

    raw_operator: str = ""

    def evaluate(self, document):
        return False


CONDITION_TYPES: dict[str, type[Condition]] = {
    cls.operator: cls
    for cls in (
        EqualsCondition,
        NotEqualsCondition,
        GreaterThanCondition,
        LessThanCondition,
        ContainsCondition,
        ExistsCondition,
    )
}


def parse_condition(raw: Mapping[str, Any] | Condition) -> Condition:
    """Build the typed condition for a stored ``{field, operator, value}`` dict."""
    if isinstance(raw, Condition):
        return raw
    if not isinstance(raw, Mapping):
        return UnsupportedCondition(field="", value="", raw_operator=repr(raw))

    field = raw.get("field")
    operator = stringify(raw.get("operator"))
    value = stringify(raw.get("value"))
    condition_cls = CONDITION_TYPES.get(operator)
    if not isinstance(field, str) or not field or condition_cls is None:
        return UnsupportedCondition(field=field if isinstance(field, str) else "", value=value, raw_operator=operator)
    return condition_cls(field=field, value=value)


def matches_conditions(
    document: Mapping[str, Any],
    conditions: Iterable[Mapping[str, Any] | Condition] | None,
) -> bool:
    """Return True when every condition holds for the document.

    An empty or missing list always matches. Evaluation stops at the first
    failing condition.
    """
    if not conditions:
        return True

    for raw in conditions:
        condition = parse_condition(raw)
        if isinstance(condition, UnsupportedCondition):
            logger.warning(
                f"Unsupported trigger condition operator={condition.raw_operator!r} "
                f"field={condition.field!r}; treating as no match"
            )
            return False
        if not condition.evaluate(document):
            return False
    return True
