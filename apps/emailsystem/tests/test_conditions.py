"""Tests for trigger condition evaluation."""

import pytest

from apps.emailsystem.conditions import (
    EqualsCondition,
    ExistsCondition,
    GreaterThanCondition,
    UnsupportedCondition,
    matches_conditions,
    parse_condition,
    to_number,
)


def cond(field, operator, value=""):
    return {"field": field, "operator": operator, "value": value}


class TestParseCondition:
    def test_builds_typed_condition(self):
        condition = parse_condition(cond("status", "==", "confirmed"))
        assert condition == EqualsCondition(field="status", value="confirmed")

    def test_unknown_operator_is_unsupported(self):
        condition = parse_condition(cond("status", "startsWith", "c"))
        assert isinstance(condition, UnsupportedCondition)
        assert condition.raw_operator == "startsWith"

    def test_missing_field_is_unsupported(self):
        assert isinstance(parse_condition({"operator": "==", "value": "x"}), UnsupportedCondition)

    def test_non_mapping_is_unsupported(self):
        assert isinstance(parse_condition("status == confirmed"), UnsupportedCondition)


class TestToNumber:
    @pytest.mark.parametrize("value,expected", [(3, 3.0), ("2.5", 2.5), (" 10 ", 10.0), ("-1", -1.0)])
    def test_numeric_values(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "nan", "inf", True, [1], {"a": 1}])
    def test_non_numeric_values(self, value):
        assert to_number(value) is None


class TestMatchesConditions:
    document = {
        "status": "confirmed",
        "balance": 500,
        "deposit_paid": True,
        "bike_model": "KTM 690 Enduro",
        "phone": "",
        "pillions": 0,
        "notes": None,
    }

    def test_empty_list_matches(self):
        assert matches_conditions(self.document, []) is True
        assert matches_conditions(self.document, None) is True

    @pytest.mark.parametrize(
        "condition,expected",
        [
            (cond("status", "==", "confirmed"), True),
            (cond("status", "==", "pending"), False),
            (cond("status", "!=", "pending"), True),
            (cond("balance", "==", "500"), True),
            (cond("deposit_paid", "==", "true"), True),
            (cond("missing", "==", ""), True),
            (cond("missing", "!=", ""), False),
            (cond("balance", ">", "0"), True),
            (cond("balance", ">", "500"), False),
            (cond("balance", "<", "1000"), True),
            (cond("status", ">", "0"), False),
            (cond("status", "<", "0"), False),
            (cond("balance", ">", "abc"), False),
            (cond("missing", "<", "10"), False),
            (cond("bike_model", "contains", "KTM"), True),
            (cond("bike_model", "contains", "Honda"), False),
            (cond("missing", "contains", ""), True),
        ],
    )
    def test_operator_truth_table(self, condition, expected):
        assert matches_conditions(self.document, [condition]) is expected

    @pytest.mark.parametrize(
        "field,value,expected",
        [
            ("status", "true", True),
            ("phone", "true", True),
            ("pillions", "true", True),
            ("deposit_paid", "true", True),
            ("notes", "true", False),
            ("missing", "true", False),
            ("missing", "false", True),
            ("notes", "false", True),
            ("pillions", "false", False),
            ("status", "maybe", False),
        ],
    )
    def test_exists_checks_presence_not_truthiness(self, field, value, expected):
        assert ExistsCondition(field=field, value=value).evaluate(self.document) is expected

    def test_all_conditions_must_hold(self):
        conditions = [cond("status", "==", "confirmed"), cond("balance", ">", "1000")]
        assert matches_conditions(self.document, conditions) is False

    def test_unknown_operator_never_matches(self):
        conditions = [cond("status", "==", "confirmed"), cond("status", "matches", ".*")]
        assert matches_conditions(self.document, conditions) is False

    def test_short_circuits_after_first_failure(self):
        class ExplodingCondition(GreaterThanCondition):
            def evaluate(self, document):
                raise AssertionError("evaluated after a failing condition")

        later = ExplodingCondition(field="balance", value="0")
        conditions = [cond("status", "==", "pending"), later]
        assert matches_conditions(self.document, conditions) is False

    def test_accepts_typed_conditions(self):
        assert matches_conditions(self.document, [GreaterThanCondition(field="balance", value="100")]) is True
