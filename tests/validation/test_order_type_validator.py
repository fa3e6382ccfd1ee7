"""Tests for OrderTypeValidator — the four save-time rules."""

from __future__ import annotations

import pytest

from ordertypes.domain.order_types import ConceptClass, OrderType
from ordertypes.validation.errors import ValidationErrors
from ordertypes.validation.messages import ErrorCode
from tests.conftest import make_validator

C1 = ConceptClass(name="C1")
C2 = ConceptClass(name="C2")
C3 = ConceptClass(name="C3")


def _validate(candidate: object, *population: OrderType | None) -> ValidationErrors:
    validator, _ = make_validator(*population)
    errors = ValidationErrors("OrderType")
    validator.validate(candidate, errors)
    return errors


class TestSupports:
    def test_supports_order_type(self) -> None:
        validator, _ = make_validator()
        assert validator.supports(OrderType)

    def test_supports_subclass(self) -> None:
        class SpecialOrderType(OrderType):
            pass

        validator, _ = make_validator()
        assert validator.supports(SpecialOrderType)

    def test_rejects_other_kinds(self) -> None:
        validator, _ = make_validator()
        assert not validator.supports(ConceptClass)
        assert not validator.supports(str)


class TestContractViolations:
    def test_none_raises(self) -> None:
        validator, _ = make_validator()
        errors = ValidationErrors()
        with pytest.raises(TypeError):
            validator.validate(None, errors)
        assert not errors.has_errors

    @pytest.mark.parametrize("obj", [C1, "Lab", {"name": "Lab"}, 42])
    def test_wrong_kind_raises(self, obj: object) -> None:
        validator, _ = make_validator()
        errors = ValidationErrors()
        with pytest.raises(TypeError):
            validator.validate(obj, errors)
        assert errors.error_count == 0


class TestNamePresence:
    @pytest.mark.parametrize("name", [None, "", "   ", "\t\n"])
    def test_missing_name_rejected(self, name: str | None) -> None:
        errors = _validate(OrderType(name=name))
        assert errors.error_count == 1
        rejection = errors.rejections[0]
        assert rejection.field == "name"
        assert rejection.code == ErrorCode.NAME_REQUIRED

    def test_missing_name_suppresses_other_rules(self) -> None:
        """A blank name stops validation even when other rules would fail."""
        stored = OrderType(name="  ")
        other = OrderType(name="Other", concept_classes=(C1,))
        candidate = stored.model_copy(update={"parent": stored, "concept_classes": (C1,)})
        validator, lookup = make_validator(other, OrderType(name="  "))

        errors = ValidationErrors()
        validator.validate(candidate, errors)

        assert errors.error_count == 1
        assert errors.rejections[0].field == "name"
        assert lookup.list_calls == []

    def test_empty_scenario(self) -> None:
        errors = _validate(OrderType(name="", parent=None))
        assert [(r.field, r.code) for r in errors.rejections] == [("name", "error.name")]


class TestParentCycle:
    def test_self_parent_rejected(self) -> None:
        stored = OrderType(name="Lab")
        candidate = stored.model_copy(update={"parent": stored})
        errors = _validate(candidate, stored)
        parent_errors = errors.field_rejections("parent")
        assert len(parent_errors) == 1
        assert parent_errors[0].code == ErrorCode.PARENT_AMONG_DESCENDANTS
        assert parent_errors[0].args == ("Lab",)
        assert parent_errors[0].default_message == "Parent of Lab is among its descendants"

    def test_direct_child_as_parent_rejected(self) -> None:
        stored = OrderType(name="Lab")
        child = OrderType(name="Chemistry", parent=stored)
        candidate = stored.model_copy(update={"parent": child})
        errors = _validate(candidate, stored, child)
        assert len(errors.field_rejections("parent")) == 1
        assert errors.field_rejections("name") == []

    def test_transitive_descendant_as_parent_rejected(self) -> None:
        stored = OrderType(name="Lab")
        child = OrderType(name="Chemistry", parent=stored)
        grandchild = OrderType(name="Electrolytes", parent=child)
        candidate = stored.model_copy(update={"parent": grandchild})
        errors = _validate(candidate, stored, child, grandchild)
        assert errors.error_count == 1
        assert errors.rejections[0].field == "parent"

    def test_unrelated_parent_accepted(self) -> None:
        root = OrderType(name="Test Order")
        candidate = OrderType(name="Lab", parent=root)
        assert not _validate(candidate, root).has_errors

    def test_existing_ancestor_as_parent_accepted(self) -> None:
        root = OrderType(name="Test Order")
        stored = OrderType(name="Lab", parent=root)
        candidate = stored.model_copy(update={"description": "edited"})
        assert not _validate(candidate, root, stored).has_errors

    def test_cycle_does_not_stop_later_rules(self) -> None:
        stored = OrderType(name="Lab")
        child = OrderType(name="Chemistry", parent=stored)
        taken = OrderType(name="Radiology")
        candidate = stored.model_copy(update={"name": "Radiology", "parent": child})
        errors = _validate(candidate, stored, child, taken)
        assert {r.field for r in errors.rejections} == {"parent", "name"}


class TestNameUniqueness:
    def test_duplicate_name_rejected(self) -> None:
        errors = _validate(OrderType(name="Lab"), OrderType(name="Lab"))
        assert errors.error_count == 1
        rejection = errors.rejections[0]
        assert rejection.field == "name"
        assert rejection.code == ErrorCode.DUPLICATE_NAME
        assert rejection.default_message == "Duplicate order type name: Lab"
        assert rejection.args == ("Lab",)

    def test_resaving_same_entity_accepted(self) -> None:
        stored = OrderType(name="Lab", description="old")
        candidate = stored.model_copy(update={"description": "new"})
        assert not _validate(candidate, stored).has_errors

    def test_value_equal_but_distinct_entity_rejected(self) -> None:
        """Identity, not field equality, decides whether a name collides."""
        stored = OrderType(name="Lab")
        lookalike = OrderType(name="Lab")
        assert stored.name == lookalike.name
        errors = _validate(lookalike, stored)
        assert len(errors.field_rejections("name")) == 1

    def test_unique_name_accepted(self) -> None:
        assert not _validate(OrderType(name="Lab"), OrderType(name="Drug")).has_errors


class TestConceptClassExclusivity:
    def test_shared_tag_rejected_at_candidate_index(self) -> None:
        other = OrderType(name="Radiology", concept_classes=(C2,))
        candidate = OrderType(name="Lab", concept_classes=(C1, C2))
        errors = _validate(candidate, other)
        assert errors.error_count == 1
        rejection = errors.rejections[0]
        assert rejection.field == "concept_classes[1]"
        assert rejection.code == ErrorCode.DUPLICATE_CONCEPT_CLASS
        assert rejection.args == ("C2", "Lab")

    def test_index_ignores_position_in_other_list(self) -> None:
        other = OrderType(name="Radiology", concept_classes=(C3, C2, C1))
        candidate = OrderType(name="Lab", concept_classes=(C1,))
        errors = _validate(candidate, other)
        assert [r.field for r in errors.rejections] == ["concept_classes[0]"]

    def test_retired_owner_still_conflicts(self) -> None:
        other = OrderType(name="Old", concept_classes=(C1,), retired=True, retire_reason="gone")
        candidate = OrderType(name="Lab", concept_classes=(C1,))
        validator, lookup = make_validator(other)
        errors = ValidationErrors()
        validator.validate(candidate, errors)
        assert len(errors.field_rejections("concept_classes[0]")) == 1
        assert lookup.list_calls == [True]

    def test_own_prior_state_skipped(self) -> None:
        stored = OrderType(name="Lab", concept_classes=(C1, C2))
        candidate = stored.model_copy()
        assert not _validate(candidate, stored).has_errors

    def test_null_entries_skipped(self) -> None:
        other = OrderType(name="Radiology", concept_classes=(None, C2))
        candidate = OrderType(name="Lab", concept_classes=(None, C2))
        errors = _validate(candidate, None, other)
        assert [r.field for r in errors.rejections] == ["concept_classes[1]"]

    def test_each_conflicting_owner_reported(self) -> None:
        first = OrderType(name="A", concept_classes=(C1,))
        second = OrderType(name="B", concept_classes=(C2,))
        candidate = OrderType(name="Lab", concept_classes=(C1, C2))
        errors = _validate(candidate, first, second)
        assert sorted(r.field for r in errors.rejections) == [
            "concept_classes[0]",
            "concept_classes[1]",
        ]

    def test_repeated_tag_rejected_at_every_position(self) -> None:
        other = OrderType(name="Radiology", concept_classes=(C1,))
        candidate = OrderType(name="Lab", concept_classes=(C1, C2, C1))
        errors = _validate(candidate, other)
        assert [r.field for r in errors.rejections] == [
            "concept_classes[0]",
            "concept_classes[2]",
        ]

    def test_same_named_tag_with_other_identity_is_distinct(self) -> None:
        other = OrderType(name="Radiology", concept_classes=(ConceptClass(name="C1"),))
        candidate = OrderType(name="Lab", concept_classes=(C1,))
        assert not _validate(candidate, other).has_errors


class TestScenarios:
    def test_new_order_type_all_fields_valid(self) -> None:
        root = OrderType(name="Test Order", concept_classes=(C3,))
        candidate = OrderType(name="Lab", parent=root, concept_classes=(C1, C2))
        assert not _validate(candidate, root).has_errors

    def test_existing_order_type_resubmitted_unchanged(self) -> None:
        root = OrderType(name="Test Order")
        stored = OrderType(name="Lab", parent=root, concept_classes=(C1, C2))
        sibling = OrderType(name="Radiology", parent=root, concept_classes=(C3,))
        errors = _validate(stored.model_copy(), root, stored, sibling)
        assert errors.error_count == 0

    def test_all_independent_rules_accumulate(self) -> None:
        stored = OrderType(name="Lab")
        child = OrderType(name="Chemistry", parent=stored, concept_classes=(C1,))
        candidate = stored.model_copy(
            update={"name": "Chemistry", "parent": child, "concept_classes": (C1,)}
        )
        errors = _validate(candidate, stored, child)
        assert {r.field for r in errors.rejections} == {"parent", "name", "concept_classes[0]"}
