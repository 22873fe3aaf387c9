"""Unit tests for the bind → validate → decide pipeline."""

from __future__ import annotations

import pytest

from tinyrest import (
    BindingError,
    NotBlank,
    Property,
    PropertyType,
    RequestHandler,
    RequestValidationError,
    Rule,
    TransferObject,
)


class NameIn(TransferObject):
    first_name = Property("firstName", rules=[Rule(NotBlank(), groups=("Default", "GroupA"))])
    last_name = Property("lastName", rules=[Rule(NotBlank(), groups=("GroupB",))])
    aliases = Property(type=PropertyType.ARRAY)


@pytest.fixture()
def handler() -> RequestHandler:
    return RequestHandler()


class TestRequestHandler:
    def test_validation(self, request_context, handler):
        """A blank first name fails the Default group."""
        with request_context("/people", query_string={"firstName": ""}) as ctx:
            with pytest.raises(RequestValidationError) as exc_info:
                handler.handle_transfer_object(ctx.request, NameIn)

        assert [v.field for v in exc_info.value.violations] == ["firstName"]

    def test_validation_groups(self, request_context, handler):
        """Configured groups replace Default: the missing last name fails."""
        with request_context("/people", query_string={"firstName": "John"}) as ctx:
            handler.set_validation_groups(["GroupB"])
            with pytest.raises(RequestValidationError) as exc_info:
                handler.handle_transfer_object(ctx.request, NameIn)

        assert exc_info.value.to_list() == [
            {"field": "lastName", "message": NotBlank.default_message}
        ]

    def test_default_groups_pass(self, handler):
        obj = handler.handle_transfer_object({"firstName": "John"}, NameIn)

        assert isinstance(obj, NameIn)
        assert obj.first_name == "John"
        assert obj.last_name is None

    def test_per_call_groups_override_stored_ones(self, handler):
        handler.set_validation_groups(["GroupB"])

        obj = handler.handle_transfer_object({"firstName": "John"}, NameIn, groups=["GroupA"])

        assert obj.first_name == "John"
        assert handler.validation_groups == ("GroupB",)

    def test_set_validation_groups_chains_and_resets(self, handler):
        assert handler.set_validation_groups(["GroupA"]) is handler
        assert handler.validation_groups == ("GroupA",)

        handler.set_validation_groups([])
        assert handler.validation_groups == ("Default",)

    def test_reports_every_violation(self, handler):
        with pytest.raises(RequestValidationError) as exc_info:
            handler.handle_transfer_object({}, NameIn, groups=["GroupA", "GroupB"])

        assert [v.field for v in exc_info.value.violations] == ["firstName", "lastName"]

    def test_binding_error_propagates_before_validation(self, handler):
        with pytest.raises(BindingError):
            handler.handle_transfer_object({"firstName": "", "aliases": "solo"}, NameIn)

    def test_instance_is_populated_in_place(self, handler):
        target = NameIn()

        result = handler.handle_transfer_object({"firstName": "Ada"}, target)

        assert result is target
        assert target.first_name == "Ada"

    def test_class_gets_a_fresh_instance_per_call(self, handler):
        first = handler.handle_transfer_object({"firstName": "Ada"}, NameIn)
        second = handler.handle_transfer_object({"firstName": "Grace"}, NameIn)

        assert first is not second
        assert first.first_name == "Ada"
