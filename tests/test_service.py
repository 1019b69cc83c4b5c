from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import pytest
from pydantic import BaseModel

import ryandata_form_constraints as rfc
from ryandata_form_constraints import (
    ConstraintService,
    ControlDescriptor,
    FormControl,
    FormGroup,
    RyanDataConstraintError,
)
from ryandata_form_constraints.forms import model_fields
from tests.factories import LenientRequiredFactory, ValidByValueFactory


class PersonModel(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    age: Optional[int] = None


@dataclass
class PersonRecord:
    firstName: str
    lastName: str


class PlainPerson:
    def __init__(self, first_name: str) -> None:
        self.firstName = first_name
        self._secret = "hidden"


class TestManualValidation:
    def test_required_message(self) -> None:
        service = ConstraintService(
            {"Person": {"firstName": {"required": {"message": "First name is required."}}}}
        )
        assert service.validate("Person", "firstName", "") == {
            "required": {"message": "First name is required."}
        }
        assert service.validate("Person", "firstName", "John") is None

    def test_unconstrained_field_always_valid(self, service: ConstraintService) -> None:
        assert service.validate("Person", "middleName", None) is None
        assert service.validate("Unknown", "anything", "") is None

    def test_multiple_violations_reported_together(self, service: ConstraintService) -> None:
        errors = service.validate("Person", "firstName", "J")
        assert errors is not None
        assert list(errors) == ["size", "pattern"]
        assert errors["size"] == {
            "message": "First name must be 2 to 20 characters.",
            "min": 2,
            "max": 20,
        }

    def test_empty_value_only_reports_required(self, service: ConstraintService) -> None:
        assert service.validate("Person", "firstName", "") == {
            "required": {"message": "First name is required."}
        }

    def test_unknown_validator_fails_fast_with_location(self) -> None:
        service = ConstraintService({"Person": {"firstName": {"requird": {"message": "x"}}}})
        with pytest.raises(RyanDataConstraintError) as exc_info:
            service.validate("Person", "firstName", "John")
        error = exc_info.value
        assert error.type == "unknown_validator"
        assert error.context["type_name"] == "Person"
        assert error.context["field_name"] == "firstName"
        assert error.context["validator"] == "requird"
        assert "Person.firstName" in str(error)

    def test_malformed_config_is_a_configuration_error(self) -> None:
        service = ConstraintService({"Person": {"age": {"min": {"message": "no bound"}}}})
        with pytest.raises(RyanDataConstraintError) as exc_info:
            service.validate("Person", "age", 3)
        assert exc_info.value.type == "invalid_validator_config"
        assert "Person.age" in str(exc_info.value)
        assert "min" in str(exc_info.value)

    def test_custom_factory_needs_no_extra_wiring(self) -> None:
        service = ConstraintService()
        service.register_validator_factories([ValidByValueFactory()])
        service.set_constraints(
            {"Person": {"code": {"validByValue": {"value": "ok", "message": "Not ok."}}}}
        )
        assert service.validate("Person", "code", "ok") is None
        assert service.validate("Person", "code", "nope") == {
            "validByValue": {"message": "Not ok.", "value": "ok"}
        }

    def test_overriding_builtin_changes_behaviour(self, service: ConstraintService) -> None:
        service.register_validator_factory(LenientRequiredFactory())
        assert service.validate("Person", "lastName", "") is None

    def test_set_constraints_is_picked_up_without_caching(
        self, service: ConstraintService
    ) -> None:
        assert service.validate("Person", "lastName", "") is not None
        service.set_constraints({"Person": {}})
        assert service.validate("Person", "lastName", "") is None


class TestFormControlBuilder:
    def test_build_from_mapping(self, service: ConstraintService) -> None:
        controls = service.create_form_group_controls(
            {"firstName": "John", "lastName": "", "middleName": "Q"}, "Person"
        )
        assert set(controls) == {"firstName", "lastName", "middleName"}
        assert all(isinstance(c, ControlDescriptor) for c in controls.values())
        assert controls["firstName"].value == "John"
        assert controls["firstName"].errors is None
        assert controls["lastName"].errors == {"required": {"message": "Last name is required."}}

    def test_unconstrained_fields_get_passing_validator(self, service: ConstraintService) -> None:
        controls = service.create_form_group_controls({"middleName": ""}, "Person")
        assert controls["middleName"].validator("") is None
        assert controls["middleName"].is_valid

    def test_build_from_pydantic_model(self, service: ConstraintService) -> None:
        controls = service.create_form_group_controls(PersonModel(firstName="Al", age=-1), "Person")
        assert list(controls) == ["firstName", "lastName", "age"]
        assert controls["age"].errors == {"min": {"message": "Age cannot be negative.", "min": 0}}
        assert controls["firstName"].errors == {
            "pattern": {"message": "Letters only, at least 4.", "value": "[a-zA-Z]{4,}"}
        }

    def test_build_from_dataclass(self, service: ConstraintService) -> None:
        controls = service.create_form_group_controls(PersonRecord("John", "Smith"), "Person")
        assert controls["lastName"].value == "Smith"
        assert controls["lastName"].is_valid

    def test_build_from_plain_object_skips_private(self, service: ConstraintService) -> None:
        controls = service.create_form_group_controls(PlainPerson("John"), "Person")
        assert list(controls) == ["firstName"]

    def test_nested_values_are_leaves(self, service: ConstraintService) -> None:
        controls = service.create_form_group_controls(
            {"address": {"street": "Main"}}, "Person"
        )
        assert controls["address"].value == {"street": "Main"}
        assert controls["address"].is_valid

    def test_unknown_validator_raises_at_build_time(self) -> None:
        service = ConstraintService({"Person": {"firstName": {"nope": {}}}})
        with pytest.raises(RyanDataConstraintError):
            service.create_form_group_controls({"firstName": "John"}, "Person")

    def test_model_fields_rejects_objects_without_fields(self) -> None:
        with pytest.raises(TypeError):
            model_fields(42)

    def test_create_form_group(self, service: ConstraintService) -> None:
        group = service.create_form_group({"firstName": "John", "lastName": ""}, "Person")
        assert isinstance(group, FormGroup)
        assert not group.valid
        assert group.errors == {"lastName": {"required": {"message": "Last name is required."}}}
        group.get("lastName").set_value("Smith")
        assert group.valid
        assert group.value == {"firstName": "John", "lastName": "Smith"}


class TestValidatorAttacher:
    def test_attach_keeps_existing_validator(self) -> None:
        service = ConstraintService(
            {"Person": {"firstName": {"pattern": {"value": "[a-z]+", "message": "Lowercase."}}}}
        )

        def no_bob(value: Any):
            return {"noBob": {"message": "No Bob."}} if value == "bob" else None

        group = FormGroup({"firstName": FormControl("bob", validator=no_bob)})
        service.add_validators(group, "Person")

        control = group.get("firstName")
        assert control.errors == {"noBob": {"message": "No Bob."}}
        control.set_value("Bob")
        assert control.errors == {"pattern": {"message": "Lowercase.", "value": "[a-z]+"}}
        control.set_value("alice")
        assert control.errors is None

    def test_attach_without_existing_validator(self, service: ConstraintService) -> None:
        group = FormGroup.from_values({"lastName": "", "middleName": ""})
        service.add_validators(group, "Person")
        assert group.get("lastName").errors == {"required": {"message": "Last name is required."}}
        assert group.get("middleName").validator is None

    def test_attach_does_not_change_values(self, service: ConstraintService) -> None:
        group = FormGroup.from_values({"firstName": "J", "age": 200})
        service.add_validators(group, "Person")
        assert group.value == {"firstName": "J", "age": 200}
        assert set(group.errors) == {"firstName", "age"}

    def test_attach_works_with_any_control_tree(self, service: ConstraintService) -> None:
        class Control:
            def __init__(self, value: Any) -> None:
                self.value = value
                self.validator = None

        class Tree(dict):
            pass

        tree = Tree(lastName=Control(""))
        service.add_validators(tree, "Person")
        assert tree["lastName"].validator("") == {
            "required": {"message": "Last name is required."}
        }

    def test_attach_twice_composes_twice(self, service: ConstraintService) -> None:
        group = FormGroup.from_values({"lastName": ""})
        service.add_validators(group, "Person")
        service.add_validators(group, "Person")
        assert group.get("lastName").errors == {"required": {"message": "Last name is required."}}


class TestModelValidation:
    def test_validate_model_collects_errors(self, service: ConstraintService) -> None:
        result = service.validate_model({"firstName": "", "lastName": "", "age": 20}, "Person")
        assert not result.is_valid
        messages = sorted(error.message for error in result.errors)
        assert messages == ["First name is required.", "Last name is required."]

    def test_validate_model_valid(self, service: ConstraintService) -> None:
        result = service.validate_model({"firstName": "John", "lastName": "Smith"}, "Person")
        assert result.is_valid

    def test_message_falls_back_to_validator_name(self) -> None:
        service = ConstraintService({"Person": {"lastName": {"required": {}}}})
        result = service.validate_model({"lastName": None}, "Person")
        assert [error.message for error in result.errors] == ["required"]


class TestConfiguration:
    def test_load_constraints_from_json_text(self) -> None:
        service = ConstraintService()
        service.load_constraints('{"Person": {"lastName": {"required": {"message": "x"}}}}')
        assert service.validate("Person", "lastName", None) == {"required": {"message": "x"}}

    def test_load_constraints_from_file(self, tmp_path: Path, person_constraints) -> None:
        path = tmp_path / "constraints.json"
        path.write_text(json.dumps(person_constraints), encoding="utf-8")
        service = ConstraintService(path)
        assert service.constraint_registry.to_dict() == person_constraints

    def test_invalid_json_is_a_spec_error(self) -> None:
        with pytest.raises(RyanDataConstraintError) as exc_info:
            ConstraintService("{not json")
        assert exc_info.value.type == "invalid_constraint_spec"

    def test_check_constraints_reports_every_bad_field(self) -> None:
        service = ConstraintService(
            {
                "Person": {
                    "firstName": {"required": {"message": "ok"}},
                    "lastName": {"requird": {}},
                    "age": {"max": {"max": "ten"}},
                }
            }
        )
        errors = service.check_constraints()
        assert [e.type for e in errors] == ["unknown_validator", "invalid_validator_config"]

    def test_check_constraints_clean(self, service: ConstraintService) -> None:
        assert service.check_constraints() == []

    def test_shared_registries(self, service: ConstraintService) -> None:
        other = ConstraintService(
            constraint_registry=service.constraint_registry,
            factory_registry=service.factory_registry,
        )
        other.register_validator_factory(ValidByValueFactory())
        assert "validByValue" in service.available_validators()


class TestDefaultService:
    def test_module_level_functions(self) -> None:
        rfc.set_constraints({"Person": {"lastName": {"required": {"message": "Required."}}}})
        rfc.register_validator_factories([ValidByValueFactory()])
        assert rfc.validate("Person", "lastName", "") == {"required": {"message": "Required."}}
        controls = rfc.create_form_group_controls({"lastName": "Smith"}, "Person")
        assert controls["lastName"].is_valid
        group = FormGroup.from_values({"lastName": ""})
        rfc.add_validators(group, "Person")
        assert not group.valid

    def test_default_service_is_shared(self) -> None:
        assert rfc.get_default_service() is rfc.get_default_service()

    def test_default_service_reads_env_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "constraints.json"
        path.write_text(json.dumps({"Person": {"lastName": {"required": {}}}}), encoding="utf-8")
        monkeypatch.setenv("RYANDATA_CONSTRAINTS_FILE", str(path))
        rfc.reset_default_service()
        assert rfc.validate("Person", "lastName", None) == {"required": {"message": None}}
