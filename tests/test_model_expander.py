import logging
from pathlib import Path

import pytest

from api_client_gen.errors import (
    DanglingReferenceError,
    DuplicateEnumNameError,
    MissingEnumValuesError,
    UnsupportedAllOfError,
    UnsupportedTypeError,
)
from api_client_gen.generator.models import ModelExpander, expand_models, sort_properties
from api_client_gen.ir import EnumModel, ObjectModel, Property
from api_client_gen.parser.swagger import parse_mapping, parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


def _document(schemas: dict):
    return parse_mapping({"info": {"title": "test"}, "components": {"schemas": schemas}})


def _by_name(models):
    return {model.name: model for model in models}


class TestPetstoreModels:
    def setup_method(self):
        self.models = _by_name(expand_models(parse_openapi(FIXTURES / "petstore.yaml")))

    def test_rendered_schemas(self):
        # Weight is a bare number schema and produces no model
        assert list(self.models) == ["NewPet", "PetIdentity", "Pet", "Species", "Tags"]

    def test_object_properties_sorted_with_optionality(self):
        new_pet = self.models["NewPet"]
        assert isinstance(new_pet, ObjectModel)
        assert new_pet.description == "A pet to be created"
        assert [(p.name, p.type, p.optional) for p in new_pet.properties] == [
            ("name", "String", False),
            ("status", "NewPetStatus", True),
            ("tag", "String", True),
        ]

    def test_nested_enum_from_description(self):
        new_pet = self.models["NewPet"]
        assert len(new_pet.nested_enums) == 1
        status = new_pet.nested_enums[0]
        assert status.name == "NewPetStatus"
        assert status.description == "Pet status in the store"
        assert [(c.name, c.description) for c in status.cases] == [
            ("available", "Ready for adoption"),
            ("pending", "Adoption in progress"),
            ("sold", "Already adopted"),
        ]

    def test_all_of_flattens_into_object(self):
        pet = self.models["Pet"]
        assert [p.name for p in pet.properties] == ["id", "name", "status", "tag"]
        assert {p.name for p in pet.properties if not p.optional} == {"id", "name"}
        assert pet.description == "Description not provided"
        assert pet.nested_enums[0].name == "PetStatus"

    def test_top_level_string_enum(self):
        species = self.models["Species"]
        assert isinstance(species, EnumModel)
        assert species.description == "Kind of animal"
        assert [c.name for c in species.cases] == ["cat", "dog", "bird"]
        assert {c.description for c in species.cases} == {"Description not provided"}

    def test_untyped_property_is_dropped(self):
        tags = self.models["Tags"]
        assert [(p.name, p.type) for p in tags.properties] == [
            ("friendly", "Bool"),
            ("labels", "[String]"),
            ("photo", "Data"),
            ("scores", "[Float]"),
        ]


class TestModelExpanderRules:
    def test_missing_enum_values_is_fatal(self):
        document = _document({"Name": {"type": "string"}})
        with pytest.raises(MissingEnumValuesError, match="Name"):
            expand_models(document)

    def test_empty_enum_values_is_fatal(self):
        document = _document({"Name": {"type": "string", "enum": []}})
        with pytest.raises(MissingEnumValuesError):
            expand_models(document)

    def test_unsupported_all_of(self):
        document = _document({"Mixed": {"allOf": [{"type": "object"}]}})
        with pytest.raises(UnsupportedAllOfError):
            expand_models(document)

    def test_ref_schema_with_same_name_is_empty_object(self):
        document = _document({"Foo": {"$ref": "#/components/schemas/Foo"}})
        models = expand_models(document)
        assert models == [ObjectModel(name="Foo", properties=[], nested_enums=[])]

    def test_ref_alias_copies_target(self):
        document = _document({
            "Target": {"type": "object", "required": ["id"], "properties": {"id": {"type": "integer"}}},
            "Alias": {"$ref": "#/components/schemas/Target"},
        })
        alias = _by_name(expand_models(document))["Alias"]
        assert [(p.name, p.type, p.optional) for p in alias.properties] == [("id", "Int", False)]

    def test_dangling_ref_is_fatal_by_default(self):
        document = _document({"Alias": {"$ref": "#/components/schemas/Missing"}})
        with pytest.raises(DanglingReferenceError):
            expand_models(document)

    def test_dangling_ref_allowed_gives_empty_object(self):
        document = _document({"Alias": {"$ref": "#/components/schemas/Missing"}})
        models = expand_models(document, allow_dangling_refs=True)
        assert models[0].name == "Alias"
        assert models[0].properties == []

    def test_unsupported_property_dropped_with_warning(self, caplog):
        document = _document({
            "Thing": {
                "type": "object",
                "properties": {
                    "ok": {"type": "boolean"},
                    "weird": {"type": "number", "enum": [0.5, 1.5]},
                    "nested": {"type": "object"},
                },
            }
        })
        with caplog.at_level(logging.WARNING, logger="api_client_gen.models"):
            models = expand_models(document)
        assert [p.name for p in models[0].properties] == ["ok"]
        assert "Thing.weird" in caplog.text
        assert "Thing.nested" in caplog.text

    def test_strict_properties_fails_on_unsupported(self):
        document = _document({
            "Thing": {"type": "object", "properties": {"weird": {"type": "number", "enum": [1]}}}
        })
        with pytest.raises(UnsupportedTypeError, match="Thing.weird"):
            expand_models(document, strict_properties=True)

    def test_strict_properties_fails_on_untyped(self):
        document = _document({"Thing": {"type": "object", "properties": {"x": {}}}})
        with pytest.raises(UnsupportedTypeError, match="Thing.x"):
            expand_models(document, strict_properties=True)

    def test_integer_enum_maps_to_int(self):
        document = _document({
            "Thing": {
                "type": "object",
                "properties": {
                    "level": {"type": "integer", "enum": [1, 2, 3]},
                    "ok": {"type": "boolean"},
                },
            }
        })
        models = expand_models(document)
        assert [(p.name, p.type) for p in models[0].properties] == [("level", "Int"), ("ok", "Bool")]
        assert models[0].nested_enums == []

    def test_number_enum_property_dropped(self, caplog):
        document = _document({
            "Thing": {
                "type": "object",
                "properties": {
                    "ratio": {"type": "number", "enum": [0.5, 1.5]},
                    "ok": {"type": "boolean"},
                },
            }
        })
        with caplog.at_level(logging.WARNING, logger="api_client_gen.models"):
            models = expand_models(document)
        assert [p.name for p in models[0].properties] == ["ok"]
        assert "Thing.ratio" in caplog.text

    def test_colliding_enum_names(self):
        document = _document({
            "Foo": {"type": "object", "properties": {"barBaz": {"type": "string", "enum": ["a"]}}},
            "FooBar": {"type": "object", "properties": {"baz": {"type": "string", "enum": ["b"]}}},
        })
        with pytest.raises(DuplicateEnumNameError, match="FooBarBaz"):
            expand_models(document)

    def test_enum_name_colliding_with_model(self):
        document = _document({
            "Order": {"type": "object", "properties": {"status": {"type": "string", "enum": ["a"]}}},
            "OrderStatus": {"type": "string", "enum": ["a"]},
        })
        with pytest.raises(DuplicateEnumNameError):
            expand_models(document)

    def test_other_kinds_are_skipped(self):
        document = _document({"Count": {"type": "integer"}, "Untyped": {}})
        assert ModelExpander().expand(document) == []


class TestSortProperties:
    def test_ascending_by_name(self):
        props = [Property(name=n, type="String", optional=False) for n in ("b", "c", "a")]
        assert [p.name for p in sort_properties(props)] == ["a", "b", "c"]
