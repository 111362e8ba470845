"""Shared fixtures: a `user` entity covering every supported type."""

import re
from datetime import datetime, timezone

import pytest
from jsonschema import Draft202012Validator, ValidationError, validators

from model2schema import (
    AttributeDescriptor,
    EntityDescriptor,
    JsonSchemaStrategy,
    OpenApiStrategy,
    RelationshipDescriptor,
    SchemaManager,
)

A = AttributeDescriptor

PHONE = r"^(\([0-9]{3}\))?[0-9]{3}-[0-9]{4}$"


def build_user() -> EntityDescriptor:
    """Attributes for all supported types, validators and custom metadata."""
    attributes = {
        "id": A(type="INTEGER", allow_null=False),
        "ARRAY_INTEGERS": A(type={"key": "ARRAY", "element": "INTEGER"}, allow_null=False),
        "ARRAY_TEXTS": A(type={"key": "ARRAY", "element": "TEXT"}, allow_null=False),
        "ARRAY_ALLOWNULL_EXPLICIT": A(type={"key": "ARRAY", "element": "TEXT"}, allow_null=True),
        "ARRAY_ALLOWNULL_IMPLICIT": A(type={"key": "ARRAY", "element": "TEXT"}),
        "ARRAY_ENUM_STRINGS": A(
            type={"key": "ARRAY", "element": {"key": "ENUM", "values": ["hello", "world"]}},
            allow_null=False,
        ),
        "BLOB": A(type="BLOB", allow_null=False),
        "CITEXT": A(type="CITEXT", allow_null=False),
        "INTEGER": A(
            type="INTEGER", allow_null=False, default_value=0,
            validation_rules={"min": 0, "max": 10},
        ),
        "INTEGER_ARGED": A(
            type="INTEGER", allow_null=False, default_value=0,
            validation_rules={"min": {"args": [0], "msg": ""}, "max": {"args": [10], "msg": ""}},
        ),
        "STRING": A(type="STRING", allow_null=False, default_value="Default value for STRING"),
        "STRING_EMAIL": A(type="STRING", allow_null=False, validation_rules={"isEmail": True}),
        "STRING_EMAIL_ARGED": A(
            type="STRING", allow_null=False, validation_rules={"isEmail": {"msg": "must be email"}}
        ),
        "STRING_LENGTH_RANGE": A(type="STRING", allow_null=False, validation_rules={"len": [2, 10]}),
        "STRING_LENGTH_RANGE_ARGED": A(
            type="STRING", allow_null=False, validation_rules={"len": {"args": [2, 10], "msg": ""}}
        ),
        "STRING_NOT_EMPTY": A(type="STRING", allow_null=False, validation_rules={"notEmpty": True}),
        "STRING_IS_URL": A(type="STRING", allow_null=False, validation_rules={"isUrl": True}),
        "STRING_IS_ALPHA": A(type="STRING", allow_null=False, validation_rules={"isAlpha": True}),
        "STRING_IS_NUMERIC": A(type="STRING", allow_null=False, validation_rules={"isNumeric": True}),
        "STRING_IS_LOWERCASE": A(type="STRING", allow_null=False, validation_rules={"isLowercase": True}),
        "STRING_IS_UPPERCASE": A(type="STRING", allow_null=False, validation_rules={"isUppercase": True}),
        "STRING_IS_ALPHANUMERIC": A(
            type="STRING", allow_null=False, validation_rules={"isAlphanumeric": True}
        ),
        "STRING_HAS_SUBSTRING": A(type="STRING", allow_null=False, validation_rules={"contains": "foo"}),
        "STRING_HAS_NO_SUBSTRING": A(
            type="STRING", allow_null=False, validation_rules={"notContains": "bar"}
        ),
        "STRING_HAS_NO_SUBSTRING_ARGED_ARRAY": A(
            type="STRING", allow_null=False,
            validation_rules={"notContains": {"args": ["foo", "bar"], "msg": ""}},
        ),
        "STRING_NOT_IN": A(type="STRING", allow_null=False, validation_rules={"notIn": [["mongoose"]]}),
        "STRING_NOT_IN_ARGED": A(
            type="STRING", allow_null=False,
            validation_rules={"notIn": {"args": [["mongoose"], ["lion"]], "msg": ""}},
        ),
        "STRING_IS": A(type="STRING", allow_null=False, validation_rules={"is": re.compile(PHONE)}),
        "STRING_IS_STRING": A(type="STRING", allow_null=False, validation_rules={"is": PHONE}),
        "STRING_IS_ARRAY": A(type="STRING", allow_null=False, validation_rules={"is": [PHONE, "i"]}),
        "STRING_NOT": A(
            type="STRING", allow_null=False, validation_rules={"not": re.compile("^[a-z]+$", re.I)}
        ),
        "STRING_ALLOWNULL_EXPLICIT": A(type="STRING", allow_null=True),
        "STRING_ALLOWNULL_IMPLICIT": A(type="STRING"),
        "STRING_1234": A(type={"key": "STRING", "length": 1234}, allow_null=False),
        "TEXT": A(type="TEXT", allow_null=False),
        "UUIDV4": A(type="UUID", allow_null=False),
        "JSON": A(type="JSON", allow_null=False),
        "JSON_OBJECT": A(type="JSON", allow_null=False, custom_metadata={"schema": {"type": "object"}}),
        "JSONB_ALLOWNULL": A(type="JSONB", allow_null=True),
        "VIRTUAL": A(type={"key": "VIRTUAL", "return_type": "BOOLEAN"}, allow_null=False),
        "VIRTUAL_DEPENDENCY": A(type={"key": "VIRTUAL", "return_type": "INTEGER"}, allow_null=False),
        "CUSTOM_DESCRIPTION": A(
            type="STRING", allow_null=False,
            custom_metadata={"description": "Custom attribute description"},
        ),
        "CUSTOM_EXAMPLES": A(
            type="STRING", allow_null=False,
            custom_metadata={"examples": ["Custom example 1", "Custom example 2"]},
        ),
        "CUSTOM_READONLY": A(type="STRING", allow_null=False, custom_metadata={"readOnly": True}),
        "CUSTOM_WRITEONLY": A(type="STRING", allow_null=False, custom_metadata={"writeOnly": True}),
        "RANGE_INTEGER": A(type={"key": "RANGE", "subtype": "INTEGER"}),
        "RANGE_DECIMAL": A(type={"key": "RANGE", "subtype": "DECIMAL"}),
        "RANGE_BIGINT": A(type={"key": "RANGE", "subtype": "BIGINT"}),
        "RANGE_DATE": A(type={"key": "RANGE", "subtype": "DATE"}),
        "RANGE_DATEONLY": A(type={"key": "RANGE", "subtype": "DATEONLY"}),
        "HSTORE": A(type="HSTORE"),
        "GEOMETRY": A(type="GEOMETRY"),
        "GEOMETRY_POINT": A(type={"key": "GEOMETRY", "geometry_type": "POINT"}),
        "GEOMETRY_LINESTRING": A(type={"key": "GEOMETRY", "geometry_type": "LINESTRING"}),
        "GEOMETRY_POLYGON": A(type={"key": "GEOMETRY", "geometry_type": "POLYGON"}),
        "GEOGRAPHY_POINT": A(type={"key": "GEOGRAPHY", "geometry_type": "POINT", "srid": 4326}),
        "companyId": A(type="INTEGER", allow_null=False),
        "bossId": A(type="INTEGER", allow_null=False),
    }
    relationships = {
        "profile": RelationshipDescriptor(kind="has_one", target="profile"),
        "boss": RelationshipDescriptor(kind="has_one", target="user"),
        "company": RelationshipDescriptor(kind="belongs_to", target="company"),
        "documents": RelationshipDescriptor(kind="has_many", target="document"),
        "friends": RelationshipDescriptor(
            kind="belongs_to_many", target="user", through="friendship", through_plural="friendships"
        ),
        "groups": RelationshipDescriptor(
            kind="belongs_to_many", target="group", through="usergroup", through_plural="usergroups"
        ),
    }
    return EntityDescriptor(name="user", attributes=attributes, relationships=relationships)


@pytest.fixture
def user() -> EntityDescriptor:
    return build_user()


@pytest.fixture
def openapi() -> OpenApiStrategy:
    return OpenApiStrategy()


@pytest.fixture
def json_schema() -> JsonSchemaStrategy:
    return JsonSchemaStrategy()


@pytest.fixture
def manager() -> SchemaManager:
    return SchemaManager()


# --- Validator with the vendor keywords used by generated schemas -------------


def _bound(item):
    return item["value"] if isinstance(item, dict) else item


def _parse_datetime(value):
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _ordered(parse):
    def check(validator, enabled, instance, schema):
        if not enabled or not validator.is_type(instance, "array") or len(instance) != 2:
            return
        lower, upper = (_bound(item) for item in instance)
        if lower is None or upper is None:
            return
        lower, upper = parse(lower), parse(upper)
        if lower is None or upper is None:
            return  # format errors are reported elsewhere
        try:
            ordered = lower < upper
        except TypeError:
            return
        if not ordered:
            yield ValidationError(f"range bounds {instance!r} are not ascending")

    return check


def _numeric(value):
    if isinstance(value, str):
        return int(value) if value.isdigit() else None
    return value


def _regexp(validator, rendered, instance, schema):
    if not validator.is_type(instance, "string"):
        return
    end = rendered.rfind("/")
    flags = 0
    for letter in rendered[end + 1:]:
        flags |= {"i": re.I, "m": re.M, "s": re.S}.get(letter, 0)
    if not re.search(rendered[1:end], instance, flags):
        yield ValidationError(f"{instance!r} does not match {rendered}")


SchemaValidator = validators.extend(
    Draft202012Validator,
    {
        "range": _ordered(_numeric),
        "daterange": _ordered(_parse_datetime),
        "regexp": _regexp,
    },
)


def is_valid(schema, instance) -> bool:
    return SchemaValidator(schema).is_valid(instance)


@pytest.fixture
def validates():
    """Callable checking an instance against a generated fragment."""
    return is_valid
