"""Tests for the schema builders of the special and container kinds.

Tests cover:
- postcode / licenseplate / bsn / iban
- editgrid (recursive composition, item cap, unique sub-fields)
- fieldset / columns / content
- children / partners
- addressNL
- customerProfile
"""

from datetime import date

import pytest

from formforge.core.types import MISSING
from formforge.registry import (
    ComponentRegistry,
    extract_initial_values,
    is_empty,
    register_builtin_components,
)
from formforge.registry.patterned import is_valid_bsn, is_valid_iban
from formforge.registry.personal import build_date_of_birth_validator
from formforge.validation.compose import build_validation_schema
from formforge.validation.services import build_context
from formforge.validation.types import ConfigurationError, ErrorKind

REGISTRY = register_builtin_components(ComponentRegistry())


def make_context(locale: str = "en"):
    """Helper to create a validation context on a private registry."""
    return build_context(locale=locale, registry=REGISTRY)


async def validate_field(component: dict, value, locale: str = "en"):
    """Validate a single value for a single component."""
    schema = build_validation_schema([component], make_context(locale))
    data = {} if value is MISSING else {component["key"]: value}
    return await schema.validate(data)


def codes(errors) -> list[str]:
    return [e.code for e in errors]


def child(bsn: str, first_names: str = "Jan", date_of_birth: str = "2018-04-01", **extra) -> dict:
    return {"bsn": bsn, "firstNames": first_names, "dateOfBirth": date_of_birth, **extra}


# =============================================================================
# Patterned Kind Tests
# =============================================================================


class TestPostcode:
    """Tests for the postcode kind."""

    @pytest.mark.asyncio
    async def test_dutch_postcodes(self):
        component = {"type": "postcode", "key": "postcode"}

        for value in ("1234 AB", "1234AB", "1015 cj"):
            assert await validate_field(component, value) == []
        for value in ("0123 AB", "1234 SA", "12345", "1234 ABC"):
            errors = await validate_field(component, value)
            assert codes(errors) == ["INVALID_POSTCODE"]
            assert errors[0].message == "Invalid Dutch postcode"

    @pytest.mark.asyncio
    async def test_custom_pattern_applies_on_top(self):
        component = {
            "type": "postcode",
            "key": "postcode",
            "validate": {"pattern": "1015 ?[A-Z]{2}"},
        }

        assert await validate_field(component, "1015 CJ") == []
        assert codes(await validate_field(component, "1234 AB")) == ["PATTERN"]

    @pytest.mark.asyncio
    async def test_trailing_newline_rejected(self):
        component = {"type": "postcode", "key": "postcode"}

        assert codes(await validate_field(component, "1234 AB\n")) == ["INVALID_POSTCODE"]


class TestLicensePlate:
    """Tests for the licenseplate kind."""

    @pytest.mark.asyncio
    async def test_plates(self):
        component = {"type": "licenseplate", "key": "plate", "multiple": True}

        assert await validate_field(component, ["AB-12-CD", "1-ABC-23"]) == []
        errors = await validate_field(component, ["AB-12-CD", "ABCD12"])
        assert [(e.path, e.code) for e in errors] == [(("plate", 1), "INVALID_LICENSE_PLATE")]

    @pytest.mark.asyncio
    async def test_trailing_newline_rejected(self):
        component = {"type": "licenseplate", "key": "plate"}

        errors = await validate_field(component, "AB-12-CD\n")

        assert codes(errors) == ["INVALID_LICENSE_PLATE"]


class TestBsn:
    """Tests for the bsn kind."""

    def test_eleven_test(self):
        assert is_valid_bsn("111222333")
        assert is_valid_bsn("923456788")
        assert not is_valid_bsn("123456789")
        assert not is_valid_bsn("12345678")

    @pytest.mark.asyncio
    async def test_valid_bsn(self):
        component = {"type": "bsn", "key": "bsn"}

        assert await validate_field(component, "111222333") == []

    @pytest.mark.asyncio
    async def test_invalid_checksum(self):
        component = {"type": "bsn", "key": "bsn"}

        errors = await validate_field(component, "123456789")

        assert codes(errors) == ["INVALID_BSN"]
        assert errors[0].message == "Invalid BSN."

    @pytest.mark.asyncio
    async def test_wrong_structure_not_checksummed(self):
        component = {"type": "bsn", "key": "bsn"}

        errors = await validate_field(component, "12345")

        assert codes(errors) == ["INVALID_BSN_STRUCTURE"]
        assert errors[0].message == "A BSN must be 9 digits."

    @pytest.mark.asyncio
    async def test_trailing_newline_rejected(self):
        component = {"type": "bsn", "key": "bsn"}

        assert not is_valid_bsn("111222333\n")
        assert codes(await validate_field(component, "111222333\n")) == ["INVALID_BSN_STRUCTURE"]


class TestIban:
    """Tests for the iban kind."""

    def test_mod_97(self):
        assert is_valid_iban("NL91ABNA0417164300")
        assert not is_valid_iban("NL90ABNA0417164300")
        assert not is_valid_iban("Just a string")

    def test_print_format_accepted(self):
        assert is_valid_iban("NL91 ABNA 0417 1643 00")
        assert is_valid_iban("nl91abna0417164300")

    @pytest.mark.asyncio
    async def test_invalid_iban(self):
        component = {"type": "iban", "key": "iban"}

        errors = await validate_field(component, "NL90ABNA0417164300")

        assert codes(errors) == ["INVALID_IBAN"]
        assert errors[0].kind == ErrorKind.FORMAT
        assert errors[0].message == "Invalid IBAN"

    @pytest.mark.asyncio
    async def test_dutch_message(self):
        component = {"type": "iban", "key": "iban"}

        errors = await validate_field(component, "Just a string", locale="nl")

        assert errors[0].message == "Ongeldig IBAN"

    @pytest.mark.asyncio
    async def test_non_string_rejected(self):
        component = {"type": "iban", "key": "iban"}

        assert codes(await validate_field(component, 123)) == ["INVALID_TYPE"]

    @pytest.mark.asyncio
    async def test_required(self):
        optional = {"type": "iban", "key": "iban"}
        required = {"type": "iban", "key": "iban", "validate": {"required": True}}

        assert await validate_field(optional, "") == []
        assert codes(await validate_field(required, "")) == ["REQUIRED"]

    @pytest.mark.asyncio
    async def test_multiple(self):
        component = {
            "type": "iban",
            "key": "ibans",
            "multiple": True,
            "validate": {"required": True},
        }

        assert await validate_field(component, ["NL91ABNA0417164300"]) == []
        assert codes(await validate_field(component, [])) == ["MIN_ITEMS"]
        errors = await validate_field(component, ["NL91ABNA0417164300", "NL90ABNA0417164300"])
        assert [(e.path, e.code) for e in errors] == [(("ibans", 1), "INVALID_IBAN")]


# =============================================================================
# Editgrid Tests
# =============================================================================


class TestEditgrid:
    """Tests for the repeating group kind."""

    COMPONENT = {
        "type": "editgrid",
        "key": "items",
        "label": "Items",
        "validate": {"maxLength": 2, "unique": ["name"]},
        "components": [
            {"type": "textfield", "key": "name", "label": "Name", "validate": {"required": True}},
            {"type": "number", "key": "amount", "validate": {"min": 1}},
        ],
    }

    @pytest.mark.asyncio
    async def test_items_validated_with_nested_components(self):
        errors = await validate_field(self.COMPONENT, [{"name": "A"}, {"name": "", "amount": 0}])

        assert [(e.path, e.code) for e in errors] == [
            (("items", 1, "name"), "REQUIRED"),
            (("items", 1, "amount"), "MIN_VALUE"),
        ]

    @pytest.mark.asyncio
    async def test_item_cap(self):
        errors = await validate_field(self.COMPONENT, [{"name": "A"}, {"name": "B"}, {"name": "C"}])

        assert codes(errors) == ["MAX_ITEMS"]
        assert errors[0].path == ("items",)
        assert errors[0].message == "Ensure the number of items is less than or equal to 2."

    @pytest.mark.asyncio
    async def test_unique_sub_field(self):
        errors = await validate_field(self.COMPONENT, [{"name": "A"}, {"name": "A"}])

        assert codes(errors) == ["DUPLICATE_VALUE"]
        assert errors[0].path == ("items", 1)
        assert errors[0].kind == ErrorKind.CROSS_ITEM
        assert errors[0].message == (
            "The value A is used more than once. Each item must have a unique Name."
        )

    @pytest.mark.asyncio
    async def test_required_needs_an_item(self):
        component = {**self.COMPONENT, "validate": {"required": True}}

        assert codes(await validate_field(component, [])) == ["MIN_ITEMS"]
        assert codes(await validate_field(component, MISSING)) == ["MIN_ITEMS"]

    @pytest.mark.asyncio
    async def test_nested_editgrids(self):
        component = {
            "type": "editgrid",
            "key": "outer",
            "components": [{
                "type": "editgrid",
                "key": "inner",
                "components": [{"type": "email", "key": "email"}],
            }],
        }

        errors = await validate_field(
            component,
            [{"inner": [{"email": "a@example.com"}]}, {"inner": [{"email": "nope"}]}],
        )

        assert [e.path for e in errors] == [("outer", 1, "inner", 0, "email")]
        assert errors[0].field == "outer.1.inner.0.email"


# =============================================================================
# Layout Tests
# =============================================================================


class TestLayout:
    """Tests for fieldset, columns and content."""

    @pytest.mark.asyncio
    async def test_fieldset_contributes_nested_keys(self):
        component = {
            "type": "fieldset",
            "key": "group",
            "components": [
                {"type": "textfield", "key": "first", "validate": {"required": True}},
                {"type": "textfield", "key": "contact.phone", "validate": {"required": True}},
            ],
        }
        schema = build_validation_schema([component], make_context())

        errors = await schema.validate({"first": "x"})

        assert [e.path for e in errors] == [("contact", "phone")]

    @pytest.mark.asyncio
    async def test_columns_contribute_every_column(self):
        component = {
            "type": "columns",
            "key": "cols",
            "columns": [
                {"components": [
                    {"type": "textfield", "key": "left", "validate": {"required": True}},
                ]},
                {"components": [
                    {"type": "number", "key": "right", "validate": {"required": True}},
                ]},
            ],
        }
        schema = build_validation_schema([component], make_context())

        errors = await schema.validate({})

        assert sorted(e.field for e in errors) == ["left", "right"]

    @pytest.mark.asyncio
    async def test_content_has_no_value(self):
        components = [
            {"type": "content", "key": "intro", "html": "<p>Welcome</p>"},
            {"type": "textfield", "key": "name"},
        ]
        schema = build_validation_schema(components, make_context())

        assert set(schema.fields) == {"name"}
        assert await schema.validate({"name": "x"}) == []


# =============================================================================
# Children and Partners Tests
# =============================================================================


class TestChildren:
    """Tests for the children kind."""

    COMPONENT = {"type": "children", "key": "children", "label": "Children"}

    @pytest.mark.asyncio
    async def test_duplicate_bsn(self):
        errors = await validate_field(self.COMPONENT, [child("111222333"), child("111222333")])

        assert codes(errors) == ["DUPLICATE_BSN"]
        assert errors[0].path == ("children", 1)
        assert "111222333" in errors[0].message
        assert errors[0].message == (
            "The BSN 111222333 is used for multiple children. "
            "Each child must have a unique BSN."
        )

    @pytest.mark.asyncio
    async def test_distinct_bsns_pass(self):
        errors = await validate_field(self.COMPONENT, [child("111222333"), child("923456788")])

        assert errors == []

    @pytest.mark.asyncio
    async def test_sub_fields_required(self):
        errors = await validate_field(self.COMPONENT, [{"bsn": "111222333"}])

        assert [(e.path, e.code) for e in errors] == [
            (("children", 0, "firstNames"), "REQUIRED"),
            (("children", 0, "dateOfBirth"), "REQUIRED"),
        ]

    @pytest.mark.asyncio
    async def test_selection_and_manual_marker(self):
        assert await validate_field(
            self.COMPONENT,
            [child("111222333", selected=True, __addedManually=True, __id="abc")],
        ) == []

        errors = await validate_field(self.COMPONENT, [child("111222333", __addedManually=False)])
        assert [e.path for e in errors] == [("children", 0, "__addedManually")]

    @pytest.mark.asyncio
    async def test_date_of_birth_range(self):
        too_old = await validate_field(
            self.COMPONENT, [child("111222333", date_of_birth="1850-01-01")]
        )
        assert codes(too_old) == ["MIN_DATE"]

        future = await validate_field(
            self.COMPONENT, [child("111222333", date_of_birth="2999-01-01")]
        )
        assert codes(future) == ["MAX_DATE"]
        assert future[0].message == "Date of birth cannot be in the future."


class TestDateOfBirth:
    """Tests for the date of birth validator."""

    @pytest.mark.asyncio
    async def test_bounds_relative_to_today(self):
        validator = build_date_of_birth_validator(
            make_context(), "Required", today=date(2024, 6, 15)
        )

        assert await validator.validate("2024-06-14") == []
        assert await validator.validate("1904-06-15") == []
        assert codes(await validator.validate("2024-06-15")) == ["MAX_DATE"]
        assert codes(await validator.validate("1904-06-14")) == ["MIN_DATE"]
        assert codes(await validator.validate("15-06-2000")) == ["INVALID_DATE"]


class TestPartners:
    """Tests for the partners kind."""

    COMPONENT = {"type": "partners", "key": "partners"}

    @pytest.mark.asyncio
    async def test_valid_partner(self):
        partner = {
            "bsn": "111222333",
            "initials": "J.",
            "affixes": "van",
            "lastName": "Dijk",
            "dateOfBirth": "1980-01-01",
        }

        assert await validate_field(self.COMPONENT, [partner]) == []

    @pytest.mark.asyncio
    async def test_last_name_required(self):
        errors = await validate_field(
            self.COMPONENT, [{"bsn": "111222333", "dateOfBirth": "1980-01-01"}]
        )

        assert [e.path for e in errors] == [("partners", 0, "lastName")]
        assert errors[0].message == "You must provide a last name."


# =============================================================================
# AddressNL Tests
# =============================================================================


class TestAddressNL:
    """Tests for the addressNL kind."""

    @pytest.mark.asyncio
    async def test_required_address(self):
        component = {"type": "addressNL", "key": "address", "validate": {"required": True}}

        errors = await validate_field(component, {})

        assert [(e.path, e.code) for e in errors] == [
            (("address", "postcode"), "REQUIRED"),
            (("address", "houseNumber"), "REQUIRED"),
        ]
        assert await validate_field(component, {"postcode": "1234 ab", "houseNumber": "12"}) == []

    @pytest.mark.asyncio
    async def test_required_with_derived_address(self):
        component = {
            "type": "addressNL",
            "key": "address",
            "deriveAddress": True,
            "validate": {"required": True},
        }

        errors = await validate_field(component, {"postcode": "1234AB", "houseNumber": "1"})

        assert [e.path for e in errors] == [("address", "streetName"), ("address", "city")]
        assert errors[0].message == "You must provide a street name."

    @pytest.mark.asyncio
    async def test_optional_address(self):
        component = {"type": "addressNL", "key": "address"}

        assert await validate_field(component, None) == []
        assert await validate_field(component, MISSING) == []
        assert await validate_field(component, {"postcode": "", "houseNumber": ""}) == []

    @pytest.mark.asyncio
    async def test_partial_optional_address(self):
        component = {"type": "addressNL", "key": "address"}

        errors = await validate_field(component, {"postcode": "1234AB"})

        assert [(e.path, e.code) for e in errors] == [
            (("address", "houseNumber"), "INCOMPLETE_ADDRESS"),
        ]
        assert errors[0].message == "You must provide a house number."

    @pytest.mark.asyncio
    async def test_sub_field_formats(self):
        component = {"type": "addressNL", "key": "address"}

        errors = await validate_field(component, {
            "postcode": "1234AB",
            "houseNumber": "123456",
            "houseLetter": "ab",
            "houseNumberAddition": "toolong",
        })

        assert codes(errors) == [
            "INVALID_HOUSE_NUMBER",
            "INVALID_HOUSE_LETTER",
            "INVALID_HOUSE_NUMBER_ADDITION",
        ]

    @pytest.mark.asyncio
    async def test_custom_postcode_pattern(self):
        component = {
            "type": "addressNL",
            "key": "address",
            "openForms": {"components": {
                "postcode": {
                    "validate": {"pattern": "1015 ?[a-z]{2}"},
                    "errors": {"pattern": "Only 1015 postcodes"},
                },
            }},
        }

        assert await validate_field(component, {"postcode": "1015 CJ", "houseNumber": "1"}) == []
        errors = await validate_field(component, {"postcode": "1234 AB", "houseNumber": "1"})
        assert codes(errors) == ["PATTERN"]
        assert errors[0].message == "Only 1015 postcodes"


# =============================================================================
# Customer Profile Tests
# =============================================================================

PROFILE = {
    "type": "customerProfile",
    "key": "profile",
    "label": "Profile",
    "digitalAddressTypes": ["email", "phoneNumber"],
}


def profile(**overrides) -> dict:
    return {**PROFILE, **overrides}


class TestCustomerProfile:
    """Tests for the customerProfile kind."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["abc123", 999, True, False])
    async def test_non_array_rejected(self, value):
        assert codes(await validate_field(profile(), value)) == ["INVALID_TYPE"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value",
        [
            [{"type": "email", "address": ""}],
            [{"type": "email", "address": "test@mail.com"}],
            [{"type": "phoneNumber", "address": ""}],
            [{"type": "phoneNumber", "address": "+0612345678"}],
        ],
    )
    async def test_optional_accepts_empty_ish_addresses(self, value):
        assert await validate_field(profile(), value) == []

    @pytest.mark.asyncio
    async def test_valid_addresses(self):
        value = [
            {"type": "email", "address": "test@mail.com"},
            {"type": "phoneNumber", "address": "+0612345678", "preferenceUpdate": "useOnlyOnce"},
        ]

        assert await validate_field(profile(), value) == []

    @pytest.mark.asyncio
    async def test_duplicate_type_reported_once(self):
        value = [
            {"type": "email", "address": "test@mail.com"},
            {"type": "email", "address": "second@mail.com"},
            {"type": "email", "address": "third@mail.com"},
        ]

        errors = await validate_field(profile(), value)

        assert codes(errors) == ["DUPLICATE_DIGITAL_ADDRESS_TYPE"]
        assert errors[0].path == ("profile",)
        assert errors[0].kind == ErrorKind.CROSS_ITEM
        assert errors[0].message == (
            "You cannot submit multiple digital addresses for the type email."
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value, valid",
        [
            ("foo@example.com", True),
            ("email+with.suffix@some-domain.tld", True),
            ("jimmy", False),
            ("laika@", False),
            ("foo@example.com\n", False),
        ],
    )
    async def test_email_address(self, value, valid):
        component = profile(digitalAddressTypes=["email"])

        errors = await validate_field(component, [{"type": "email", "address": value}])

        assert (errors == []) is valid
        if not valid:
            assert errors[0].path == ("profile", 0, "address")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value",
        ["123456789", "+31 6 11223344", "0031 6 11223344", "06 112 233 44", "06-112-23-44"],
    )
    async def test_phone_number_address(self, value):
        component = profile(digitalAddressTypes=["phoneNumber"])

        assert await validate_field(component, [{"type": "phoneNumber", "address": value}]) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [124, False, True, ["array"], None, {"object": "value"}])
    async def test_non_string_address_rejected(self, value):
        component = profile(digitalAddressTypes=["phoneNumber"])

        errors = await validate_field(component, [{"type": "phoneNumber", "address": value}])

        assert codes(errors) == ["INVALID_TYPE"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "address, valid",
        [(MISSING, False), ("", False), ("test@mail.com", True)],
        ids=["missing", "blank", "filled"],
    )
    async def test_required_single_type_needs_address(self, address, valid):
        component = profile(digitalAddressTypes=["email"], validate={"required": True})
        item = {"type": "email"} if address is MISSING else {"type": "email", "address": address}

        errors = await validate_field(component, [item])

        assert (errors == []) is valid
        if not valid:
            assert codes(errors) == ["REQUIRED"]
            assert errors[0].path == ("profile", 0, "address")
            assert errors[0].message == "The required field Email must be filled in."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value",
        [
            [{"type": "phoneNumber", "address": "0612345678"}],
            [{"type": "email", "address": "test@mail.com"}],
            [
                {"type": "email", "address": "test@mail.com"},
                {"type": "phoneNumber", "address": "0612345678"},
            ],
            [
                {"type": "email", "address": ""},
                {"type": "phoneNumber", "address": "0612345678"},
            ],
        ],
    )
    async def test_required_multiple_types_accepts_any_address(self, value):
        component = profile(validate={"required": True})

        assert await validate_field(component, value) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value",
        [
            [{"type": "email", "address": ""}, {"type": "phoneNumber", "address": ""}],
            [],
            MISSING,
        ],
        ids=["blank", "empty", "missing"],
    )
    async def test_required_multiple_types_needs_one_address(self, value):
        component = profile(validate={"required": True})

        errors = await validate_field(component, value)

        assert codes(errors) == ["REQUIRED"]
        assert errors[0].path == ("profile",)
        assert errors[0].message == "At least one digital address should be provided."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "types, value, valid",
        [
            (["email"], [{"type": "email", "address": "test@mail.com"}], True),
            (["email"], [{"type": "phoneNumber", "address": "0612345678"}], False),
            (["phoneNumber"], [{"type": "phoneNumber", "address": "0612345678"}], True),
            (["phoneNumber"], [{"type": "email", "address": "test@mail.com"}], False),
            (["email", "phoneNumber"], [{"type": "phoneNumber", "address": "0612345678"}], True),
        ],
    )
    async def test_only_allowed_types(self, types, value, valid):
        errors = await validate_field(profile(digitalAddressTypes=types), value)

        assert (errors == []) is valid
        if not valid:
            assert codes(errors) == ["INVALID_OPTION"]
            assert errors[0].path == ("profile", 0, "type")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "preference, valid",
        [("useOnlyOnce", True), ("isNewPreferred", True), ("some-unknown-flag", False)],
    )
    async def test_preference_update(self, preference, valid):
        component = profile(digitalAddressTypes=["phoneNumber"])
        item = {"type": "phoneNumber", "address": "0612345678", "preferenceUpdate": preference}

        errors = await validate_field(component, [item])

        assert (errors == []) is valid

    @pytest.mark.asyncio
    async def test_unknown_keys_rejected(self):
        item = {"type": "email", "address": "test@mail.com", "verified": True}

        errors = await validate_field(profile(), [item])

        assert codes(errors) == ["UNRECOGNIZED_KEY"]
        assert errors[0].path == ("profile", 0, "verified")

    @pytest.mark.asyncio
    async def test_non_object_item_rejected(self):
        errors = await validate_field(profile(), ["test@mail.com"])

        assert codes(errors) == ["INVALID_TYPE"]
        assert errors[0].path == ("profile", 0)

    def test_requires_known_address_types(self):
        for types in ([], ["fax"]):
            with pytest.raises(ConfigurationError, match="digitalAddressTypes"):
                build_validation_schema([profile(digitalAddressTypes=types)], make_context())

    @pytest.mark.parametrize(
        "value, expected",
        [
            (MISSING, True),
            (None, True),
            ([], True),
            ([{"address": "", "type": "email"}], True),
            ([{"address": "test@mail.com", "type": "email"}], False),
            (
                [
                    {"address": "", "type": "email"},
                    {"address": "+0612345678", "type": "phoneNumber"},
                ],
                False,
            ),
            ([{"address": "", "type": "email", "preferenceUpdate": "useOnlyOnce"}], False),
        ],
    )
    def test_is_empty(self, value, expected):
        assert is_empty(PROFILE, value, REGISTRY) is expected

    def test_initial_values_one_address_per_type(self):
        values = extract_initial_values([PROFILE], REGISTRY)

        assert values == {"profile": [
            {"type": "email", "address": "", "preferenceUpdate": "useOnlyOnce"},
            {"type": "phoneNumber", "address": "", "preferenceUpdate": "useOnlyOnce"},
        ]}

    def test_initial_values_keep_default(self):
        default = [{"type": "email", "address": "a@b.nl"}]

        values = extract_initial_values([profile(defaultValue=default)], REGISTRY)

        assert values == {"profile": default}
