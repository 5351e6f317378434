"""Component kinds and JSON value types shared across formforge."""

from enum import Enum
from typing import Any, Union

JSONPrimitive = Union[str, int, float, bool, None]
JSONValue = Union[JSONPrimitive, list["JSONValue"], dict[str, "JSONValue"]]
JSONObject = dict[str, JSONValue]

# A field definition is a JSON object, tagged by its "type" key
ComponentDefinition = dict[str, Any]


class _Missing:
    """Marker for a key that is absent from the submission data.

    Distinct from ``None``: the legacy engine sends ``null`` for some empty
    values and omits the key entirely for others.
    """

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class ComponentType(str, Enum):
    """The component kinds known to the built-in registry."""

    # basic
    TEXTFIELD = "textfield"
    TEXTAREA = "textarea"
    EMAIL = "email"
    PHONE_NUMBER = "phoneNumber"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    CHECKBOX = "checkbox"
    SELECT = "select"
    SELECTBOXES = "selectboxes"
    RADIO = "radio"
    SIGNATURE = "signature"
    # special types
    POSTCODE = "postcode"
    LICENSE_PLATE = "licenseplate"
    BSN = "bsn"
    EDITGRID = "editgrid"
    CHILDREN = "children"
    PARTNERS = "partners"
    ADDRESS_NL = "addressNL"
    IBAN = "iban"
    COSIGN = "cosign"
    CUSTOMER_PROFILE = "customerProfile"
    # layout
    FIELDSET = "fieldset"
    COLUMNS = "columns"
    CONTENT = "content"


def is_number(value: Any) -> bool:
    """True for int/float values; booleans are not numbers in a submission."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_blank(value: Any) -> bool:
    """Legacy string emptiness: missing, null or whitespace-only."""
    if value is MISSING or value is None:
        return True
    return isinstance(value, str) and value.strip() == ""
