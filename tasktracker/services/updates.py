"""Allow-listed partial updates.

The whole payload is accepted or rejected before anything is written: any
key outside ``allowed`` rejects the request, then the remaining values are
validated by the schema.
"""
import pydantic
from tasktracker.errors import InvalidUpdateFieldsError, ValidationError
from tasktracker.validation import unknown_fields


def parse_update(model, payload, allowed) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Update body must be a JSON object")
    invalid = unknown_fields(payload, allowed)
    if invalid:
        raise InvalidUpdateFieldsError(invalid)
    try:
        parsed = model.model_validate(payload)
    except pydantic.ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        messages = "; ".join(err["msg"] for err in e.errors())
        raise ValidationError(f"Invalid update: {messages}", fields=fields)
    return parsed.model_dump(exclude_unset=True)
