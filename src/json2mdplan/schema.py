"""JSON Schema validation of input documents."""

from __future__ import annotations

from typing import Any, Mapping

import jsonschema
from jsonschema import exceptions as jsonschema_exceptions
from jsonschema.validators import validator_for

from .document import Node, encode_pointer


class SchemaValidationError(ValueError):
    """Raised when a document does not satisfy its JSON Schema."""


def validate_instance(document: Node, schema: Mapping[str, Any]) -> None:
    """Validate ``document`` against ``schema``.

    The validator class follows the schema's ``$schema`` keyword and falls
    back to Draft 2020-12.
    """

    validator_cls = validator_for(schema, default=jsonschema.Draft202012Validator)
    try:
        validator_cls.check_schema(schema)
    except jsonschema_exceptions.SchemaError as exc:
        raise SchemaValidationError(f"invalid JSON schema: {exc.message}") from exc

    validator = validator_cls(schema)
    error = jsonschema_exceptions.best_match(validator.iter_errors(document.to_python()))
    if error is None:
        return
    location = encode_pointer([str(token) for token in error.absolute_path]) or "/"
    raise SchemaValidationError(
        f"JSON instance validation failed at {location}: {error.message}"
    )
