"""Plan model: a versioned, ordered list of rendering directives."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from .constants import PLAN_VERSION

_PLAN_KEYS = ("version", "directives")
_DIRECTIVE_KEYS = ("op", "path", "fields")
_FIELD_KEYS = ("path", "label")


class PlanParseError(ValueError):
    """Raised when a plan document is malformed or carries unknown fields."""


@dataclass(frozen=True)
class Field:
    path: str
    label: str


@dataclass(frozen=True)
class Directive:
    op: str
    path: str
    fields: Tuple[Field, ...] = ()


@dataclass(frozen=True)
class Plan:
    version: int
    directives: Tuple[Directive, ...] = ()


def new_plan(directives: Sequence[Directive], version: int = PLAN_VERSION) -> Plan:
    return Plan(version=version, directives=tuple(directives))


def parse_plan(data: Union[bytes, str]) -> Plan:
    """Strictly decode a plan document.

    Unknown keys at any level, missing required keys, wrong value types and
    trailing content are all rejected. ``version`` is not range-checked here;
    evaluation re-checks it for every plan regardless of origin.
    """

    try:
        payload = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PlanParseError(f"invalid plan JSON: {exc}") from exc
    return plan_from_dict(payload)


def plan_from_dict(payload: Any) -> Plan:
    plan_obj = _require_object(payload, "plan")
    _reject_unknown(plan_obj, _PLAN_KEYS, "plan")

    if "version" not in plan_obj:
        raise PlanParseError('plan is missing required field "version"')
    version = plan_obj["version"]
    if isinstance(version, bool) or not isinstance(version, int):
        raise PlanParseError('plan field "version" must be an integer')

    raw_directives = plan_obj.get("directives")
    if not isinstance(raw_directives, list):
        raise PlanParseError('plan field "directives" must be an array')

    directives = tuple(
        _directive_from_dict(entry, index) for index, entry in enumerate(raw_directives)
    )
    return Plan(version=version, directives=directives)


def plan_to_dict(plan: Plan) -> Dict[str, Any]:
    return {
        "version": plan.version,
        "directives": [_directive_to_dict(directive) for directive in plan.directives],
    }


def marshal_plan(plan: Plan) -> str:
    """Render a plan as two-space indented JSON with a fixed key order."""

    return json.dumps(plan_to_dict(plan), indent=2, ensure_ascii=False)


def _directive_from_dict(entry: Any, index: int) -> Directive:
    where = f"directives[{index}]"
    directive_obj = _require_object(entry, where)
    _reject_unknown(directive_obj, _DIRECTIVE_KEYS, where)
    op = _require_string(directive_obj, "op", where)
    path = _require_string(directive_obj, "path", where)

    raw_fields = directive_obj.get("fields")
    if raw_fields is None:
        raw_fields = []
    if not isinstance(raw_fields, list):
        raise PlanParseError(f'{where} field "fields" must be an array')

    fields: List[Field] = []
    for field_index, raw_field in enumerate(raw_fields):
        field_where = f"{where}.fields[{field_index}]"
        field_obj = _require_object(raw_field, field_where)
        _reject_unknown(field_obj, _FIELD_KEYS, field_where)
        fields.append(
            Field(
                path=_require_string(field_obj, "path", field_where),
                label=_require_string(field_obj, "label", field_where),
            )
        )
    return Directive(op=op, path=path, fields=tuple(fields))


def _directive_to_dict(directive: Directive) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"op": directive.op, "path": directive.path}
    if directive.fields:
        payload["fields"] = [
            {"path": field.path, "label": field.label} for field in directive.fields
        ]
    return payload


def _require_object(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise PlanParseError(f"{where} must be a JSON object")
    return value


def _reject_unknown(obj: Mapping[str, Any], allowed: Sequence[str], where: str) -> None:
    for key in obj:
        if key not in allowed:
            raise PlanParseError(f'{where} has unknown field "{key}"')


def _require_string(obj: Mapping[str, Any], key: str, where: str) -> str:
    if key not in obj:
        raise PlanParseError(f'{where} is missing required field "{key}"')
    value = obj[key]
    if not isinstance(value, str):
        raise PlanParseError(f'{where} field "{key}" must be a string')
    return value
