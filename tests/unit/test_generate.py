import pytest

from json2mdplan import engine
from json2mdplan.diagnostics import DiagnosticError
from json2mdplan.document import parse_document
from json2mdplan.generate import PlanGenerationError, generate_plan
from json2mdplan.plan import Directive, Field, marshal_plan


def test_flat_object_becomes_named_bullets():
    plan = generate_plan(parse_document('{"name": "Widget", "count": 3, "notes": null}'))

    assert plan.version == 1
    assert plan.directives == (
        Directive(
            op="named_bullets",
            path=".",
            fields=(Field("name", "name"), Field("count", "count"), Field("notes", "notes")),
        ),
    )


def test_scalar_array_becomes_bullet_list():
    plan = generate_plan(parse_document('["a", 1, null]'))

    assert plan.directives == (Directive(op="bullet_list", path="."),)


def test_empty_array_becomes_bullet_list():
    plan = generate_plan(parse_document("[]"))

    assert plan.directives == (Directive(op="bullet_list", path="."),)
    assert engine.render(parse_document("[]"), plan) == ""


def test_object_array_columns_follow_first_appearance():
    plan = generate_plan(parse_document('[{"b": 1, "a": 2}, {"c": 3, "a": 4}]'))

    (directive,) = plan.directives
    assert directive.op == "table"
    assert [field.path for field in directive.fields] == ["b", "a", "c"]


def test_generated_table_with_ragged_rows_fails_at_render():
    root = parse_document('[{"a": 1}, {"a": 2, "b": 3}]')

    with pytest.raises(DiagnosticError) as excinfo:
        engine.render(root, generate_plan(root))

    assert excinfo.value.code == "missing_field"
    assert excinfo.value.path == "b"


def test_keys_with_separators_are_escaped_and_still_render():
    root = parse_document('{"a/b": 1, "c~d": 2}')
    plan = generate_plan(root)

    assert [(field.path, field.label) for field in plan.directives[0].fields] == [
        ("a~1b", "a/b"),
        ("c~0d", "c~d"),
    ]
    assert engine.render(root, plan) == "- **a/b:** 1\n- **c~d:** 2"


@pytest.mark.parametrize(
    "text, message",
    [
        ("42", "automatic plan generation only supports root objects and arrays"),
        ('"text"', "automatic plan generation only supports root objects and arrays"),
        ('{"a": {"b": 1}}', "automatic plan generation only supports flat objects with scalar fields"),
        ('{"a": [1]}', "automatic plan generation only supports flat objects with scalar fields"),
        (
            '[1, {"a": 1}]',
            "automatic plan generation only supports arrays of scalar values or arrays of flat objects",
        ),
        (
            '[{"a": [1]}]',
            "automatic plan generation only supports arrays of scalar values or arrays of flat objects",
        ),
        (
            "[[1]]",
            "automatic plan generation only supports arrays of scalar values or arrays of flat objects",
        ),
    ],
)
def test_unsupported_shapes_raise(text, message):
    with pytest.raises(PlanGenerationError) as excinfo:
        generate_plan(parse_document(text))

    assert str(excinfo.value) == message


def test_generated_plan_marshals_with_stable_layout():
    plan = generate_plan(parse_document('{"id": 7}'))

    assert marshal_plan(plan) == (
        "{\n"
        '  "version": 1,\n'
        '  "directives": [\n'
        "    {\n"
        '      "op": "named_bullets",\n'
        '      "path": ".",\n'
        '      "fields": [\n'
        "        {\n"
        '          "path": "id",\n'
        '          "label": "id"\n'
        "        }\n"
        "      ]\n"
        "    }\n"
        "  ]\n"
        "}"
    )
