import pytest

from json2mdplan import directives, engine, render_markdown, validate_plan
from json2mdplan.diagnostics import DiagnosticError
from json2mdplan.document import parse_document
from json2mdplan.generate import generate_plan
from json2mdplan.plan import Directive, Field, Plan, new_plan


def _named(path, *pairs):
    return Directive(op="named_bullets", path=path, fields=tuple(Field(p, l) for p, l in pairs))


def test_flat_object_renders_in_field_order():
    root = parse_document('{"name": "Widget", "count": 3, "active": true}')
    plan = new_plan([_named(".", ("count", "Count"), ("name", "Name"), ("active", "Active"))])

    assert engine.render(root, plan) == "- **Count:** 3\n- **Name:** Widget\n- **Active:** true"


def test_uncovered_leaf_fails_with_missing_coverage():
    root = parse_document('{"name": "Widget", "count": 3}')
    plan = new_plan([_named(".", ("name", "Name"))])

    with pytest.raises(DiagnosticError) as excinfo:
        engine.render(root, plan)

    error = excinfo.value
    assert error.code == "missing_coverage"
    assert error.directive == -1
    assert error.path == "/count"
    assert error.message == 'plan does not cover JSON path "/count"'


def test_first_uncovered_leaf_is_reported_in_document_order():
    root = parse_document('{"a": 1, "b": {"c": [2, 3]}, "d": 4}')
    plan = new_plan([_named(".", ("a", "A"), ("d", "D"))])

    with pytest.raises(DiagnosticError) as excinfo:
        engine.validate(root, plan)

    assert excinfo.value.path == "/b/c/0"


def test_unsupported_version_is_checked_before_directives():
    root = parse_document('{"a": 1}')
    plan = Plan(version=2, directives=(Directive(op="nope", path="."),))

    with pytest.raises(DiagnosticError) as excinfo:
        engine.render(root, plan)

    assert excinfo.value.code == "unsupported_version"
    assert excinfo.value.directive == -1
    assert excinfo.value.path == ""
    assert excinfo.value.message == "plan version 2 is not supported"


def test_first_failing_directive_aborts_the_run():
    root = parse_document('{"a": 1, "tags": ["x"]}')
    plan = new_plan(
        [
            Directive(op="bullet_list", path="/tags"),
            Directive(op="heading", path="."),
            _named(".", ("missing", "Missing")),
        ]
    )

    with pytest.raises(DiagnosticError) as excinfo:
        engine.render(root, plan)

    assert excinfo.value.code == "unknown_directive"
    assert excinfo.value.directive == 1


def test_empty_plan_over_empty_containers_renders_nothing():
    plan = new_plan([])

    assert engine.render(parse_document("{}"), plan) == ""
    assert engine.render(parse_document("[]"), plan) == ""
    assert engine.render(parse_document('{"a": [], "b": {}}'), plan) == ""


def test_empty_plan_over_scalar_root_fails_on_root_leaf():
    with pytest.raises(DiagnosticError) as excinfo:
        engine.render(parse_document("42"), new_plan([]))

    assert excinfo.value.code == "missing_coverage"
    assert excinfo.value.path == ""


def test_overlapping_directives_repeat_output_and_share_coverage():
    root = parse_document('{"name": "svc", "tags": ["a", "b"]}')
    plan = new_plan(
        [
            _named(".", ("name", "Name"), ("tags/0", "First tag")),
            Directive(op="bullet_list", path="/tags"),
        ]
    )

    evaluation = engine.evaluate(root, plan)

    assert evaluation.lines == ("- **Name:** svc", "- **First tag:** a", "- a", "- b")
    assert evaluation.consumed == frozenset({"/name", "/tags/0", "/tags/1"})


def test_table_then_named_bullets_over_nested_report():
    root = parse_document(
        '{"service": "api", "checks": [{"id": 1, "ok": true}, {"id": 2, "ok": false}]}'
    )
    plan = new_plan(
        [
            _named(".", ("service", "Service")),
            Directive(
                op="table",
                path="/checks",
                fields=(Field("id", "ID"), Field("ok", "OK")),
            ),
        ]
    )

    assert render_markdown(root, plan).splitlines() == [
        "- **Service:** api",
        "| ID | OK |",
        "| --- | --- |",
        "| 1 | true |",
        "| 2 | false |",
    ]


def test_validate_plan_returns_none_on_success():
    root = parse_document('["a"]')

    assert validate_plan(root, new_plan([Directive(op="bullet_list", path=".")])) is None


def test_rendering_is_deterministic():
    root = parse_document('{"x": 1.10, "y": [true, null]}')
    plan = new_plan([_named(".", ("x", "X")), Directive(op="bullet_list", path="/y")])

    assert engine.render(root, plan) == engine.render(root, plan)
    assert engine.render(root, plan) == "- **X:** 1.10\n- true\n- null"


def test_shadowed_duplicate_key_is_never_covered():
    root = parse_document('{"a": "first", "a": "second"}')

    with pytest.raises(DiagnosticError) as excinfo:
        engine.render(root, generate_plan(root))

    assert excinfo.value.code == "missing_coverage"
    assert excinfo.value.path == "/a"


def test_duplicate_key_lookup_reads_the_last_occurrence():
    root = parse_document('{"a": "first", "a": "second"}')

    result = directives.execute(root, 0, _named(".", ("a", "A")))

    assert result.lines == ("- **A:** second",)
    assert result.consumed == ("/a",)


def test_duplicate_object_members_report_the_unreachable_leaf():
    root = parse_document('{"o": {"x": 1}, "o": {"y": 2}}')
    plan = new_plan([_named("/o", ("y", "Y"))])

    with pytest.raises(DiagnosticError) as excinfo:
        engine.validate(root, plan)

    assert excinfo.value.code == "missing_coverage"
    assert excinfo.value.path == "/o/x"
