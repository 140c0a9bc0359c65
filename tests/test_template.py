import pytest

from shaken.errors import TemplateError
from shaken.template import Environment, SimpleTemplate, find_keys


def test_apply_substitutes_known_keys() -> None:
    template = SimpleTemplate("hi", "hello ${name}, welcome to ${channel}. ${unknown} stays")
    env = Environment().insert("name", "museun").insert("channel", "#test")

    assert template.apply(env) == "hello museun, welcome to #test. ${unknown} stays"


def test_callables_are_resolved_lazily() -> None:
    calls: list[int] = []

    def counter() -> int:
        calls.append(1)
        return len(calls)

    env = Environment().insert("count", counter)

    assert SimpleTemplate("c", "${count} ${count}").apply(env) == "1 1"
    assert calls == [1]


def test_environment_insert_does_not_mutate() -> None:
    base = Environment()
    extended = base.insert("a", 1)

    assert base.resolve("a") is None
    assert extended.resolve("a") == "1"
    assert extended.insert("b", None).resolve("b") == ""


def test_find_keys_in_order() -> None:
    assert find_keys("${a} and ${b} cost $5 {literally}") == ["a", "b"]


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("${a", "non-terminated template found"),
        ("${}", "empty templates are not allowed"),
        ("${a{b}}", "nested templates are not allowed"),
        ("${a ${b}}", "nested templates are not allowed"),
    ],
)
def test_malformed_bodies_are_rejected(body: str, message: str) -> None:
    with pytest.raises(TemplateError, match=message):
        SimpleTemplate("bad", body)
