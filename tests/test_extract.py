import pytest

from shaken.core import Matched, MissingRequired, NoMatch, build_schema, extract


@pytest.fixture
def hello():
    return build_schema("!hello <name> <other?> <rest...>")


def test_each_slot_binds_in_order(hello) -> None:
    result = hello.extract("!hello world this is a test")

    assert result == Matched({"name": "world", "other": "this", "rest": "is a test"})


def test_last_token_stops_the_walk(hello) -> None:
    assert hello.extract("!hello world") == Matched({"name": "world"})


def test_bare_command_with_required_slot_asks_for_help(hello) -> None:
    assert hello.extract("!hello") == MissingRequired()
    assert hello.extract("!hello    ") == MissingRequired()


@pytest.mark.parametrize("line", ["!testing world this is a test", "!", "", "!help me"])
def test_other_commands_do_not_match(hello, line: str) -> None:
    assert hello.extract(line) == NoMatch()


def test_surplus_text_is_discarded() -> None:
    schema = build_schema("!hello <name> <other>")

    assert schema.extract("!hello world testing this") == Matched({"name": "world", "other": "testing"})
    assert schema.extract("!hello world testing") == Matched({"name": "world", "other": "testing"})


def test_flexible_slot_takes_the_rest() -> None:
    schema = build_schema("!hello <name> <other> <tail...>")

    result = schema.extract("!hello world testing this is the tail")
    assert result == Matched({"name": "world", "other": "testing", "tail": "this is the tail"})
    assert schema.extract("!hello world testing") == Matched({"name": "world", "other": "testing"})


@pytest.mark.parametrize("line", ["!maybe", "!maybe   "])
def test_schema_without_required_slots_never_reports_missing(line: str) -> None:
    assert build_schema("!maybe <something?>").extract(line) == Matched({})
    assert build_schema("!maybe <rest...>").extract(line) == Matched({})
    assert build_schema("!maybe").extract(line) == Matched({})


def test_optional_slot_binds_when_present() -> None:
    schema = build_schema("!maybe <something?>")

    assert schema.extract("!maybe monad") == Matched({"something": "monad"})


def test_flexible_only_keeps_inner_spacing() -> None:
    schema = build_schema("!repeat <this...>")

    assert schema.extract("!repeat some  spaced\tmessage ") == Matched({"this": "some  spaced\tmessage "})


def test_whitespace_after_the_name_is_skipped(hello) -> None:
    assert hello.extract("!hello   \t world") == Matched({"name": "world"})


def test_only_spaces_separate_slots() -> None:
    schema = build_schema("!pair <left> <right?>")

    assert schema.extract("!pair a\tb c") == Matched({"left": "a\tb", "right": "c"})


def test_doubled_space_leaves_a_slot_unbound() -> None:
    schema = build_schema("!pair <left> <right?>")

    assert schema.extract("!pair a  b") == Matched({"left": "a"})


def test_name_is_matched_as_a_prefix() -> None:
    assert build_schema("!go").extract("!gopher") == Matched({})
    assert build_schema("!go <where>").extract("!gopher") == Matched({"where": "pher"})


def test_leader_is_optional_and_stripped_once(hello) -> None:
    assert hello.extract("hello world") == Matched({"name": "world"})
    assert hello.extract("!!hello world") == NoMatch()


def test_name_match_is_case_sensitive(hello) -> None:
    assert hello.extract("!Hello world") == NoMatch()


def test_custom_leader() -> None:
    schema = build_schema("?hello <name>", leader="?")

    assert schema.extract("?hello world") == Matched({"name": "world"})
    assert extract(schema, "~hello world", leader="~") == Matched({"name": "world"})
    assert schema.extract("!hello world") == NoMatch()


def test_extract_defaults_to_the_schema_leader() -> None:
    schema = build_schema("?hello <name>", leader="?")

    assert extract(schema, "?hello world") == Matched({"name": "world"})
    assert extract(schema, "?hello") == MissingRequired()
    assert extract(schema, "!hello world") == NoMatch()


def test_matched_mapping_access(hello) -> None:
    result = hello.extract("!hello world")

    assert isinstance(result, Matched)
    assert result["name"] == "world"
    assert result.get("other") is None
    assert "other" not in result.mapping
