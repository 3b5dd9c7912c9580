from __future__ import annotations

from textwrap import dedent

import pytest

from bluefox_notation import (
    BfArray,
    BfBool,
    BfFloat,
    BfFunction,
    BfInt,
    BfNull,
    BfObject,
    BfString,
    BluefoxSyntaxError,
    Data,
    load,
    loads,
    parse_data,
    parse_value,
)
from tests.support.harness import SAMPLE, SOME_DATA, assert_sample_values

VALUE_CASES = [
    pytest.param("null", BfNull(), id="null"),
    pytest.param("true", BfBool(True), id="true"),
    pytest.param("false", BfBool(False), id="false"),
    pytest.param("4", BfInt(4), id="int"),
    pytest.param("-12", BfInt(-12), id="int-negative"),
    pytest.param("+7", BfInt(7), id="int-plus-sign"),
    pytest.param("9223372036854775807", BfInt(9223372036854775807), id="int-max"),
    pytest.param("9223372036854775808", BfFloat(9223372036854775808.0), id="int-overflow-is-float"),
    pytest.param("6.4", BfFloat(6.4), id="float"),
    pytest.param("1e3", BfFloat(1000.0), id="float-exponent"),
    pytest.param("-.5", BfFloat(-0.5), id="float-leading-dot"),
    pytest.param("inf", BfFloat(float("inf")), id="float-inf"),
    pytest.param('"4"', BfString("4"), id="quoted-number-is-string"),
    pytest.param('""', BfString(""), id="empty-string"),
    pytest.param('"true"', BfString("true"), id="quoted-bool-is-string"),
    pytest.param("True", BfString("True"), id="keywords-are-case-sensitive"),
    pytest.param("1_000", BfString("1_000"), id="underscored-digits-are-string"),
    pytest.param("4 apples", BfString("4 apples"), id="number-prefix-is-string"),
    pytest.param(
        "this is the, first test string",
        BfString("this is the, first test string"),
        id="bare-phrase",
    ),
    pytest.param("`return 1`", BfFunction("return 1"), id="function"),
    pytest.param("``", BfFunction(""), id="function-empty"),
    pytest.param("[ 5\n6\n7 ]", BfArray([BfInt(5), BfInt(6), BfInt(7)]), id="array"),
    pytest.param("[]", BfArray([]), id="array-empty"),
    pytest.param(
        "[\nnull\n\"x\"\n[\n1\n]\n]",
        BfArray([BfNull(), BfString("x"), BfArray([BfInt(1)])]),
        id="array-mixed-nested",
    ),
    pytest.param("{}", BfObject(Data()), id="object-empty"),
    pytest.param(
        "{ more_bool: true\nmore_int: 9\nmore_float: 1.67 }",
        SOME_DATA,
        id="object",
    ),
]


@pytest.mark.parametrize("text, expected", VALUE_CASES)
def test_parse_value(text: str, expected: object) -> None:
    assert parse_value(text) == expected


def test_array_preserves_order_by_index() -> None:
    arr = parse_value("[ 5\n6\n7 ]")

    assert isinstance(arr, BfArray)
    assert [item.value for item in arr.items] == [5, 6, 7]
    assert arr.items[0] == BfInt(5)
    assert arr.items[2] == BfInt(7)


def test_sample_document() -> None:
    assert_sample_values(parse_data(SAMPLE))


def test_nested_object_has_exactly_its_keys() -> None:
    data = loads("some_data: {\n more_bool: true\n more_int: 9\n more_float: 1.67\n}")
    inner = data["some_data"]

    assert isinstance(inner, BfObject)
    assert sorted(inner.data) == ["more_bool", "more_float", "more_int"]


def test_deeply_nested_objects() -> None:
    data = loads(
        dedent(
            """\
            a: {
                b: {
                    c: {
                        d: 1
                    }
                }
                e: 2
            }
            f: 3
            """
        )
    )

    a = data["a"]
    assert isinstance(a, BfObject)
    assert a.data["e"] == BfInt(2)
    assert a.data["b"] == BfObject(Data({"c": BfObject(Data({"d": BfInt(1)}))}))
    assert data["f"] == BfInt(3)


def test_function_keeps_interior_verbatim() -> None:
    data = loads("f: `\n  local x = {1, 2}\n  return x[2]\n`")

    assert data["f"] == BfFunction("\n  local x = {1, 2}\n  return x[2]\n")


def test_escaped_quote_stays_in_one_string() -> None:
    data = loads('q: "she said \\"hi\\""\nnext: 1')

    assert data["q"] == BfString('she said \\"hi\\"')
    assert data["next"] == BfInt(1)


def test_duplicate_key_last_write_wins() -> None:
    data = loads("a: 1\nb: 2\na: 3")

    assert data["a"] == BfInt(3)
    assert len(data) == 2


def test_missing_colon_is_syntax_error() -> None:
    with pytest.raises(BluefoxSyntaxError) as exc_info:
        loads("key value")

    err = exc_info.value
    assert err.fragment == "key value"
    assert str(err) == "expected ':' after key value"


def test_missing_colon_inside_object_is_syntax_error() -> None:
    with pytest.raises(BluefoxSyntaxError) as exc_info:
        loads("outer: {\n ok: 1\n broken\n}")

    assert exc_info.value.fragment == "broken"


def test_empty_document() -> None:
    assert loads("") == Data()
    assert loads("  \n\n ") == Data()


def test_load_reads_file(tmp_path) -> None:
    path = tmp_path / "doc.bfn"
    path.write_text(SAMPLE, encoding="utf-8")

    assert_sample_values(load(path))
    assert_sample_values(Data.from_file(str(path)))


def test_load_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.bfn")


def test_quotes_inside_bare_text_stay_literal() -> None:
    data = loads('title: the "best" one\nnote: don\'t panic\n')

    assert data["title"] == BfString('the "best" one')
    assert data["note"] == BfString("don't panic")


def test_closers_inside_nested_strings_and_functions() -> None:
    data = loads('o: {\ns: "a}b"\n}\na: [\n`return "]"`\n"x]"\n]\n')

    assert data["o"] == BfObject(Data({"s": BfString("a}b")}))
    assert data["a"] == BfArray([BfFunction('return "]"'), BfString("x]")])
