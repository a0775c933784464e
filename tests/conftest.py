"""
Pytest configuration and shared fixtures for tagjson tests.

Provides immutable test data fixtures describing documents the grammar must
accept or reject, and the tagged values they decode to.
"""

from dataclasses import dataclass
from typing import Any

import pytest

from tagjson import FALSE
from tagjson import NULL
from tagjson import TRUE
from tagjson import Array
from tagjson import DecimalNumber
from tagjson import IntegerNumber
from tagjson import Object
from tagjson import StringValue


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    object_root: bool = True


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides documents the grammar must reject.

    Adapted from the json.org JSON_checker failures, keeping only those that
    remain failures under the relaxed grammar (trailing commas, raw control
    characters and unknown escapes are accepted) and wrapping array roots in
    an object.
    """
    fail_docs = [
        ("empty input", ""),
        ("whitespace only", " \n\t "),
        ("string root", '"A JSON payload should be an object"'),
        ("array root", '["an array is not an object"]'),
        ("number root", "42"),
        ("literal root", "true"),
        ("unclosed object", '{"Unclosed object": true'),
        ("unclosed array", '{"a": ["Unclosed array"}'),
        ("unquoted key", '{unquoted_key: "keys must be quoted"}'),
        ("single quotes", "{'single': 'quote'}"),
        ("double extra comma", '{"a": ["double extra comma",,]}'),
        ("missing value", '{"a": [   , "<-- missing value"]}'),
        ("lone comma object", "{,}"),
        ("lone comma array", '{"a": [,]}'),
        ("doubled member comma", '{"a": 1,,}'),
        ("illegal expression", '{"Illegal expression": 1 + 2}'),
        ("illegal invocation", '{"Illegal invocation": alert()}'),
        ("leading zero", '{"Numbers cannot have leading zeroes": 013}'),
        ("hex number", '{"Numbers cannot be hex": 0x14}'),
        ("naked word", '{"a": [\\naked]}'),
        ("missing colon", '{"Missing colon" null}'),
        ("double colon", '{"Double colon":: null}'),
        ("comma instead of colon", '{"Comma instead of colon", null}'),
        ("colon instead of comma", '{"a": ["Colon instead of comma": false]}'),
        ("bad literal", '{"Bad value": truth}'),
        ("missing comma", '{"a": 1 "b": 2}'),
        ("missing array comma", '{"a": [1 2]}'),
        ("dangling fraction", '{"a": 1.}'),
        ("bare fraction", '{"a": .5}'),
        ("explicit plus", '{"a": +1}'),
        ("lone minus", '{"a": -}'),
        ("empty exponent", '{"a": [0e]}'),
        ("signed empty exponent", '{"a": [0e+]}'),
        ("double exponent sign", '{"a": [0e+-1]}'),
        ("comma instead of brace", '{"Comma instead if closing brace": true,'),
        ("mismatch", '{"a": ["mismatch"}}'),
        ("unterminated string", '{"a": "unterminated}'),
        ("escaped closing quote", '{"a": "ends with escaped quote\\"}'),
        ("unterminated key", '{"a'),
    ]

    return [
        JsonTestCase(description=description, input_data=doc, should_fail=True)
        for description, doc in fail_docs
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides documents the grammar must accept.

    Covers the json.org pass files plus the documented relaxations.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
            object_root=False,
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='{"deep": [[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]}',
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
        JsonTestCase("trailing member comma", '{"a": 1,}'),
        JsonTestCase("trailing element comma", '{"a": [1, 2,],}'),
        JsonTestCase("raw tab in string", '{"a": "tab\there"}'),
        JsonTestCase("unknown escape kept", '{"a": "abc\\y"}'),
        JsonTestCase("trailing data", '{"a": 1} "misplaced quoted value"'),
        JsonTestCase("byte order mark", '\ufeff{"a": 1}'),
        JsonTestCase("duplicate keys", '{"a": 1, "a": 2}'),
        JsonTestCase("control characters as whitespace", '\x00{\x01"a"\x7f:\x1f1}'),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic value test cases decoded with any root allowed.

    Covers every variant of the value model.
    """
    return [
        JsonTestCase("null value", "null", False, NULL, False),
        JsonTestCase("true boolean", "true", False, TRUE, False),
        JsonTestCase("false boolean", "false", False, FALSE, False),
        JsonTestCase("integer", "42", False, IntegerNumber(42), False),
        JsonTestCase("negative integer", "-17", False, IntegerNumber(-17), False),
        JsonTestCase("zero", "0", False, IntegerNumber(0), False),
        JsonTestCase("decimal", "3.14", False, DecimalNumber("3.14"), False),
        JsonTestCase("empty string", '""', False, StringValue(""), False),
        JsonTestCase("simple string", '"hello"', False, StringValue("hello"), False),
        JsonTestCase("empty array", "[]", False, Array(()), False),
        JsonTestCase("empty object", "{}", False, Object(()), False),
        JsonTestCase(
            "simple array",
            "[1, 2, 3]",
            False,
            Array((IntegerNumber(1), IntegerNumber(2), IntegerNumber(3))),
            False,
        ),
        JsonTestCase(
            "simple object",
            '{"key": "value"}',
            False,
            Object((("key", StringValue("value")),)),
            False,
        ),
    ]
