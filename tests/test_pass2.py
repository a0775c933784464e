"""
JSON specification pass2 test from json.org test suite.

Validates parsing of a deeply nested array structure, held inside an object
since the document root must be an object.
"""

import tagjson

# adapted from https://json.org/JSON_checker/test/pass2.json
JSON = r"""
{"deep": [[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]}
"""


def test_parse() -> None:
    """
    Validates decoding and round-trip encoding for deeply nested arrays.

    Tests the grammar's handling of 19 levels of array nesting and proper
    reconstruction through encoding.
    """
    res = tagjson.loads(JSON)

    node = res.get("deep")
    for _ in range(18):
        (node,) = node.items
    assert node == tagjson.Array((tagjson.StringValue("Not too deep"),))

    out = tagjson.dumps(res)
    assert res == tagjson.loads(out)
