import json

import pytest

from tablerecon.codec import compare_json, split_json
from tablerecon.errors import KeyColumnNotFound, MalformedInput


def test_compare_json_round_trip():
    request = {
        "left_headers": ["id", "name"],
        "left_rows": [["1", "a"]],
        "right_headers": ["id", "name"],
        "right_rows": [["1", "b"]],
        "key": "id",
        "options": {"trim": False, "case_insensitive": False},
    }
    data = json.loads(compare_json(json.dumps(request)))

    assert data["result"]["rows"] == [["1", "a", "1", "b", "both", "name", "0"]]
    assert data["log"][0] == ["left_rows", "1"]


def test_split_json_round_trip():
    request = {"headers": ["k"], "rows": [["b"], ["a"]], "key": "k"}
    data = json.loads(split_json(json.dumps(request)))
    assert [p["key_value"] for p in data["parts"]] == ["a", "b"]


@pytest.mark.parametrize("text", [
    "not json",
    "{}",
    '{"headers": ["k"], "rows": "nope", "key": "k"}',
    '{"headers": ["k"], "rows": [[1]], "key": "k"}',
])
def test_split_json_malformed(text):
    with pytest.raises(MalformedInput):
        split_json(text)


def test_compare_json_missing_options():
    request = {
        "left_headers": ["id"],
        "left_rows": [],
        "right_headers": ["id"],
        "right_rows": [],
        "key": "id",
    }
    with pytest.raises(MalformedInput):
        compare_json(json.dumps(request))


def test_key_error_passes_through():
    with pytest.raises(KeyColumnNotFound):
        split_json(json.dumps({"headers": ["k"], "rows": [], "key": "x"}))
