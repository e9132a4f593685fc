"""Unit tests for the envelope helpers and log redaction."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.utils.json_parser import discover_collection_key, safe_parse_json, unwrap_collection, unwrap_record
from app.utils.logger import redact_for_log


class TestEnvelopes:
    def test_discover_first_list_key(self):
        assert discover_collection_key({"meta": {}, "carros": [1]}) == "carros"
        assert discover_collection_key({"meta": {}}) is None
        assert discover_collection_key([]) is None

    def test_unwrap_fixed_key_ignores_other_lists(self):
        assert unwrap_collection({"outros": [1], "carros": [2]}, "carros") == [2]

    def test_unwrap_fixed_key_missing(self):
        assert unwrap_collection({"hondas": [2]}, "carros") == []

    def test_unwrap_non_dict(self):
        assert unwrap_collection(None) == []
        assert unwrap_record("x", "carro") is None

    def test_unwrap_record(self):
        assert unwrap_record({"carro": {"id": 1}}, "carro") == {"id": 1}
        assert unwrap_record({"carro": []}, "carro") is None

    def test_safe_parse_json(self):
        assert safe_parse_json(b'{"a": 1}') == {"a": 1}
        assert safe_parse_json("{broken") is None
        assert safe_parse_json(None) is None


class TestRedaction:
    def test_nested_passwords_masked(self):
        payload = {"user": {"username": "rui", "password": "pw", "email": "r@x.pt"}}
        assert redact_for_log(payload) == {
            "user": {"username": "rui", "password": "<redacted>", "email": "r@x.pt"},
        }

    def test_lists_and_scalars(self):
        assert redact_for_log([{"Password": 1}, "x", 3]) == [{"Password": "<redacted>"}, "x", 3]
