from __future__ import annotations

import io
import json
import sys
import unittest
from pathlib import Path

import requests
from requests.structures import CaseInsensitiveDict

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tsclient import with_body, with_header, with_json_body, with_url_values


def blank_request() -> requests.Request:
    return requests.Request("POST", "http://unit.test/x", headers=CaseInsensitiveDict())


class HeaderOptionTests(unittest.TestCase):
    def test_with_header_appends_to_existing_value(self) -> None:
        request = blank_request()

        with_header({"Accept": "application/json"})(request)
        with_header({"accept": ["text/plain", "*/*"]})(request)

        self.assertEqual(request.headers["Accept"], "application/json, text/plain, */*")


class QueryOptionTests(unittest.TestCase):
    def test_with_url_values_replaces_previous_query(self) -> None:
        request = blank_request()

        with_url_values({"a": ["1"], "b": ["2", "3"]})(request)
        with_url_values({"c": [4]})(request)

        self.assertEqual(request.params, [("c", "4")])

    def test_with_url_values_keeps_mapping_order(self) -> None:
        request = blank_request()

        with_url_values({"z": ["1"], "a": ["2"]})(request)

        self.assertEqual(request.prepare().url, "http://unit.test/x?z=1&a=2")

    def test_with_url_values_sends_string_as_one_item(self) -> None:
        request = blank_request()

        with_url_values({"action": "upsert", "ids": ["1", "2"]})(request)

        self.assertEqual(
            request.params, [("action", "upsert"), ("ids", "1"), ("ids", "2")]
        )


class BodyOptionTests(unittest.TestCase):
    def test_later_body_wins(self) -> None:
        request = blank_request()

        with_json_body({"a": 1})(request)
        with_body(b"raw")(request)

        self.assertEqual(request.data, b"raw")

    def test_with_body_accepts_stream(self) -> None:
        request = blank_request()
        stream = io.BytesIO(b'{"id": "1"}\n')

        with_body(stream)(request)

        self.assertIs(request.data, stream)

    def test_with_json_body_sets_content_type(self) -> None:
        request = blank_request()

        with_json_body({"name": "books"})(request)

        self.assertEqual(request.headers["Content-Type"], "application/json")
        self.assertEqual(json.loads(request.data), {"name": "books"})

    def test_with_json_body_none_is_noop(self) -> None:
        request = blank_request()
        request.data = b"kept"

        with_json_body(None)(request)

        self.assertEqual(request.data, b"kept")
        self.assertNotIn("Content-Type", request.headers)

    def test_with_json_body_encodes_lazily(self) -> None:
        option = with_json_body({"bad": object()})

        with self.assertRaises(TypeError):
            option(blank_request())


if __name__ == "__main__":
    unittest.main()
