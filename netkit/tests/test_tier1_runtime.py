"""Tests for tier1_runtime modules."""
from __future__ import annotations

import pytest
from pydantic import BaseModel

from netkit.tier0_core.errors import DecodeError, EncodeError, ParseError
from netkit.tier1_runtime.serialize import decode_json, encode_json
from netkit.tier1_runtime.urls import build_url, parse_query_params


class Message(BaseModel):
    message: str
    status: str


# ── serialize ──────────────────────────────────────────────────────────────

class TestSerialize:
    def test_encode_dict(self):
        assert encode_json({"name": "test", "value": 42}) == b'{"name": "test", "value": 42}'

    def test_encode_model(self):
        data = encode_json(Message(message="hi", status="ok"))
        assert data == b'{"message":"hi","status":"ok"}'

    def test_encode_unserializable_raises(self):
        with pytest.raises(EncodeError):
            encode_json({"when": object()})

    def test_encode_nan_raises(self):
        with pytest.raises(EncodeError):
            encode_json({"value": float("nan")})

    def test_decode_plain(self):
        assert decode_json(b'{"a": [1, 2]}') == {"a": [1, 2]}

    @pytest.mark.parametrize("empty", [b"", b"  \n", ""])
    def test_decode_empty_body_raises(self, empty):
        with pytest.raises(DecodeError):
            decode_json(empty)

    def test_decode_empty_body_raises_with_model(self):
        with pytest.raises(DecodeError):
            decode_json(b"", Message)

    def test_decode_into_model(self):
        msg = decode_json(b'{"message": "hi", "status": "ok"}', Message)
        assert msg == Message(message="hi", status="ok")

    def test_decode_into_list_of_models(self):
        items = decode_json(b'[{"message": "a", "status": "x"}]', list[Message])
        assert items[0].message == "a"

    def test_decode_malformed_raises(self):
        with pytest.raises(DecodeError):
            decode_json(b"invalid json")

    def test_decode_model_mismatch_raises(self):
        with pytest.raises(DecodeError):
            decode_json(b'{"message": "hi"}', Message)

    def test_decode_malformed_into_model_raises(self):
        with pytest.raises(DecodeError):
            decode_json(b"{not json", Message)


# ── urls ───────────────────────────────────────────────────────────────────

class TestBuildUrl:
    def test_no_params_leaves_url_unchanged(self):
        assert build_url("https://example.com", None) == "https://example.com"
        assert build_url("https://example.com/path", {}) == "https://example.com/path"

    def test_params_sorted_by_key(self):
        url = build_url(
            "https://api.example.com/users",
            {"sort": "name", "page": "1", "limit": "10"},
        )
        assert url == "https://api.example.com/users?limit=10&page=1&sort=name"

    def test_merges_with_existing_query(self):
        url = build_url("https://example.com?existing=param", {"key": "value"})
        assert url == "https://example.com?existing=param&key=value"

    def test_colliding_key_overwrites_existing(self):
        url = build_url("https://example.com/?page=1&page=2&q=x", {"page": "3"})
        assert url == "https://example.com/?page=3&q=x"

    def test_existing_query_is_reordered(self):
        assert build_url("https://example.com/?b=2&a=1") == "https://example.com/?a=1&b=2"

    def test_empty_base_url(self):
        assert build_url("", {"key": "value"}) == "?key=value"

    def test_values_are_form_encoded(self):
        url = build_url("https://example.com/search", {"q": "hello world&more"})
        assert url == "https://example.com/search?q=hello+world%26more"

    def test_fragment_preserved(self):
        url = build_url("https://example.com/docs#intro", {"v": "2"})
        assert url == "https://example.com/docs?v=2#intro"

    def test_bare_question_mark_kept(self):
        assert build_url("https://example.com?") == "https://example.com?"
        assert build_url("https://example.com/path?", {}) == "https://example.com/path?"
        assert build_url("https://example.com?", {"a": "1"}) == "https://example.com?a=1"

    def test_question_mark_in_fragment_not_a_query(self):
        assert build_url("https://example.com/docs#what?") == "https://example.com/docs#what?"

    def test_existing_semicolon_pair_dropped(self):
        url = build_url("https://example.com/?a=1;b=2&c=3", {"d": "4"})
        assert url == "https://example.com/?c=3&d=4"

    def test_existing_malformed_escape_dropped(self):
        url = build_url("https://example.com/?bad=%zz&ok=1")
        assert url == "https://example.com/?ok=1"

    def test_userinfo_and_ipv6_host_accepted(self):
        url = build_url("http://user:p%40ss@[::1]:8080/x", {"a": "b"})
        assert url == "http://user:p%40ss@[::1]:8080/x?a=b"

    @pytest.mark.parametrize("bad", [
        "://invalid-url",
        "http://example.com/\x7fpath",
        "http://[::1/",
        "http://example.com:port/",
        "http://exa mple.com/",
        "http://example{1}.com/",
        "http://example%zz.com/",
    ])
    def test_unparsable_base_raises(self, bad):
        with pytest.raises(ParseError):
            build_url(bad, {"key": "value"})


class TestParseQueryParams:
    def test_empty_string(self):
        assert parse_query_params("") == {}

    def test_single_parameter(self):
        assert parse_query_params("key=value") == {"key": "value"}

    def test_multiple_parameters(self):
        assert parse_query_params("key1=value1&key2=value2") == {"key1": "value1", "key2": "value2"}

    def test_first_occurrence_wins(self):
        assert parse_query_params("key=value1&key=value2") == {"key": "value1"}

    def test_parameter_without_value(self):
        assert parse_query_params("key=") == {"key": ""}
        assert parse_query_params("flag") == {"flag": ""}

    def test_decodes_escapes_and_plus(self):
        assert parse_query_params("q=hello+world%21&name=J%C3%BCrgen") == {
            "q": "hello world!",
            "name": "Jürgen",
        }

    def test_skips_empty_segments(self):
        assert parse_query_params("a=1&&b=2&") == {"a": "1", "b": "2"}

    def test_invalid_escape_raises(self):
        with pytest.raises(ParseError):
            parse_query_params("%invalid")

    def test_truncated_escape_raises(self):
        with pytest.raises(ParseError):
            parse_query_params("a=1&b=%4")

    def test_semicolon_separator_raises(self):
        with pytest.raises(ParseError):
            parse_query_params("a=1;b=2")
