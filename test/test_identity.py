"""
Tests for identifier parsing and comparison.
"""

import uuid

import pytest

from vidshare.exceptions import InvalidIdentifierError
from vidshare.utils.identity import identity_of, is_valid_id, new_id, parse_id, same_id


class FakeEntity:
    def __init__(self, id):
        self.id = id


class TestParseId:
    """Tests for parse_id and is_valid_id."""

    def test_new_id_is_valid(self):
        assert is_valid_id(new_id())

    @pytest.mark.parametrize("value", [None, "", "123", "not-a-uuid", "zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz"])
    def test_rejects_malformed(self, value):
        assert not is_valid_id(value)
        with pytest.raises(InvalidIdentifierError):
            parse_id(value, "Video")

    def test_canonical_form(self):
        raw = uuid.uuid4()
        assert parse_id(str(raw).upper(), "Video") == str(raw)

    def test_error_names_resource(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            parse_id("nope", "Playlist")
        assert exc_info.value.message == "Invalid playlist ID format"


class TestSameId:
    """Tests for identity comparison."""

    def test_string_and_uuid(self):
        raw = uuid.uuid4()
        assert same_id(str(raw), raw)

    def test_entity_and_string(self):
        value = new_id()
        assert same_id(FakeEntity(value), value)
        assert identity_of(FakeEntity(value)) == value

    def test_different_ids(self):
        assert not same_id(new_id(), new_id())

    def test_none_never_matches(self):
        assert not same_id(None, None)
        assert not same_id(None, new_id())
