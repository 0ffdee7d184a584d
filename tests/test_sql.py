"""Tests for the SQL fragment builders."""

import pytest
from songly.core.errors import BadRequestError
from songly.services.sql import placeholder, positional_params, select_columns, sql_for_partial_update


class TestSqlForPartialUpdate:
    """Test the SET clause builder."""

    def test_single_field(self):
        set_cols, values = sql_for_partial_update({"firstName": "Aliya"}, {"firstName": "first_name"})
        assert set_cols == '"first_name"=:p1'
        assert values == ["Aliya"]

    def test_placeholders_follow_input_order(self):
        data = {"name": "New", "logoUrl": "http://new.img", "description": "D"}
        set_cols, values = sql_for_partial_update(data, {"logoUrl": "logo_url"})
        assert set_cols == '"name"=:p1, "logo_url"=:p2, "description"=:p3'
        assert values == ["New", "http://new.img", "D"]

    def test_unmapped_keys_used_verbatim(self):
        set_cols, values = sql_for_partial_update({"title": "T", "link": "L"}, {})
        assert set_cols == '"title"=:p1, "link"=:p2'
        assert values == ["T", "L"]

    def test_none_values_kept(self):
        set_cols, values = sql_for_partial_update({"logoUrl": None}, {"logoUrl": "logo_url"})
        assert set_cols == '"logo_url"=:p1'
        assert values == [None]

    def test_empty_data(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_partial_update({}, {"logoUrl": "logo_url"})
        assert exc_info.value.message == "No data"

    def test_n_fields_give_n_placeholders(self):
        data = {f"f{i}": i for i in range(1, 8)}
        set_cols, values = sql_for_partial_update(data, {})
        for i in range(1, 8):
            assert f'"f{i}"=:p{i}' in set_cols
        assert ":p8" not in set_cols
        assert values == list(range(1, 8))


def test_positional_params():
    assert positional_params(["a", "b"]) == {"p1": "a", "p2": "b"}
    assert positional_params(["c"], start=3) == {"p3": "c"}
    assert positional_params([]) == {}


def test_placeholder():
    assert placeholder(1) == ":p1"
    assert placeholder(12) == ":p12"


def test_select_columns_aliases_renamed_fields():
    cols = select_columns(("handle", "logoUrl"), {"logoUrl": "logo_url"})
    assert cols == 'handle, logo_url AS "logoUrl"'


def test_select_columns_with_table():
    cols = select_columns(("id", "playlistHandle"), {"playlistHandle": "playlist_handle"}, table="s")
    assert cols == 's.id, s.playlist_handle AS "playlistHandle"'
