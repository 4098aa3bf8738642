"""Tests for the TOON encoder."""

import json

import pytest

import config
from utils.toon_encoder import encode


class TestScalars:
    """Scalars render as standard JSON literals."""

    @pytest.mark.parametrize("value", [
        True, False, 0, -17, 3.5, 1.5e-7, 1e21, "plain", 'quote " and \\ slash',
        "tab\tnew\nline", "caf\u00e9", "",
    ])
    def test_scalar_matches_json_literal(self, value):
        assert encode(value) == json.dumps(value, ensure_ascii=False)

    def test_null(self):
        assert encode(None) == "null"

    def test_scalar_literal_reads_back(self):
        value = "line\u0001\"end\""
        assert json.loads(encode(value)) == value


class TestRootArrays:
    """Arrays passed directly to encode."""

    def test_empty_array(self):
        assert encode([]) == "[]"

    def test_scalar_list(self):
        assert encode([1, 2, 3]) == "[3]: 1,2,3"

    def test_scalar_list_with_null_and_strings(self):
        assert encode([1, "a", None, True]) == '[4]: 1,"a",null,true'

    def test_table(self):
        data = [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]
        assert encode(data) == "[2]{id,name}: 1,Alice 2,Bob"

    def test_root_table_quotes_commas_only(self):
        data = [{"name": "Smith, Jr.", "age": 40}, {"name": "Ann Lee", "age": 30}]
        assert encode(data) == '[2]{name,age}: "Smith, Jr.",40 Ann Lee,30'

    def test_table_row_and_cell_counts(self):
        data = [{"a": i, "b": i * 2, "c": "x"} for i in range(5)]
        header, rows = encode(data).split(": ", 1)
        assert header == "[5]{a,b,c}"
        assert len(rows.split(" ")) == 5
        assert all(len(row.split(",")) == 3 for row in rows.split(" "))

    def test_mixed_root_array_keyed_by_index(self):
        assert encode([1, {"a": 1}]) == "0: 1\n1:\n  a: 1"

    def test_sample_document(self):
        expected = (
            '[4]{id,name,role,active,tags}: '
            '1,Alice Johnson,admin,true,["dev","lead"] '
            '2,Bob Smith,user,true,["design"] '
            '3,Charlie Brown,user,false,["marketing"] '
            '4,Diana Ross,moderator,true,["support"]'
        )
        assert encode(config.SAMPLE_JSON) == expected


class TestTableClassification:
    """Key order affects the header, not the table/non-table decision."""

    def test_header_follows_first_element_order(self):
        assert encode([{"a": 1, "b": 2}, {"b": 3, "a": 4}]) == "[2]{a,b}: 1,2 4,3"

    def test_reordered_first_element_changes_header_only(self):
        assert encode([{"b": 2, "a": 1}, {"a": 4, "b": 3}]) == "[2]{b,a}: 2,1 3,4"

    def test_differing_key_sets_are_not_a_table(self):
        assert encode({"items": [{"a": 1}, {"b": 2}]}) == "items:\n  a: 1\n  b: 2"


class TestObjects:
    """Object properties, one or more lines each."""

    def test_scalar_list_property(self):
        assert encode({"tags": ["a", "b"]}) == 'tags[2]: "a","b"'

    def test_nested_object(self):
        assert encode({"user": {"id": 1, "active": True}}) == "user:\n  id: 1\n  active: true"

    def test_empty_array_property(self):
        assert encode({"x": []}) == "x: []"

    def test_scalar_properties(self):
        assert encode({"n": None, "s": "hi there", "f": 2.25}) == 'n: null\ns: "hi there"\nf: 2.25'

    def test_property_table_quotes_commas_and_spaces(self):
        data = {"people": [{"name": "Smith, Jr.", "age": 40}, {"name": "Ann Lee", "age": 30}]}
        assert encode(data) == 'people[2]{name,age}: "Smith, Jr.",40 "Ann Lee",30'

    def test_table_cells_for_null_bool_and_composites(self):
        data = {"rows": [{"id": 1, "ok": True, "note": None, "tags": ["x", "y"]}]}
        assert encode(data) == 'rows[1]{id,ok,note,tags}: 1,true,,["x","y"]'

    def test_deep_nesting_indents_two_spaces_per_level(self):
        assert encode({"a": {"b": {"c": 1}}}) == "a:\n  b:\n    c: 1"

    def test_table_inside_nested_object(self):
        data = {"org": {"users": [{"id": 1}, {"id": 2}]}}
        assert encode(data) == "org:\n  users[2]{id}: 1 2"

    def test_mixed_array_elements_encoded_standalone(self):
        assert encode({"k": [1, {"a": 1}]}) == "k:\n1\n  a: 1"

    def test_array_of_arrays(self):
        assert encode({"m": [[1, 2], [3]]}) == "m:\n[2]: 1,2\n[1]: 3"

    def test_empty_nested_object_leaves_blank_line(self):
        assert encode({"a": {}, "b": 1}) == "a:\n\nb: 1"

    def test_empty_root_object(self):
        assert encode({}) == ""

    def test_insertion_order_preserved(self):
        assert encode({"z": 1, "a": 2}) == "z: 1\na: 2"

    def test_no_trailing_newline(self):
        assert not encode({"a": 1, "b": [1]}).endswith("\n")


class TestOutOfRangeValues:
    """Values json.loads accepts but JSON cannot spell literally."""

    def test_overflowing_number_renders_null(self):
        assert encode(json.loads('{"x": 1e400}')) == "x: null"
        assert encode(json.loads("[1e400, -1e400, 2]")) == "[3]: null,null,2"

    def test_overflowing_number_in_table_cell(self):
        data = json.loads('{"rows": [{"v": 1e400, "w": [1e400]}]}')
        assert encode(data) == "rows[1]{v,w}: ,[null]"

    def test_lone_surrogate_escaped(self):
        value = json.loads('{"a": "\\ud800"}')
        out = encode(value)
        assert out == 'a: "\\ud800"'
        assert json.loads(out.split(": ", 1)[1]) == "\ud800"
        out.encode("utf-8")

    def test_lone_surrogate_in_table_cell(self):
        value = json.loads('[{"a": "x\\udc00"}]')
        assert encode(value) == "[1]{a}: x\\udc00"

    def test_surrogate_pair_kept_as_character(self):
        assert encode(json.loads('"\\ud83d\\ude00"')) == '"\U0001F600"'
