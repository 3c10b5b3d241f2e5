"""
Tests for JSON extraction from free-text model replies.
"""
import pytest

from chefai.models.ai import DetectedIngredient
from chefai.services.errors import MalformedResponse
from chefai.services.parsing import extract_json_array, extract_json_object, parse_list, parse_object


def test_array_inside_prose():
    text = 'Sure! ```json\n[{"a": 1}, {"a": 2}]\n``` Enjoy.'
    assert extract_json_array(text) == [{"a": 1}, {"a": 2}]


def test_no_array():
    with pytest.raises(MalformedResponse):
        extract_json_array("nothing to see")


def test_broken_array():
    with pytest.raises(MalformedResponse):
        extract_json_array("[{'single': 'quotes'}]")


def test_object_inside_prose():
    assert extract_json_object('Result: {"totalCalories": 100} done') == {"totalCalories": 100}


def test_none_text():
    with pytest.raises(MalformedResponse):
        extract_json_object(None)


def test_parse_list_validates_each_entry():
    items = parse_list('[{"name": "Tomato", "confidence": 0.9, "extra": true}]', DetectedIngredient)
    assert items[0].name == "Tomato"

    with pytest.raises(MalformedResponse):
        parse_list('[{"name": "Tomato", "confidence": 1.5}]', DetectedIngredient)


def test_parse_object_rejects_wrong_shape():
    with pytest.raises(MalformedResponse):
        parse_object('{"name": ""}', DetectedIngredient)
