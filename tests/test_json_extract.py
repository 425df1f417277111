from schemafs.core.json_extract import extract_json


def test_whole_response_is_json():
    assert extract_json('  [{"a": 1}]  ', list) == [{"a": 1}]


def test_code_fence_is_stripped():
    assert extract_json('```json\n{"name": "/"}\n```', dict) == {"name": "/"}


def test_prose_around_array():
    text = 'Sure! Here is the result:\n[{"table": "t", "category": "c"}]\nHope that helps.'
    assert extract_json(text, list) == [{"table": "t", "category": "c"}]


def test_first_balanced_block_wins_over_greedy_match():
    text = 'first {"a": 1} then {"b": 2}'
    assert extract_json(text, dict) == {"a": 1}


def test_braces_inside_strings_do_not_break_scanning():
    text = 'noise {"desc": "uses } and { in text", "n": 2} trailing }'
    assert extract_json(text, dict) == {"desc": "uses } and { in text", "n": 2}


def test_wrong_kind_or_garbage_returns_none():
    assert extract_json('{"a": [1, 2]}', list) == [1, 2]
    assert extract_json("no json here", dict) is None
    assert extract_json("", list) is None
    assert extract_json("[1, 2", list) is None
