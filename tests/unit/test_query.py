from urllib.parse import parse_qsl

from atp_agent.services.query import build_query


def test_empty_mapping_yields_empty_string():
    assert build_query({}) == ""


def test_absent_and_empty_values_are_dropped():
    qs = build_query({"ticker": None, "userId": "", "page": 2, "agentTokenContract": None})
    assert qs == "?page=2"


def test_all_empty_yields_no_question_mark():
    assert build_query({"ticker": None, "userId": ""}) == ""


def test_insertion_order_is_kept():
    qs = build_query({"page": 1, "ticker": "SOPHIA", "userId": "u-1"})
    assert qs == "?page=1&ticker=SOPHIA&userId=u-1"


def test_values_are_url_escaped():
    qs = build_query({"ticker": "A&B=C", "note": "two words"})
    assert "&B" not in qs
    assert parse_qsl(qs[1:]) == [("ticker", "A&B=C"), ("note", "two words")]


def test_booleans_and_zero_are_kept():
    qs = build_query({"extendedStats": True, "pretty": False, "page": 0})
    assert qs == "?extendedStats=true&pretty=false&page=0"


def test_never_emits_keys_for_missing_values():
    params = {f"k{i}": value for i, value in enumerate([None, "", "x", 0, None, "", "y"])}
    keys = [key for key, _ in parse_qsl(build_query(params)[1:], keep_blank_values=True)]
    assert keys == ["k2", "k3", "k6"]
