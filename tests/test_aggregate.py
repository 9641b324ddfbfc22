import json

from sharecount.core.aggregate import decode_payload, to_int, total_count

from conftest import PAYLOAD


def test_empty_and_absent_payloads_total_zero():
    assert total_count({}) == 0
    assert total_count(None) == 0
    assert total_count("") == 0
    assert total_count([1, 2, 3]) == 0


def test_sums_plain_and_structured_counts():
    assert total_count({"Twitter": 5, "Facebook": {"total_count": 10, "like_count": 7}}) == 15
    assert total_count(PAYLOAD) == 1200 + 45 + 5 + 0 + 2 + 0


def test_accepts_json_text_and_bytes():
    text = json.dumps(PAYLOAD)
    assert total_count(text) == total_count(PAYLOAD)
    assert total_count(text.encode("utf-8")) == total_count(PAYLOAD)


def test_unparseable_json_is_zero():
    assert total_count("{not json") == 0
    assert total_count(b"[1, 2]") == 0


def test_unusable_entries_contribute_nothing():
    payload = {
        "Twitter": "12",
        "Flag": True,
        "Facebook": {"like_count": 7},
        "Other": {"total_count": "30"},
        "Nothing": None,
    }
    assert total_count(payload) == 30


def test_hook_receives_total_and_payload():
    seen = []

    def hook(total, payload):
        seen.append((total, payload))
        return total * 2

    assert total_count({"Twitter": 4}, hook) == 8
    assert seen == [(4, {"Twitter": 4})]


def test_hook_not_called_for_unparseable_payload():
    calls = []
    assert total_count("garbage", lambda t, p: calls.append(t) or 99) == 0
    assert calls == []


def test_to_int_is_lenient():
    assert to_int("12") == 12
    assert to_int(12.7) == 12
    assert to_int("x") == 0
    assert to_int(None) == 0


def test_decode_payload_only_returns_mappings():
    assert decode_payload('{"Twitter": 1}') == {"Twitter": 1}
    assert decode_payload("1") is None
    assert decode_payload(42) is None
