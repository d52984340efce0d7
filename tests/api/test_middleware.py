from inventory.api.middleware import MAX_REQUEST_ID_LENGTH, choose_request_id


def test_choose_request_id_reuses_caller_value():
    assert choose_request_id("abc-123") == "abc-123"


def test_choose_request_id_generates_when_missing_or_oversized():
    generated = choose_request_id(None)
    assert len(generated) == 32
    assert choose_request_id("") != ""
    assert choose_request_id("x" * (MAX_REQUEST_ID_LENGTH + 1)) != "x" * (MAX_REQUEST_ID_LENGTH + 1)
