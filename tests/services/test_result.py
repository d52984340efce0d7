import pytest

from inventory.core.exceptions import HasDependentsError
from inventory.services.result import Outcome, Result


def test_found():
    result = Result.found("value")
    assert result.outcome is Outcome.FOUND
    assert result.is_found
    assert result.unwrap() == "value"


def test_not_found_unwraps_to_none():
    result = Result.not_found()
    assert result.is_not_found
    assert not result.is_found
    assert result.unwrap() is None


def test_invalid_raises_carried_error():
    error = HasDependentsError("in use")
    result = Result.invalid(error)

    assert result.is_invalid
    with pytest.raises(HasDependentsError) as exc:
        result.unwrap()
    assert exc.value is error
