import pytest

from govledger.gov_runtime.errors import GovernanceError, GovernanceFailure, GovernanceResult


def test_error_kinds_are_closed_set():
    assert {e.value for e in GovernanceError} == {
        "proposal_not_found",
        "proposal_not_active",
        "duplicate_vote",
        "already_finalized",
    }


@pytest.mark.parametrize("error", list(GovernanceError))
def test_every_error_has_message(error):
    assert error.message
    assert GovernanceError(error.value) is error


def test_success_result():
    res = GovernanceResult.success(5)
    assert res.ok
    assert bool(res) is True
    assert res.unwrap() == 5
    assert res.to_dict() == {"ok": True, "value": 5}


def test_failure_result_unwrap_raises():
    res = GovernanceResult.failure(GovernanceError.DUPLICATE_VOTE)
    assert not res
    assert res.value is None

    with pytest.raises(GovernanceFailure) as excinfo:
        res.unwrap()

    assert excinfo.value.error is GovernanceError.DUPLICATE_VOTE
    assert str(excinfo.value) == "Voter has already cast a vote for this proposal"


def test_failure_to_dict_envelope():
    res = GovernanceResult.failure(GovernanceError.PROPOSAL_NOT_FOUND)
    assert res.to_dict() == {
        "ok": False,
        "error": "proposal_not_found",
        "message": "No proposal found with the given ID",
    }
