import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from voting_app.domain.voting import (
    AlreadyVoted,
    DuplicateCandidate,
    DuplicateVoter,
    UnknownCandidate,
    UnknownVoter,
    VotingClosed,
    VotingError,
    VotingState,
)


@pytest.fixture
def state():
    return VotingState()

@pytest.fixture
def populated_state(state):
    state.add_candidate("A", "Alice")
    state.add_candidate("B", "Bob")
    for voter_id in ("v1", "v2", "v3"):
        state.register_voter(voter_id)
    return state


def test_new_state_is_open_and_empty(state):
    assert state.is_active() is True
    assert state.list_candidates() == []
    assert state.get_results() == {}

def test_add_candidate_starts_with_zero_votes(state):
    candidate = state.add_candidate("A", "Alice")

    assert candidate.id == "A"
    assert candidate.name == "Alice"
    assert candidate.vote_count == 0
    assert state.get_results() == {"A": 0}

def test_duplicate_candidate_keeps_original(state):
    state.add_candidate("A", "Alice")

    with pytest.raises(DuplicateCandidate, match="Candidate already exists"):
        state.add_candidate("A", "Someone Else")

    candidates = state.list_candidates()
    assert len(candidates) == 1
    assert candidates[0].name == "Alice"

def test_duplicate_voter_rejected(state):
    state.register_voter("v1")

    with pytest.raises(DuplicateVoter, match="Voter already registered"):
        state.register_voter("v1")

def test_new_voter_has_not_voted(state):
    voter = state.register_voter("v1")

    assert voter.has_voted is False
    assert voter.chosen_candidate_id is None

def test_tally_scenario(populated_state):
    populated_state.cast_vote("v1", "A")
    populated_state.cast_vote("v2", "A")
    populated_state.cast_vote("v3", "B")

    assert populated_state.get_results() == {"A": 2, "B": 1}

def test_cast_vote_records_choice(populated_state):
    populated_state.cast_vote("v1", "B")

    voter = populated_state.get_voter("v1")
    assert voter.has_voted is True
    assert voter.chosen_candidate_id == "B"

def test_unknown_voter_changes_nothing(populated_state):
    with pytest.raises(UnknownVoter, match="Voter not registered"):
        populated_state.cast_vote("ghost", "A")

    assert populated_state.get_results() == {"A": 0, "B": 0}
    assert populated_state.get_voter("ghost") is None

def test_unknown_candidate_changes_nothing(state):
    state.register_voter("v1")

    with pytest.raises(UnknownCandidate, match="Candidate does not exist"):
        state.cast_vote("v1", "nonexistent")

    assert state.get_results() == {}
    voter = state.get_voter("v1")
    assert voter.has_voted is False
    assert voter.chosen_candidate_id is None

def test_second_vote_rejected(populated_state):
    populated_state.cast_vote("v1", "A")

    with pytest.raises(AlreadyVoted, match="Voter has already cast a vote"):
        populated_state.cast_vote("v1", "B")

    assert populated_state.get_results() == {"A": 1, "B": 0}
    assert populated_state.get_voter("v1").chosen_candidate_id == "A"

def test_end_voting_blocks_votes_only(populated_state):
    populated_state.end_voting()

    with pytest.raises(VotingClosed, match="Voting is no longer active"):
        populated_state.cast_vote("v1", "A")

    populated_state.add_candidate("C", "Carol")
    populated_state.register_voter("v4")
    assert populated_state.get_results() == {"A": 0, "B": 0, "C": 0}

def test_end_voting_is_idempotent(state):
    state.end_voting()
    state.end_voting()

    assert state.is_active() is False

def test_closed_check_comes_first(state):
    state.end_voting()

    # Neither voter nor candidate exist, but the closed state wins.
    with pytest.raises(VotingClosed):
        state.cast_vote("ghost", "nobody")

def test_voter_check_before_candidate_check(populated_state):
    populated_state.cast_vote("v1", "A")

    with pytest.raises(AlreadyVoted):
        populated_state.cast_vote("v1", "nonexistent")
    with pytest.raises(UnknownVoter):
        populated_state.cast_vote("ghost", "nonexistent")

def test_errors_are_value_errors():
    for error in (DuplicateCandidate, DuplicateVoter, VotingClosed, UnknownVoter, AlreadyVoted, UnknownCandidate):
        assert issubclass(error, VotingError)
        assert issubclass(error, ValueError)

def test_snapshots_are_detached(populated_state):
    candidates = populated_state.list_candidates()
    candidates[0].vote_count = 99

    results = populated_state.get_results()
    results["A"] = 42

    assert populated_state.get_results() == {"A": 0, "B": 0}

def test_vote_total_matches_voters_who_voted(populated_state):
    attempts = [("v1", "A"), ("v1", "B"), ("v2", "missing"), ("ghost", "A"), ("v2", "B"), ("v3", "B")]
    for voter_id, candidate_id in attempts:
        try:
            populated_state.cast_vote(voter_id, candidate_id)
        except VotingError:
            pass

    voted = [v for v in ("v1", "v2", "v3") if populated_state.get_voter(v).has_voted]
    assert sum(populated_state.get_results().values()) == len(voted) == 3

def test_concurrent_votes_are_not_lost(state):
    voter_count = 200
    state.add_candidate("A", "Alice")
    for i in range(voter_count):
        state.register_voter(f"v{i}")

    barrier = threading.Barrier(16)

    def vote(i):
        if i < 16:
            barrier.wait()
        state.cast_vote(f"v{i}", "A")

    with ThreadPoolExecutor(max_workers=16) as executor:
        list(executor.map(vote, range(voter_count)))

    assert state.get_results() == {"A": voter_count}

def test_concurrent_repeat_votes_count_once(state):
    state.add_candidate("A", "Alice")
    state.register_voter("v1")
    outcomes = []

    def vote(_):
        try:
            state.cast_vote("v1", "A")
            outcomes.append("ok")
        except AlreadyVoted:
            outcomes.append("rejected")

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(vote, range(50)))

    assert outcomes.count("ok") == 1
    assert outcomes.count("rejected") == 49
    assert state.get_results() == {"A": 1}
