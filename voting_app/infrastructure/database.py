from voting_app.domain.voting import VotingState

# Lives for the whole process; nothing is written to disk.
voting_state = VotingState()


def get_voting_state() -> VotingState:
    return voting_state
