class GetCandidatesQuery:
    pass  # No parameters, every candidate is returned

class GetResultsQuery:
    pass

class GetVotingStatusQuery:
    pass
