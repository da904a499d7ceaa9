from pydantic import BaseModel


class AddCandidateCommand(BaseModel):
    id: str
    name: str


class RegisterVoterCommand(BaseModel):
    id: str


class CastVoteCommand(BaseModel):
    voter_id: str
    candidate_id: str


class EndVotingCommand(BaseModel):
    pass
