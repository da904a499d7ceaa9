from fastapi import APIRouter
from fastapi.responses import JSONResponse
from voting_app.application.commands import CastVoteCommand, EndVotingCommand
from voting_app.application.handlers import command_bus
from voting_app.application.queries import GetResultsQuery
from voting_app.application.query_bus import query_bus
from voting_app.domain.voting import VotingError


router = APIRouter(tags=["Votes"])

@router.post("/vote")
def cast_vote(command: CastVoteCommand):
    try:
        return command_bus.handle(command)
    except VotingError as e:
        # VotingClosed, UnknownVoter, AlreadyVoted or UnknownCandidate
        return JSONResponse(status_code=400, content=str(e))

@router.get("/results")
def get_results():
    return query_bus.handle(GetResultsQuery())

@router.post("/end")
def end_voting():
    return command_bus.handle(EndVotingCommand())
