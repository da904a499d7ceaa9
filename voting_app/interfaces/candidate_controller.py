from fastapi import APIRouter
from fastapi.responses import JSONResponse
from voting_app.application.commands import AddCandidateCommand
from voting_app.application.queries import GetCandidatesQuery
from voting_app.application.query_bus import query_bus
from voting_app.application.handlers import command_bus
from voting_app.domain.voting import VotingError

router = APIRouter(prefix="/candidates", tags=["Candidates"])

@router.get("")
def get_candidates():
    return query_bus.handle(GetCandidatesQuery())

@router.post("")
def add_candidate(command: AddCandidateCommand):
    try:
        return command_bus.handle(command)
    except VotingError as e:
        return JSONResponse(status_code=400, content=str(e))
