from fastapi import APIRouter
from fastapi.responses import JSONResponse
from voting_app.application.commands import RegisterVoterCommand
from voting_app.application.handlers import command_bus
from voting_app.domain.voting import VotingError


router = APIRouter(prefix="/voters", tags=["Voters"])

@router.post("")
def register_voter(command: RegisterVoterCommand):
    try:
        return command_bus.handle(command)  # Dispatch the command to the handler
    except VotingError as e:
        return JSONResponse(status_code=400, content=str(e))
