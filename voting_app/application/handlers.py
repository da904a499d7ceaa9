import logging
from dataclasses import asdict

from voting_app.application.commands import AddCandidateCommand, CastVoteCommand, EndVotingCommand, RegisterVoterCommand
from voting_app.application.queries import GetCandidatesQuery, GetResultsQuery, GetVotingStatusQuery
from voting_app.application.query_bus import query_bus
from voting_app.infrastructure import database

logger = logging.getLogger(__name__)


class AddCandidateHandler:
    def handle(self, command: AddCandidateCommand):
        state = database.get_voting_state()
        state.add_candidate(command.id, command.name)
        return "Candidate added successfully"


class RegisterVoterHandler:
    def handle(self, command: RegisterVoterCommand):
        state = database.get_voting_state()
        state.register_voter(command.id)
        return "Voter registered successfully"


class CastVoteHandler:
    def handle(self, command: CastVoteCommand):
        state = database.get_voting_state()
        state.cast_vote(command.voter_id, command.candidate_id)
        return "Vote cast successfully"


class EndVotingHandler:
    def handle(self, command: EndVotingCommand):
        database.get_voting_state().end_voting()
        return "Voting has ended"


class GetCandidatesHandler:
    def handle(self, query: GetCandidatesQuery):
        candidates = database.get_voting_state().list_candidates()
        return [asdict(candidate) for candidate in candidates]


class GetResultsHandler:
    def handle(self, query: GetResultsQuery):
        return database.get_voting_state().get_results()


class GetVotingStatusHandler:
    def handle(self, query: GetVotingStatusQuery):
        return {"is_active": database.get_voting_state().is_active()}


class CommandBus:
    def __init__(self):
        self.handlers = {}

    def register_handler(self, command_type, handler):
        if command_type in self.handlers:
            raise ValueError(f"Handler already registered for {command_type.__name__}")
        self.handlers[command_type] = handler

    def handle(self, command):
        handler = self.handlers.get(type(command))
        if handler is None:
            raise ValueError(f"No handler registered for {type(command).__name__}")
        logger.debug("Dispatching %s", type(command).__name__)
        return handler.handle(command)

# Create and register the command handlers
command_bus = CommandBus()
command_bus.register_handler(AddCandidateCommand, AddCandidateHandler())
command_bus.register_handler(RegisterVoterCommand, RegisterVoterHandler())
command_bus.register_handler(CastVoteCommand, CastVoteHandler())
command_bus.register_handler(EndVotingCommand, EndVotingHandler())


# Create and register the query handlers
query_bus.register_handler(GetCandidatesQuery, GetCandidatesHandler())
query_bus.register_handler(GetResultsQuery, GetResultsHandler())
query_bus.register_handler(GetVotingStatusQuery, GetVotingStatusHandler())
