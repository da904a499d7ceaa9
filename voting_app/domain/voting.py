import logging
import threading
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class VotingError(ValueError):
    """Base class for rejected voting operations. The message is sent back to the client as-is."""
    message = "Voting operation rejected"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class DuplicateCandidate(VotingError):
    message = "Candidate already exists"


class DuplicateVoter(VotingError):
    message = "Voter already registered"


class VotingClosed(VotingError):
    message = "Voting is no longer active"


class UnknownVoter(VotingError):
    message = "Voter not registered"


class AlreadyVoted(VotingError):
    message = "Voter has already cast a vote"


class UnknownCandidate(VotingError):
    message = "Candidate does not exist"


@dataclass
class Candidate:
    id: str
    name: str
    vote_count: int = 0


@dataclass
class Voter:
    id: str
    has_voted: bool = False
    chosen_candidate_id: Optional[str] = None


class VotingState:
    """
    In-memory registry of candidates and voters.

    Every operation holds one exclusive lock for its whole duration, so a vote's
    checks and its updates are seen by other threads as a single step. Once
    ``end_voting`` has been called only ``cast_vote`` is refused; candidates
    and voters can still be registered.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.candidates: Dict[str, Candidate] = {}
        self.voters: Dict[str, Voter] = {}
        self._active = True

    def add_candidate(self, candidate_id: str, name: str) -> Candidate:
        with self._lock:
            if candidate_id in self.candidates:
                logger.warning("Rejected duplicate candidate %r", candidate_id)
                raise DuplicateCandidate()
            candidate = Candidate(id=candidate_id, name=name)
            self.candidates[candidate_id] = candidate
            logger.info("Candidate %r added", candidate_id)
            return replace(candidate)

    def register_voter(self, voter_id: str) -> Voter:
        with self._lock:
            if voter_id in self.voters:
                logger.warning("Rejected duplicate voter %r", voter_id)
                raise DuplicateVoter()
            voter = Voter(id=voter_id)
            self.voters[voter_id] = voter
            logger.info("Voter %r registered", voter_id)
            return replace(voter)

    def cast_vote(self, voter_id: str, candidate_id: str) -> None:
        with self._lock:
            error = self._vote_error(voter_id, candidate_id)
            if error is not None:
                logger.warning("Rejected vote from %r for %r: %s", voter_id, candidate_id, error)
                raise error

            voter = self.voters[voter_id]
            candidate = self.candidates[candidate_id]
            voter.has_voted = True
            voter.chosen_candidate_id = candidate_id
            candidate.vote_count += 1
            logger.info("Vote recorded for candidate %r", candidate_id)

    def _vote_error(self, voter_id: str, candidate_id: str) -> Optional[VotingError]:
        # Caller holds the lock. Order of checks fixes which error is reported.
        if not self._active:
            return VotingClosed()
        voter = self.voters.get(voter_id)
        if voter is None:
            return UnknownVoter()
        if voter.has_voted:
            return AlreadyVoted()
        if candidate_id not in self.candidates:
            return UnknownCandidate()
        return None

    def get_results(self) -> Dict[str, int]:
        with self._lock:
            return {candidate_id: candidate.vote_count for candidate_id, candidate in self.candidates.items()}

    def list_candidates(self) -> List[Candidate]:
        with self._lock:
            return [replace(candidate) for candidate in self.candidates.values()]

    def get_voter(self, voter_id: str) -> Optional[Voter]:
        with self._lock:
            voter = self.voters.get(voter_id)
            return replace(voter) if voter else None

    def is_active(self) -> bool:
        with self._lock:
            return self._active

    def end_voting(self) -> None:
        with self._lock:
            if self._active:
                logger.info("Voting closed")
            self._active = False
