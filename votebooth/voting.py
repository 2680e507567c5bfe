import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from votebooth.candidate_registry import CandidateRegistry
from votebooth.errors import AlreadyVoted, PersistenceUnavailable, VoteRollbackError, VoterNotFound
from votebooth.logs import get_alert_logger
from votebooth.models.candidate_model import CandidateWithVotes
from votebooth.models.vote_model import VotingStatus
from votebooth.results import ResultsAggregator
from votebooth.storage_mongo import VoteLedger, VoterStore

logger = logging.getLogger(__name__)
alerts = get_alert_logger()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VotingService:
    """
    Casts votes.

    The ledger insert and the voter flag update are two separate writes. The
    unique index on the ledger stops a second vote from the same voter, and a
    failed flag update is compensated by deleting the vote just inserted.
    """

    def __init__(self, voters: VoterStore, registry: CandidateRegistry, ledger: VoteLedger,
                 aggregator: ResultsAggregator, clock: Optional[Callable[[], datetime]] = None):
        self.voters = voters
        self.registry = registry
        self.ledger = ledger
        self.aggregator = aggregator
        self.clock = clock or utc_now

    def cast_vote(self, voter_id: str, candidate_id: str) -> CandidateWithVotes:
        logger.info(f"Vote attempt: voter={voter_id} candidate={candidate_id}")

        voter = self.voters.get(voter_id)
        if voter is None:
            logger.warning(f"Vote rejected, voter not found: {voter_id}")
            raise VoterNotFound()

        if voter.hasVoted:
            logger.warning(f"Vote rejected, voter {voter.id} has already voted")
            raise AlreadyVoted()

        candidate = self.registry.get(candidate_id)

        # the flag may be stale; the ledger is the authority
        if self.ledger.find_by_voter(voter.id) is not None:
            logger.warning(f"Vote rejected, ledger already holds a vote for {voter.id}")
            raise AlreadyVoted()

        vote_id = self.ledger.record(voter.id, candidate.id, self.clock())

        try:
            modified = self.voters.mark_voted(voter.id)
        except PersistenceUnavailable:
            alerts.critical(
                f"Database failed while marking voter {voter.id} as voted, "
                f"vote {vote_id} for candidate {candidate.id} needs checking"
            )
            # the update may have been applied before the connection dropped
            try:
                current = self.voters.get(voter.id)
            except PersistenceUnavailable:
                alerts.critical(f"State of voter {voter.id} unknown, vote {vote_id} kept for operator review")
                raise
            if current is None or not current.hasVoted:
                self._compensate(vote_id, voter.id, candidate.id)
                raise
            logger.warning(f"Voter {voter.id} was marked as voted before the failure, keeping vote {vote_id}")
            modified = 1

        if modified != 1:
            self._compensate(vote_id, voter.id, candidate.id)
            alerts.critical(
                f"Vote rolled back: could not mark voter {voter.id} as voted "
                f"(modified={modified}), vote {vote_id} for candidate {candidate.id} deleted"
            )
            raise VoteRollbackError()

        result = self.aggregator.candidate_with_votes(candidate.id)
        logger.info(f"Vote recorded: voter={voter.id} candidate={candidate.id} votes={result.votes}")
        return result

    def _compensate(self, vote_id: str, voter_id: str, candidate_id: str) -> None:
        try:
            deleted = self.ledger.delete(vote_id)
        except PersistenceUnavailable:
            alerts.critical(
                f"Compensation failed: vote {vote_id} (voter {voter_id}, candidate {candidate_id}) "
                f"could not be deleted, database unavailable"
            )
            return
        if deleted != 1:
            alerts.critical(f"Compensation failed: vote {vote_id} for voter {voter_id} was not found")
        else:
            logger.warning(f"Vote {vote_id} for voter {voter_id} deleted during rollback")

    def voting_status(self, voter_id: str) -> VotingStatus:
        voter = self.voters.get(voter_id)
        if voter is None:
            raise VoterNotFound()
        record = self.ledger.find_by_voter(voter.id)
        if record is None:
            return VotingStatus(userId=voter.id, hasVoted=False)
        return VotingStatus(
            userId=voter.id,
            hasVoted=True,
            candidateId=record.candidateId,
            timestamp=record.timestamp,
        )
