import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from votebooth.candidate_registry import CandidateRegistry
from votebooth.errors import PersistenceUnavailable
from votebooth.models.candidate_model import Candidate, CandidateResult, CandidateWithVotes
from votebooth.models.results_model import AdminStats, ElectionResults
from votebooth.storage_mongo import VoteLedger, VoterStore

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal("0.1")


def round_percentage(part: int, whole: int) -> float:
    """part/whole as a percentage, rounded half-up to one decimal. 0 when whole is 0."""
    if whole <= 0:
        return 0.0
    value = (Decimal(part) * 100 / Decimal(whole)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return float(value)


def candidate_sort_key(candidate_id: str) -> Tuple[int, int, str]:
    # numeric ids compare as numbers ("2" < "10"), others lexically after them
    if candidate_id.isdigit():
        return (0, int(candidate_id), "")
    return (1, 0, candidate_id)


def rank_candidates(candidates: List[CandidateResult]) -> List[CandidateResult]:
    """Most votes first; equal counts go to the lowest candidate id."""
    return sorted(candidates, key=lambda c: (-c.votes, candidate_sort_key(c.id)))


class ResultsAggregator:
    """
    Derives per-candidate counts, percentages and turnout from the ledger.

    Nothing is cached as ground truth: every call recounts. The last good
    result is kept only to serve a degraded view when the store is down.
    """

    def __init__(self, registry: CandidateRegistry, voters: VoterStore, ledger: VoteLedger,
                 fallback_candidates: Optional[List[Candidate]] = None):
        self.registry = registry
        self.voters = voters
        self.ledger = ledger
        self.fallback_candidates = fallback_candidates or []
        self._last_results: Optional[ElectionResults] = None

    def candidate_with_votes(self, candidate_id: str) -> CandidateWithVotes:
        candidate = self.registry.get(candidate_id)
        votes = self.ledger.count_for_candidate(candidate_id)
        return CandidateWithVotes(**candidate.model_dump(), votes=votes)

    def candidates_with_votes(self) -> List[CandidateWithVotes]:
        counts = self.ledger.counts_by_candidate()
        return [
            CandidateWithVotes(**c.model_dump(), votes=counts.get(c.id, 0))
            for c in self.registry.list()
        ]

    def compute_results(self) -> ElectionResults:
        counts = self.ledger.counts_by_candidate()
        candidates = self.registry.list()
        eligible = self.voters.count_eligible()

        # grouped over every record, so this equals the ledger size
        total_votes = sum(counts.values())

        rows = [
            CandidateResult(
                **c.model_dump(),
                votes=counts.get(c.id, 0),
                percentage=round_percentage(counts.get(c.id, 0), total_votes),
            )
            for c in candidates
        ]
        rows = rank_candidates(rows)

        results = ElectionResults(
            candidates=rows,
            totalVotes=total_votes,
            turnoutPercentage=round_percentage(total_votes, eligible),
        )
        if total_votes > 0 and rows:
            winner = rows[0]
            winner.winner = True
            results.winningCandidate = winner.name
            results.winningParty = winner.party

        self._last_results = results
        logger.info(f"Results computed: {total_votes} votes, {eligible} eligible voters")
        return results

    def results_or_fallback(self) -> ElectionResults:
        """Results for display; a stale or empty view instead of an error when the store is down."""
        try:
            return self.compute_results()
        except PersistenceUnavailable:
            if self._last_results is not None:
                logger.warning("Serving last computed results, database unavailable")
                return self._last_results.model_copy(update={"degraded": True})
            logger.warning("Serving empty results, database unavailable")
            rows = [CandidateResult(**c.model_dump()) for c in self.fallback_candidates]
            return ElectionResults(
                candidates=rank_candidates(rows),
                totalVotes=0,
                turnoutPercentage=0.0,
                degraded=True,
            )

    def admin_stats(self) -> AdminStats:
        registered = self.voters.count_eligible()
        voted = self.voters.count_voted()
        votes_cast = self.ledger.count_all()
        return AdminStats(
            registeredVoters=registered,
            votesCast=votes_cast,
            pendingVoters=max(registered - voted, 0),
            turnoutPercentage=round_percentage(votes_cast, registered),
        )
