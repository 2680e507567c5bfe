# votebooth/errors.py
# Error taxonomy shared by the stores, the voting service and the HTTP layer


class VotingError(Exception):
    """Base class for every failure that is shown to the user as ``{"message": ...}``."""

    status_code = 500
    default_message = "Failed to process request"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class VoterNotFound(VotingError):
    status_code = 404
    default_message = "User not found"


class CandidateNotFound(VotingError):
    status_code = 404
    default_message = "Candidate not found"


class AlreadyVoted(VotingError):
    status_code = 400
    default_message = "User has already voted"


class VoteRollbackError(VotingError):
    """The vote was recorded but the voter could not be marked as having voted.

    The recorded vote has been deleted again; operators are alerted because the
    ledger and the voter flag briefly disagreed.
    """

    status_code = 500
    default_message = "Failed to update user voting status"


class PersistenceUnavailable(VotingError):
    status_code = 503
    default_message = "Database is unavailable, please try again later"


class EmailInUse(VotingError):
    status_code = 400
    default_message = "Email already in use"


class VoterIdInUse(VotingError):
    status_code = 400
    default_message = "Voter ID already registered"


class InvalidCredentials(VotingError):
    status_code = 401
    default_message = "Invalid credentials"


class NotAuthorized(VotingError):
    status_code = 403
    default_message = "Admin access required"


class ConfigError(Exception):
    """Raised when settings or the seed candidate list cannot be loaded."""
