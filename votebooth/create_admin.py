import argparse
import logging
import sys

from votebooth.config import get_settings
from votebooth.crud import create_admin, rehash_plaintext_passwords
from votebooth.database.connection import MongoConnector
from votebooth.errors import VotingError
from votebooth.logs import configure_logging
from votebooth.storage_mongo import VoterStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("--name")
    parser.add_argument("--email")
    parser.add_argument("--voter-id")
    parser.add_argument("--password")
    parser.add_argument("--rehash", action="store_true",
                        help="hash any passwords still stored in plaintext")
    return parser


def main(argv=None, connector: MongoConnector = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    connector = connector or MongoConnector(settings)
    voters = VoterStore(connector)
    try:
        connector.ensure_indexes()
        if args.rehash:
            count = rehash_plaintext_passwords(voters)
            print(f"Hashed {count} plaintext password(s)")
        if args.email:
            if not (args.name and args.voter_id and args.password):
                print("--name, --voter-id and --password are required with --email", file=sys.stderr)
                return 2
            admin, created = create_admin(voters, args.name, args.email, args.voter_id, args.password)
            print(f"{'Created' if created else 'Promoted'} admin {admin.email} ({admin.id})")
    except VotingError as e:
        logger.error(f"Admin command failed: {e.message}")
        return 1
    finally:
        connector.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
