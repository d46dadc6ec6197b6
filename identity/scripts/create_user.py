"""
Create a user (e.g. the first admin) from the command line. Run from project root:
  python -m identity.scripts.create_user FULL_NAME USERNAME EMAIL PASSWORD [--age N] [--role ROLE ...]
Example:
  python -m identity.scripts.create_user "Site Admin" admin admin@acme.io 'S3cure!pass' --role Admin
Missing roles are created.
"""
import argparse
import logging
import sys

from identity.core.database import SessionLocal
from identity.schemas.user import RegistrationRequest
from identity.services import auth_service, role_assigner
from identity.services.errors import AuthServiceError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an identity user with roles.")
    parser.add_argument("full_name", help="Display name")
    parser.add_argument("username", help="Username (letters, digits, -._@+)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--age", type=int, default=0, help="Age in years (default 0)")
    parser.add_argument(
        "--role",
        dest="roles",
        action="append",
        default=[],
        help="Role to assign; repeat for several",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        request = RegistrationRequest(
            full_name=args.full_name,
            user_name=args.username,
            email=args.email,
            age=args.age,
            password=args.password,
            confirm_password=args.password,
            roles=args.roles,
        )
    except ValueError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        role_assigner.ensure_roles(db, request.roles)
        user, _ = auth_service.register(db, request)
        logger.info(
            "Created user '%s' (%s) with roles %s",
            user.username,
            user.id,
            user.role_names,
        )
        return 0
    except AuthServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
