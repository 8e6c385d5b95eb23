"""
Command line driver:

    salt-cracker 4 hashed-passwords.txt passwords.txt --algorithm SHA-512
"""

import sys
from typing import Optional

from password_cracker.config import CRACKER_LOGGER, parse_args, setup_logger
from password_cracker.cracker.coordinator import Coordinator
from password_cracker.cracker.sequential import crack_sequential
from password_cracker.exceptions import CrackerError
from password_cracker.models.models import MatchResult, RunStatus

EXIT_OK = 0
EXIT_SETUP_ERROR = 1
EXIT_TIMED_OUT = 2


def print_matches(matches: list[MatchResult]) -> None:
    for match in matches:
        print(f"{match.user} {match.candidate}")


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args("Salted password dictionary cracker", argv)
    logger = setup_logger(CRACKER_LOGGER, log_level=args.log_level,
                          log_file=args.log_file)

    if args.workers > 1 and args.workers % 2 != 0:
        logger.warning(
            f"Worker count {args.workers} is odd; 1 or an even number splits the candidates more evenly")

    try:
        if args.sequential:
            print_matches(crack_sequential(
                args.candidates, args.targets, args.algorithm))
            return EXIT_OK

        coordinator = Coordinator(algorithm=args.algorithm, executor=args.executor)
        handle = coordinator.start(
            args.candidates, args.targets, args.workers, deadline=args.deadline)
    except CrackerError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    report = handle.wait()

    print_matches(report.matches)
    print(f"--> {report.finished_workers}/{report.total_workers} workers finished "
          f"({report.failed_workers} failed). Total duration: {report.duration}")

    if report.status is RunStatus.TIMED_OUT:
        return EXIT_TIMED_OUT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
