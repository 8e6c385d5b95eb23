"""Create a target file of salted hashes from "user password" lines."""
import argparse
import secrets
from pathlib import Path
from typing import Iterable, Optional

from password_cracker.config import DEFAULT_HASH_ALGORITHM
from password_cracker.cracker.cracker_core import hash_of, resolve_algorithm
from password_cracker.models.models import TargetEntry

SALT_BYTES = 8


def make_entry(user: str, password: str, algorithm: str = DEFAULT_HASH_ALGORITHM,
               salt: Optional[str] = None) -> TargetEntry:
    """Hash password + salt for a user. A random hex salt is drawn when none is given.

    Args:
        user: User name, without whitespace
        password: Clear-text password
        algorithm: Hash algorithm name, e.g. 'SHA-512'
        salt: Salt to append to the password

    Returns:
        The target entry for the user
    """
    if salt is None:
        salt = secrets.token_hex(SALT_BYTES)
    expected_hash = hash_of(resolve_algorithm(algorithm), password + salt)
    return TargetEntry(user=user, salt=salt, expected_hash=expected_hash)


def write_targets(entries: Iterable[TargetEntry], path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for entry in entries:
            f.write(f"{entry.user} {entry.salt} {entry.expected_hash}\n")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("users", type=Path, help='File of "user password" lines')
    parser.add_argument("output", type=Path, help="Target file to write")
    parser.add_argument("--algorithm", default=DEFAULT_HASH_ALGORITHM)
    args = parser.parse_args(argv)

    entries = []
    with open(args.users, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            user, password = line.rstrip("\n").split(" ", 1)
            entry = make_entry(user, password, args.algorithm)
            print(f"{user} -> {entry.expected_hash}")
            entries.append(entry)

    write_targets(entries, args.output)


if __name__ == "__main__":
    main()
