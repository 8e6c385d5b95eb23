from pathlib import Path

import pytest

from password_cracker.create_hashes import make_entry, write_targets


@pytest.fixture
def write_lines(tmp_path):
    """Write lines to a file under tmp_path and return its path."""
    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def target_file(tmp_path):
    """Write a target file for (user, password, salt) triples."""
    def _write(users: list[tuple[str, str, str]], name: str = "hashed-passwords.txt") -> Path:
        path = tmp_path / name
        write_targets([make_entry(u, p, salt=s) for u, p, s in users], path)
        return path
    return _write
