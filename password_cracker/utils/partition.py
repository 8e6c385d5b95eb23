"""
Splitting of the candidate list between workers.
"""

from password_cracker.models.models import CandidateRange


def split_candidates(total: int, parts: int) -> list[CandidateRange]:
    """
    Divide [0..total-1] into `parts` contiguous slices of `total // parts` lines.
    The last slice absorbs the remainder, so no candidate is dropped.
    When parts > total the leading slices are empty.
    """
    if total < 0:
        raise ValueError("total must be >= 0")
    if parts <= 0:
        raise ValueError("parts must be greater than 0")

    chunk = total // parts

    slices = []
    for i in range(parts):
        start = i * chunk
        end = total - 1 if i == parts - 1 else (i + 1) * chunk - 1
        slices.append(CandidateRange(start=start, end=end))

    return slices


def format_duration(seconds: float) -> str:
    """Render a duration as HH:MM:SS.mmm."""
    millis = int(round(seconds * 1000))
    hours, rest = divmod(millis, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, ms = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"
