"""
Daily time-frame bucketing.

Readings are grouped into fixed one-day windows. A time frame is identified
by its index: the number of whole days since the Unix epoch.

Two explicit entry points are provided (epoch seconds, or an already
computed frame number). normalize_time_frame() keeps the legacy single-entry
contract that guesses which of the two it was given.
"""

from datanode_core.errors import InvalidTimeFrameError

TIME_FRAME_SECONDS = 24 * 3600

# Any realistic day index is far below this, any recent epoch timestamp far above.
EPOCH_SECONDS_THRESHOLD = 1_500_000_000


def time_frame_from_epoch(seconds: int) -> int:
    """Return the time-frame index containing the given epoch second."""
    if seconds < 0:
        raise InvalidTimeFrameError(f"epoch seconds must be non-negative, got {seconds}")
    return int(seconds) // TIME_FRAME_SECONDS


def time_frame_from_number(number: int) -> int:
    """Accept an already computed time-frame index."""
    if number < 0:
        raise InvalidTimeFrameError(f"time frame must be non-negative, got {number}")
    return int(number)


def normalize_time_frame(date: int) -> int:
    """
    Map either epoch seconds or a time-frame index to a time-frame index.

    Values at or above EPOCH_SECONDS_THRESHOLD are treated as epoch seconds,
    anything smaller is returned unchanged as an index. Epoch timestamps
    before mid-2017 are therefore indistinguishable from frame numbers; use
    time_frame_from_epoch() / time_frame_from_number() when the caller knows
    which one it holds.

    Total over all integers: negative values pass through as (pre-epoch)
    frame indices, so legacy callers always get a key.
    """
    if date >= EPOCH_SECONDS_THRESHOLD:
        return time_frame_from_epoch(date)
    return int(date)


def time_frame_bounds(time_frame: int) -> tuple[int, int]:
    """Half-open [start, end) epoch-second range covered by a time frame."""
    start = int(time_frame) * TIME_FRAME_SECONDS
    return start, start + TIME_FRAME_SECONDS


def timestamp_in_time_frame(timestamp: int, time_frame: int) -> bool:
    start, end = time_frame_bounds(time_frame)
    return start <= timestamp < end
