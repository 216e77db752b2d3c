"""
Gap closing: stretch every caption until the next one starts.
"""
from typing import List

from .subtitles import CaptionRecord


def count_gaps( records: List[CaptionRecord] ) -> int:
    """
    Count captions whose end time differs from the successor's start time.

    Args:
        records: Caption records in display order

    Returns:
        Number of records close_gaps would rewrite
    """
    return sum(
        1 for current, following in zip( records, records[1:] )
        if current.end_time != following.start_time
    );


def close_gaps( records: List[CaptionRecord] ) -> List[CaptionRecord]:
    """
    Set each caption's end time to the start time of the caption after it.

    The last caption keeps its parsed end time. Order and overlap are not
    checked; records are updated in place and the same list is returned.
    """
    for i in range( len( records ) - 1 ):
        records[i].end_time = records[i + 1].start_time;
    return records;
