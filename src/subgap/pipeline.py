"""
Parse, close gaps and serialize in one call.
"""
from dataclasses import dataclass, field
from typing import List

from .gaps import close_gaps, count_gaps
from .subtitles import DroppedBlock, parse_report, serialize_captions
from .logging import get_logger


class SubGapError( ValueError ):
    """Base class for SubGap processing errors."""


class EmptyInputError( SubGapError ):
    """Raised when the input is blank or contains no valid caption."""

    def __init__( self, message: str = "No valid subtitle entries found, check the SRT format", dropped=None ):
        super().__init__( message );
        self.dropped: List[DroppedBlock] = list( dropped or [] );


@dataclass
class ProcessResult:
    """Outcome of a successful pipeline run."""

    result: str;                 # Serialized SRT text
    count: int;                  # Number of captions processed
    gaps_closed: int = 0;        # Captions whose end time was rewritten
    dropped: List[DroppedBlock] = field( default_factory=list );


def process( raw_text: str ) -> ProcessResult:
    """
    Close the gaps between consecutive captions of an SRT document.

    Args:
        raw_text: Raw SRT text

    Returns:
        ProcessResult with the rewritten text and the caption count

    Raises:
        EmptyInputError: If the input is blank or yields no valid caption
    """
    logger = get_logger();

    if not raw_text or not raw_text.strip():
        raise EmptyInputError( "Subtitle content is empty" );

    report = parse_report( raw_text );
    if not report.records:
        raise EmptyInputError( dropped=report.dropped );

    gaps = count_gaps( report.records );
    close_gaps( report.records );
    logger.debug( f"Closed {gaps} gap(s) across {len( report.records )} caption(s)" );

    return ProcessResult(
        result=serialize_captions( report.records ),
        count=len( report.records ),
        gaps_closed=gaps,
        dropped=report.dropped
    );
