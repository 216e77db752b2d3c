"""
SRT parsing and serialization for caption records.

Parsing is best-effort: blocks that do not form a valid caption are
skipped, never raised. Timestamps are kept as the validated strings found in
the source so that serialization reproduces them exactly.

The index line only needs to start with a number ("5a" is caption 5).
Timing fields are strict: a digit glued to either timestamp rejects the
line, and only ASCII digits count.
"""
import re
from dataclasses import dataclass, field
from typing import List

from .logging import get_logger


TIMESTAMP_PATTERN = r'\d{2}:\d{2}:\d{2},\d{3}';

# Start and end timestamps separated by an arrow; trailing position
# coordinates after the end timestamp are tolerated.
TIMING_LINE_RE = re.compile(
    rf'(?<!\d)({TIMESTAMP_PATTERN})[ \t]*-->[ \t]*({TIMESTAMP_PATTERN})(?!\d)',
    re.ASCII
);
INDEX_RE = re.compile( r'\d+', re.ASCII );
BLOCK_SEPARATOR_RE = re.compile( r'\n\s*\n' );

TIMING_SEPARATOR = " --> ";

# Reasons recorded for dropped blocks
TOO_FEW_LINES = "too_few_lines";
BAD_INDEX = "bad_index";
BAD_TIMING = "bad_timing";


@dataclass
class CaptionRecord:
    """A single subtitle entry: sequence number, timing and text."""

    index: int;        # Sequence number as declared in the source
    start_time: str;   # HH:MM:SS,mmm
    end_time: str;     # HH:MM:SS,mmm, rewritten by gap closing
    text: str;         # Caption body, may span several lines

    def timing_line( self ) -> str:
        return f"{self.start_time}{TIMING_SEPARATOR}{self.end_time}";


@dataclass
class DroppedBlock:
    """A block that could not be turned into a caption record."""

    position: int;     # 1-based block number in the input
    reason: str;
    content: str;


@dataclass
class ParseReport:
    """Parsed records together with the blocks that were skipped."""

    records: List[CaptionRecord] = field( default_factory=list );
    dropped: List[DroppedBlock] = field( default_factory=list );


def normalize_newlines( text: str ) -> str:
    """Convert CRLF and bare CR line endings to LF."""
    return text.replace( "\r\n", "\n" ).replace( "\r", "\n" );


def split_blocks( raw_text: str ) -> List[str]:
    """
    Split raw SRT text into blank-line separated blocks.

    Args:
        raw_text: Raw subtitle document

    Returns:
        List of block strings, empty when the document is blank
    """
    content = normalize_newlines( raw_text ).lstrip( "\ufeff" ).strip();
    if not content:
        return [];
    return BLOCK_SEPARATOR_RE.split( content );


def parse_block( block: str ):
    """
    Parse a single block.

    Returns:
        Tuple of (CaptionRecord or None, reason or None)
    """
    lines = block.strip().split( "\n" );
    if len( lines ) < 3:
        return None, TOO_FEW_LINES;

    index_match = INDEX_RE.match( lines[0].strip() );
    if not index_match:
        return None, BAD_INDEX;
    try:
        index = int( index_match.group( 0 ) );
    except ValueError:
        # Longer than the interpreter's integer conversion limit
        return None, BAD_INDEX;

    timing = TIMING_LINE_RE.search( lines[1] );
    if not timing:
        return None, BAD_TIMING;

    text = "\n".join( lines[2:] ).strip();
    record = CaptionRecord(
        index=index,
        start_time=timing.group( 1 ),
        end_time=timing.group( 2 ),
        text=text
    );
    return record, None;


def parse_report( raw_text: str ) -> ParseReport:
    """
    Parse SRT text and keep track of every skipped block.

    Args:
        raw_text: Raw subtitle document

    Returns:
        ParseReport with records in input order and dropped blocks
    """
    logger = get_logger();
    report = ParseReport();

    for position, block in enumerate( split_blocks( raw_text ), start=1 ):
        record, reason = parse_block( block );
        if record is None:
            report.dropped.append( DroppedBlock( position=position, reason=reason, content=block ) );
            logger.debug( f"Skipping block {position}: {reason}" );
            continue;
        report.records.append( record );

    logger.debug( f"Parsed {len( report.records )} caption(s), skipped {len( report.dropped )} block(s)" );
    return report;


def parse_captions( raw_text: str ) -> List[CaptionRecord]:
    """Parse SRT text into caption records, silently skipping malformed blocks."""
    return parse_report( raw_text ).records;


def serialize_caption( record: CaptionRecord ) -> str:
    return f"{record.index}\n{record.timing_line()}\n{record.text}";


def serialize_captions( records: List[CaptionRecord] ) -> str:
    """
    Render caption records as SRT text.

    Blocks are separated by a single blank line and the result has no
    trailing newline. Indexes and timestamps are written as stored.
    """
    return "\n\n".join( serialize_caption( record ) for record in records );
