"""
SubGap - Subtitle gap closer.

Extends each SRT caption until the next caption starts so that no
blank gaps appear between subtitles during playback.
"""

__version__ = "0.1.0";
__author__ = "SubGap Project";
__license__ = "MIT";

from .subtitles import CaptionRecord, DroppedBlock, ParseReport, parse_captions, parse_report, serialize_captions
from .gaps import close_gaps, count_gaps
from .pipeline import EmptyInputError, ProcessResult, SubGapError, process
