"""
Shifting of a single time-range line, including the clamp-or-delete policy.

Example line:  '00:00:01.913 --> 00:00:04.328'
Index:          01234567890123456789012345678
"""
from typing import Union

from .errors import MalformedLineError, MalformedTimeError
from .logging import get_logger
from .timecode import DELETED, TIME_CODE_WIDTH, Dialect, TimeCode, format_milliseconds, _Deleted


START_SLICE = slice( 0, TIME_CODE_WIDTH );
ARROW_SLICE = slice( 12, 17 );
END_SLICE = slice( 17, 17 + TIME_CODE_WIDTH );
RANGE_WIDTH = 29;

ARROW = " --> ";
TIMELINE_START_MS = 0;


class RangeShifter:
    """
    Applies a fixed offset to both ends of a time-range line.
    
    Policy:
    - start and end both before zero: the line is DELETED
    - only start before zero: start is clamped to zero, end is kept
    - start kept but end before zero (end precedes start in the input):
      end is clamped to zero
    - otherwise: both ends are shifted
    """
    
    def __init__( self, offset_seconds: float, dialect: Dialect = Dialect.VTT ):
        self.offset_seconds = offset_seconds;
        self.dialect = dialect;
    
    def validate_layout( self, line: str ):
        """Raise MalformedLineError unless the line has the fixed-column layout."""
        if len( line ) < RANGE_WIDTH:
            raise MalformedLineError(
                f"time-range line shorter than {RANGE_WIDTH} characters: {line!r}"
            );
        if line[ARROW_SLICE] != ARROW:
            raise MalformedLineError( f"expected {ARROW.strip()!r} at columns 12-16: {line!r}" );
    
    def shift_line( self, line: str ) -> Union[str, _Deleted]:
        """
        Shift a time-range line.
        
        Args:
            line: Line of the form '<time> --> <time>' in the file's dialect,
                  optionally followed by cue settings
            
        Returns:
            The rewritten line, or DELETED when the whole range falls
            before the start of the timeline
            
        Raises:
            MalformedLineError: layout or time fields are malformed
        """
        self.validate_layout( line );
        separator = self.dialect.separator;
        
        try:
            start = TimeCode.parse( line[START_SLICE], separator );
            end = TimeCode.parse( line[END_SLICE], separator );
        except MalformedTimeError as e:
            raise MalformedLineError( str( e ) ) from e;
        
        new_start = format_milliseconds( start.shift( self.offset_seconds ), separator );
        new_end = format_milliseconds( end.shift( self.offset_seconds ), separator );
        trailer = line[RANGE_WIDTH:];
        
        if new_start is DELETED:
            if new_end is DELETED:
                return DELETED;
            new_start = format_milliseconds( TIMELINE_START_MS, separator );
        elif new_end is DELETED:
            get_logger().warning( f"End time precedes start time and falls before zero, clamped: {line}" );
            new_end = format_milliseconds( TIMELINE_START_MS, separator );
        
        return new_start + ARROW + new_end + trailer;
