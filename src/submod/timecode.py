"""
Millisecond-resolution time codes and the two subtitle dialects that write them.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from pathlib import Path
from typing import Union

from .errors import MalformedTimeError, UnsupportedFormatError


# Field layout of "HH:MM:SS.mmm"
TIME_CODE_WIDTH = 12;
HOURS_SLICE = slice( 0, 2 );
MINUTES_SLICE = slice( 3, 5 );
SECONDS_SLICE = slice( 6, 12 );

MS_PER_HOUR = 3_600_000;
MS_PER_MINUTE = 60_000;
MS_PER_SECOND = 1000;


class Dialect( Enum ):
    """Decimal separator convention of a subtitle format."""
    
    SRT = ( ",", ".srt" );
    VTT = ( ".", ".vtt" );
    
    def __init__( self, separator: str, extension: str ):
        self.separator = separator;
        self.extension = extension;
    
    @classmethod
    def from_path( cls, path: Union[str, Path] ) -> "Dialect":
        """
        Resolve the dialect of a subtitle file from its extension.
        
        Raises:
            UnsupportedFormatError: extension is neither .srt nor .vtt
        """
        suffix = Path( path ).suffix.lower();
        for dialect in cls:
            if dialect.extension == suffix:
                return dialect;
        raise UnsupportedFormatError(
            f"Please specify either an .srt or .vtt file as input, got: {suffix or Path( path ).name}"
        );


class _Deleted:
    """Marker for a time code that was shifted before the start of the timeline."""
    
    _instance = None;
    
    def __new__( cls ):
        if cls._instance is None:
            cls._instance = super().__new__( cls );
        return cls._instance;
    
    def __repr__( self ):
        return "DELETED";


DELETED = _Deleted();


def time_code_pattern( separator: str ) -> str:
    return r"[0-9]{2}:[0-9]{2}:[0-9]{2}" + re.escape( separator ) + r"[0-9]{3}";


def seconds_to_milliseconds( seconds: Union[float, int, str] ) -> int:
    """Convert seconds to whole milliseconds, rounding halves away from zero."""
    value = Decimal( repr( seconds ) ) if isinstance( seconds, float ) else Decimal( seconds );
    return int( ( value * MS_PER_SECOND ).quantize( Decimal( 1 ), rounding=ROUND_HALF_UP ) );


def offset_to_milliseconds( offset_seconds: float ) -> int:
    """Convert a signed offset in seconds to whole milliseconds."""
    return seconds_to_milliseconds( offset_seconds );


@dataclass( frozen=True )
class TimeCode:
    """A non-negative duration since the start of the timeline."""
    
    milliseconds: int;
    
    @classmethod
    def parse( cls, text: str, separator: str = "." ) -> "TimeCode":
        """
        Parse a time code of the exact form HH:MM:SS<sep>mmm.
        
        Args:
            text: Twelve character time code
            separator: Decimal separator between seconds and milliseconds
            
        Returns:
            Parsed TimeCode
            
        Raises:
            MalformedTimeError: text does not have the fixed layout
        """
        if not re.fullmatch( time_code_pattern( separator ), text ):
            raise MalformedTimeError( f"Invalid time code: {text!r}" );
        
        hours = int( text[HOURS_SLICE] );
        minutes = int( text[MINUTES_SLICE] );
        seconds = text[SECONDS_SLICE].replace( separator, "." );
        
        return cls(
            hours * MS_PER_HOUR +
            minutes * MS_PER_MINUTE +
            seconds_to_milliseconds( seconds )
        );
    
    def to_milliseconds( self ) -> int:
        return self.milliseconds;
    
    def shift( self, offset_seconds: float ) -> int:
        """Return the total milliseconds after applying the offset; may be negative."""
        return self.milliseconds + offset_to_milliseconds( offset_seconds );
    
    def format( self, separator: str = "." ) -> str:
        return format_milliseconds( self.milliseconds, separator );
    
    def __str__( self ):
        return self.format();


def format_milliseconds( total: int, separator: str = "." ) -> Union[str, _Deleted]:
    """
    Render a millisecond count as HH:MM:SS<sep>mmm.
    
    Negative totals fall before the start of the timeline and
    yield the DELETED marker instead of a string.
    """
    if total < 0:
        return DELETED;
    
    hours = total // MS_PER_HOUR;
    minutes = ( total % MS_PER_HOUR ) // MS_PER_MINUTE;
    seconds, millis = divmod( total % MS_PER_MINUTE, MS_PER_SECOND );
    
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{millis:03d}";
