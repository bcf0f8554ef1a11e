"""
Exception types raised by the submod core.
"""


class SubmodError( Exception ):
    """Base class for every unrecoverable submod failure."""


class MalformedTimeError( SubmodError, ValueError ):
    """A time field is not of the form HH:MM:SS<sep>mmm."""


class MalformedLineError( SubmodError, ValueError ):
    """A time-range line does not follow the fixed-column layout."""
    
    def __init__( self, message: str, line_number: int = None ):
        self.line_number = line_number;
        if line_number is not None:
            message = f"line {line_number}: {message}";
        super().__init__( message );


class UnsupportedFormatError( SubmodError ):
    """The subtitle file extension is neither .srt nor .vtt."""
