"""
Line-by-line conversion of a whole subtitle file.

The subtitle files consist of a repetition of:

- Index-line: integer count of the subtitle
- Time-line: the range during which the subtitle is shown
- Sub-line(s): the caption text (1 or 2 lines)
- An empty line closing the block

Example .srt (',' for decimal spaces, '.' in .vtt files):

1
00:00:00,243 --> 00:00:02,110
Previously on ...

2
00:00:03,802 --> 00:00:05,314
Etc.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .classify import LineClassifier
from .errors import MalformedLineError, SubmodError
from .logging import get_logger
from .shifter import RangeShifter
from .timecode import DELETED, Dialect


class ConverterState( Enum ):
    PASSTHROUGH = "passthrough";
    SUPPRESSING = "suppressing";


@dataclass
class ConversionResult:
    """Outcome of converting one subtitle file."""
    
    source: Path;
    destination: Optional[Path];   # None for a dry run
    deleted: int;                  # Subtitles dropped before the timeline start
    lines_read: int;
    lines_written: int;
    ranges_shifted: int;           # Time-range lines emitted with new times


class StreamConverter:
    """
    Finite-state machine driving the per-line transformation.
    
    In PASSTHROUGH every ordinary line is emitted unchanged. A time-range
    line that resolves to DELETED moves the machine to SUPPRESSING, where
    the caption lines are dropped up to and including the next empty line.
    The index line before a deleted range has already been emitted and
    is kept.
    """
    
    def __init__( self, offset_seconds: float, dialect: Dialect ):
        self.logger = get_logger();
        self.dialect = dialect;
        self.classifier = LineClassifier( dialect );
        self.shifter = RangeShifter( offset_seconds, dialect );
        self.state = ConverterState.PASSTHROUGH;
        self.deleted = 0;
        self.lines_read = 0;
        self.lines_written = 0;
        self.ranges_shifted = 0;
    
    def feed( self, line: str ) -> Optional[str]:
        """
        Process one input line (without its newline).
        
        Returns:
            The line to emit, or None when the line is suppressed
        """
        self.lines_read += 1;
        
        if self.classifier.is_time_range( line ):
            try:
                new_line = self.shifter.shift_line( line );
            except MalformedLineError as e:
                raise MalformedLineError( str( e ), line_number=self.lines_read ) from e;
            
            if new_line is DELETED:
                self.deleted += 1;
                self.state = ConverterState.SUPPRESSING;
                self.logger.debug( f"Deleted subtitle at line {self.lines_read}: {line}" );
                return None;
            
            self.ranges_shifted += 1;
            return self._emit( new_line );
        
        if self.state is ConverterState.SUPPRESSING:
            if line == "":
                self.state = ConverterState.PASSTHROUGH;
            return None;
        
        return self._emit( line );
    
    def _emit( self, line: str ) -> str:
        self.lines_written += 1;
        return line;
    
    def convert_lines( self, lines: Iterable[str] ) -> Iterator[str]:
        """Yield the converted lines; input lines may carry a trailing newline."""
        for raw_line in lines:
            new_line = self.feed( raw_line.rstrip( "\r\n" ) );
            if new_line is not None:
                yield new_line;


def _resolve_dialect( source: Path, dialect: Optional[Dialect] ) -> Dialect:
    return dialect if dialect is not None else Dialect.from_path( source );


def _read_encoding( encoding: str ) -> str:
    # Drop a leading byte order mark when reading UTF-8
    if encoding.lower().replace( "_", "-" ) in ( "utf-8", "utf8" ):
        return "utf-8-sig";
    return encoding;


def convert_file(
    source: Union[str, Path],
    destination: Union[str, Path],
    offset_seconds: float,
    dialect: Optional[Dialect] = None,
    encoding: str = "utf-8"
) -> ConversionResult:
    """
    Write a copy of source to destination with every time shifted by offset_seconds.
    
    Args:
        source: Path to the .srt or .vtt input file
        destination: Path of the file to create
        offset_seconds: Signed shift in seconds
        dialect: Dialect override; resolved from the source extension by default
        encoding: Text encoding of both files
        
    Returns:
        ConversionResult with the number of deleted subtitles
        
    Raises:
        UnsupportedFormatError, MalformedLineError, OSError
    """
    logger = get_logger();
    source = Path( source );
    destination = Path( destination );
    dialect = _resolve_dialect( source, dialect );
    converter = StreamConverter( offset_seconds, dialect );

    if source.resolve() == destination.resolve():
        raise SubmodError( f"Output file would overwrite the input file: {source}" );

    logger.debug( f"Converting {source} -> {destination} ({dialect.name}, {offset_seconds:+.3f}s)" );
    
    created = False;
    try:
        with open( source, "r", encoding=_read_encoding( encoding ) ) as infile:
            with open( destination, "w", encoding=encoding, newline="\n" ) as outfile:
                created = True;
                for new_line in converter.convert_lines( infile ):
                    outfile.write( new_line + "\n" );
    except Exception:
        if created and destination.exists():
            logger.debug( f"Removing partial output {destination}" );
            destination.unlink();
        raise;
    
    logger.debug(
        f"Read {converter.lines_read} lines, wrote {converter.lines_written}, "
        f"shifted {converter.ranges_shifted} ranges"
    );
    
    return ConversionResult(
        source=source,
        destination=destination,
        deleted=converter.deleted,
        lines_read=converter.lines_read,
        lines_written=converter.lines_written,
        ranges_shifted=converter.ranges_shifted
    );


def count_deletions(
    source: Union[str, Path],
    offset_seconds: float,
    dialect: Optional[Dialect] = None,
    encoding: str = "utf-8"
) -> ConversionResult:
    """Run the conversion without writing any output (dry run)."""
    source = Path( source );
    converter = StreamConverter( offset_seconds, _resolve_dialect( source, dialect ) );
    
    with open( source, "r", encoding=_read_encoding( encoding ) ) as infile:
        for _ in converter.convert_lines( infile ):
            pass;
    
    return ConversionResult(
        source=source,
        destination=None,
        deleted=converter.deleted,
        lines_read=converter.lines_read,
        lines_written=converter.lines_written,
        ranges_shifted=converter.ranges_shifted
    );
