"""
Output file naming.

The new file keeps the name of the input file, prepended with "{+x.xx_Sec}_".
A file that already carries such a tag gets its number updated instead of a
second tag, so repeated runs keep a single tag with the cumulative shift.
"""
import re
from pathlib import Path
from typing import Union


TAG_PATTERN = re.compile( r"\{(?P<value>[+-]\d+\.\d+)_Sec\}_" );


def format_tag( value: float ) -> str:
    """Render the tag for a cumulative offset; zero is rendered with '+'."""
    sign = "+" if value >= 0 else "-";
    return f"{{{sign}{abs( value ):.2f}_Sec}}_";


def tag_filename( filename: str, offset_seconds: float ) -> str:
    """
    Tag a bare file name with an offset.
    
    Args:
        filename: File name without directory, e.g. 'movie.srt'
        offset_seconds: Shift applied by this run
        
    Returns:
        'movie.srt' -> '{+2.50_Sec}_movie.srt'; a name that is already tagged
        has its first tag replaced by one carrying the summed offset
    """
    match = TAG_PATTERN.search( filename );
    if match is None:
        return format_tag( offset_seconds ) + filename;
    
    total = float( match.group( "value" ) ) + offset_seconds;
    return filename[ : match.start() ] + format_tag( total ) + filename[ match.end() : ];


def name_output( inputfile: Union[str, Path], offset_seconds: float ) -> Path:
    """Derive the output path, kept in the same directory as the input."""
    inputfile = Path( inputfile );
    return inputfile.with_name( tag_filename( inputfile.name, offset_seconds ) );
