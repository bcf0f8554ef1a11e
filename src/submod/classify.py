"""
Recognition of time-range lines.
"""
import re
from typing import List

from .timecode import Dialect, time_code_pattern


class LineClassifier:
    """
    Lexical detector for the time-range line of a subtitle block.
    
    A line is a time-range line when it contains a time code written
    with the dialect's decimal separator anywhere in it. Field values
    are not range-checked here ("99:99:99.999" still matches).
    """
    
    def __init__( self, dialect: Dialect ):
        self.dialect = dialect;
        self.pattern = re.compile( time_code_pattern( dialect.separator ) );
    
    def is_time_range( self, line: str ) -> bool:
        return self.pattern.search( line ) is not None;
    
    def extract_time_codes( self, line: str ) -> List[str]:
        """Return every time code substring found in the line, in order."""
        return self.pattern.findall( line );
    