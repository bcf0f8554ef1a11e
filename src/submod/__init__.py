"""
Submod - Subtitle timestamp shifting utility.

Shifts every timestamp in an .srt or .vtt file by a fixed number of seconds
and writes the result to a tagged copy of the file.
"""

__version__ = "0.1.0";
__author__ = "Submod Project";
__license__ = "MIT";
