"""
Shared fixtures for submod tests.
"""
import sys
from pathlib import Path

import pytest

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from submod import logging as submod_logging


@pytest.fixture( autouse=True )
def isolated_workdir( tmp_path, monkeypatch ):
    """Run every test in its own directory with a fresh logger and clean environment."""
    monkeypatch.chdir( tmp_path );
    for key in ( "SUBMOD_ENCODING", "SUBMOD_LOG_DIR", "SUBMOD_BACKUP_DIR", "SUBMOD_BACKUP_KEEP", "SUBMOD_DEBUG" ):
        monkeypatch.delenv( key, raising=False );
    
    yield tmp_path;
    
    if submod_logging._logger is not None:
        submod_logging._logger.close();
    submod_logging._logger = None;


@pytest.fixture
def write_subtitle( tmp_path ):
    """Write a subtitle file into the test directory and return its path."""
    def _write( name: str, content: str ) -> Path:
        path = tmp_path / name;
        path.write_text( content, encoding="utf-8" );
        return path;
    return _write;
