"""
Configuration loaded from environment variables and an optional .env file.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv


TRUTHY = ( "1", "true", "yes", "on" );


@dataclass
class SubmodConfig:
    """Runtime settings; command line flags override these."""
    
    encoding: str = "utf-8";
    log_dir: Optional[Path] = Path( "logs" );  # None disables the file log
    backup_dir: Path = Path( "backup" );
    backup_keep: int = 25;
    debug: bool = False;
    
    @classmethod
    def from_env( cls, env_file: Path = Path( ".env" ) ) -> "SubmodConfig":
        """Load configuration from the environment, reading env_file first if present."""
        if env_file.exists():
            load_dotenv( env_file );
        
        log_dir = os.getenv( "SUBMOD_LOG_DIR", "logs" );
        keep = os.getenv( "SUBMOD_BACKUP_KEEP", "25" );
        try:
            backup_keep = int( keep );
        except ValueError:
            raise ValueError( f"SUBMOD_BACKUP_KEEP must be an integer, got: {keep!r}" ) from None;
        
        return cls(
            encoding=os.getenv( "SUBMOD_ENCODING", "utf-8" ),
            log_dir=Path( log_dir ) if log_dir else None,
            backup_dir=Path( os.getenv( "SUBMOD_BACKUP_DIR", "backup" ) ),
            backup_keep=backup_keep,
            debug=os.getenv( "SUBMOD_DEBUG", "" ).strip().lower() in TRUTHY
        );
