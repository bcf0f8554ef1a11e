"""
CLI entry point for submod with argument parsing and environment variable loading.
"""
import argparse
import math
import sys
from pathlib import Path

from .backup import BackupManager
from .config import SubmodConfig
from .convert import convert_file, count_deletions
from .errors import SubmodError
from .logging import setup_logging
from .naming import name_output
from .timecode import Dialect
from . import __version__


def status_message( deleted_subs: int ) -> str:
    """Build the status text reported after a successful run."""
    if deleted_subs == 1:
        return "Success.\nOne subtitle was deleted at the beginning of the file.";
    if deleted_subs > 1:
        return f"Success.\n{deleted_subs} subtitles were deleted at the beginning of the file.";
    return "Success.";


class SubmodCLI:
    """
    Command line interface for submod.
    
    Positional arguments are the subtitle file and the shift in seconds;
    environment variables (SUBMOD_*) provide defaults for the options.
    """
    
    def __init__( self ):
        self.parser = self._create_parser();
        self.args = None;
        self.logger = None;
        self.config = None;
    
    def _create_parser( self ):
        """Create argument parser with all submod options."""
        parser = argparse.ArgumentParser(
            prog="submod",
            description="Shift every timestamp of an .srt or .vtt subtitle file by a number of seconds",
            epilog="Environment variables: SUBMOD_ENCODING, SUBMOD_LOG_DIR, SUBMOD_BACKUP_DIR, "
                   "SUBMOD_BACKUP_KEEP, SUBMOD_DEBUG"
        );
        
        parser.add_argument(
            "inputfile",
            type=Path,
            help="Path to subtitle file (.srt or .vtt)"
        );
        
        parser.add_argument(
            "seconds",
            type=float,
            help="Seconds to add to every timestamp (negative to subtract)"
        );
        
        parser.add_argument(
            "--encoding",
            default=None,
            help="Text encoding of the subtitle file (default: utf-8)"
        );
        
        parser.add_argument(
            "--log-dir",
            type=Path,
            default=None,
            help="Directory for the rotating log file (default: ./logs)"
        );
        
        parser.add_argument(
            "--backup-dir",
            type=Path,
            default=None,
            help="Directory for backups of overwritten output files (default: ./backup)"
        );
        
        parser.add_argument(
            "--no-backup",
            action="store_true",
            help="Overwrite an existing output file without backing it up"
        );
        
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report how many subtitles would be deleted without writing a file"
        );
        
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug mode with verbose output"
        );
        
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        );
        
        return parser;
    
    def _apply_overrides( self ):
        """Let command line flags take precedence over the environment."""
        if self.args.encoding:
            self.config.encoding = self.args.encoding;
        if self.args.log_dir is not None:
            self.config.log_dir = self.args.log_dir;
        if self.args.backup_dir is not None:
            self.config.backup_dir = self.args.backup_dir;
        if self.args.debug:
            self.config.debug = True;
    
    def _validate_arguments( self ):
        """Validate parsed arguments."""
        errors = [];
        
        if not math.isfinite( self.args.seconds ):
            errors.append( f"The seconds field should be a finite number, got: {self.args.seconds}" );
        
        try:
            Dialect.from_path( self.args.inputfile );
        except SubmodError as e:
            errors.append( str( e ) );
        
        if not self.args.inputfile.exists():
            errors.append( f"Subtitle file not found: {self.args.inputfile}" );
        
        if self.config.backup_keep < 1:
            errors.append( "SUBMOD_BACKUP_KEEP must be at least 1" );
        
        return errors;
    
    def parse_args( self, argv=None ):
        """Parse command line arguments and validate configuration."""
        self.args = self.parser.parse_args( argv );
        
        try:
            self.config = SubmodConfig.from_env();
        except ValueError as e:
            self.parser.error( str( e ) );
        self._apply_overrides();
        
        self.logger = setup_logging( debug=self.config.debug, log_dir=self.config.log_dir );
        
        errors = self._validate_arguments();
        if errors:
            self.logger.error( "Configuration errors:" );
            for error in errors:
                self.logger.error( f"  - {error}" );
            sys.exit( 1 );
        
        self.logger.debug( f"submod v{__version__} starting..." );
        self.logger.debug( f"Subtitles: {self.args.inputfile}" );
        self.logger.debug( f"Offset: {self.args.seconds:+.3f}s" );
        self.logger.debug( f"Encoding: {self.config.encoding}" );
        
        return self.args;
    
    def run( self ) -> int:
        """Convert the subtitle file; returns the number of deleted subtitles."""
        inputfile = self.args.inputfile;
        seconds = self.args.seconds;
        
        if self.args.dry_run:
            result = count_deletions( inputfile, seconds, encoding=self.config.encoding );
            self.logger.info( f"Dry run: {result.ranges_shifted} subtitles would be shifted, "
                              f"{result.deleted} deleted" );
            return result.deleted;
        
        outputfile = name_output( inputfile, seconds );
        if outputfile.resolve() == inputfile.resolve():
            raise SubmodError( f"Output file would overwrite the input file: {inputfile}" );
        
        if not self.args.no_backup:
            BackupManager( self.config.backup_dir, self.config.backup_keep ).backup_before_overwrite( outputfile );
        
        result = convert_file( inputfile, outputfile, seconds, encoding=self.config.encoding );
        
        for line in status_message( result.deleted ).splitlines():
            self.logger.info( line );
        self.logger.info( f"Filename = {result.destination}" );
        return result.deleted;


def main( argv=None ):
    """Main entry point for the submod CLI."""
    cli = SubmodCLI();
    try:
        cli.parse_args( argv );
    except OSError as e:
        # Logging may not be set up yet
        print( f"Could not start submod: {e}", file=sys.stderr );
        sys.exit( 1 );
    
    try:
        cli.run();
    except KeyboardInterrupt:
        cli.logger.warning( "Interrupted by user" );
        sys.exit( 130 );
    except ( SubmodError, OSError, UnicodeDecodeError ) as e:
        cli.logger.error( f"{type( e ).__name__}: {e}" );
        if cli.config.debug:
            raise;
        sys.exit( 1 );
    except Exception as e:
        cli.logger.error( f"Unexpected error: {e}" );
        if cli.config.debug:
            raise;
        sys.exit( 1 );


if __name__ == "__main__":
    main();
