"""
Logging system for submod with 5MB rotation check and Rich console output.
"""
import logging
import shutil
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union
from rich.console import Console
from rich.logging import RichHandler


MAX_LOG_BYTES = 5 * 1024 * 1024;  # 5MB
LOG_BACKUP_COUNT = 5;


class SubmodLogger:
    """
    Logger for submod with automatic log rotation and Rich display.
    
    Features:
    - 5MB size check on startup, rotates if exceeded
    - Rich console output with colors
    - File logging with rotation (skipped when log_dir is None)
    - INFO default, DEBUG with --debug flag
    """
    
    def __init__( self, name: str = "submod", debug: bool = False, log_dir: Optional[Union[str, Path]] = "logs" ):
        self.name = name;
        self.debug_mode = debug;
        self.console = Console( stderr=True );
        
        self.logs_dir = Path( log_dir ) if log_dir is not None else None;
        self.log_file = None;
        if self.logs_dir is not None:
            self.logs_dir.mkdir( parents=True, exist_ok=True );
            self.log_file = self.logs_dir / f"{name}.log";
            self._check_and_rotate_on_startup();
        
        self.logger = self._setup_logger();
    
    def _check_and_rotate_on_startup( self ):
        """Check log file size on startup and rotate if >5MB."""
        if self.log_file.exists() and self.log_file.stat().st_size > MAX_LOG_BYTES:
            timestamp = datetime.now().isoformat().replace( ":", "-" );
            backup_name = self.logs_dir / f"{self.name}.{timestamp}.log";
            shutil.move( str( self.log_file ), str( backup_name ) );
    
    def _level( self ) -> int:
        return logging.DEBUG if self.debug_mode else logging.INFO;
    
    def _setup_logger( self ) -> logging.Logger:
        """Setup logger with Rich console and file handlers."""
        logger = logging.getLogger( self.name );
        logger.setLevel( self._level() );
        logger.propagate = False;
        
        for handler in list( logger.handlers ):
            logger.removeHandler( handler );
            handler.close();
        
        console_handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=False,
            show_path=self.debug_mode
        );
        console_handler.setLevel( self._level() );
        console_handler.setFormatter( logging.Formatter( "%(message)s" ) );
        logger.addHandler( console_handler );
        
        if self.log_file is not None:
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8"
            );
            file_handler.setLevel( logging.DEBUG );
            file_handler.setFormatter( logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ) );
            logger.addHandler( file_handler );
        
        return logger;
    
    def set_debug( self, debug: bool ):
        self.debug_mode = debug;
        self.logger.setLevel( self._level() );
        for handler in self.logger.handlers:
            if isinstance( handler, RichHandler ):
                handler.setLevel( self._level() );
    
    def close( self ):
        for handler in list( self.logger.handlers ):
            self.logger.removeHandler( handler );
            handler.close();
    
    def debug( self, message, **kwargs ):
        self.logger.debug( message, **kwargs );
    
    def info( self, message, **kwargs ):
        self.logger.info( message, **kwargs );
    
    def warning( self, message, **kwargs ):
        self.logger.warning( message, **kwargs );
    
    def error( self, message, **kwargs ):
        self.logger.error( message, **kwargs );
    
    def critical( self, message, **kwargs ):
        self.logger.critical( message, **kwargs );


# Global logger instance
_logger = None;


def get_logger( debug: bool = False ) -> SubmodLogger:
    """
    Get the global submod logger instance.
    
    Created without a file log when setup_logging() has not run yet,
    so library use never writes into the working directory.
    """
    global _logger;
    if _logger is None:
        _logger = SubmodLogger( debug=debug, log_dir=None );
    elif debug and not _logger.debug_mode:
        _logger.set_debug( True );
    return _logger;


def setup_logging( debug: bool = False, log_dir: Optional[Union[str, Path]] = "logs" ) -> SubmodLogger:
    """Setup logging for the application, replacing any earlier instance."""
    global _logger;
    if _logger is not None:
        _logger.close();
    _logger = SubmodLogger( debug=debug, log_dir=log_dir );
    return _logger;
