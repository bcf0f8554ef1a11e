"""
Backup of output files that a run is about to overwrite.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

from .logging import get_logger


class BackupManager:
    """
    Keeps timestamped copies of files before they are overwritten.
    
    Rules:
    - Copies are named <stem>.<ISO-8601 timestamp><suffix>
    - Only the newest max_backups copies per file are kept
    """
    
    def __init__( self, backup_dir: Path = None, max_backups: int = 25 ):
        self.logger = get_logger();
        self.backup_dir = Path( backup_dir ) if backup_dir else Path( "backup" );
        self.max_backups = max_backups;
    
    def get_backup_filename( self, original_file: Path ) -> str:
        """Generate backup filename with ISO-8601 timestamp (microseconds kept for uniqueness)."""
        timestamp = datetime.now().isoformat( timespec="microseconds" ).replace( ":", "-" );
        return f"{original_file.stem}.{timestamp}{original_file.suffix}";
    
    def get_existing_backups( self, original_file: Path ) -> List[Tuple[Path, datetime]]:
        """
        Get existing backups of a file, oldest first.
        
        Args:
            original_file: Path to original file
            
        Returns:
            List of (backup_path, timestamp) tuples
        """
        if not self.backup_dir.exists():
            return [];
        
        prefix = f"{original_file.stem}.";
        backup_info = [];
        for backup_path in self.backup_dir.iterdir():
            name = backup_path.name;
            if not ( name.startswith( prefix ) and name.endswith( original_file.suffix ) ):
                continue;
            
            timestamp_str = name[ len( prefix ) : len( name ) - len( original_file.suffix ) ];
            date_part, _, time_part = timestamp_str.partition( "T" );
            try:
                timestamp = datetime.fromisoformat( f"{date_part}T{time_part.replace( '-', ':', 2 )}" );
            except ValueError:
                self.logger.debug( f"Skipping unrelated file in backup dir: {name}" );
                continue;
            
            backup_info.append( ( backup_path, timestamp ) );
        
        backup_info.sort( key=lambda x: x[1] );
        return backup_info;
    
    def apply_retention_policy( self, original_file: Path ):
        """Remove the oldest backups beyond max_backups."""
        backups = self.get_existing_backups( original_file );
        if len( backups ) <= self.max_backups:
            return;
        
        backups_to_remove = backups[ : len( backups ) - self.max_backups ];
        for backup_path, _ in backups_to_remove:
            try:
                backup_path.unlink();
                self.logger.debug( f"Removed old backup: {backup_path.name}" );
            except OSError as e:
                self.logger.warning( f"Could not remove backup {backup_path}: {e}" );
        
        self.logger.info( f"Removed {len( backups_to_remove )} old backup(s) to enforce retention policy" );
    
    def create_backup( self, file_path: Path ) -> Path:
        """
        Copy file_path into the backup directory and apply the retention policy.
        
        Returns:
            Path to created backup file
        """
        file_path = Path( file_path );
        if not file_path.exists():
            raise FileNotFoundError( f"File to backup not found: {file_path}" );
        
        self.backup_dir.mkdir( parents=True, exist_ok=True );
        backup_path = self.backup_dir / self.get_backup_filename( file_path );
        shutil.copy2( file_path, backup_path );
        self.logger.info( f"Created backup: {backup_path}" );
        
        self.apply_retention_policy( file_path );
        return backup_path;
    
    def backup_before_overwrite( self, file_path: Path ):
        """Back up file_path if it exists; returns the backup path or None."""
        file_path = Path( file_path );
        if not file_path.exists():
            return None;
        self.logger.debug( f"Output file exists, backing up {file_path}" );
        return self.create_backup( file_path );
