"""
Timestamped backups of subtitle files before they are overwritten in place.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from .logging import get_logger


TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S-%f";


class BackupManager:
    """
    Copies a file into the backup directory and keeps only the newest copies.

    Backup names follow ``<stem>.<timestamp><suffix>`` so that backups of
    the same file sort chronologically.
    """

    def __init__( self, backup_dir: Optional[Path] = None, max_backups: int = 20 ):
        self.logger = get_logger();
        self.backup_dir = Path( backup_dir ) if backup_dir else Path( "backup" );
        self.max_backups = max_backups;

    def get_backup_filename( self, original_file: Path ) -> str:
        timestamp = datetime.now().strftime( TIMESTAMP_FORMAT );
        return f"{original_file.stem}.{timestamp}{original_file.suffix}";

    def get_existing_backups( self, original_file: Path ) -> List[Tuple[Path, datetime]]:
        """
        List backups of a file, oldest first.

        Args:
            original_file: Path to the file whose backups are wanted

        Returns:
            List of (backup_path, timestamp) tuples
        """
        if not self.backup_dir.exists():
            return [];

        backups = [];
        prefix = f"{original_file.stem}.";
        for backup_path in self.backup_dir.glob( f"{original_file.stem}.*{original_file.suffix}" ):
            timestamp_str = backup_path.name[len( prefix ):];
            if original_file.suffix:
                timestamp_str = timestamp_str[:-len( original_file.suffix )];
            try:
                timestamp = datetime.strptime( timestamp_str, TIMESTAMP_FORMAT );
            except ValueError:
                self.logger.debug( f"Skipping unrelated file in backup dir: {backup_path.name}" );
                continue;
            backups.append( ( backup_path, timestamp ) );

        backups.sort( key=lambda item: item[1] );
        return backups;

    def apply_retention_policy( self, original_file: Path ):
        """Remove the oldest backups beyond max_backups."""
        backups = self.get_existing_backups( original_file );
        if len( backups ) <= self.max_backups:
            return;

        backups_to_remove = backups[:-self.max_backups] if self.max_backups > 0 else backups;
        for backup_path, _ in backups_to_remove:
            try:
                backup_path.unlink();
                self.logger.debug( f"Removed old backup: {backup_path.name}" );
            except OSError as e:
                self.logger.warning( f"Could not remove backup {backup_path}: {e}" );

        self.logger.info( f"Removed {len( backups_to_remove )} old backup(s) to enforce retention policy" );

    def create_backup( self, file_path: Path ) -> Path:
        """
        Copy a file into the backup directory and apply the retention policy.

        Args:
            file_path: Path to file to backup

        Returns:
            Path to created backup file

        Raises:
            FileNotFoundError: If file_path does not exist
            RuntimeError: If the copy fails
        """
        file_path = Path( file_path );
        if not file_path.exists():
            raise FileNotFoundError( f"File to backup not found: {file_path}" );

        backup_path = self.backup_dir / self.get_backup_filename( file_path );
        try:
            self.backup_dir.mkdir( parents=True, exist_ok=True );
            shutil.copy2( file_path, backup_path );
        except OSError as e:
            raise RuntimeError( f"Failed to create backup: {e}" ) from e;

        self.logger.info( f"Created backup: {backup_path}" );
        self.apply_retention_policy( file_path );
        return backup_path;
