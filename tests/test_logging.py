"""
Test cases for SubGap logging setup.
"""
import logging
import pytest
from pathlib import Path
import sys

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from rich.logging import RichHandler
from logging.handlers import RotatingFileHandler

import subgap.logging as subgap_logging
from subgap.logging import MAX_LOG_BYTES, SubGapLogger, get_logger, setup_logging


@pytest.fixture( autouse=True )
def reset_global_logger():
    yield;
    subgap_logging._logger = None;
    for handler in list( logging.getLogger( "subgap" ).handlers ):
        handler.close();
    logging.getLogger( "subgap" ).handlers.clear();


class TestSubGapLogger:
    """Test cases for the logger wrapper."""

    def test_console_only_by_default( self ):
        """Test no file handler is attached without a log directory."""
        logger = SubGapLogger();
        handlers = logger.logger.handlers;

        assert len( handlers ) == 1;
        assert isinstance( handlers[0], RichHandler );
        assert logger.logger.level == logging.INFO;

    def test_debug_level( self ):
        """Test the debug flag lowers the level."""
        logger = SubGapLogger( debug=True );
        assert logger.logger.level == logging.DEBUG;

    def test_file_logging( self, tmp_path ):
        """Test messages reach the rotating log file."""
        logger = SubGapLogger( log_dir=tmp_path / "logs" );
        logger.info( "hello file" );

        assert any( isinstance( h, RotatingFileHandler ) for h in logger.logger.handlers );
        for handler in logger.logger.handlers:
            handler.flush();
        assert "hello file" in ( tmp_path / "logs" / "subgap.log" ).read_text( encoding="utf-8" );

    def test_oversized_log_rotated_on_startup( self, tmp_path ):
        """Test a log file over the limit is moved aside."""
        log_dir = tmp_path / "logs";
        log_dir.mkdir();
        ( log_dir / "subgap.log" ).write_bytes( b"x" * ( MAX_LOG_BYTES + 1 ) );

        SubGapLogger( log_dir=log_dir );

        rotated = [ p for p in log_dir.iterdir() if p.name != "subgap.log" ];
        assert len( rotated ) == 1;

    def test_reconfiguring_does_not_duplicate_handlers( self ):
        """Test handlers are replaced rather than stacked."""
        SubGapLogger();
        logger = SubGapLogger();
        assert len( logger.logger.handlers ) == 1;


class TestGlobalLogger:
    """Test cases for the module level accessors."""

    def test_get_logger_is_shared( self ):
        """Test get_logger returns one instance."""
        assert get_logger() is get_logger();

    def test_setup_logging_replaces_instance( self ):
        """Test setup_logging installs a new configured logger."""
        first = get_logger();
        second = setup_logging( debug=True );

        assert second is not first;
        assert get_logger() is second;
        assert second.debug_mode == True;


if __name__ == '__main__':
    pytest.main( [ __file__ ] );
