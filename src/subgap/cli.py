"""
CLI entry point for SubGap with argument parsing and environment variable loading.
"""
import argparse
import codecs
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

from . import __version__
from .backup import BackupManager
from .logging import setup_logging
from .pipeline import EmptyInputError, process
from .stats import format_stats, text_stats


STDIN_MARKER = "-";
DEFAULT_SUFFIX = "_processed";
DEFAULT_BACKUP_DIR = "backup";


class SubGapCLI:
    """
    Command line interface for closing gaps between SRT captions.

    Command line arguments take precedence; environment variables (and a
    .env file) supply directory and naming defaults.
    """

    def __init__( self ):
        self.parser = self._create_parser();
        self.args = None;
        self.logger = None;
        self.log_dir = None;
        self.backup_dir = Path( DEFAULT_BACKUP_DIR );
        self.suffix = DEFAULT_SUFFIX;

    def _create_parser( self ):
        """Create argument parser with all SubGap options."""
        parser = argparse.ArgumentParser(
            prog="subgap",
            description="Extend every subtitle until the next one starts, removing gaps between captions",
            epilog="Environment variables: SUBGAP_LOG_DIR, SUBGAP_BACKUP_DIR, SUBGAP_SUFFIX"
        );

        parser.add_argument(
            "input",
            help="Path to subtitle file (.srt format only), or - to read standard input"
        );

        parser.add_argument(
            "--output", "-o",
            type=Path,
            default=None,
            help="Output path (default: <name>_processed.srt next to the input)"
        );

        parser.add_argument(
            "--in-place", "-i",
            action="store_true",
            help="Overwrite the input file, keeping a timestamped backup"
        );

        parser.add_argument(
            "--stdout",
            action="store_true",
            help="Write the processed subtitles to standard output"
        );

        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Process and report without writing anything"
        );

        parser.add_argument(
            "--stats",
            action="store_true",
            help="Report character and line counts before and after processing"
        );

        parser.add_argument(
            "--show-dropped",
            action="store_true",
            help="List blocks that were skipped because they are not valid captions"
        );

        parser.add_argument(
            "--encoding",
            default=None,
            help="Text encoding for reading and writing (default: UTF-8, BOM tolerated)"
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

    def _load_environment( self ):
        """Load directory and naming defaults from .env file and system."""
        env_file = Path( ".env" );
        if env_file.exists():
            load_dotenv( env_file );

        log_dir = os.getenv( "SUBGAP_LOG_DIR" );
        self.log_dir = Path( log_dir ) if log_dir else None;
        self.backup_dir = Path( os.getenv( "SUBGAP_BACKUP_DIR" ) or DEFAULT_BACKUP_DIR );
        self.suffix = os.getenv( "SUBGAP_SUFFIX", DEFAULT_SUFFIX );

    @property
    def reads_stdin( self ) -> bool:
        return self.args.input == STDIN_MARKER;

    def _validate_arguments( self ):
        """Validate parsed arguments and return a list of problems."""
        errors = [];

        if not self.reads_stdin:
            input_path = Path( self.args.input );
            if not input_path.exists():
                errors.append( f"Subtitle file not found: {input_path}" );
            elif not input_path.is_file():
                errors.append( f"Subtitle path is not a file: {input_path}" );

            if input_path.suffix.lower() != ".srt":
                errors.append( f"Only .srt subtitle files are supported, got: {input_path.suffix or '(none)'}" );

        if self.args.in_place:
            if self.reads_stdin:
                errors.append( "--in-place cannot be used when reading standard input" );
            if self.args.output is not None:
                errors.append( "--in-place cannot be combined with --output" );
            if self.args.stdout:
                errors.append( "--in-place cannot be combined with --stdout" );

        if self.args.stdout and self.args.output is not None:
            errors.append( "--stdout cannot be combined with --output" );

        if self.args.encoding:
            try:
                codecs.lookup( self.args.encoding );
            except LookupError:
                errors.append( f"Unknown encoding: {self.args.encoding}" );

        return errors;

    def parse_args( self, argv=None ):
        """Parse command line arguments and validate configuration."""
        self.args = self.parser.parse_args( argv );

        self._load_environment();
        self.logger = setup_logging( debug=self.args.debug, log_dir=self.log_dir );

        errors = self._validate_arguments();
        if errors:
            self.logger.error( "Configuration errors:" );
            for error in errors:
                self.logger.error( f"  - {error}" );
            sys.exit( 1 );

        self.logger.debug( f"SubGap v{__version__} starting..." );
        self.logger.debug( f"Input: {self.args.input}" );
        return self.args;

    def resolve_output( self ):
        """
        Decide where the processed subtitles go.

        Returns:
            Output Path, or None for standard output
        """
        if self.args.stdout:
            return None;
        if self.args.output is not None:
            return self.args.output;
        if self.reads_stdin:
            return None;

        input_path = Path( self.args.input );
        if self.args.in_place:
            return input_path;
        return input_path.with_name( f"{input_path.stem}{self.suffix}{input_path.suffix}" );

    def read_input( self ) -> str:
        if self.reads_stdin:
            return sys.stdin.read();
        return Path( self.args.input ).read_text( encoding=self.args.encoding or "utf-8-sig" );

    def write_output( self, text: str, output_path ):
        if output_path is None:
            sys.stdout.write( text + "\n" );
            sys.stdout.flush();
            return;

        if self.args.in_place:
            BackupManager( self.backup_dir ).create_backup( output_path );

        output_path.write_text( text, encoding=self.args.encoding or "utf-8" );
        self.logger.info( f"Wrote {output_path}" );

    def report_dropped( self, dropped ):
        for block in dropped:
            first_line = block.content.split( "\n", 1 )[0];
            self.logger.warning( f"Skipped block {block.position} ({block.reason}): {first_line!r}" );

    def run( self ) -> int:
        """Run the pipeline for the parsed arguments and return an exit code."""
        try:
            raw_text = self.read_input();
        except ( OSError, UnicodeDecodeError ) as e:
            self.logger.error( f"Failed to read subtitles: {e}" );
            return 1;

        try:
            outcome = process( raw_text );
        except EmptyInputError as e:
            if self.args.show_dropped:
                self.report_dropped( e.dropped );
            self.logger.error( f"Processing failed: {e}" );
            return 1;

        if self.args.show_dropped:
            self.report_dropped( outcome.dropped );
        elif outcome.dropped:
            self.logger.debug( f"{len( outcome.dropped )} block(s) skipped, use --show-dropped for details" );

        if self.args.stats:
            self.logger.info( f"Original:  {format_stats( text_stats( raw_text ) )}" );
            self.logger.info( f"Processed: {format_stats( text_stats( outcome.result ) )}" );

        self.logger.info( f"Processed {outcome.count} subtitle(s), closed {outcome.gaps_closed} gap(s)" );

        if self.args.dry_run:
            self.logger.info( "Dry run: nothing written" );
            return 0;

        try:
            self.write_output( outcome.result, self.resolve_output() );
        except ( OSError, RuntimeError, UnicodeEncodeError ) as e:
            self.logger.error( f"Failed to write subtitles: {e}" );
            return 1;

        return 0;


def main( argv=None ):
    """Main entry point for the SubGap CLI."""
    cli = SubGapCLI();
    args = cli.parse_args( argv );

    try:
        exit_code = cli.run();
    except KeyboardInterrupt:
        cli.logger.warning( "Interrupted by user" );
        sys.exit( 130 );
    except Exception as e:
        cli.logger.error( f"Unexpected error: {e}" );
        if args.debug:
            raise;
        sys.exit( 1 );

    sys.exit( exit_code );


if __name__ == "__main__":
    main();
