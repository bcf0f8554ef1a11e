"""
Test cases for the submod command line interface.
"""
import pytest
from pathlib import Path
from unittest.mock import patch

from submod.cli import SubmodCLI, main, status_message


SRT_SAMPLE = "1\n00:00:02,000 --> 00:00:04,000\nHi\n\n2\n00:00:10,000 --> 00:00:12,000\nBye\n\n";


class TestSubmodCLI:
    """Test cases for argument parsing and validation."""
    
    def test_cli_initialization( self ):
        cli = SubmodCLI();
        assert cli.parser is not None;
        assert cli.args is None;
        assert cli.logger is None;
    
    def test_argument_parsing_missing_required( self ):
        with pytest.raises( SystemExit ):
            SubmodCLI().parse_args( [] );
    
    def test_seconds_must_be_numeric( self, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        with pytest.raises( SystemExit ) as excinfo:
            SubmodCLI().parse_args( [ str( source ), "abc" ] );
        assert excinfo.value.code == 2;
    
    def test_negative_seconds( self, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        args = SubmodCLI().parse_args( [ str( source ), "-5" ] );
        assert args.seconds == -5.0;
        assert args.inputfile == source;
    
    def test_non_finite_seconds( self, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        with pytest.raises( SystemExit ) as excinfo:
            SubmodCLI().parse_args( [ str( source ), "nan" ] );
        assert excinfo.value.code == 1;
    
    def test_unsupported_extension( self, write_subtitle ):
        source = write_subtitle( "movie.ass", SRT_SAMPLE );
        with pytest.raises( SystemExit ) as excinfo:
            SubmodCLI().parse_args( [ str( source ), "1" ] );
        assert excinfo.value.code == 1;
    
    def test_missing_file( self, tmp_path ):
        with pytest.raises( SystemExit ) as excinfo:
            SubmodCLI().parse_args( [ str( tmp_path / "missing.srt" ), "1" ] );
        assert excinfo.value.code == 1;
    
    def test_flags_override_environment( self, write_subtitle, monkeypatch ):
        monkeypatch.setenv( "SUBMOD_ENCODING", "latin-1" );
        source = write_subtitle( "movie.vtt", "" );
        
        cli = SubmodCLI();
        cli.parse_args( [ str( source ), "1", "--encoding", "utf-16", "--backup-dir", "bk", "--debug" ] );
        
        assert cli.config.encoding == "utf-16";
        assert cli.config.backup_dir == Path( "bk" );
        assert cli.config.debug is True;
        assert cli.logger.debug_mode is True;


class TestStatusMessage:
    """Test the status line reported to the user."""
    
    def test_no_deletions( self ):
        assert status_message( 0 ) == "Success.";
    
    def test_one_deletion( self ):
        assert status_message( 1 ) == "Success.\nOne subtitle was deleted at the beginning of the file.";
    
    def test_many_deletions( self ):
        assert status_message( 3 ) == "Success.\n3 subtitles were deleted at the beginning of the file.";


class TestMain:
    """End-to-end runs through main()."""
    
    def test_writes_tagged_file( self, tmp_path, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        
        main( [ str( source ), "-5" ] );
        
        output = tmp_path / "{-5.00_Sec}_movie.srt";
        assert output.read_text( encoding="utf-8" ) == "1\n2\n00:00:05,000 --> 00:00:07,000\nBye\n\n";
        assert ( tmp_path / "logs" / "submod.log" ).exists();
    
    def test_reports_deletions( self, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        cli = SubmodCLI();
        cli.parse_args( [ str( source ), "-5" ] );
        
        with patch.object( cli.logger, "info" ) as mock_info:
            assert cli.run() == 1;
        
        messages = [ call.args[0] for call in mock_info.call_args_list ];
        assert "One subtitle was deleted at the beginning of the file." in messages;
        assert any( m.startswith( "Filename = " ) and m.endswith( "{-5.00_Sec}_movie.srt" ) for m in messages );
    
    def test_rerun_on_output_accumulates_tag( self, tmp_path, write_subtitle ):
        source = write_subtitle( "movie.vtt", "1\n00:00:01.000 --> 00:00:02.000\nHi\n" );
        
        main( [ str( source ), "2.5" ] );
        main( [ str( tmp_path / "{+2.50_Sec}_movie.vtt" ), "-0.5" ] );
        
        output = tmp_path / "{+2.00_Sec}_movie.vtt";
        assert output.read_text( encoding="utf-8" ) == "1\n00:00:03.000 --> 00:00:04.000\nHi\n";
    
    def test_existing_output_is_backed_up( self, tmp_path, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        
        main( [ str( source ), "1" ] );
        main( [ str( source ), "1" ] );
        
        backups = list( ( tmp_path / "backup" ).iterdir() );
        assert len( backups ) == 1;
        assert backups[0].name.startswith( "{+1.00_Sec}_movie." );
    
    def test_no_backup_flag( self, tmp_path, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        
        main( [ str( source ), "1" ] );
        main( [ str( source ), "1", "--no-backup" ] );
        
        assert not ( tmp_path / "backup" ).exists();
    
    def test_dry_run_writes_nothing( self, tmp_path, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        
        main( [ str( source ), "-5", "--dry-run" ] );
        
        assert not ( tmp_path / "{-5.00_Sec}_movie.srt" ).exists();
    
    def test_malformed_file_exits_with_error( self, tmp_path, write_subtitle ):
        source = write_subtitle( "movie.srt", "1\n00:00:01,000->00:00:02,000\n" );
        
        with pytest.raises( SystemExit ) as excinfo:
            main( [ str( source ), "1" ] );
        
        assert excinfo.value.code == 1;
        assert not ( tmp_path / "{+1.00_Sec}_movie.srt" ).exists();
    
    def test_debug_reraises( self, write_subtitle ):
        source = write_subtitle( "movie.srt", "1\n00:00:01,000->00:00:02,000\n" );
        
        with pytest.raises( ValueError ):
            main( [ str( source ), "1", "--debug" ] );
    
    def test_keyboard_interrupt( self, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        
        with patch( "submod.cli.convert_file", side_effect=KeyboardInterrupt ):
            with pytest.raises( SystemExit ) as excinfo:
                main( [ str( source ), "1" ] );
        
        assert excinfo.value.code == 130;
    
    def test_zero_offset_on_tagged_file_makes_no_backup( self, tmp_path, write_subtitle ):
        source = write_subtitle( "{+1.00_Sec}_movie.srt", SRT_SAMPLE );
        
        with pytest.raises( SystemExit ) as excinfo:
            main( [ str( source ), "0" ] );
        
        assert excinfo.value.code == 1;
        assert not ( tmp_path / "backup" ).exists();
        assert source.read_text( encoding="utf-8" ) == SRT_SAMPLE;
    
    def test_unwritable_log_dir_exits_with_error( self, write_subtitle ):
        source = write_subtitle( "movie.srt", SRT_SAMPLE );
        
        with patch( "submod.cli.setup_logging", side_effect=PermissionError( "logs" ) ):
            with pytest.raises( SystemExit ) as excinfo:
                main( [ str( source ), "1" ] );
        
        assert excinfo.value.code == 1;
