"""
Tests for the bin2c command-line interface.

Tests cover:
- File and standard stream encoding end to end
- Flag handling (type, width, static, null terminate, prefix)
- Usage errors and exit codes
- I/O errors and exit codes
- Config file integration
"""

import errno
import io
import os
import sys
import pytest
from pathlib import Path
from types import SimpleNamespace

from bin2c.cli import main, build_parser, EXIT_OK, EXIT_IO_ERROR, EXIT_USAGE


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory with an empty home directory."""
    home = tmp_path / 'home'
    home.mkdir()
    cwd = tmp_path / 'work'
    cwd.mkdir()
    monkeypatch.setattr(Path, 'home', lambda: home)
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def input_file(workdir):
    path = workdir / 'input.bin'
    path.write_bytes(b'\x41\x42')
    return path


def set_stdin(monkeypatch, data: bytes):
    monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(data)))


class TestEncoding:
    """End-to-end runs through main()."""

    def test_file_to_file(self, input_file, workdir):
        out = workdir / 'out.h'
        assert main(['-i', str(input_file), '-o', str(out), '-a', 'data']) == EXIT_OK
        text = out.read_text()
        assert text.startswith(f"// Imported from file '{input_file}'\n")
        assert 'const unsigned char data[] = {\n\t0x41,0x42\n};\n' in text
        assert 'const unsigned int data_len = 2;' in text

    def test_file_to_stdout(self, input_file, capsys):
        assert main(['-i', str(input_file), '-a', 'data']) == EXIT_OK
        captured = capsys.readouterr()
        assert '0x41,0x42' in captured.out
        assert captured.err == ''

    def test_stdin_to_stdout(self, workdir, monkeypatch, capsys):
        set_stdin(monkeypatch, b'')
        assert main(['-a', 'empty']) == EXIT_OK
        assert capsys.readouterr().out == (
            'const unsigned char empty[] = {};\n'
            'const unsigned int empty_len = 0;\n'
        )

    def test_line_width(self, workdir, monkeypatch, capsys):
        set_stdin(monkeypatch, bytes(range(10)))
        assert main(['-a', 'd', '-l', '5']) == EXIT_OK
        out = capsys.readouterr().out
        assert out.count(',\n\t') == 1
        assert '0x04,\n\t0x05' in out

    def test_null_terminate_empty(self, workdir, monkeypatch, capsys):
        set_stdin(monkeypatch, b'')
        assert main(['-a', 'd', '-0']) == EXIT_OK
        out = capsys.readouterr().out
        assert '{\n\t0x00\n};' in out
        assert 'd_len = 1;' in out

    def test_static_and_prefix(self, workdir, monkeypatch, capsys):
        set_stdin(monkeypatch, b'\x01')
        assert main(['-a', 'd', '-s', '-p', 'constexpr']) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith('static constexpr unsigned char d[] = {')
        assert 'static constexpr unsigned int d_len = 1;' in out

    def test_nsstring(self, workdir, monkeypatch, capsys):
        set_stdin(monkeypatch, b'hi')
        assert main(['-a', 'greeting', '-t', 'nsstring']) == EXIT_OK
        assert capsys.readouterr().out == 'const NSString *greeting = \n\t@"\\x68\\x69";\n'

    def test_string(self, workdir, monkeypatch, capsys):
        set_stdin(monkeypatch, b'hi')
        assert main(['--array', 'greeting', '--type', 'string']) == EXIT_OK
        assert capsys.readouterr().out == 'const char *greeting = \n\t"\\x68\\x69";\n'

    def test_verbose(self, input_file, workdir, capsys):
        out = workdir / 'out.h'
        assert main(['-i', str(input_file), '-o', str(out), '-a', 'd', '-v']) == EXIT_OK
        assert f'Encoded 2 bytes from {input_file} to {out}' in capsys.readouterr().err


class TestUsageErrors:
    """Usage errors never touch the target files."""

    def test_missing_array_name(self, input_file, workdir, capsys):
        out = workdir / 'out.h'
        assert main(['-i', str(input_file), '-o', str(out)]) == EXIT_USAGE
        captured = capsys.readouterr()
        assert 'usage:' in captured.err
        assert captured.out == ''
        assert not out.exists()

    def test_help_goes_to_stderr(self, workdir, capsys):
        assert main(['-h']) == EXIT_USAGE
        captured = capsys.readouterr()
        assert 'usage:' in captured.err
        assert captured.out == ''

    def test_unknown_flag(self, input_file, workdir, capsys):
        out = workdir / 'out.h'
        assert main(['-i', str(input_file), '-o', str(out), '-a', 'd', '-z']) == EXIT_USAGE
        assert 'usage:' in capsys.readouterr().err
        assert not out.exists()

    def test_invalid_type(self, workdir, capsys):
        assert main(['-a', 'd', '-t', 'wchar']) == EXIT_USAGE

    def test_non_numeric_width(self, workdir, capsys):
        assert main(['-a', 'd', '-l', 'wide']) == EXIT_USAGE

    def test_zero_width(self, input_file, workdir, capsys):
        out = workdir / 'out.h'
        assert main(['-i', str(input_file), '-o', str(out), '-a', 'd', '-l', '0']) == EXIT_USAGE
        assert 'Line width' in capsys.readouterr().err
        assert not out.exists()

    def test_null_terminate_with_string(self, input_file, workdir, capsys):
        out = workdir / 'out.h'
        args = ['-i', str(input_file), '-o', str(out), '-a', 'd', '-t', 'string', '-0']
        assert main(args) == EXIT_USAGE
        assert 'Null termination' in capsys.readouterr().err
        assert not out.exists()

    def test_parser_accepts_null_flag(self):
        args = build_parser().parse_args(['-a', 'x', '-0'])
        assert args.null_terminate is True


class TestIOErrors:
    """I/O failures exit with EXIT_IO_ERROR."""

    def test_missing_input(self, workdir, capsys):
        out = workdir / 'out.h'
        assert main(['-i', str(workdir / 'missing.bin'), '-o', str(out), '-a', 'd']) == EXIT_IO_ERROR
        assert 'Failed to open file for reading' in capsys.readouterr().err
        assert not out.exists()

    def test_unwritable_output(self, input_file, workdir, capsys):
        out = workdir / 'no_such_dir' / 'out.h'
        assert main(['-i', str(input_file), '-o', str(out), '-a', 'd']) == EXIT_IO_ERROR
        assert 'Failed to open file for writing' in capsys.readouterr().err

    def test_read_failure_mid_stream(self, workdir, monkeypatch, capsys):
        class BrokenReader:
            def read(self, size=-1):
                raise OSError(errno.EIO, 'Input/output error')

        monkeypatch.setattr(sys, 'stdin', SimpleNamespace(buffer=BrokenReader()))
        assert main(['-a', 'd']) == EXIT_IO_ERROR
        assert 'I/O failure while encoding' in capsys.readouterr().err

    @pytest.mark.skipif(sys.platform != 'linux', reason='needs byte-oriented file names')
    def test_undecodable_missing_input_name(self, workdir, capsys):
        missing = os.fsdecode(os.fsencode(workdir) + b'/gone\xff.bin')
        assert main(['-i', missing, '-a', 'd']) == EXIT_IO_ERROR
        assert 'gone\\xff.bin' in capsys.readouterr().err


class TestUndecodableFileNames:
    """File names that are not valid UTF-8 are still ordinary input."""

    @pytest.mark.skipif(sys.platform != 'linux', reason='needs byte-oriented file names')
    def test_encode_and_report(self, workdir, capsys):
        src = os.fsdecode(os.fsencode(workdir) + b'/in\xff.bin')
        with open(src, 'wb') as f:
            f.write(b'\x41')
        out = workdir / 'out.h'

        assert main(['-i', src, '-o', str(out), '-a', 'd', '-v']) == EXIT_OK
        assert "in\\xff.bin'\n" in out.read_text()
        assert 'Encoded 1 bytes from' in capsys.readouterr().err


class TestConfigFile:
    """Config file settings with CLI overrides."""

    def test_settings_from_cwd_file(self, workdir, monkeypatch, capsys):
        (workdir / 'bin2c.yaml').write_text('encoder:\n  static: true\n  line_width: 1\n')
        set_stdin(monkeypatch, b'ab')
        assert main(['-a', 'd']) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith('static const unsigned char d[] = {')
        assert '\t0x61,\n\t0x62\n' in out

    def test_cli_overrides_file(self, workdir, monkeypatch, capsys):
        (workdir / 'bin2c.yaml').write_text('encoder:\n  line_width: 1\n')
        set_stdin(monkeypatch, b'ab')
        assert main(['-a', 'd', '-l', '10']) == EXIT_OK
        assert '\t0x61,0x62\n' in capsys.readouterr().out

    def test_explicit_missing_config(self, workdir, monkeypatch, capsys):
        assert main(['-a', 'd', '-c', 'nope.yaml']) == EXIT_USAGE
        assert 'Config file not found' in capsys.readouterr().err

    def test_generate_config(self, workdir, capsys):
        assert main(['--generate-config']) == EXIT_OK
        assert (workdir / 'bin2c.yaml').exists()

    def test_generate_config_path(self, workdir, capsys):
        target = workdir / 'custom.yaml'
        assert main(['--generate-config', str(target)]) == EXIT_OK
        assert target.exists()
