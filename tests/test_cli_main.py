"""Tests for the CLI entry point."""

import json

import pytest

import markdown_cli.main as cli_main
from markdown_cli.constants import USAGE
from markdown_cli.main import main
from markdown_common.logging_config import get_logger


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep handlers from binding to a captured stream."""
    monkeypatch.setattr(cli_main, 'setup_logging', lambda name, log_level=None: get_logger(name))


@pytest.fixture
def use_client(monkeypatch):
    """
    Route main() to a prepared client.

    Returns:
        Function taking the client; returns the list of server URLs requested
    """
    requested = []

    def _use(client):
        def _create_client(server_url, config):
            requested.append(server_url)
            return client
        monkeypatch.setattr(cli_main, 'create_client', _create_client)
        return requested

    return _use


class TestHelpAndParsing:

    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == 0
        assert capsys.readouterr().out.strip() == USAGE

    def test_help_flag(self, capsys):
        assert main(['--help']) == 0
        assert 'Usage: markdown-cli' in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert main(['bogus']) == 1

        captured = capsys.readouterr()
        assert 'Error: Unrecognized command: bogus' in captured.err
        assert 'Usage: markdown-cli' in captured.out

    def test_missing_argument(self, capsys):
        assert main(['download']) == 1
        assert 'download requires a file name argument' in capsys.readouterr().err

    def test_unsupported_scheme(self, capsys):
        assert main(['--server', 'ftp://example.com', 'list']) == 1
        assert 'Error: Unsupported server URL: ftp://example.com' in capsys.readouterr().err

    def test_unusable_config_location(self, monkeypatch, capsys):
        def _read_only(*args, **kwargs):
            raise OSError(30, 'Read-only file system')
        monkeypatch.setattr(cli_main, 'Config', _read_only)

        assert main(['list']) == 1
        assert capsys.readouterr().err == 'Error: [Errno 30] Read-only file system\n'


class TestCommands:

    def test_list_empty_store(self, use_client, http_client, capsys):
        use_client(http_client)

        assert main(['list']) == 0
        assert capsys.readouterr().out == 'No files found\n'

    def test_upload_then_list(self, use_client, url_client, sample_file, capsys):
        use_client(url_client)

        assert main(['upload', str(sample_file)]) == 0
        assert main(['list']) == 0

        out = capsys.readouterr().out
        assert out.startswith('Uploaded: notes.md (id: ')
        assert 'Total: 1 file(s)' in out

    def test_delete_missing_file(self, use_client, url_client, capsys):
        use_client(url_client)

        assert main(['delete', 'missing.md']) == 1

        captured = capsys.readouterr()
        assert captured.out == ''
        assert captured.err == 'Error: File not found: missing.md\n'

    def test_download_with_output(self, use_client, http_client, store, tmp_path, capsys):
        use_client(http_client)
        store.create('a.md', 'body')
        target = tmp_path / 'out.md'

        assert main(['download', 'a.md', '-o', str(target)]) == 0
        assert target.read_text() == 'body'
        assert f"Downloaded: a.md -> {target}" in capsys.readouterr().out

    def test_health(self, use_client, url_client, capsys):
        use_client(url_client)

        assert main(['health']) == 0
        assert capsys.readouterr().out.startswith('Server health: ')

    def test_unexpected_error(self, monkeypatch, capsys):
        def _broken(server_url, config):
            raise RuntimeError('boom')
        monkeypatch.setattr(cli_main, 'create_client', _broken)

        assert main(['list']) == 1
        assert capsys.readouterr().err == 'Error: boom\n'


class TestServerSelection:

    def test_default_server_from_config(self, use_client, url_client):
        requested = use_client(url_client)

        main(['list'])

        assert requested == ['url://markdown/']

    def test_config_file_server(self, use_client, url_client, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({'server': 'http://configured:8080'}))
        requested = use_client(url_client)

        main(['list'])

        assert requested == ['http://configured:8080']

    def test_server_option_overrides(self, use_client, url_client, monkeypatch):
        monkeypatch.setenv('MARKDOWN_SERVER', 'http://env:8080')
        requested = use_client(url_client)

        main(['-s', 'http://localhost:8080', 'list'])

        assert requested == ['http://localhost:8080']


class TestShell:

    def test_shell_runs_repl_with_editor(self, use_client, url_client, monkeypatch):
        use_client(url_client)
        monkeypatch.setenv('EDITOR', 'nano')
        calls = []
        monkeypatch.setattr(cli_main, 'repl_loop', lambda client, editor: calls.append((client, editor)))

        assert main(['shell']) == 0
        assert calls == [(url_client, 'nano')]

    def test_default_editor(self, use_client, url_client, monkeypatch):
        use_client(url_client)
        monkeypatch.delenv('EDITOR', raising=False)
        calls = []
        monkeypatch.setattr(cli_main, 'repl_loop', lambda client, editor: calls.append(editor))

        main(['shell'])

        assert calls == ['vim']
