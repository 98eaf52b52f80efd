"""Shared pytest fixtures for all tests."""

import itertools
import json
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from markdown_cli.config import Config
from markdown_cli.http_client import MarkdownClient
from markdown_cli.url_client import UrlProtocolClient


class InMemoryMarkdownStore:
    """Minimal stand-in for the markdown storage service."""

    def __init__(self):
        self.files: Dict[str, dict] = {}
        self._ids = itertools.count(1)
        self._clock = itertools.count(1_700_000_000_000, 1000)

    def create(self, name: str, content: str) -> dict:
        file_id = f"00000000-0000-0000-0000-{next(self._ids):012d}"
        record = {'id': file_id, 'name': name, 'content': content, 'lastModified': next(self._clock)}
        self.files[file_id] = record
        return record

    def by_id(self, file_id: str) -> Optional[dict]:
        return self.files.get(file_id)

    def by_name(self, name: str) -> Optional[dict]:
        for record in self.files.values():
            if record['name'] == name:
                return record
        return None

    def update(self, file_id: str, **changes) -> None:
        self.files[file_id].update(changes)
        self.files[file_id]['lastModified'] = next(self._clock)

    @staticmethod
    def info(record: dict) -> dict:
        return {k: record[k] for k in ('id', 'name', 'lastModified')}

    def http_handler(self, request: httpx.Request) -> httpx.Response:
        """REST API routes as served by the storage service."""
        path = request.url.path
        params = request.url.params
        body = json.loads(request.content) if request.content else {}

        if path == '/health' and request.method == 'GET':
            return httpx.Response(200, json={'result': 'healthy'})
        if path == '/files' and request.method == 'GET':
            return httpx.Response(200, json={'files': [self.info(r) for r in self.files.values()]})
        if path == '/file':
            if request.method == 'GET':
                record = self.by_id(params['id']) if 'id' in params else self.by_name(params.get('name', ''))
                if record is None:
                    return httpx.Response(200, json={'found': False})
                return httpx.Response(200, json={'found': True, **record})
            if request.method == 'POST':
                return httpx.Response(200, json=self.info(self.create(body['name'], body['content'])))
            if params.get('id') not in self.files:
                return httpx.Response(404, json={'error': f"No file with id {params.get('id')}"})
            if request.method == 'PUT':
                self.update(params['id'], **body)
                return httpx.Response(200, json={'success': True})
            if request.method == 'DELETE':
                del self.files[params['id']]
                return httpx.Response(200, json={'success': True})
        return httpx.Response(404, json={'error': 'Not found'})

    def rpc(self, method: str, params: Dict[str, str]) -> Optional[str]:
        """Service RPC methods as exposed over the URL protocol."""
        if method == 'health':
            return json.dumps({'result': 'healthy'})
        if method == 'getAllFiles':
            return json.dumps({'files': [self.info(r) for r in self.files.values()]})
        if method in ('getFile', 'getFileByName'):
            record = self.by_id(params['id']) if method == 'getFile' else self.by_name(params['name'])
            return json.dumps(record if record else {'found': False})
        if method == 'createFile':
            return json.dumps(self.info(self.create(params['name'], params['content'])))
        if method == 'setContent':
            self.update(params['id'], content=params['content'])
            return None
        if method == 'setName':
            self.update(params['id'], name=params['name'])
            return None
        if method == 'deleteFile':
            self.files.pop(params['id'], None)
            return None
        raise ValueError(f"Unknown method {method}")


class FakeResolver:
    """Resolver double that routes calls to an in-memory store."""

    def __init__(self, store: Optional[InMemoryMarkdownStore] = None):
        self.store = store or InMemoryMarkdownStore()
        self.calls: List[Tuple[str, str, Dict[str, str]]] = []
        self.closed = False

    def send_service_rpc_request(self, service_url: str, method: str, params: Dict[str, str]) -> Optional[str]:
        self.calls.append((service_url, method, dict(params)))
        return self.store.rpc(method, params)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the CLI config at a temporary file for every test."""
    config_path = tmp_path / '.markdown-cli' / 'config.json'
    monkeypatch.setenv('MARKDOWN_CLI_CONFIG', str(config_path))
    monkeypatch.delenv('MARKDOWN_SERVER', raising=False)
    return config_path


@pytest.fixture
def temp_config(isolated_config):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(isolated_config)


@pytest.fixture
def store():
    return InMemoryMarkdownStore()


@pytest.fixture
def http_client(store):
    """MarkdownClient wired to the in-memory store through httpx.MockTransport."""
    client = MarkdownClient('http://test')
    client.session = httpx.Client(transport=httpx.MockTransport(store.http_handler), base_url='http://test')
    yield client
    client.close()


@pytest.fixture
def fake_resolver(store):
    return FakeResolver(store)


@pytest.fixture
def url_client(fake_resolver):
    """UrlProtocolClient wired to the in-memory store through FakeResolver."""
    with UrlProtocolClient('url://markdown/', resolver=fake_resolver) as client:
        yield client


@pytest.fixture(params=['http', 'url'])
def any_client(request, http_client, url_client):
    """Each transport client in turn, backed by the same kind of store."""
    return http_client if request.param == 'http' else url_client


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample markdown file for testing uploads.

    Returns:
        Path to sample file
    """
    file_path = tmp_path / 'notes.md'
    file_path.write_text('# Notes\n\nSample content for testing\n')
    return file_path
