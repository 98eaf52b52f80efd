"""Unit tests for UrlProtocolClient."""

import json
import time
from unittest.mock import Mock, patch

import pytest

from markdown_cli.url_client import UrlProtocolClient
from markdown_common.exceptions import RpcCallError, ServiceUnavailableError
from markdown_common.url_resolver import UrlResolver


def resolver_returning(result):
    resolver = Mock(spec=UrlResolver)
    resolver.send_service_rpc_request.return_value = result
    return resolver


class TestOperations:
    """Each operation maps to one named RPC."""

    def test_health_calls_health_rpc(self, url_client, fake_resolver):
        assert url_client.health() == 'healthy'
        assert fake_resolver.calls == [('url://markdown/', 'health', {})]

    def test_health_without_response_is_ok(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning(None))
        assert client.health() == 'OK'

    def test_round_trip_create_get_update(self, url_client):
        info = url_client.create_file('a.md', 'x')

        assert url_client.get_file_by_id(info.id).content == 'x'

        url_client.update_content(info.id, 'y')
        assert url_client.get_file_by_id(info.id).content == 'y'

    def test_method_names_and_params(self, url_client, fake_resolver):
        info = url_client.create_file('a.md', 'x')
        url_client.get_file_by_name('a.md')
        url_client.get_file_by_id(info.id)
        url_client.update_content(info.id, 'y')
        url_client.update_name(info.id, 'b.md')
        url_client.list_files()
        url_client.delete_file(info.id)

        assert [(method, params) for _, method, params in fake_resolver.calls] == [
            ('createFile', {'name': 'a.md', 'content': 'x'}),
            ('getFileByName', {'name': 'a.md'}),
            ('getFile', {'id': info.id}),
            ('setContent', {'id': info.id, 'content': 'y'}),
            ('setName', {'id': info.id, 'name': 'b.md'}),
            ('getAllFiles', {}),
            ('deleteFile', {'id': info.id}),
        ]

    def test_list_files_unwraps_files_array(self, url_client):
        url_client.create_file('a.md', 'x')
        url_client.create_file('b.md', 'y')

        assert [f.name for f in url_client.list_files()] == ['a.md', 'b.md']

    def test_list_files_without_response_is_empty(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning(None))
        assert client.list_files() == []

    def test_list_files_without_array_is_empty(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning('{}'))
        assert client.list_files() == []

    def test_get_file_not_found(self, url_client):
        assert url_client.get_file_by_name('missing.md') is None
        assert url_client.get_file_by_id('missing-id') is None

    def test_get_file_with_error_field_is_none(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning('{"error": "gone"}'))
        assert client.get_file_by_name('a.md') is None
        assert client.get_file_by_id('abc') is None

    def test_get_file_without_response_is_none(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning(None))
        assert client.get_file_by_name('a.md') is None

    def test_create_file_without_response_fails(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning(None))

        with pytest.raises(RpcCallError, match='no response from server'):
            client.create_file('a.md', 'x')

    def test_fire_and_forget_results_are_discarded(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning(json.dumps({'ok': True})))

        assert client.update_content('abc', 'x') is None
        assert client.update_name('abc', 'b.md') is None
        assert client.delete_file('abc') is None


class TestErrors:
    """Transport failures are wrapped with the method name."""

    def test_resolver_failure_is_wrapped(self):
        resolver = Mock(spec=UrlResolver)
        resolver.send_service_rpc_request.side_effect = ServiceUnavailableError('no peers')
        client = UrlProtocolClient('url://markdown/', resolver=resolver)

        with pytest.raises(RpcCallError, match='RPC call to getAllFiles failed: no peers'):
            client.list_files()

    def test_invalid_json_result_is_wrapped(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning('not json'))

        with pytest.raises(RpcCallError, match='RPC call to health failed'):
            client.health()

    def test_non_object_result_is_wrapped(self):
        client = UrlProtocolClient('url://markdown/', resolver=resolver_returning('[1, 2]'))

        with pytest.raises(RpcCallError, match='not a JSON object'):
            client.get_file_by_id('abc')


class TestLifecycle:
    """Construction is cheap and silent; close releases the resolver."""

    def test_construction_is_fast_and_offline(self):
        with patch('socket.getaddrinfo') as mock_getaddrinfo, \
                patch('grpc.insecure_channel') as mock_channel:
            start = time.perf_counter()
            client = UrlProtocolClient('url://markdown/', bootstrap_peers=['198.199.106.165:35000'])
            elapsed = time.perf_counter() - start

            assert elapsed < 0.1
            mock_getaddrinfo.assert_not_called()
            mock_channel.assert_not_called()
            assert not client.resolver.joined
            client.close()

    def test_close_releases_resolver(self, fake_resolver):
        client = UrlProtocolClient('url://markdown/', resolver=fake_resolver)
        client.close()
        assert fake_resolver.closed

    def test_context_manager_closes_on_error(self, fake_resolver):
        with pytest.raises(RuntimeError):
            with UrlProtocolClient('url://markdown/', resolver=fake_resolver):
                raise RuntimeError('boom')

        assert fake_resolver.closed
