"""URL protocol RPC envelope definitions (serialization formats)."""

import json
from dataclasses import dataclass, field
from typing import Dict, Optional

from markdown_common.exceptions import ProtocolError


@dataclass
class ServiceRpcRequest:
    """Request message for the ServiceRpc call."""
    service: str
    method: str
    params: Dict[str, str] = field(default_factory=dict)

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({
            'service': self.service,
            'method': self.method,
            'params': self.params,
        }).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'ServiceRpcRequest':
        """Deserialize from JSON bytes."""
        obj = json.loads(data)
        return cls(
            service=obj['service'],
            method=obj['method'],
            params={str(k): str(v) for k, v in (obj.get('params') or {}).items()},
        )


@dataclass
class ServiceRpcResponse:
    """Response message for the ServiceRpc call."""
    result: Optional[str] = None
    error: Optional[str] = None

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({
            'result': self.result,
            'error': self.error,
        }).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'ServiceRpcResponse':
        """Deserialize from JSON bytes."""
        try:
            obj = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProtocolError(f"Invalid ServiceRpc response: {e}")
        if not isinstance(obj, dict):
            raise ProtocolError("Invalid ServiceRpc response: expected a JSON object")
        return cls(result=obj.get('result'), error=obj.get('error'))
