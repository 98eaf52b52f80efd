"""Project-wide constants (default endpoints, timeouts, RPC routing)."""

DEFAULT_SERVER_URL: str = "url://markdown/"

URL_PROTOCOL_SCHEME: str = "url://"
HTTP_SCHEMES: tuple[str, ...] = ("http://", "https://")

HTTP_TIMEOUT_SECONDS: float = 10.0
RPC_TIMEOUT_SECONDS: float = 30.0

DEFAULT_BOOTSTRAP_PEERS: tuple[str, ...] = ("198.199.106.165:35000",)

SERVICE_RPC_METHOD: str = "/url.UrlProtocol/ServiceRpc"
