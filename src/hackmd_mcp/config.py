"""Configuration constants"""

# ========================================================================
# HackMD API
# ========================================================================

# Public HackMD API endpoint
DEFAULT_HACKMD_API_URL = "https://api.hackmd.io/v1"

# Default outbound request headers (Authorization is added per token)
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# ========================================================================
# HTTP mode: per-request credentials
# ========================================================================

HACKMD_API_TOKEN_HEADER = "Hackmd-Api-Token"
HACKMD_API_URL_HEADER = "Hackmd-Api-Url"

# Query parameter carrying base64-encoded JSON config (embedding platforms)
CONFIG_QUERY_PARAM = "config"

# Keys inside the decoded query config
CONFIG_TOKEN_KEY = "hackmdApiToken"
CONFIG_URL_KEY = "hackmdApiUrl"

MCP_ENDPOINT_PATH = "/mcp"

# ========================================================================
# Environment variables
# ========================================================================

ENV_API_TOKEN = "HACKMD_API_TOKEN"
ENV_API_URL = "HACKMD_API_URL"
ENV_ALLOWED_API_URLS = "ALLOWED_HACKMD_API_URLS"
ENV_CORS_ORIGIN = "CORS_ORIGIN"
ENV_TRANSPORT = "TRANSPORT"
ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_DEBUG = "HACKMD_MCP_DEBUG"

DEFAULT_TRANSPORT = "stdio"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8081

# ========================================================================
# JSON-RPC error codes
# ========================================================================

JSONRPC_PARSE_ERROR = -32700
JSONRPC_INTERNAL_ERROR = -32603
JSONRPC_SERVER_ERROR = -32000
