# wallet_core/constants.py
from enum import Enum

# Response envelope
SUCCESS_CODE = 0
HTTP_OK = 200

# Headers
HEADER_INVOKE_MODE = "Bc-Invoke-Mode"
HEADER_CALLBACK_URL = "Callback-Url"
HEADER_API_KEY = "API-Key"
HEADER_CONTENT_TYPE = "Content-Type"
JSON_CONTENT_TYPE = "application/json"

SIGNATURE_ALGORITHM = "ed25519"

# Endpoints
PATH_TOKENS_ISSUE = "/v1/transaction/tokens/issue"
PATH_ASSETS_ISSUE = "/v1/transaction/assets/issue"
PATH_TOKENS_TRANSFER = "/v1/transaction/tokens/transfer"
PATH_ASSETS_TRANSFER = "/v1/transaction/assets/transfer"
PATH_TRANSACTION_LOGS = "/v1/transaction/logs"
PATH_POE_CREATE = "/v1/poe/create"
PATH_POE_UPDATE = "/v1/poe/update"
PATH_POE = "/v1/poe"
PATH_POE_UPLOAD = "/v1/poe/upload"

# Multipart form fields for POE uploads
OFFCHAIN_POE_ID = "poe_id"
OFFCHAIN_READ_ONLY = "read_only"
OFFCHAIN_POE_FILE = "poe_file"

# Transaction log directions
TX_TYPE_IN = "in"
TX_TYPE_OUT = "out"


class InvocationMode(str, Enum):
    """How long the gateway holds the call: until submission or until confirmation."""
    ASYNC = "async"
    SYNC = "sync"
