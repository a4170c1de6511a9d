"""
wallet_core.client
------------------
WalletClient exposes one method per gateway operation. Every operation runs the
same fixed sequence:

    validate → (sign) → compose → transport send → decode envelope

Invocation mode
    Calls are asynchronous by default: the gateway returns without waiting for
    ledger confirmation and, if a Callback-Url header is given, later posts a
    TransactionEvent there. Set ``Bc-Invoke-Mode: sync`` (see
    ``wallet_core.transport.invoke_headers``) to block until confirmation.
    The mode never changes how the response is decoded.

Signing
    Methods without a ``_sign`` suffix take a SignedPayload the caller produced
    over the compact JSON serialization of the body. ``*_sign`` methods (and the
    POE create/update calls) serialize the body once, sign those exact bytes
    with the client's signer and send the same string.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional

from .config import WalletConfig, load_config
from .constants import (
    OFFCHAIN_POE_FILE,
    OFFCHAIN_POE_ID,
    OFFCHAIN_READ_ONLY,
    PATH_ASSETS_ISSUE,
    PATH_ASSETS_TRANSFER,
    PATH_POE,
    PATH_POE_CREATE,
    PATH_POE_UPDATE,
    PATH_POE_UPLOAD,
    PATH_TOKENS_ISSUE,
    PATH_TOKENS_TRANSFER,
    PATH_TRANSACTION_LOGS,
    TX_TYPE_IN,
    TX_TYPE_OUT,
)
from .custody import KeyCustody, load_custody_provider
from .envelope import decode_response, serialize_payload, wrap_payload
from .errors import PreconditionError
from .logger import get_logger, set_level
from .models import (
    IssueAssetBody,
    IssueBody,
    POEBody,
    POEPayload,
    SignatureParams,
    SignedPayload,
    TransactionLogs,
    TransferAssetBody,
    TransferBody,
    UploadResponse,
    WalletResponse,
)
from .multipart import encode_file_upload
from .signature import CustodySigner, KeySigner, SignatureBuilder
from .transport import compose, transport_factory

log = get_logger("Wallet.Client")

Headers = Optional[Mapping[str, str]]


class WalletClient:
    def __init__(self, transport, signer=None):
        self.transport = transport
        self.builder = SignatureBuilder(signer)

    @classmethod
    def from_config(cls, config: Optional[WalletConfig] = None, custody: Optional[KeyCustody] = None) -> "WalletClient":
        """Build a client whose transport and signer are chosen by configuration."""
        config = config or load_config()
        set_level(config.log_level)
        if custody is None:
            custody = load_custody_provider({"provider": config.custody})
        signer = CustodySigner(custody) if custody is not None else KeySigner()
        return cls(transport_factory(config), signer)

    def close(self) -> None:
        self.transport.close()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------
    def _call(self, method: str, path: str, headers: Headers, target, **kwargs) -> Any:
        request = compose(method, path, headers, **kwargs)
        response = self.transport.send(request)
        return decode_response(response, target)

    def _send_presigned(self, method: str, path: str, headers: Headers, body, signature: Optional[SignedPayload]):
        if body is None:
            raise PreconditionError("request payload invalid")
        if signature is None:
            raise PreconditionError("request signature is required")
        raw_payload = serialize_payload(body)
        return self._call(method, path, headers, WalletResponse, body=wrap_payload(raw_payload, signature))

    def _send_signed(self, method: str, path: str, headers: Headers, body, sign_params: Optional[SignatureParams]):
        if body is None:
            raise PreconditionError("request payload invalid")
        raw_payload = serialize_payload(body)
        signature = self.builder.build(sign_params, raw_payload)
        return self._call(method, path, headers, WalletResponse, body=wrap_payload(raw_payload, signature))

    # ------------------------------------------------------------------
    # Colored tokens and digital assets
    # ------------------------------------------------------------------
    def issue_ctoken(self, headers: Headers, body: IssueBody, signature: SignedPayload) -> WalletResponse:
        """Issue colored tokens against a digital asset."""
        return self._send_presigned("POST", PATH_TOKENS_ISSUE, headers, body, signature)

    def issue_ctoken_sign(self, headers: Headers, body: IssueBody, sign_params: SignatureParams) -> WalletResponse:
        return self._send_signed("POST", PATH_TOKENS_ISSUE, headers, body, sign_params)

    def issue_asset(self, headers: Headers, body: IssueAssetBody, signature: SignedPayload) -> WalletResponse:
        """Issue a digital asset to its owner."""
        return self._send_presigned("POST", PATH_ASSETS_ISSUE, headers, body, signature)

    def issue_asset_sign(self, headers: Headers, body: IssueAssetBody, sign_params: SignatureParams) -> WalletResponse:
        return self._send_signed("POST", PATH_ASSETS_ISSUE, headers, body, sign_params)

    def transfer_ctoken(self, headers: Headers, body: TransferBody, signature: SignedPayload) -> WalletResponse:
        """Transfer colored tokens from one wallet to another."""
        return self._send_presigned("POST", PATH_TOKENS_TRANSFER, headers, body, signature)

    def transfer_ctoken_sign(self, headers: Headers, body: TransferBody, sign_params: SignatureParams) -> WalletResponse:
        return self._send_signed("POST", PATH_TOKENS_TRANSFER, headers, body, sign_params)

    def transfer_asset(self, headers: Headers, body: TransferAssetBody, signature: SignedPayload) -> WalletResponse:
        """Transfer digital assets from one wallet to another."""
        return self._send_presigned("POST", PATH_ASSETS_TRANSFER, headers, body, signature)

    def transfer_asset_sign(self, headers: Headers, body: TransferAssetBody, sign_params: SignatureParams) -> WalletResponse:
        return self._send_signed("POST", PATH_ASSETS_TRANSFER, headers, body, sign_params)

    def query_transaction_logs(self, headers: Headers, id: str, tx_type: Optional[str] = None) -> TransactionLogs:
        """
        Query UTXO/STXO logs for a wallet identity.

        tx_type: "in" for income, "out" for spending, None for both.
        """
        if not id:
            raise PreconditionError("request id invalid")
        if tx_type not in (None, "", TX_TYPE_IN, TX_TYPE_OUT):
            raise PreconditionError(f"transaction type invalid: {tx_type!r}")

        result = self._call(
            "GET", PATH_TRANSACTION_LOGS, headers, TransactionLogs,
            params={"id": id, "type": tx_type},
        )
        return result if result is not None else TransactionLogs()

    # ------------------------------------------------------------------
    # Proof of existence
    # ------------------------------------------------------------------
    def create_poe(self, headers: Headers, body: POEBody, sign_params: SignatureParams) -> WalletResponse:
        return self._send_signed("POST", PATH_POE_CREATE, headers, body, sign_params)

    def update_poe(self, headers: Headers, body: POEBody, sign_params: SignatureParams) -> WalletResponse:
        return self._send_signed("PUT", PATH_POE_UPDATE, headers, body, sign_params)

    def query_poe(self, headers: Headers, id: str) -> Optional[POEPayload]:
        if not id:
            raise PreconditionError("poe id invalid")
        return self._call("GET", PATH_POE, headers, POEPayload, params={"id": id})

    def upload_poe_file(self, headers: Headers, poe_id: str, poe_file: str, read_only: bool = False) -> UploadResponse:
        """
        Upload a file for a POE asset created beforehand with create_poe.

        Local file problems raise LocalFileError (LocalFileNotFoundError for a
        missing path) without contacting the gateway.
        """
        if not poe_id:
            raise PreconditionError("poe id must be set when uploading poe file")
        if not poe_file:
            raise PreconditionError("poe file must be set when uploading poe file")
        if not isinstance(read_only, bool):
            raise PreconditionError(f"read_only must be a bool, got {type(read_only).__name__}")

        log.info(f"[UPLOAD] building form for poe {poe_id}")
        fields = [
            (OFFCHAIN_POE_ID, poe_id),
            (OFFCHAIN_READ_ONLY, "true" if read_only else "false"),
        ]
        data, content_type = encode_file_upload(fields, OFFCHAIN_POE_FILE, poe_file)

        result = self._call(
            "POST", PATH_POE_UPLOAD, headers, UploadResponse,
            raw=data, content_type=content_type,
        )
        log.info(f"[UPLOAD] poe {poe_id} file uploaded")
        return result
