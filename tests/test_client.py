import json
import pytest
from wallet_core import WalletClient, load_config
from wallet_core.crypto import ed25519_generate, encode_private_key
from wallet_core.custody import CustodyRecord, InMemoryKeyCustody
from wallet_core.envelope import encode_error, encode_success, serialize_payload, split_envelope
from wallet_core.errors import (
    LocalFileNotFoundError, PreconditionError, RemoteError, SigningError
)
from wallet_core.models import (
    Fee, IssueAssetBody, IssueBody, POEBody, POEPayload, SignatureParams, TokenAmount,
    TransactionLogs, TransferAssetBody, TransferBody, UploadResponse, WalletResponse,
)
from wallet_core.signature import build_signature, verify_signature
from wallet_core.transport import LocalAdapter, invoke_headers
from wallet_core.transport.transport_local import make_response

RESULT = WalletResponse(id="did:axn:asset-1", created=1528166400, transaction_ids=["tx-1"])


def gateway(result=RESULT, status=200, body=None):
    def handler(req):
        return make_response(status, body if body is not None else encode_success(result))
    return LocalAdapter(handler)


ISSUE = IssueBody(issuer="did:axn:bank", owner="did:axn:alice", asset_id="asset-1", amount=100, fee=Fee(1))
ISSUE_ASSET = IssueAssetBody(issuer="did:axn:bank", owner="did:axn:alice", asset_id="asset-1")
TRANSFER = TransferBody(from_="did:axn:alice", to="did:axn:bob", asset_id="asset-1",
                        tokens=[TokenAmount("ct-1", 5)], fee=Fee(1))
TRANSFER_ASSET = TransferAssetBody(from_="did:axn:alice", to="did:axn:bob", assets=["asset-1"])
POE = POEBody(id="did:axn:poe-1", name="contract", owner="did:axn:alice", hash="abc")

SIGNED_OPS = [
    ("issue_ctoken_sign", ISSUE, "POST", "/v1/transaction/tokens/issue"),
    ("issue_asset_sign", ISSUE_ASSET, "POST", "/v1/transaction/assets/issue"),
    ("transfer_ctoken_sign", TRANSFER, "POST", "/v1/transaction/tokens/transfer"),
    ("transfer_asset_sign", TRANSFER_ASSET, "POST", "/v1/transaction/assets/transfer"),
    ("create_poe", POE, "POST", "/v1/poe/create"),
    ("update_poe", POE, "PUT", "/v1/poe/update"),
]


@pytest.mark.parametrize("op,body,method,path", SIGNED_OPS, ids=[o[0] for o in SIGNED_OPS])
def test_signed_operations(op, body, method, path, keypair, sign_params):
    _, pub = keypair
    transport = gateway()
    client = WalletClient(transport)

    result = getattr(client, op)({"X-Trace": "t-1"}, body, sign_params)

    assert result == RESULT
    req = transport.sent[0]
    assert (req.method, req.path) == (method, path)
    assert req.headers["Content-Type"] == "application/json"
    assert req.headers["X-Trace"] == "t-1"

    payload, sig = split_envelope(req.data)
    assert json.loads(payload) == body.to_dict()
    assert sig.creator == sign_params.creator
    assert verify_signature(sig, payload.encode("utf-8"), pub)


@pytest.mark.parametrize("op,body,method,path", [
    ("issue_ctoken", ISSUE, "POST", "/v1/transaction/tokens/issue"),
    ("issue_asset", ISSUE_ASSET, "POST", "/v1/transaction/assets/issue"),
    ("transfer_ctoken", TRANSFER, "POST", "/v1/transaction/tokens/transfer"),
    ("transfer_asset", TRANSFER_ASSET, "POST", "/v1/transaction/assets/transfer"),
])
def test_presigned_operations_carry_callers_signature(op, body, method, path, keypair, sign_params):
    _, pub = keypair
    signature = build_signature(sign_params, serialize_payload(body))
    transport = gateway()

    assert getattr(WalletClient(transport), op)(None, body, signature) == RESULT

    req = transport.sent[0]
    assert (req.method, req.path) == (method, path)
    payload, sig = split_envelope(req.data)
    assert sig == signature
    assert verify_signature(sig, payload.encode("utf-8"), pub)


@pytest.mark.parametrize("call", [
    lambda c, p: c.issue_ctoken_sign({}, None, p),
    lambda c, p: c.transfer_asset({}, None, build_signature(p, b"{}")),
    lambda c, p: c.issue_asset({}, ISSUE_ASSET, None),
    lambda c, p: c.create_poe({}, None, p),
    lambda c, p: c.query_poe({}, ""),
    lambda c, p: c.query_transaction_logs({}, ""),
    lambda c, p: c.query_transaction_logs({}, "did:axn:alice", tx_type="sideways"),
    lambda c, p: c.upload_poe_file({}, "", "/tmp/file"),
    lambda c, p: c.upload_poe_file({}, "did:axn:poe-1", ""),
])
def test_preconditions_fail_before_any_request(call, sign_params):
    transport = gateway()
    with pytest.raises(PreconditionError):
        call(WalletClient(transport), sign_params)
    assert transport.sent == []


def test_signing_failure_sends_nothing():
    transport = gateway()
    bad = SignatureParams("did:axn:alice", "n-1", "not-a-key")
    with pytest.raises(SigningError):
        WalletClient(transport).issue_ctoken_sign({}, ISSUE, bad)
    assert transport.sent == []


def test_query_transaction_logs():
    logs = TransactionLogs.from_dict({"did:axn:alice": {"utxo": [{"ctoken_id": "ct-1", "amount": 4}]}})
    transport = gateway(result=logs)
    client = WalletClient(transport)

    assert client.query_transaction_logs({}, "did:axn:alice", "in") == logs
    assert client.query_transaction_logs({}, "did:axn:alice") == logs

    first, second = transport.sent
    assert (first.method, first.path) == ("GET", "/v1/transaction/logs")
    assert first.params == {"id": "did:axn:alice", "type": "in"}
    assert second.params == {"id": "did:axn:alice"}
    assert first.data is None


def test_query_poe():
    poe = POEPayload(id="did:axn:poe-1", name="contract", owner="did:axn:alice")
    transport = gateway(result=poe)

    assert WalletClient(transport).query_poe({}, "did:axn:poe-1") == poe
    assert transport.sent[0].params == {"id": "did:axn:poe-1"}


def test_remote_rejection_reaches_caller(sign_params):
    transport = gateway(body=encode_error(3002, "insufficient balance"))
    with pytest.raises(RemoteError) as e:
        WalletClient(transport).transfer_ctoken_sign({}, TRANSFER, sign_params)
    assert (e.value.code, e.value.message) == (3002, "insufficient balance")


def test_sync_and_async_share_the_same_contract(sign_params):
    transport = gateway()
    client = WalletClient(transport)

    async_result = client.issue_asset_sign(invoke_headers(callback_url="https://me/cb"), ISSUE_ASSET, sign_params)
    sync_result = client.issue_asset_sign(invoke_headers("sync"), ISSUE_ASSET, sign_params)

    assert async_result == sync_result == RESULT
    a, s = transport.sent
    assert a.data == s.data
    assert "Bc-Invoke-Mode" not in a.headers
    assert s.headers["Bc-Invoke-Mode"] == "sync"


def test_upload_poe_file(tmp_path):
    doc = tmp_path / "contract.pdf"
    doc.write_bytes(b"%PDF-1.4 fake")
    uploaded = UploadResponse(id="did:axn:poe-1", filename="contract.pdf", size=13, read_only=True)
    transport = gateway(result=uploaded)

    result = WalletClient(transport).upload_poe_file({"Bc-Invoke-Mode": "sync"}, "did:axn:poe-1", str(doc), True)

    assert result == uploaded
    req = transport.sent[0]
    assert (req.method, req.path) == ("POST", "/v1/poe/upload")
    assert req.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert req.headers["Bc-Invoke-Mode"] == "sync"
    assert b'name="poe_id"\r\n\r\ndid:axn:poe-1\r\n' in req.data
    assert b'name="read_only"\r\n\r\ntrue\r\n' in req.data
    assert b"%PDF-1.4 fake" in req.data
    assert req.data.index(b'name="read_only"') < req.data.index(b'name="poe_file"')


@pytest.mark.parametrize("read_only", ["false", 0, None])
def test_upload_read_only_must_be_bool(tmp_path, read_only):
    doc = tmp_path / "contract.pdf"
    doc.write_bytes(b"%PDF-1.4 fake")
    transport = gateway()
    with pytest.raises(PreconditionError):
        WalletClient(transport).upload_poe_file({}, "did:axn:poe-1", str(doc), read_only)
    assert transport.sent == []


def test_upload_missing_file_never_sends(tmp_path):
    transport = gateway()
    with pytest.raises(LocalFileNotFoundError):
        WalletClient(transport).upload_poe_file({}, "did:axn:poe-1", str(tmp_path / "missing.pdf"))
    assert transport.sent == []


def test_client_from_config_with_custody():
    priv, pub = ed25519_generate()
    custody = InMemoryKeyCustody()
    custody.upsert(CustodyRecord("did:axn:alice", encode_private_key(priv), security_code="2468"))

    client = WalletClient.from_config(load_config({"transport": "local"}), custody=custody)
    client.transport.handler = lambda req: make_response(200, encode_success(RESULT))

    params = SignatureParams("did:axn:alice", "n-3", security_code="2468")
    assert client.create_poe({}, POE, params) == RESULT

    payload, sig = split_envelope(client.transport.sent[0].data)
    assert verify_signature(sig, payload.encode("utf-8"), pub)
