import pytest
from wallet_core.crypto import ed25519_generate, encode_private_key
from wallet_core.models import SignatureParams


@pytest.fixture
def keypair():
    return ed25519_generate()


@pytest.fixture
def sign_params(keypair):
    priv, _ = keypair
    return SignatureParams(
        creator="did:axn:alice",
        nonce="nonce-0001",
        private_key=encode_private_key(priv),
    )
