"""Solana transaction signing and submission.

Aggregator transactions may list other required signers; only the wallet's
own slot is filled, existing signatures are left untouched.
"""

import logging
from typing import Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TxOpts
from solders.keypair import Keypair
from solders.message import to_bytes_versioned
from solders.transaction import VersionedTransaction

from tradeapi.errors import BroadcastError, ConfirmError, SigningError, SwapBuildError
from tradeapi.signing.base import TransactionSubmitter

logger = logging.getLogger(__name__)


def partial_sign(tx_bytes: bytes, keypair: Keypair) -> VersionedTransaction:
    """Sign a serialized legacy or v0 transaction with one keypair.

    Raises:
        SwapBuildError: If the bytes are not a transaction
        SigningError: If the keypair is not a required signer
    """
    try:
        tx = VersionedTransaction.from_bytes(tx_bytes)
    except Exception as e:
        raise SwapBuildError(f"Invalid swap transaction payload: {e}") from e

    message = tx.message
    num_signers = message.header.num_required_signatures
    signers = list(message.account_keys)[:num_signers]

    pubkey = keypair.pubkey()
    if pubkey not in signers:
        raise SigningError(f"Wallet {pubkey} is not a signer of the swap transaction")

    signatures = list(tx.signatures)
    signatures[signers.index(pubkey)] = keypair.sign_message(to_bytes_versioned(message))

    return VersionedTransaction.populate(message, signatures)


class SolanaSubmitter(TransactionSubmitter):
    """Broadcasts through a Solana RPC node and waits for ``confirmed``."""

    def __init__(self, rpc_url: str, client: Optional[AsyncClient] = None):
        self.rpc_url = rpc_url
        self._client = client or AsyncClient(rpc_url, commitment=Confirmed)

    async def sign_and_broadcast(self, unsigned_tx: bytes, keypair: Keypair) -> str:
        signed = partial_sign(unsigned_tx, keypair)
        logger.info(f"Swap transaction signed by {keypair.pubkey()}")

        try:
            resp = await self._client.send_raw_transaction(
                bytes(signed),
                opts=TxOpts(skip_confirmation=True, preflight_commitment=Confirmed),
            )
        except Exception as e:
            logger.error(f"Solana broadcast failed via {self.rpc_url}: {e}")
            raise BroadcastError(f"Failed to broadcast transaction: {e}") from e

        signature = resp.value
        logger.info(f"Solana tx broadcast: {signature}")

        try:
            confirmation = await self._client.confirm_transaction(signature, Confirmed)
        except Exception as e:
            logger.error(f"Solana confirmation failed for {signature}: {e}")
            raise ConfirmError(f"Transaction {signature} was not confirmed: {e}") from e

        status = confirmation.value[0] if confirmation.value else None
        if status is None:
            raise ConfirmError(f"Transaction {signature} was not confirmed")
        if status.err is not None:
            raise ConfirmError(f"Transaction {signature} failed: {status.err}")

        return str(signature)

    async def close(self) -> None:
        await self._client.close()
