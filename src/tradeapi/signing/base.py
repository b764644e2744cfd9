"""Base interface for transaction submission.

Submission flow:
1. Deserialize the unsigned transaction
2. Apply the wallet signature in its signer slot
3. Broadcast the signed transaction
4. Wait for the requested commitment
"""

from abc import ABC, abstractmethod

from solders.keypair import Keypair


class TransactionSubmitter(ABC):
    """Signs and broadcasts aggregator-built transactions."""

    @abstractmethod
    async def sign_and_broadcast(self, unsigned_tx: bytes, keypair: Keypair) -> str:
        """Partially sign, broadcast and confirm a transaction.

        Args:
            unsigned_tx: Serialized transaction bytes
            keypair: Wallet keypair to sign with

        Returns:
            Transaction signature (base58)
        """
        pass

    async def close(self) -> None:
        """Release network resources."""
        return None
