import logging
import random
from typing import Iterable, Optional

from solders.pubkey import Pubkey

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000


def sol_to_lamports(sol: float) -> int:
    return int(sol * LAMPORTS_PER_SOL)


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


class TipAccountPool:
    """Fixed, non-empty set of tip recipients for one provider."""

    def __init__(self, addresses: Iterable[str | Pubkey]):
        accounts = tuple(
            a if isinstance(a, Pubkey) else Pubkey.from_string(a) for a in addresses
        )
        if not accounts:
            raise ValueError("Tip account pool must not be empty")
        self._accounts = accounts

    @property
    def accounts(self) -> tuple[Pubkey, ...]:
        return self._accounts

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, item: object) -> bool:
        return item in self._accounts

    def __iter__(self):
        return iter(self._accounts)

    def choose(self, rng: Optional[random.Random] = None) -> Pubkey:
        """Pick a recipient uniformly at random, falling back to the first one."""
        if len(self._accounts) == 1:
            return self._accounts[0]
        try:
            return (rng or random).choice(self._accounts)
        except Exception as e:
            logger.warning(f"Random tip account choice failed ({e}), using first account")
            return self._accounts[0]
