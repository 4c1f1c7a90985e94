"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Unit of work shared by the repositories of one request.

    Multi-step writes run inside ``atomic()``: either every step is kept or
    none is. Blocks may nest; an inner failure only discards the inner
    block's effects.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an all-or-nothing block.

        Usage:
            async with transaction_manager.atomic():
                ...

        Any exception raised inside the block rolls back its writes and
        propagates unchanged.
        """
        pass
