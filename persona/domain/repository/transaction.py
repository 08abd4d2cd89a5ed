"""Transaction manager interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Scopes groups of writes within the current unit of work.

    The unit of work itself (one request) commits or rolls back as a whole;
    a savepoint lets one group of writes inside it be undone on its own.
    """

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Run a block of writes that is undone if the block raises.

        The exception still propagates; writes made before the block are
        kept, and later writes can continue in the same unit of work.

        Raises:
            VoteOperationError: If the savepoint cannot be opened or
                released
        """
        pass
