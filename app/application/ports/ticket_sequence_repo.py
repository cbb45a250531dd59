"""Port interface for the persisted ticket number sequence."""

from abc import ABC, abstractmethod

TICKET_SEQUENCE = "ticket_id"


class TicketSequenceRepository(ABC):
    @abstractmethod
    async def next_value(self, name: str = TICKET_SEQUENCE) -> int:
        """Atomically increment the named sequence and return the NEW value.

        The increment belongs to the caller's open transaction: it becomes
        durable on commit and disappears on rollback, and concurrent callers
        are serialized on the sequence row until the holder commits.

        Raises:
            AllocationConflict: if a concurrent writer won a race (e.g. both
                tried to create the missing sequence row).
        """
        ...

    @abstractmethod
    async def resync(self, name: str = TICKET_SEQUENCE) -> None:
        """Raise the sequence to at least the highest ticket number already stored.

        Runs in the caller's transaction. A missing row is left for next_value
        to create.
        """
        ...
