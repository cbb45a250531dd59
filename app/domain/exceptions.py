"""Domain errors raised along the complaint pipeline."""


class ComplaintProcessingError(Exception):
    """Base class for all complaint pipeline errors."""


class EmptyComplaint(ComplaintProcessingError):
    """The submitted complaint text is missing or blank."""


class ClassifierUnavailable(ComplaintProcessingError):
    """The external text/vision classifier could not be reached or answered with nothing."""


class PhotoAnalysisFailure(ComplaintProcessingError):
    """Photo analysis failed; recovered with a placeholder text."""


class ClassificationParseFailure(ComplaintProcessingError):
    """Classifier output was missing, malformed or incomplete."""


class AllocationConflict(ComplaintProcessingError):
    """Two writers raced for the same ticket number; the allocation must be retried."""


class PersistenceFailure(ComplaintProcessingError):
    """The ticket could not be stored; no identifier can be returned."""


class TicketNotFound(ComplaintProcessingError):
    def __init__(self, ticket_id: str):
        super().__init__(f"Ticket {ticket_id} not found")
        self.ticket_id = ticket_id
