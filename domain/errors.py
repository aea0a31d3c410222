# fgprint/domain/errors.py


class TicketPrintError(Exception):
    """Base class for failures that stop a print action."""


class NoTicketsError(TicketPrintError):
    """Ticket creation returned nothing to print."""


class PrintSurfaceUnavailableError(TicketPrintError):
    """No window/view could be opened to print into (e.g. popups blocked)."""


class QrEncoderNotConfiguredError(TicketPrintError):
    """The external QR rendering endpoint is not configured."""
