# fgprint/services/print_service.py
"""
Hand rendered label documents to a print surface.

A surface is acquired first (this may fail, e.g. popups/browser not
available) and then renders one document. Printing itself is driven by
the document's post-load auto-print behaviour; nothing here waits for
the printer.
"""

import logging
import tempfile
import webbrowser
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

import data_integrator
from domain.errors import NoTicketsError, PrintSurfaceUnavailableError
from domain.models import DataSource, Part, Runner, Ticket, TicketRequest
from services.label_document_service import build_print_html

logger = logging.getLogger(__name__)

SURFACE_BLOCKED_MESSAGE = "Popup blocked. Please allow popups/print windows for printing."

DOCUMENT_PREFIX = "fg-tickets-"
# Older label files are deleted; the newest few stay for windows still loading them
MAX_KEPT_DOCUMENTS = 5


@dataclass
class PrintHandle:
    """Where the document was rendered (file path, component key, ...)."""
    location: str


class PrintSurface(Protocol):
    def render(self, document: str) -> PrintHandle:
        ...


SurfaceFactory = Callable[[], PrintSurface]


class BrowserPrintSurface:
    """
    Opens the document in a new browser window. The document's own
    auto-print script opens the print dialog and closes the window.
    """

    def __init__(self, browser: webbrowser.BaseBrowser, out_dir: Optional[Path] = None):
        self.browser = browser
        self.out_dir = out_dir

    @classmethod
    def acquire(cls, out_dir: Optional[Path] = None) -> "BrowserPrintSurface":
        try:
            browser = webbrowser.get()
        except webbrowser.Error as e:
            raise PrintSurfaceUnavailableError(SURFACE_BLOCKED_MESSAGE) from e
        return cls(browser, out_dir)

    def _write_document(self, document: str) -> Path:
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                prefix=f"{DOCUMENT_PREFIX}{timestamp}-",
                suffix=".html",
                dir=str(self.out_dir) if self.out_dir else None,
                delete=False,
        ) as f:
            f.write(document)
        return Path(f.name)

    def _remove_old_documents(self, keep: Path) -> None:
        """Keep only the newest MAX_KEPT_DOCUMENTS label files (incl. `keep`)."""
        folder = keep.parent
        old = sorted(
            (p for p in folder.glob(f"{DOCUMENT_PREFIX}*.html") if p != keep),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        for path in old[MAX_KEPT_DOCUMENTS - 1:]:
            try:
                path.unlink()
            except OSError as e:
                logger.warning("Could not remove old label document %s: %s", path, e)

    def render(self, document: str) -> PrintHandle:
        path = self._write_document(document)
        self._remove_old_documents(keep=path)
        if not self.browser.open_new(path.resolve().as_uri()):
            raise PrintSurfaceUnavailableError(SURFACE_BLOCKED_MESSAGE)
        return PrintHandle(location=str(path))


def dispatch_tickets(
        tickets: Sequence[Ticket],
        acquire_surface: SurfaceFactory = BrowserPrintSurface.acquire,
) -> PrintHandle:
    """
    Build the label document and render it on a freshly acquired surface.
    PrintSurfaceUnavailableError is logged and re-raised for the operator;
    there is no retry.
    """
    document = build_print_html(tickets)
    try:
        surface = acquire_surface()
        handle = surface.render(document)
    except PrintSurfaceUnavailableError as e:
        logger.error("No print surface for %d label(s): %s", len(tickets), e)
        raise
    logger.info("Sent %d label(s) to print surface at %s", len(tickets), handle.location)
    return handle


@dataclass
class PrintOutcome:
    tickets: List[Ticket]
    source: DataSource
    handle: PrintHandle


def generate_and_print_tickets(
        request: TicketRequest,
        parts: Optional[Sequence[Part]] = None,
        runners: Optional[Sequence[Runner]] = None,
        acquire_surface: SurfaceFactory = BrowserPrintSurface.acquire,
        base_url: Optional[str] = None,
) -> PrintOutcome:
    """
    Full print action: create tickets (backend or local), then print them.

    Raises:
        NoTicketsError: nothing came back to print
        PrintSurfaceUnavailableError: no surface could be opened
    """
    result = data_integrator.create_tickets(request, parts, runners, base_url=base_url)
    tickets = result.data.tickets
    if not tickets:
        raise NoTicketsError("No tickets returned")

    handle = dispatch_tickets(tickets, acquire_surface)
    return PrintOutcome(tickets=tickets, source=result.source, handle=handle)
