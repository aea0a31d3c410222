# fgprint/services/label_document_service.py

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Sequence

from domain.models import Ticket
from utils.formatting import format_ticket_timestamp
from utils.html_helpers import escape_html, replace_placeholders_in_template

# Resolve template paths relative to this file
BASE_DIR = Path(__file__).resolve().parent.parent
DOCUMENT_TEMPLATE_PATH = BASE_DIR / "templates" / "ticket_document.html"
SECTION_TEMPLATE_PATH = BASE_DIR / "templates" / "ticket_section.html"
PRINT_SCRIPT_TEMPLATE_PATH = BASE_DIR / "templates" / "print_script.html"

DOCUMENT_TITLE = "FG Tickets"


@dataclass(frozen=True)
class LabelLayout:
    """Physical label stock. Defaults target 58mm thermal rolls, ~40mm labels."""
    width: str = "58mm"
    height: str = "40mm"
    qr_size: str = "20mm"


@dataclass(frozen=True)
class AutoPrint:
    """
    Post-load behaviour of the document: once loaded, wait `print_delay_ms`
    (so the QR images can arrive), open the print dialog, then close the
    surface `close_delay_ms` later.
    """
    print_delay_ms: int = 250
    close_delay_ms: int = 300


DEFAULT_LAYOUT = LabelLayout()
DEFAULT_AUTO_PRINT = AutoPrint()


def _read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _section_placeholder_map(ticket: Ticket) -> Dict[str, str]:
    payload = ticket.payload
    return {
        "{{qr_url}}": escape_html(ticket.qr_url),
        "{{part_name}}": escape_html(payload.part_name),
        "{{part_no}}": escape_html(payload.part_no),
        "{{model}}": escape_html(payload.model),
        "{{runner}}": escape_html(payload.runner),
        "{{unique_no}}": escape_html(payload.unique_no),
        "{{printed_at}}": escape_html(format_ticket_timestamp(payload.ts)),
    }


def build_print_html(
        tickets: Sequence[Ticket],
        *,
        auto_print: bool = True,
        auto_print_options: AutoPrint = DEFAULT_AUTO_PRINT,
        layout: LabelLayout = DEFAULT_LAYOUT,
) -> str:
    """
    Build one self-contained HTML document for thermal printing,
    one label (page) per ticket, in input order.

    Every text field coming from the backend is HTML-escaped here,
    whatever validation happened upstream. An empty ticket list gives a
    valid document with an empty body.
    """
    section_template = _read_template(SECTION_TEMPLATE_PATH)
    sections = "".join(
        replace_placeholders_in_template(section_template, _section_placeholder_map(t))
        for t in tickets
    )

    print_script = ""
    if auto_print:
        print_script = replace_placeholders_in_template(
            _read_template(PRINT_SCRIPT_TEMPLATE_PATH),
            {
                "{{print_delay_ms}}": str(int(auto_print_options.print_delay_ms)),
                "{{close_delay_ms}}": str(int(auto_print_options.close_delay_ms)),
            },
        )

    mapping = {
        "{{title}}": escape_html(DOCUMENT_TITLE),
        "{{label_width}}": layout.width,
        "{{label_height}}": layout.height,
        "{{qr_size}}": layout.qr_size,
        "{{sections}}": sections,
        "{{print_script}}": print_script,
    }
    return replace_placeholders_in_template(_read_template(DOCUMENT_TEMPLATE_PATH), mapping)
