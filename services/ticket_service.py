# fgprint/services/ticket_service.py

import json
import logging
import time
from typing import Callable, Iterable, List, Optional
from urllib.parse import quote

import config
from domain.catalog import placeholder_part, placeholder_runner
from domain.errors import QrEncoderNotConfiguredError
from domain.models import Part, Runner, Ticket, TicketPayload, TicketRequest
from utils.formatting import clamp_copies
from utils.ids import generate_ticket_serial

logger = logging.getLogger(__name__)

# Same safe set as JavaScript's encodeURIComponent
URI_COMPONENT_SAFE = "-_.!~*'()"

# Attempts at drawing a serial not already used in the current batch
MAX_SERIAL_ATTEMPTS = 10


def build_payload(part: Part, runner: Runner, serial: str, now_ms: int) -> TicketPayload:
    if part is None or runner is None:
        raise ValueError("part and runner are required")
    return TicketPayload(
        part_name=part.name,
        part_no=part.part_no,
        model=part.model,
        runner=runner.name,
        unique_no=serial,
        picture=part.image_url or None,
        ts=now_ms,
    )


def payload_to_qr_data(payload: TicketPayload) -> str:
    """Compact JSON of the payload, URL-encoded for the QR `data` parameter."""
    raw = json.dumps(payload.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return quote(raw, safe=URI_COMPONENT_SAFE)


def build_qr_url(
        payload: TicketPayload,
        *,
        endpoint: Optional[str] = None,
        size: Optional[str] = None,
) -> str:
    endpoint = config.QR_ENDPOINT if endpoint is None else endpoint
    size = size or config.QR_SIZE
    if not endpoint:
        raise QrEncoderNotConfiguredError("QR endpoint is not configured (FG_QR_ENDPOINT)")
    # plain '&' here: this is a URL, the document renderer escapes it
    return f"{endpoint}?size={size}&data={payload_to_qr_data(payload)}"


def resolve_part(part_id: str, parts: Optional[Iterable[Part]]) -> Part:
    found = next((p for p in (parts or []) if p.id == part_id), None)
    if found is None:
        logger.info('Part "%s" not in known parts, using placeholder', part_id)
        return placeholder_part(part_id)
    return found


def resolve_runner(runner_id: str, runners: Optional[Iterable[Runner]]) -> Runner:
    found = next((r for r in (runners or []) if r.id == runner_id), None)
    if found is None:
        logger.info('Runner "%s" not in known runners, using placeholder', runner_id)
        return placeholder_runner(runner_id)
    return found


def _next_serial(used: set, make_serial: Callable[[], str]) -> str:
    serial = make_serial()
    for _ in range(MAX_SERIAL_ATTEMPTS - 1):
        if serial not in used:
            break
        serial = make_serial()
    if serial in used:
        logger.warning("Serial %s repeated after %d draws, batch has a duplicate", serial, MAX_SERIAL_ATTEMPTS)
    used.add(serial)
    return serial


def synthesize_tickets(
        request: TicketRequest,
        parts: Optional[Iterable[Part]] = None,
        runners: Optional[Iterable[Runner]] = None,
        *,
        make_serial: Optional[Callable[[], str]] = None,
        clock_ms: Optional[Callable[[], int]] = None,
        qr_endpoint: Optional[str] = None,
) -> List[Ticket]:
    """
    Build tickets locally (not persisted, so no `id`).

    Unknown part/runner ids get a placeholder instead of failing.
    copies < 1 is treated as 1. Tickets come back in creation order.
    """
    make_serial = make_serial or (lambda: generate_ticket_serial(config.SERIAL_PREFIX))
    clock_ms = clock_ms or (lambda: int(time.time() * 1000))

    part = resolve_part(request.part_id, parts)
    runner = resolve_runner(request.runner_id, runners)
    copies = clamp_copies(request.copies)

    used_serials: set = set()
    tickets: List[Ticket] = []
    for _ in range(copies):
        serial = _next_serial(used_serials, make_serial)
        payload = build_payload(part, runner, serial, clock_ms())
        tickets.append(Ticket(payload=payload, qr_url=build_qr_url(payload, endpoint=qr_endpoint)))

    return tickets


def resolve_quantity(part: Optional[Part], mode: str = "std", custom_qty=None) -> int:
    """
    Quantity picked on the station:
      - "std": the part's standard packing
      - "custom": operator value, at least 1
    Without a part there is nothing to pack, so 1.
    """
    if part is None:
        return 1
    if mode == "std":
        return clamp_copies(part.std_packing)
    if mode == "custom":
        return clamp_copies(custom_qty)
    raise ValueError(f"Unknown quantity mode: {mode}")
