import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

import config
from domain.catalog import seed_parts, seed_runners
from domain.models import (
    CreateTicketsResponse,
    DataSource,
    GatewayResult,
    Part,
    Runner,
    TicketRequest,
)
from services.ticket_service import synthesize_tickets
from utils.formatting import clamp_copies

logger = logging.getLogger(__name__)

# Anything that means "backend didn't give us usable data" -> local fallback
BACKEND_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError)


def _endpoint(path: str, base_url: Optional[str] = None) -> str:
    base = (base_url or config.API_BASE).rstrip("/")
    return f"{base}/{path.lstrip('/')}"


def _get_json(url: str) -> Any:
    resp = requests.get(
        url,
        headers={"Cache-Control": "no-store"},
        timeout=config.REQUEST_TIMEOUT_SECONDS,
    )
    resp.raise_for_status()
    return resp.json()


def _parse_list(body: Any, parse_row) -> list:
    if not isinstance(body, list):
        raise ValueError(f"Expected a JSON array, got {type(body).__name__}")
    return [parse_row(row) for row in body]


def fetch_parts(base_url: Optional[str] = None) -> GatewayResult[List[Part]]:
    """
    Fetch the finished-good parts list.
    Falls back to the seed catalog if the backend is unavailable.
    """
    url = _endpoint(config.PARTS_PATH, base_url)
    try:
        parts = _parse_list(_get_json(url), Part.from_dict)
        return GatewayResult(DataSource.REMOTE, parts)
    except BACKEND_ERRORS as e:
        logger.warning("Fetching parts from %s failed, using seed catalog: %s", url, e)
        return GatewayResult(DataSource.FALLBACK, seed_parts())


def fetch_runners(base_url: Optional[str] = None) -> GatewayResult[List[Runner]]:
    """
    Fetch the runner (manpower) list.
    Falls back to the seed runners if the backend is unavailable.
    """
    url = _endpoint(config.RUNNERS_PATH, base_url)
    try:
        runners = _parse_list(_get_json(url), Runner.from_dict)
        return GatewayResult(DataSource.REMOTE, runners)
    except BACKEND_ERRORS as e:
        logger.warning("Fetching runners from %s failed, using seed runners: %s", url, e)
        return GatewayResult(DataSource.FALLBACK, seed_runners())


def create_tickets(
        request: TicketRequest,
        parts: Optional[Sequence[Part]] = None,
        runners: Optional[Sequence[Runner]] = None,
        base_url: Optional[str] = None,
) -> GatewayResult[CreateTicketsResponse]:
    """
    Ask the backend to create (and store) tickets.

    If the backend is unavailable, tickets are synthesized locally from
    the known parts/runners. Those are printable but never saved.
    QrEncoderNotConfiguredError from the local path is not caught.
    """
    request = TicketRequest(
        part_id=request.part_id,
        runner_id=request.runner_id,
        copies=clamp_copies(request.copies),
    )
    url = _endpoint(config.TICKETS_PATH, base_url)

    try:
        resp = requests.post(
            url,
            json=request.to_dict(),
            timeout=config.REQUEST_TIMEOUT_SECONDS,
        )
        resp.raise_for_status()
        body = CreateTicketsResponse.from_dict(resp.json())
        logger.info("Backend created %d ticket(s) for part %s", len(body.tickets), request.part_id)
        return GatewayResult(DataSource.REMOTE, body)
    except BACKEND_ERRORS as e:
        logger.warning("Creating tickets via %s failed, generating locally: %s", url, e)

    tickets = synthesize_tickets(request, parts, runners)
    logger.info("Generated %d local ticket(s) for part %s", len(tickets), request.part_id)
    return GatewayResult(DataSource.FALLBACK, CreateTicketsResponse(tickets=tickets))


def add_part(
        part_id: str,
        name: str,
        part_no: str,
        model: str,
        std_packing: int,
        image_bytes: bytes,
        image_filename: str,
        image_mimetype: str = "image/jpeg",
        base_url: Optional[str] = None,
) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
    """
    Register a new part (with its picture) in the backend.
    Sent as multipart form data because of the image file.
    Returns (ok, message, response_body)
    """
    if not part_id or not part_id.strip():
        raise ValueError("part_id must be a non-empty string")
    if not name or not name.strip():
        raise ValueError("name must be a non-empty string")
    if int(std_packing) < 1:
        raise ValueError("std_packing must be at least 1")

    form = {
        "partId": part_id.strip(),
        "partName": name.strip(),
        "partNo": part_no.strip(),
        "model": model.strip(),
        "stdPacking": str(int(std_packing)),
    }
    files = {"imageFile": (image_filename, image_bytes, image_mimetype)}
    url = _endpoint(config.ADD_PART_PATH, base_url)

    try:
        resp = requests.post(url, data=form, files=files, timeout=config.REQUEST_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error("Add part %s failed: %s", part_id, e)
        return False, f"Unexpected error: {e}", None

    try:
        body = resp.json()
    except ValueError:
        body = None

    if not resp.ok:
        error = body.get("error") if isinstance(body, dict) else None
        msg = error or f"HTTP {resp.status_code}"
        logger.error("Add part %s rejected: %s", part_id, msg)
        return False, f"Insert failed: {msg}", body if isinstance(body, dict) else None

    message = body.get("message") if isinstance(body, dict) else None
    return True, message or "Inserted", body if isinstance(body, dict) else None
