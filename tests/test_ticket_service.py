import itertools
import json
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from domain.errors import QrEncoderNotConfiguredError
from domain.models import TicketPayload, TicketRequest
from services.ticket_service import (
    build_payload,
    build_qr_url,
    payload_to_qr_data,
    resolve_part,
    resolve_quantity,
    resolve_runner,
    synthesize_tickets,
)


def _qr_data(qr_url):
    """Raw (still percent-encoded) value of the data= parameter."""
    return qr_url.split("&data=", 1)[1]


def test_build_payload_copies_part_and_runner(known_parts, known_runners):
    payload = build_payload(known_parts[0], known_runners[0], "FG-20240101-120000-AB12", 1700000000000)
    assert payload == TicketPayload(
        part_name="Gear Assembly",
        part_no="GA-1042",
        model="M-AX",
        runner="Aisyah",
        unique_no="FG-20240101-120000-AB12",
        picture="https://img.example/p1.jpg",
        ts=1700000000000,
    )


def test_build_payload_requires_part_and_runner(known_runners):
    with pytest.raises(ValueError):
        build_payload(None, known_runners[0], "FG-1", 0)


def test_qr_url_has_size_and_encoded_payload(known_parts, known_runners):
    payload = build_payload(known_parts[0], known_runners[0], "FG-20240101-120000-AB12", 1)
    url = build_qr_url(payload, endpoint="https://qr.example/create/", size="200x200")

    assert url.startswith("https://qr.example/create/?size=200x200&data=")
    data = _qr_data(url)
    assert " " not in data and "&" not in data and "+" not in data
    assert json.loads(unquote(data)) == payload.to_dict()
    assert parse_qs(urlsplit(url).query)["size"] == ["200x200"]


def test_qr_data_is_compact_json_like_encode_uri_component():
    payload = TicketPayload(part_name="A & B (x)", part_no="N/1", model="M", runner="Mei Lin",
                            unique_no="FG-1", ts=2)
    data = payload_to_qr_data(payload)
    assert data.startswith("%7B%22partName%22%3A%22A%20%26%20B%20(x)%22")
    assert "N%2F1" in data


def test_qr_url_without_endpoint_raises(known_parts, known_runners):
    payload = build_payload(known_parts[0], known_runners[0], "FG-1", 1)
    with pytest.raises(QrEncoderNotConfiguredError):
        build_qr_url(payload, endpoint="")


def test_synthesize_three_tickets_for_known_part_and_runner(known_parts, known_runners):
    request = TicketRequest(part_id="p1", runner_id="r1", copies=3)
    tickets = synthesize_tickets(request, known_parts, known_runners)

    assert len(tickets) == 3
    assert len({t.payload.unique_no for t in tickets}) == 3
    for t in tickets:
        assert t.id is None
        assert (t.payload.part_name, t.payload.part_no, t.payload.model) == ("Gear Assembly", "GA-1042", "M-AX")
        assert t.payload.runner == "Aisyah"
        assert json.loads(unquote(_qr_data(t.qr_url))) == t.payload.to_dict()


def test_synthesize_keeps_creation_order():
    serials = iter(["FG-A", "FG-B", "FG-C"])
    clock = itertools.count(100)
    tickets = synthesize_tickets(
        TicketRequest("p1", "r1", 3),
        make_serial=lambda: next(serials),
        clock_ms=lambda: next(clock),
    )
    assert [t.payload.unique_no for t in tickets] == ["FG-A", "FG-B", "FG-C"]
    assert [t.payload.ts for t in tickets] == [100, 101, 102]


def test_synthesize_redraws_serial_already_used_in_batch(known_parts, known_runners):
    serials = iter(["FG-SAME", "FG-SAME", "FG-OTHER"])
    tickets = synthesize_tickets(
        TicketRequest("p1", "r1", 2), known_parts, known_runners,
        make_serial=lambda: next(serials),
    )
    assert [t.payload.unique_no for t in tickets] == ["FG-SAME", "FG-OTHER"]


@pytest.mark.parametrize("copies", [0, -4])
def test_synthesize_clamps_copies_to_one(known_parts, known_runners, copies):
    tickets = synthesize_tickets(TicketRequest("p1", "r1", copies), known_parts, known_runners)
    assert len(tickets) == 1


def test_unknown_part_gets_placeholder(known_parts, known_runners):
    tickets = synthesize_tickets(TicketRequest("zz9", "r1", 1), known_parts, known_runners)
    assert tickets[0].payload.part_name == "Unknown Part"
    assert tickets[0].payload.part_no == "N/A"

    part = resolve_part("zz9", known_parts)
    assert part.id == "zz9"
    assert part.std_packing == 1


def test_unknown_runner_gets_placeholder(known_parts):
    runner = resolve_runner("r404", [])
    assert runner.id == "r404"
    assert runner.name == "Unknown"
    tickets = synthesize_tickets(TicketRequest("p1", "r404", 1), known_parts, None)
    assert tickets[0].payload.runner == "Unknown"


def test_synthesize_without_qr_endpoint_raises(known_parts, known_runners):
    with pytest.raises(QrEncoderNotConfiguredError):
        synthesize_tickets(TicketRequest("p1", "r1", 1), known_parts, known_runners, qr_endpoint="")


def test_resolve_quantity_modes(known_parts):
    part = known_parts[0]
    assert resolve_quantity(part, "std") == 10
    assert resolve_quantity(part, "custom", 7) == 7
    assert resolve_quantity(part, "custom", 0) == 1
    assert resolve_quantity(part, "custom", "abc") == 1
    assert resolve_quantity(None, "std") == 1
    with pytest.raises(ValueError):
        resolve_quantity(part, "bulk")


def test_repeated_duplicate_serial_is_logged(known_parts, known_runners, caplog):
    tickets = synthesize_tickets(
        TicketRequest("p1", "r1", 2), known_parts, known_runners,
        make_serial=lambda: "FG-STUCK",
    )
    assert len(tickets) == 2
    assert "FG-STUCK repeated" in caplog.text
