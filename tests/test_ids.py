import random
import re
from datetime import datetime

from utils.ids import generate_ticket_serial

SERIAL_RE = re.compile(r"^FG-\d{8}-\d{6}-[0-9A-Z]{4}$")


def test_serial_matches_format():
    assert SERIAL_RE.match(generate_ticket_serial("FG"))


def test_serial_default_prefix_is_fg():
    assert generate_ticket_serial().startswith("FG-")


def test_serial_embeds_local_date_and_time():
    now = datetime(2024, 3, 7, 9, 5, 2)
    serial = generate_ticket_serial("FG", now=now, rng=random.Random(1))
    assert serial.startswith("FG-20240307-090502-")
    assert len(serial) == len("FG-20240307-090502-XXXX")


def test_serial_custom_prefix():
    serial = generate_ticket_serial("WIP", now=datetime(2024, 12, 31, 23, 59, 59))
    assert re.match(r"^WIP-20241231-235959-[0-9A-Z]{4}$", serial)


def test_serials_in_quick_succession_differ():
    serials = {generate_ticket_serial("FG") for _ in range(20)}
    assert len(serials) == 20
