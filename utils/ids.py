# fgprint/utils/ids.py

import random
import string
from datetime import datetime
from typing import Optional

SERIAL_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase  # base36
SERIAL_SUFFIX_LENGTH = 4


def generate_ticket_serial(
        prefix: str = "FG",
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
) -> str:
    """
    Readable serial for a ticket: PREFIX-YYYYMMDD-HHMMSS-XXXX
      - date/time from the local wall clock, for traceability
      - XXXX: 4 uppercase base36 chars for extra entropy

    Uniqueness within one second rests on the random suffix only.
    """
    now = now or datetime.now()
    rng = rng or random
    suffix = "".join(rng.choice(SERIAL_SUFFIX_ALPHABET) for _ in range(SERIAL_SUFFIX_LENGTH))
    return f"{prefix}-{now.strftime('%Y%m%d')}-{now.strftime('%H%M%S')}-{suffix}"
