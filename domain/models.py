# fgprint/domain/models.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

# Label timestamps must fall in 1970-01-01 .. 3000-01-01 (UTC)
MAX_TS_MS = 32503680000000


def _require_dict(row: Any, what: str) -> Dict[str, Any]:
    if not isinstance(row, dict):
        raise TypeError(f"{what} must be a JSON object, got {type(row).__name__}")
    return row


@dataclass(frozen=True)
class Part:
    """
    Finished-good part as stored by the backend.
    Read-only reference data for the ticket flow.
    """
    id: str
    name: str
    part_no: str
    model: str
    image_url: str
    std_packing: int  # standard packing quantity, > 0

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "Part":
        row = _require_dict(row, "part")
        std_packing = int(row["stdPacking"])
        if std_packing < 1:
            raise ValueError(f"stdPacking must be positive, got {std_packing}")
        return cls(
            id=str(row["id"]),
            name=str(row["name"]),
            part_no=str(row["partNo"]),
            model=str(row["model"]),
            image_url=str(row.get("imageUrl") or ""),
            std_packing=std_packing,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "partNo": self.part_no,
            "model": self.model,
            "imageUrl": self.image_url,
            "stdPacking": self.std_packing,
        }


@dataclass(frozen=True)
class Runner:
    """
    Runner (manpower) who carries the finished goods.
    """
    id: str
    name: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "Runner":
        row = _require_dict(row, "runner")
        avatar = row.get("avatarUrl")
        return cls(
            id=str(row["id"]),
            name=str(row["name"]),
            avatar_url=str(avatar) if avatar else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.avatar_url:
            data["avatarUrl"] = self.avatar_url
        return data


@dataclass(frozen=True)
class TicketRequest:
    part_id: str
    runner_id: str
    copies: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partId": self.part_id,
            "runnerId": self.runner_id,
            "copies": self.copies,
        }


@dataclass(frozen=True)
class TicketPayload:
    """
    Data encoded in the QR code and printed on the label.
    Key order of to_dict() is the order used for the QR JSON.
    """
    part_name: str
    part_no: str
    model: str
    runner: str
    unique_no: str  # serial, unique per ticket
    ts: int  # creation instant, ms since epoch
    picture: Optional[str] = None

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "TicketPayload":
        row = _require_dict(row, "ticket payload")
        ts = int(row["ts"])
        if not 0 <= ts <= MAX_TS_MS:
            raise ValueError(f"ts out of range: {ts}")
        picture = row.get("picture")
        return cls(
            part_name=str(row["partName"]),
            part_no=str(row["partNo"]),
            model=str(row["model"]),
            runner=str(row["runner"]),
            unique_no=str(row["uniqueNo"]),
            ts=ts,
            picture=str(picture) if picture else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "partName": self.part_name,
            "partNo": self.part_no,
            "model": self.model,
            "runner": self.runner,
            "uniqueNo": self.unique_no,
        }
        if self.picture:
            data["picture"] = self.picture
        data["ts"] = self.ts
        return data


@dataclass(frozen=True)
class Ticket:
    """
    One physical label. `id` is only set when the backend persisted it.
    """
    payload: TicketPayload
    qr_url: str
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "Ticket":
        row = _require_dict(row, "ticket")
        ticket_id = row.get("id")
        return cls(
            payload=TicketPayload.from_dict(row["payload"]),
            qr_url=str(row["qrUrl"]),
            id=str(ticket_id) if ticket_id is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data["payload"] = self.payload.to_dict()
        data["qrUrl"] = self.qr_url
        return data


@dataclass
class CreateTicketsResponse:
    tickets: List[Ticket] = field(default_factory=list)

    @classmethod
    def from_dict(cls, body: Dict[str, Any]) -> "CreateTicketsResponse":
        raw = _require_dict(body, "create tickets response")["tickets"]
        if not isinstance(raw, list):
            raise ValueError("'tickets' must be a list")
        return cls(tickets=[Ticket.from_dict(t) for t in raw])


class DataSource(Enum):
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass
class GatewayResult(Generic[T]):
    """
    Result of a gateway call, tagged with the path that produced it.
    """
    source: DataSource
    data: T

    @property
    def is_fallback(self) -> bool:
        return self.source is DataSource.FALLBACK
