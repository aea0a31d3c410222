import pytest
import requests

from domain.models import Part, Runner
from tests.fakes import FakeSurface


@pytest.fixture
def known_parts():
    return [
        Part(id="p1", name="Gear Assembly", part_no="GA-1042", model="M-AX",
             image_url="https://img.example/p1.jpg", std_packing=10),
        Part(id="p2", name="Control Panel", part_no="CP-221B", model="M-BRX",
             image_url="https://img.example/p2.jpg", std_packing=5),
    ]


@pytest.fixture
def known_runners():
    return [
        Runner(id="r1", name="Aisyah", avatar_url="https://img.example/r1.jpg"),
        Runner(id="r2", name="Daniel"),
    ]


@pytest.fixture
def backend_down(monkeypatch):
    """Every HTTP call fails as if the server were unreachable."""
    calls = []

    def refuse(url, *args, **kwargs):
        calls.append(url)
        raise requests.ConnectionError(f"cannot reach {url}")

    monkeypatch.setattr(requests, "get", refuse)
    monkeypatch.setattr(requests, "post", refuse)
    return calls


@pytest.fixture
def fake_surface():
    return FakeSurface()
