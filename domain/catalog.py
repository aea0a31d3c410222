# fgprint/domain/catalog.py
"""
Seed catalog used when the backend cannot be reached, so the printer
station keeps working offline (and for demos).
"""

from typing import List

from domain.models import Part, Runner

CDN_BASE = "https://pub-cdn.sider.ai/u/U0Z6H6O5A87/web-coder/68f8e67b14c697e997a39c2b/resource"

PLACEHOLDER_PART_IMAGE = f"{CDN_BASE}/2fe31d18-5fe6-4de3-8715-9f71799e6aea.jpg"
RUNNER_FACE = f"{CDN_BASE}/bceeca13-8bbe-4ed6-8898-a533a7e9e46f.jpg"

RUNNER_NAMES = [
    "Aisyah", "Daniel", "Farid", "Mei Lin", "Prakash", "Rina",
    "Amir", "Sofia", "Kenji", "Hana", "Miguel", "Priya",
    "Omar", "Nurul", "Ivan", "Sara", "Jae", "Lila",
    "Yusuf", "Elena", "Chen", "Maya", "Arif", "Grace",
]


def seed_parts() -> List[Part]:
    return [
        Part("p1", "Gear Assembly", "GA-1042", "M-AX", f"{CDN_BASE}/c8a86152-2656-4d2d-beaa-b8b7ce8d123f.jpg", 10),
        Part("p2", "Control Panel", "CP-221B", "M-BRX", f"{CDN_BASE}/4e0f2310-5562-46b7-aa57-fba2988783ba.jpg", 5),
        Part("p3", "Cooling Fan", "CF-7810", "M-ECO", f"{CDN_BASE}/63186bdf-a9cd-45a1-90b8-d4df0170a0e8.jpg", 20),
        Part("p4", "Sensor Module", "SM-500", "M-PRO", f"{CDN_BASE}/754dd4c0-07b2-4d7f-b458-b20cc6c0970c.jpg", 15),
        Part("p5", "Drive Belt", "DB-92", "M-AX", f"{CDN_BASE}/d2ff4f0d-1adf-420d-bc51-b35225b4af96.jpg", 25),
        Part("p6", "Valve Body", "VB-300", "M-HYD", f"{CDN_BASE}/c25fcf19-b178-4e6f-873c-dc0b28be2232.jpg", 8),
    ]


def seed_runners() -> List[Runner]:
    return [
        Runner(id=f"r{i}", name=name, avatar_url=RUNNER_FACE)
        for i, name in enumerate(RUNNER_NAMES, start=1)
    ]


def placeholder_part(part_id: str) -> Part:
    return Part(
        id=part_id,
        name="Unknown Part",
        part_no="N/A",
        model="N/A",
        image_url=PLACEHOLDER_PART_IMAGE,
        std_packing=1,
    )


def placeholder_runner(runner_id: str) -> Runner:
    return Runner(id=runner_id, name="Unknown")
