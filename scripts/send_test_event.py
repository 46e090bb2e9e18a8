#!/usr/bin/env python3
"""Send test Purchase events to the Meta Conversions API.

This script:
1. Builds an ad-click event and an offline event from sample leads
2. Submits both with META_TEST_EVENT_CODE so they land in Test Events
3. Prints the dedup keys and Meta's responses

Requires META_PIXEL_ID, META_ACCESS_TOKEN and META_TEST_EVENT_CODE.
"""

import asyncio
import os
import sys

from pixelrelay.connectors import PurchasePipeline, RelayConfig

SAMPLE_LEADS = [
    {
        "label": "ad click",
        "payload": {
            "nombre": "Ana",
            "apellido": "Pérez",
            "phone": "011 2345-6789",
            "amount": "500",
            "fbc": "fb.1.1700000000000.IwAR-sample",
            "event_id": "smoke-ad-click",
        },
    },
    {
        "label": "offline",
        "payload": {
            "nombre": "Juan",
            "phone": "+54 9 223 556-0000",
            "amount": 1250.5,
            "fbp": "N/A",
        },
    },
]


async def send_samples(test_event_code: str) -> int:
    """Submit every sample lead and return the number of failures."""
    pipeline = PurchasePipeline(RelayConfig.from_env())
    failures = 0

    for sample in SAMPLE_LEADS:
        print("=" * 60)
        print(f"Sending {sample['label']} event")
        print("=" * 60)

        result = await pipeline.process({**sample["payload"], "test_event_code": test_event_code})

        print(f"  outcome:  {result.outcome.value}")
        print(f"  event_id: {result.event_id}")
        print(f"  body:     {result.to_dict()}")
        if not result.success:
            failures += 1

    return failures


if __name__ == "__main__":
    code = os.getenv("META_TEST_EVENT_CODE")
    if not code:
        print("META_TEST_EVENT_CODE is required so events stay out of production data")
        sys.exit(2)

    sys.exit(1 if asyncio.run(send_samples(code)) else 0)
