"""Live check: connect to /ws/dashboard, post movements, see metrics pushed in real time."""

import asyncio
import json
import os
import random
from datetime import datetime, timezone

import httpx
import websockets


HOST = os.environ.get("CONDO_LIVE_HOST", "127.0.0.1:8000")
COMPANY = os.environ.get("CONDO_LIVE_COMPANY", "default")
PROFILE = {"x-user-id": "live-check", "x-user-role": "admin", "x-company-id": COMPANY}

API_URL = f"http://{HOST}/api/companies/{COMPANY}"
DASHBOARD_URI = f"ws://{HOST}/ws/dashboard/{COMPANY}?uid=live-check&role=admin&company_id={COMPANY}"


async def dashboard_listener(ready_event: asyncio.Event):
    """Connect to /ws/dashboard and print whatever the service pushes."""
    async with websockets.connect(DASHBOARD_URI) as ws:
        print("[DASHBOARD] Connected, waiting for metric pushes...\n")
        ready_event.set()

        while True:
            data = json.loads(await ws.recv())
            metrics = data.get("metrics", {})

            print("=" * 70)
            print(f"[DASHBOARD] METRICS for {data.get('company_id')} (demo={metrics.get('is_demo')})")
            print("=" * 70)
            print(f"  Entries/exits (month): {metrics.get('total_entries')} / {metrics.get('total_exits')}")
            print(
                f"  Visitors: today={metrics.get('total_visitors_today')}"
                f" week={metrics.get('total_visitors_week')}"
                f" month={metrics.get('total_visitors_month')}"
            )
            print(f"  Blocks:   {metrics.get('visits_by_block')}")
            for v in metrics.get("top_visitors", []):
                print(f"    {v['name']}: {v['count']}")
            busy = [h for h in metrics.get("entries_by_hour", []) if h["count"]]
            print(f"  Busy hours: {[(h['hour'], h['count']) for h in busy]}")
            for day in metrics.get("entry_exit_trend", []):
                print(f"    {day['date']}: in={day['entries']} out={day['exits']}")
            print()


async def send_movements():
    """Post a handful of entries and exits."""
    async with httpx.AsyncClient(headers=PROFILE) as client:
        for driver, plate, block, kind in [
            ("Juan Pérez", "ABC123", "A", "entry"),
            ("María Gómez", "XYZ987", "C", "entry"),
            ("Juan Pérez", "ABC123", "A", "exit"),
        ]:
            body = {
                "driver_name": driver,
                "license_plate": plate,
                "movement_type": kind,
                "block": block,
                "unit": str(random.randint(101, 420)),
                "occurred_at": datetime.now(timezone.utc).isoformat(),
            }
            resp = await client.post(f"{API_URL}/movements", json=body)
            resp.raise_for_status()
            print(f"[MOVEMENT] Sent {kind} for {driver} -> record={resp.json()['record_id']}")
            await asyncio.sleep(0.5)


async def main():
    print("Connecting to dashboard WebSocket...")
    ready = asyncio.Event()

    listener_task = asyncio.create_task(dashboard_listener(ready))
    await ready.wait()

    print("\nPosting test movements...\n")
    await send_movements()

    await asyncio.sleep(3)

    listener_task.cancel()
    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
