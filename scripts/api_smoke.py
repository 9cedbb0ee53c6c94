#!/usr/bin/env python3
"""
Smoke test against a running server (python run_server.py).
Creates a prospect, reads its metrics, saves projection inputs, then deletes it.
"""
import os
import sys

import requests

BASE = os.getenv("FUNNELSCOPE_URL", "http://127.0.0.1:8000")

PROSPECT = {
    "name": "Smoke Test",
    "business_name": "Smoke Test Coaching",
    "funnel_type": "webinar",
    "current_daily_spend": 4000,
    "current_cpa_stage1": 600,
    "current_stage2_rate": 70,
    "current_conversion_rate": 30,
    "high_ticket_price": 89000,
}


def run_api_smoke_test():
    print("--- Running API Smoke Test ---")
    try:
        print("\n[1/4] Health...")
        r = requests.get(f"{BASE}/health", timeout=5)
        r.raise_for_status()
        print("✅ Server is up.")

        print("\n[2/4] Creating prospect...")
        r = requests.post(f"{BASE}/api/prospects", json=PROSPECT, params={"user_id": "smoke"}, timeout=5)
        r.raise_for_status()
        pid = r.json()["id"]
        print(f"✅ Created {pid}")

        print("\n[3/4] Saving projection and reading metrics...")
        requests.put(f"{BASE}/api/prospects/{pid}/projection",
                     json={"projected_daily_spend": 10000, "projected_cpa_stage1": 700},
                     timeout=5).raise_for_status()
        m = requests.get(f"{BASE}/api/prospects/{pid}/metrics", timeout=5).json()
        cur, proj = m["current"], m["projection"]
        print(f"   - Current revenue {cur['revenue']}, ROI {cur['roi']}x ({cur['roi_status']})")
        print(f"   - Projected revenue {proj['revenue']}, ROI {proj['roi']}x, sales {proj['sales_increase']:+d}%")
        print(f"   - Scaling: {m['scaling']['totalSteps']} steps over {m['scaling']['totalDays']} days")
        assert cur["revenue"] == 3738000, "unexpected current revenue"

        print("\n[4/4] Cleaning up...")
        requests.delete(f"{BASE}/api/prospects/{pid}", timeout=5).raise_for_status()
        print("\n--- ✅ Smoke Test Passed Successfully! ---")

    except Exception as e:
        print(f"\n--- ❌ Smoke Test FAILED ---")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run_api_smoke_test()
