import json
import os
import subprocess
import sys
import time
import urllib.error
import urllib.request


SAMPLE_ACTIVITY = {
    "id": 1,
    "name": "Smoke Run",
    "distance": 10500.0,
    "moving_time": 3000,
    "elapsed_time": 3100,
    "total_elevation_gain": 40,
    "type": "Run",
    "start_date": "2026-01-01T07:00:00Z",
    "start_date_local": "2026-01-01T08:00:00Z",
    "average_speed": 3.5,
    "kudos_count": 3,
}


def wait_for_health(base_url: str, timeout_sec: float = 15) -> None:
    deadline = time.time() + timeout_sec
    last_err = None
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(f"{base_url}/api/health", timeout=2) as resp:
                if resp.status == 200:
                    return
        except (urllib.error.URLError, ConnectionError) as exc:
            last_err = exc
            time.sleep(0.5)
    raise SystemExit(f"Smoke failed: {last_err}")


def post_sample(base_url: str) -> dict:
    body = json.dumps({"athlete": {"id": 1}, "activities": [SAMPLE_ACTIVITY]}).encode("utf-8")
    req = urllib.request.Request(
        f"{base_url}/api/v1/gamification",
        data=body,
        headers={"content-type": "application/json"},
        method="POST",
    )
    with urllib.request.urlopen(req, timeout=10) as resp:
        return json.loads(resp.read().decode("utf-8"))


def main() -> None:
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    venv_py = os.path.join(root, ".venv", "bin", "python")
    py = venv_py if os.path.exists(venv_py) else sys.executable
    env = os.environ.copy()
    env.setdefault("PORT", "8001")
    base_url = f"http://127.0.0.1:{env['PORT']}"

    proc = subprocess.Popen(
        [py, "-m", "uvicorn", "apps.api.main:app", "--port", env["PORT"]],
        cwd=root,
        env=env,
    )

    try:
        wait_for_health(base_url)
        payload = post_sample(base_url)
        if payload.get("totals", {}).get("activities") != 1:
            raise SystemExit(f"Smoke failed: unexpected payload {payload.get('totals')}")
        print("Smoke OK")
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()


if __name__ == "__main__":
    main()
