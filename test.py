"""
Smoke test: POST /api/extract-address with a local photo.

Run with the API server already running:
    uvicorn routeassist.main:app --reload

Then in another terminal:
    python test.py path/to/photo.jpg
"""

import base64
import mimetypes
import sys

import httpx

BASE = "http://127.0.0.1:8000"


def main(path: str) -> None:
    mime = mimetypes.guess_type(path)[0] or "image/jpeg"
    with open(path, "rb") as f:
        data_uri = f"data:{mime};base64," + base64.b64encode(f.read()).decode()

    # Three attempts with 5s/10s backoff can take a while.
    r = httpx.post(f"{BASE}/api/extract-address", json={"image": data_uri}, timeout=120)

    print(f"status:  {r.status_code}")
    if r.status_code == 200:
        print(f"address: {r.json()['address']}")
    else:
        print(r.text)
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    main(sys.argv[1])
