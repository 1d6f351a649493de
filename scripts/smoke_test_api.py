#!/usr/bin/env python
"""Exercise a running Page Scraper instance against a fixed set of URLs.

Run from the project root while the server is up::

    python scripts/smoke_test_api.py --base-url http://localhost:3000

Each case prints the HTTP status, the elapsed time and the JSON body.

Exit codes:
    0: Every case with an expected status returned it.
    1: At least one case returned an unexpected status or failed to connect.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class SmokeCase:
    name: str
    path: str
    expected_status: Optional[int] = None
    description: str = ""


SMOKE_CASES: tuple[SmokeCase, ...] = (
    SmokeCase("Missing URL", "/api/scrape", 400, "No url query parameter"),
    SmokeCase("Invalid URL", "/api/scrape?url=invalid", 400, "Not an http(s) URL"),
    SmokeCase("example.com", "/api/scrape?url=https://example.com", 200),
    SmokeCase("Wikipedia", "/api/scrape?url=https://www.wikipedia.org", 200),
    SmokeCase("GitHub", "/api/scrape?url=https://github.com", 200),
    SmokeCase(
        "Non-existent domain",
        "/api/scrape?url=https://nonexistent-domain-12345.com",
        502,
        "DNS failure is reported as a navigation error",
    ),
    SmokeCase(
        "Encoded query string",
        "/api/scrape?url=https://example.com/test?query=hello%20world",
        200,
    ),
    SmokeCase("Unknown route", "/api/unknown", 404),
)


def _run_case(client: httpx.Client, case: SmokeCase) -> bool:
    """Run one case and print its outcome.

    Returns:
        ``True`` when the case passed (or has no expected status).
    """
    print(f"\n--- {case.name} ---")
    if case.description:
        print(f"    {case.description}")
    print(f"    GET {case.path}")

    start = time.perf_counter()
    try:
        response = client.get(case.path)
    except httpx.HTTPError as exc:
        print(f"    FAILED: {exc}")
        return False
    elapsed_ms = (time.perf_counter() - start) * 1000

    try:
        body = json.dumps(response.json(), indent=2, ensure_ascii=False)
    except ValueError:
        body = response.text

    print(f"    status {response.status_code} in {elapsed_ms:.0f} ms")
    print("    " + body.replace("\n", "\n    "))

    if case.expected_status is None:
        return True
    passed = response.status_code == case.expected_status
    if not passed:
        print(f"    FAILED: expected {case.expected_status}")
    return passed


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--base-url", default="http://localhost:3000")
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Per-request client timeout in seconds (default: 30).",
    )
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        results = [_run_case(client, case) for case in SMOKE_CASES]

    failed = results.count(False)
    print(f"\n{len(results) - failed}/{len(results)} cases passed")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
