"""Lightweight REST client for the ffcompanion API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_payload(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid payload JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the ffcompanion REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("question", help="Question to ask about the league")
    parser.add_argument("--payload", type=Path, help="JSON file with myRoster/allRosters/league/users")
    parser.add_argument("--league", help="Sleeper league id (fetches the snapshot server-side)")
    parser.add_argument("--owner", help="Sleeper user id owning the roster, with --league")
    parser.add_argument("--gpt4", action="store_true", help="Use the higher-capability model tier")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout in seconds")
    args = parser.parse_args()

    if args.payload:
        path = "/api/ai"
        body = load_payload(args.payload)
        body["question"] = args.question
        body["useGPT4"] = args.gpt4
    elif args.league and args.owner:
        path = f"/api/leagues/{args.league}/analysis"
        body = {"question": args.question, "owner_id": args.owner, "useGPT4": args.gpt4}
    else:
        raise SystemExit("either --payload or both --league and --owner are required")

    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        resp = client.post(path, json=body)
        payload = resp.json()
        if resp.status_code != 200:
            raise SystemExit(f"{resp.status_code}: {json.dumps(payload, indent=2)}")
        print(payload["result"])


if __name__ == "__main__":
    main()
