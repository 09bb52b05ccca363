"""Lightweight REST client for the leaguepanel API."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path

import httpx


RESOURCES = ("teams", "players", "news", "matches")


def build_payload(raw: str, path: Path | None) -> dict:
    if path is not None:
        raw = path.read_text(encoding="utf-8")
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid payload JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise SystemExit("Payload must be a JSON object")
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the leaguepanel REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:5000")
    parser.add_argument("resource", choices=RESOURCES, help="Resource collection")
    parser.add_argument("action", choices=("list", "create", "update", "delete"), help="Operation to run")
    parser.add_argument("doc_id", nargs="?", help="Document id (update/delete)")
    parser.add_argument("--data", default="", help="JSON payload for create/update")
    parser.add_argument("--data-file", type=Path, default=None, help="Read the JSON payload from a file")
    parser.add_argument(
        "--token",
        default=os.getenv("LEAGUEPANEL_TOKEN", ""),
        help="Bearer token (default: $LEAGUEPANEL_TOKEN)",
    )
    args = parser.parse_args()

    if args.action in {"update", "delete"} and not args.doc_id:
        raise SystemExit(f"{args.action} requires a document id")

    headers = {"Authorization": f"Bearer {args.token}"} if args.token else {}
    path = f"/{args.resource}"
    with httpx.Client(base_url=args.base_url, headers=headers) as client:
        if args.action == "list":
            resp = client.get(path)
        elif args.action == "create":
            resp = client.post(path, json=build_payload(args.data, args.data_file))
        elif args.action == "update":
            resp = client.put(f"{path}/{args.doc_id}", json=build_payload(args.data, args.data_file))
        else:
            resp = client.delete(f"{path}/{args.doc_id}")

    if resp.status_code in {401, 403}:
        raise SystemExit(f"authentication failed: {resp.json().get('message')}")
    if resp.status_code in {400, 409}:
        raise SystemExit(f"request rejected: {resp.json().get('message')}")
    resp.raise_for_status()
    print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
