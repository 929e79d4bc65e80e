"""Small CLI for interacting with the vote relay server.

Usage examples:
    python cli.py candidates
    python cli.py vote --candidate Alice --from 0x...
    python cli.py votes --candidate Alice
    python cli.py results
    python cli.py status 0x...
"""

import argparse
import json
import os
import sys
from typing import Optional

import requests


BASE = os.environ.get("VOTE_RELAY_URL", "http://127.0.0.1:8080")
TIMEOUT = 10


def _show(r: requests.Response) -> int:
    try:
        body = r.json()
    except ValueError:
        print(f"HTTP {r.status_code}: {r.text}")
        return 1
    print(json.dumps(body, indent=2))
    return 0 if body.get("success") else 1


def candidates(base: str = BASE) -> int:
    return _show(requests.get(f"{base}/api/candidates", timeout=TIMEOUT))


def votes(candidate: str, base: str = BASE) -> int:
    r = requests.get(f"{base}/api/votes", params={"candidate": candidate}, timeout=TIMEOUT)
    return _show(r)


def vote(candidate: str, voter: Optional[str] = None, base: str = BASE) -> int:
    body = {"candidate": candidate}
    if voter:
        body["from"] = voter
    return _show(requests.post(f"{base}/api/vote", json=body, timeout=TIMEOUT))


def results(names=None, base: str = BASE) -> int:
    params = {"candidate": names} if names else None
    return _show(requests.get(f"{base}/api/results", params=params, timeout=TIMEOUT))


def status(voter: str, base: str = BASE) -> int:
    return _show(requests.get(f"{base}/api/voters/{voter}", timeout=TIMEOUT))


def main(argv=None) -> int:
    p = argparse.ArgumentParser()
    p.add_argument("--url", default=BASE, help="server base URL")
    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("candidates")
    s = sub.add_parser("votes")
    s.add_argument("--candidate", required=True)
    v = sub.add_parser("vote")
    v.add_argument("--candidate", required=True)
    v.add_argument("--from", dest="voter")
    r = sub.add_parser("results")
    r.add_argument("--candidate", action="append")
    st = sub.add_parser("status")
    st.add_argument("voter")
    args = p.parse_args(argv)
    try:
        if args.cmd == "candidates":
            return candidates(args.url)
        elif args.cmd == "votes":
            return votes(args.candidate, args.url)
        elif args.cmd == "vote":
            return vote(args.candidate, args.voter, args.url)
        elif args.cmd == "results":
            return results(args.candidate, args.url)
        elif args.cmd == "status":
            return status(args.voter, args.url)
    except requests.RequestException as e:
        print(f"request failed: {e}", file=sys.stderr)
        return 2
    p.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
