"""Flask HTTP API over the voting service.

Endpoints:
- GET  /api/candidates             -> {"success": true, "candidates": [...]}
- GET  /api/votes?candidate=<name> -> {"success": true, "votes": n}
- POST /api/vote                   -> body {"candidate": ..., "from": ...}
- GET  /api/results                -> {"success": true, "results": {name: n}}
- GET  /api/voters/<address>       -> {"success": true, "voter": ..., "hasVoted": bool}
- GET  /api/health                 -> ledger connection test

Failures are {"success": false, "error": "...", "kind": "..."} with 400 for
InvalidInput and 500 for every other kind.
"""

import logging
import os
import sys
from typing import Optional

from flask import Flask, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from .config import Settings
from .errors import InvalidInput, LedgerUnavailable, VotingError
from .gateway import build_gateway
from .service import VotingService

logger = logging.getLogger(__name__)


def create_app(service: VotingService, static_dir: Optional[str] = None) -> Flask:
    """Build the Flask app around an already constructed service."""
    if static_dir:
        app = Flask(__name__, static_folder=os.path.abspath(static_dir), static_url_path="")
    else:
        app = Flask(__name__, static_folder=None)
    # results must keep candidate order
    app.json.sort_keys = False
    app.extensions["voting_service"] = service

    @app.errorhandler(VotingError)
    def voting_error(e: VotingError):
        status = 400 if isinstance(e, InvalidInput) else 500
        return jsonify(e.to_dict()), status

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s", request.path)
        return jsonify(LedgerUnavailable(str(e)).to_dict()), 500

    @app.route("/api/candidates", methods=["GET"])
    def list_candidates():
        return jsonify({"success": True, "candidates": service.list_candidates()})

    @app.route("/api/votes", methods=["GET"])
    def total_votes():
        votes = service.get_tally(request.args.get("candidate"))
        return jsonify({"success": True, "votes": votes})

    @app.route("/api/vote", methods=["POST"])
    def cast_vote():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            raise InvalidInput("request body must be a JSON object")
        receipt = service.cast_vote(data.get("candidate"), data.get("from"))
        return jsonify(
            {
                "success": True,
                "message": f"Successfully voted for {receipt.candidate}",
                "receipt": receipt.to_dict(),
            }
        )

    @app.route("/api/results", methods=["GET"])
    def results():
        requested = request.args.getlist("candidate") or None
        return jsonify({"success": True, "results": service.get_results(requested)})

    @app.route("/api/voters/<voter>", methods=["GET"])
    def voter_status(voter: str):
        return jsonify(
            {"success": True, "voter": voter, "hasVoted": service.has_voted(voter)}
        )

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"success": True, "ledger": service.gateway.ping()})

    if static_dir:

        @app.route("/", methods=["GET"])
        def index():
            return send_from_directory(app.static_folder, "index.html")

    return app


def main() -> int:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    gateway = build_gateway(settings)
    try:
        info = gateway.ping()
    except VotingError as e:
        logger.error("Failed to connect to ledger: %s", e)
        gateway.close()
        return 1
    logger.info("Connected to ledger. Accounts: %s", info.get("accounts"))
    logger.info("Available candidates: %s", info["candidates"])

    app = create_app(VotingService(gateway), static_dir=settings.static_dir)
    try:
        app.run(host=settings.host, port=settings.port)
    finally:
        gateway.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
