"""Flask JSON API for motorbike maintenance tracking."""

import os
from pathlib import Path

from flask import Flask, abort, jsonify, request

from motocare import (
    AdvisoryClient,
    HealthStatus,
    InvalidInputError,
    MaintenanceItem,
    NotFoundError,
    Status,
    Tracker,
    YamlStore,
    state_to_dict,
)
from motocare.config import get_settings
from motocare.loader import log_to_dict
from motocare.registry import DEFAULT_MODEL_NAME, new_state
from motocare.tracker import utcnow

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
app.config["DATA_DIR"] = get_settings().data_dir


def get_store() -> YamlStore:
    return YamlStore(Path(app.config["DATA_DIR"]))


def get_tracker(account_id: str) -> Tracker:
    """Open an existing account or abort with 404."""
    store = get_store()
    if not store.exists(account_id):
        abort(404, description=f"Account '{account_id}' not found")
    return Tracker(store, account_id)


def health_to_dict(item: MaintenanceItem, health: HealthStatus) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category.value,
        "action": item.action.value,
        "percentage": round(health.percentage, 2),
        "status": health.status.label,
        "remaining": health.remaining,
        "basis": health.basis,
        "hint": health.hint,
    }


def json_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return payload


def status_counts(pairs) -> dict:
    return {
        status.label.lower(): sum(1 for _, h in pairs if h.status == status)
        for status in Status
    }


@app.errorhandler(404)
def not_found(error):
    return jsonify(error=error.description), 404


@app.errorhandler(InvalidInputError)
def invalid_input(error):
    return jsonify(error=str(error)), 400


@app.errorhandler(NotFoundError)
def unknown_item(error):
    return jsonify(error=str(error)), 404


@app.route("/api")
def index():
    """Stored accounts with their count of items needing attention."""
    store = get_store()
    accounts = []
    for account_id in store.accounts():
        tracker = Tracker(store, account_id)
        accounts.append(
            {
                "id": account_id,
                "modelName": tracker.state.model_name,
                "currentOdo": tracker.state.current_odo,
                "attention": len(tracker.attention()),
            }
        )
        tracker.close()
    return jsonify(accounts=accounts)


@app.route("/api/<account_id>", methods=["POST"])
def create_account(account_id: str):
    """Seed a new account from the standard schedule."""
    store = get_store()
    if store.exists(account_id):
        return jsonify(error=f"Account '{account_id}' already exists"), 409

    payload = json_payload()
    current_odo = payload.get("currentOdo", 0)
    if not isinstance(current_odo, int) or isinstance(current_odo, bool) or current_odo < 0:
        raise InvalidInputError(f"Invalid currentOdo: {current_odo!r}")

    state = new_state(utcnow(), payload.get("modelName") or DEFAULT_MODEL_NAME, current_odo)
    if not store.save(account_id, state):
        return jsonify(error="Could not save account"), 503
    return jsonify(state_to_dict(state)), 201


@app.route("/api/<account_id>", methods=["GET"])
def get_account(account_id: str):
    """Full state snapshot."""
    return jsonify(state_to_dict(get_tracker(account_id).state))


@app.route("/api/<account_id>/status")
def account_status(account_id: str):
    """Health of every item, most urgent first."""
    tracker = get_tracker(account_id)
    whichever_first = request.args.get("whichever_first", "").lower() == "true"
    pairs = tracker.health(whichever_first=whichever_first)
    pairs.sort(key=lambda pair: (pair[1].status.value, pair[1].percentage))

    return jsonify(
        modelName=tracker.state.model_name,
        currentOdo=tracker.state.current_odo,
        counts=status_counts(pairs),
        items=[health_to_dict(item, health) for item, health in pairs],
    )


@app.route("/api/<account_id>/history")
def account_history(account_id: str):
    tracker = get_tracker(account_id)
    return jsonify(history=[log_to_dict(log) for log in tracker.state.history])


@app.route("/api/<account_id>/odometer", methods=["POST"])
def update_odometer(account_id: str):
    """Update the odometer. A lower reading is ignored (updated: false)."""
    tracker = get_tracker(account_id)
    payload = json_payload()
    if "odo" not in payload:
        raise InvalidInputError("Missing 'odo'")

    updated = tracker.update_odometer(payload["odo"])
    return jsonify(updated=updated, currentOdo=tracker.state.current_odo)


@app.route("/api/<account_id>/items/<item_id>/service", methods=["POST"])
def record_service(account_id: str, item_id: str):
    """Mark an item as serviced at the current odometer."""
    tracker = get_tracker(account_id)
    payload = json_payload()
    log = tracker.record_service(item_id, notes=payload.get("notes"))
    return jsonify(log_to_dict(log)), 201


@app.route("/api/<account_id>/advice")
def advice(account_id: str):
    tracker = get_tracker(account_id)
    return jsonify(advice=AdvisoryClient().summarize(tracker.state, tracker.clock()))


if __name__ == "__main__":
    app.run(debug=True, port=5000)
