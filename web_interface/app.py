#!/usr/bin/env python3
"""
Diagnostics service for the linear vesting validator
"""

from typing import Optional

from flask import Flask, jsonify, request

from linear_vesting.codec import (
    CodecError,
    action_from_dict,
    asset_to_dict,
    snapshot_from_dict,
    state_from_dict,
)
from linear_vesting.config import Settings, load_settings
from linear_vesting.logging_utils import get_logger
from linear_vesting.predicate import VestingValidator
from linear_vesting.schedule import calculate_vested_amount


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or load_settings()
    logger = get_logger("linear_vesting.web", settings.LOG_LEVEL)
    validator = VestingValidator(settings.asset())

    app = Flask(__name__)
    app.config['SETTINGS'] = settings

    @app.errorhandler(CodecError)
    def bad_payload(e):
        logger.info("Rejected malformed payload", extra={'error': str(e)})
        return jsonify({'error': str(e)}), 400

    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise CodecError("Request body must be a JSON object")
        return data

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok', 'asset': asset_to_dict(validator.asset)})

    @app.route('/api/vested', methods=['POST'])
    def vested():
        """Vested and still-claimable amounts at a point in time"""
        data = _json_body()
        state = state_from_dict(data.get('state') or {})
        current_time = data.get('current_time')
        if isinstance(current_time, bool) or not isinstance(current_time, int):
            raise CodecError("current_time must be an integer")

        vested_now = calculate_vested_amount(state, current_time)
        return jsonify({
            'vested': vested_now,
            'available': vested_now - state.claimed_quantity,
        })

    @app.route('/api/validate', methods=['POST'])
    def validate():
        """Run the validator against a proposed transaction"""
        data = _json_body()
        state_data = data.get('state')
        state = state_from_dict(state_data) if state_data is not None else None
        action = action_from_dict(data.get('action') or {})
        try:
            snapshot = snapshot_from_dict(data.get('snapshot') or {})
        except (ValueError, AttributeError, TypeError) as e:
            raise CodecError(f"Malformed snapshot: {e}") from e

        accepted, reason = validator.verify(state, action, snapshot)
        logger.info(
            "Validation finished",
            extra={'accepted': accepted, 'reason': reason, 'action': type(action).__name__},
        )
        return jsonify({
            'accepted': accepted,
            'error': None if accepted else reason,
            'reason': reason,
        })

    return app


if __name__ == "__main__":
    settings = load_settings()
    create_app(settings).run(
        host=settings.HOST,
        port=settings.PORT,
        debug=False
    )
