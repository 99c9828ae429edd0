"""Flask web application for the Secret Santa generator."""

import logging

from flask import Flask, request, jsonify

from config import LOG_LEVEL, MAX_CONTENT_LENGTH, MIN_PARTICIPANTS, PORT, SECRET_KEY, MatchSettings
from santa.models import Exclusion, ForcedAssignment, Match, Participant
from santa.services.match_service import MatchService
from santa.services.rules_service import check_preconditions, prune_rules
from santa.services.share_service import (
    ShareTokenError,
    UnknownGiverError,
    build_exchange,
    decode_exchange,
    encode_exchange,
    lookup_match,
)

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH
app.config['SECRET_KEY'] = SECRET_KEY


class BadRequest(ValueError):
    """Raised when a request body has the wrong shape."""
    pass


def _list_field(data, key):
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise BadRequest(f"'{key}' must be a list of objects")
    return value


def _parse_draw_request(data):
    """Turn a JSON body into participants, exclusions and specific pairs."""
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a JSON object')
    participants = [Participant.from_dict(p) for p in _list_field(data, 'participants')]
    exclusions = [Exclusion.from_dict(e) for e in _list_field(data, 'exclusions')]
    assignments = [ForcedAssignment.from_dict(a) for a in _list_field(data, 'forcedAssignments')]
    return participants, exclusions, assignments


def _match_settings(data):
    settings = MatchSettings()
    attempts = data.get('maxAttempts')
    if attempts is None:
        return settings
    try:
        attempts = int(attempts)
    except (TypeError, ValueError):
        raise BadRequest("'maxAttempts' must be an integer")
    if attempts < 1:
        raise BadRequest("'maxAttempts' must be at least 1")
    return MatchSettings(max_attempts=attempts, complete_fallback=settings.complete_fallback)


@app.route('/health')
def health():
    """Liveness probe."""
    return jsonify({'status': 'ok'})


@app.route('/api/generate-matches', methods=['POST'])
def api_generate_matches():
    """Draw matches for a roster and its rules."""
    data = request.get_json(silent=True)

    try:
        participants, exclusions, assignments = _parse_draw_request(data)
        settings = _match_settings(data)
    except BadRequest as e:
        return jsonify({'error': str(e)}), 400

    problems = check_preconditions(
        participants, exclusions, assignments, min_participants=MIN_PARTICIPANTS
    )
    if problems:
        return jsonify({'error': problems[0], 'problems': problems}), 400

    try:
        exclusions, assignments = prune_rules(participants, exclusions, assignments)
        result = MatchService(settings=settings).generate(participants, exclusions, assignments)
    except Exception as e:
        logger.exception("[api] generate-matches failed")
        return jsonify({'error': str(e)}), 500

    if not result.success:
        return jsonify(result.to_dict()), 422
    return jsonify(result.to_dict())


@app.route('/api/share-link', methods=['POST'])
def api_share_link():
    """Pack a finished draw into a share token."""
    data = request.get_json(silent=True)

    try:
        participants, _, _ = _parse_draw_request(data)
        by_id = {p.id: p for p in participants}
        matches = []
        for pair in _list_field(data, 'matches'):
            giver = by_id.get(str(pair.get('giverId', '')))
            receiver = by_id.get(str(pair.get('receiverId', '')))
            if giver is None or receiver is None:
                raise BadRequest('Every match must reference listed participants')
            matches.append(Match(giver=giver, receiver=receiver))
        if not matches:
            raise BadRequest('Matches are required')
        exchange = build_exchange(
            participants,
            matches,
            event_details=(data.get('eventDetails') or '').strip(),
            reveal_date=(data.get('revealDate') or '').strip(),
            style=data.get('style') if isinstance(data.get('style'), dict) else None,
        )
    except (BadRequest, ShareTokenError) as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({'success': True, 'token': encode_exchange(exchange)})


@app.route('/api/exchange/<token>')
def api_get_exchange(token):
    """Decode a share token."""
    try:
        exchange = decode_exchange(token)
    except ShareTokenError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'success': True, 'exchange': exchange.to_dict()})


@app.route('/api/exchange/<token>/reveal/<int:index>')
def api_reveal(token, index):
    """Show one giver who they drew."""
    try:
        exchange = decode_exchange(token)
        match = lookup_match(exchange, index)
    except UnknownGiverError as e:
        return jsonify({'error': str(e)}), 404
    except ShareTokenError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({
        'success': True,
        'giver': match.giver.name,
        'receiver': match.receiver.to_dict(),
        'eventDetails': exchange.event_details,
        'revealDate': exchange.reveal_date,
    })


if __name__ == '__main__':
    app.run(debug=False, host='0.0.0.0', port=PORT)
