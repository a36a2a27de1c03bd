"""
Flask web application for the knockout bracket simulator.
"""
import os

from flask import Flask, render_template, request, jsonify, redirect, url_for

from knockout.bracket import run_tournament
from knockout import display
from knockout.display import get_bracket_display, match_display
from knockout.queries import NEVER_MEET
from knockout.randomness import RandomSource
from main import load_roster

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(display.__file__)), 'templates')

app = Flask(__name__, template_folder=TEMPLATE_DIR)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get('BRACKET_DATA_DIR', os.path.join(BASE_DIR, 'data'))
ROSTER_FILE = os.path.join(DATA_DIR, 'players.yaml')

# The bracket currently on display; replaced wholesale by /api/simulate.
_current_bracket = None


def _parse_seed(value):
    """
    Seed from a request or the environment; None (fresh entropy) when absent.

    Only integers and digit strings are accepted. Anything else (floats,
    booleans, lists) raises ValueError so the request is rejected with a 400.
    """
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValueError(f'Invalid seed: {value!r}')
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value)
    raise ValueError(f'Invalid seed: {value!r}')


def simulate_bracket(seed=None):
    """Load the roster, run a full tournament and make it the current bracket."""
    global _current_bracket
    roster = load_roster(ROSTER_FILE)
    _current_bracket = run_tournament(roster, RandomSource(seed))
    app.logger.info(f'Simulated bracket (seed={seed}): champion {_current_bracket.root.name}')
    return _current_bracket


def get_bracket():
    """Current bracket, simulated on first use."""
    if _current_bracket is None:
        return simulate_bracket(_parse_seed(os.environ.get('BRACKET_SEED')))
    return _current_bracket


@app.errorhandler(ValueError)
def handle_value_error(e):
    app.logger.warning(f'Bad request: {e}')
    return jsonify({'success': False, 'error': str(e)}), 400


@app.route('/')
def index():
    """Main page showing the whole bracket."""
    bracket = get_bracket()
    return render_template('bracket.html', bracket=get_bracket_display(bracket))


@app.route('/api/bracket', methods=['GET'])
def api_bracket():
    return jsonify(get_bracket_display(get_bracket()))


@app.route('/simulate', methods=['POST'])
def simulate():
    """Replay the bracket from the HTML view."""
    simulate_bracket(_parse_seed(request.form.get('seed')))
    return redirect(url_for('index'))


@app.route('/api/simulate', methods=['POST'])
def api_simulate():
    """Re-seed and replay the bracket. Accepts an optional ``seed`` as JSON or form data."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    seed = _parse_seed(data.get('seed'))
    bracket = simulate_bracket(seed)
    return jsonify({'success': True, 'bracket': get_bracket_display(bracket)})


@app.route('/api/players/<name>/path', methods=['GET'])
def api_player_path(name):
    name = name.strip()
    return jsonify({'player': name, 'path': get_bracket().path_to_final(name)})


@app.route('/api/players/<name>/score', methods=['GET'])
def api_player_score(name):
    name = name.strip()
    return jsonify({'player': name, 'total_score': get_bracket().total_score_by_name(name)})


@app.route('/api/players/<name>/first-win', methods=['GET'])
def api_player_first_win(name):
    name = name.strip()
    bracket = get_bracket()
    match = bracket.find_match_by_name(name)
    if match is None:
        return jsonify({'success': False, 'error': f'{name} did not win any match.'}), 404
    return jsonify({'success': True, 'player': name, 'match': match_display(bracket, match)})


@app.route('/api/meet', methods=['GET'])
def api_meet():
    """Where two players would meet if both kept winning."""
    p1 = request.args.get('p1', '').strip()
    p2 = request.args.get('p2', '').strip()
    if not p1 or not p2:
        return jsonify({'success': False, 'error': 'Both p1 and p2 are required.'}), 400

    match_id, round_num = get_bracket().would_meet(p1, p2)
    if (match_id, round_num) == NEVER_MEET:
        return jsonify({'match_id': None, 'round': None, 'would_meet': False})
    return jsonify({'match_id': match_id, 'round': round_num, 'would_meet': True})


if __name__ == '__main__':
    app.run(debug=True, port=5000)
