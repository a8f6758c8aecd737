from flask import Blueprint, current_app, jsonify, request
from duelhub.services.maze import generate_maze, maze_to_dict

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'duelhub matchmaking server is running'})


@main.route('/api/lobby')
def lobby_stats():
    """Queue lengths per game type and the number of live sessions."""
    return jsonify(current_app.extensions['lobby'].stats())


@main.route('/api/maze')
def get_maze():
    """
    Returns a generated maze. With ``seed`` the result is the same maze both
    players of a session draw.
    """
    rows = request.args.get('rows', current_app.config['MAZE_ROWS'])
    cols = request.args.get('cols', current_app.config['MAZE_COLS'])
    seed = request.args.get('seed')
    try:
        rows, cols = int(rows), int(cols)
        seed = int(seed) if seed is not None else None
    except ValueError:
        return jsonify({'error': 'rows, cols and seed must be integers'}), 400

    limit = int(current_app.config.get('MAX_MAZE_DIMENSION', 100))
    if not (1 <= rows <= limit and 1 <= cols <= limit):
        return jsonify({'error': f'rows and cols must be between 1 and {limit}'}), 400

    return jsonify(maze_to_dict(generate_maze(rows, cols, seed), seed)), 200
