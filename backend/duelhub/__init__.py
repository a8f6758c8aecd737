from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from duelhub.config import Config

socketio = SocketIO(async_mode=None)


def _socket_emitter(namespace):
    """Adapt Lobby emissions (ServerEvent, payload, sid) to Socket.IO emits.

    No join_room here: the lobby already knows both member sids of a
    session and addresses each one directly.
    """
    def emit(event, payload, to):
        args = () if payload is None else (payload,)
        socketio.emit(event.value, *args, to=to, namespace=namespace)
    return emit


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Matchmaking state lives on the app, not in module globals
    from duelhub.services.lobby import Lobby
    flask_app.extensions['lobby'] = Lobby.from_config(
        flask_app.config, _socket_emitter(namespace), logger=flask_app.logger
    )

    from duelhub.main import main
    flask_app.register_blueprint(main)

    from duelhub.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    from duelhub.services.reaper import start_idle_reaper
    start_idle_reaper(flask_app)

    @click.command('maze')
    @click.option('--rows', type=int, default=None, help='Number of rows.')
    @click.option('--cols', type=int, default=None, help='Number of columns.')
    @click.option('--seed', type=int, default=None, help='Seed for a reproducible maze.')
    def maze_command(rows, cols, seed):
        """Prints a maze as ASCII art."""
        from duelhub.services.maze import generate_maze, render_ascii
        rows = flask_app.config['MAZE_ROWS'] if rows is None else rows
        cols = flask_app.config['MAZE_COLS'] if cols is None else cols
        try:
            maze = generate_maze(rows, cols, seed)
        except ValueError as exc:
            raise click.BadParameter(str(exc))
        click.echo(render_ascii(maze))

    flask_app.cli.add_command(maze_command)

    return flask_app
