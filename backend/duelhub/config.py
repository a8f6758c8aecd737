import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of browser origins allowed to open a socket
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,https://maze-web.onrender.com'
        ).split(',')
        if origin.strip()
    ]
    PORT = int(os.environ.get('PORT', '3001'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Maze dimensions used by the HTTP endpoint and CLI when none are given
    MAZE_ROWS = int(os.environ.get('MAZE_ROWS', '20'))
    MAZE_COLS = int(os.environ.get('MAZE_COLS', '25'))
    MAX_MAZE_DIMENSION = int(os.environ.get('MAX_MAZE_DIMENSION', '100'))
    # Idle eviction (seconds). 0 disables.
    QUEUE_TIMEOUT_SEC = int(os.environ.get('QUEUE_TIMEOUT_SEC', '0'))
    SESSION_IDLE_TIMEOUT_SEC = int(os.environ.get('SESSION_IDLE_TIMEOUT_SEC', '0'))
    REAPER_INTERVAL_SEC = int(os.environ.get('REAPER_INTERVAL_SEC', '5'))
