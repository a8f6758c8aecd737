from duelhub import socketio


def start_idle_reaper(app) -> bool:
    """Start the background task that evicts idle seekers and sessions.

    - No-ops in TESTING mode
    - No-ops when both QUEUE_TIMEOUT_SEC and SESSION_IDLE_TIMEOUT_SEC are 0
    """
    if app.config.get('TESTING'):
        return False
    if not (app.config.get('QUEUE_TIMEOUT_SEC') or app.config.get('SESSION_IDLE_TIMEOUT_SEC')):
        return False

    interval = max(1, int(app.config.get('REAPER_INTERVAL_SEC', 5)))
    app.logger.info(
        f"[reaper-start] interval={interval}s queue_timeout={app.config.get('QUEUE_TIMEOUT_SEC')}s "
        f"session_timeout={app.config.get('SESSION_IDLE_TIMEOUT_SEC')}s"
    )

    def _worker(delay: int):
        lobby = app.extensions['lobby']
        while True:
            socketio.sleep(delay)
            try:
                reaped = lobby.reap_idle()
            except Exception:
                app.logger.exception("[reaper-error] idle sweep failed")
                continue
            if reaped:
                app.logger.info(f"[reaper] evicted={reaped}")

    socketio.start_background_task(_worker, interval)
    return True
