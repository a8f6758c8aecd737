from flask import current_app, request
from duelhub import socketio
from duelhub.events import ClientEvent, RELAY_EVENTS


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _lobby():
    return current_app.extensions['lobby']


def handle_connect(auth=None):
    _lobby().connect(_get_sid())


def handle_disconnect(reason=None):
    _lobby().disconnect(_get_sid())


def handle_find_match(data=None):
    _lobby().find_match(_get_sid(), data)


def _make_relay_handler(event: ClientEvent):
    def handler(data=None):
        _lobby().relay(_get_sid(), event, data)
    handler.__name__ = f"handle_{event.name.lower()}"
    return handler


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Gameplay events all go through one relay handler per event name; the
    lobby decides per game type what to do with them.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(ClientEvent.FIND_MATCH.value, handle_find_match, namespace=namespace)
    for event in RELAY_EVENTS:
        socketio.on_event(event.value, _make_relay_handler(event), namespace=namespace)
