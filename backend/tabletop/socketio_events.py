import functools

from flask import current_app, request
from flask_socketio import join_room, leave_room
from tabletop import socketio
from tabletop.broadcast import RoomBroadcaster, room_channel
from tabletop.models import is_coordinate, is_index, is_scalar
from tabletop.services.layout import LAYER_SPECS
from tabletop.services.session import RoomFull
from tabletop.services.store import SessionStore


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _store() -> SessionStore:
    return current_app.extensions['session_store']


def _broadcaster() -> RoomBroadcaster:
    return current_app.extensions['room_broadcaster']


def _is_card(value) -> bool:
    return isinstance(value, str) and bool(value)


def _payload(event, data, **checks):
    """Return the checked fields of ``data`` in order, or None when malformed."""
    if not isinstance(data, dict):
        current_app.logger.debug(f"[malformed] event={event} sid={_get_sid()} payload={data!r}")
        return None
    values = []
    for name, check in checks.items():
        value = data.get(name)
        if not check(value):
            current_app.logger.debug(f"[malformed] event={event} sid={_get_sid()} field={name} value={value!r}")
            return None
        values.append(value)
    return values


def _noop(event, session, sid):
    current_app.logger.debug(f"[noop] event={event} room={session.room_id} sid={sid}")


def session_event(event):
    """Run the wrapped handler under the sender's room lock.

    Events from connections that never joined a room are dropped. The
    handler receives ``(session, sid, data)`` and does its own broadcasts
    while the lock is held, so each room sees its events fully applied in
    arrival order.
    """
    def decorator(apply):
        @functools.wraps(apply)
        def handler(data=None):
            sid = _get_sid()
            session = _store().session_of(sid)
            if session is None:
                current_app.logger.debug(f"[no-room] event={event} sid={sid}")
                return
            with session.lock:
                if not session.has_player(sid):
                    return
                apply(session, sid, data)
        return handler
    return decorator


# ---- Room lifecycle ----

def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(*args):
    sid = _get_sid()
    _leave_room(sid)
    current_app.logger.debug(f"[disconnect] sid={sid}")


def handle_join_room(room_id=None):
    sid = _get_sid()
    if not isinstance(room_id, str) or not room_id:
        current_app.logger.debug(f"[malformed] event=join-room sid={sid} payload={room_id!r}")
        return
    store = _store()
    broadcaster = _broadcaster()

    with store.lock:
        current = store.room_of(sid)
        # A disconnect processed on another thread must not be followed by a join
        if not _is_connected(sid):
            current_app.logger.debug(f"[join-after-disconnect] room={room_id} sid={sid}")
            return
        if current == room_id:
            session = store.get(room_id)
            if session is not None:
                with session.lock:
                    broadcaster.snapshot(session, sid)
            return
        if current is not None:
            _leave_room(sid)

        session = store.get_or_create(room_id)
        with session.lock:
            try:
                count = session.join(sid)
            except RoomFull:
                current_app.logger.info(f"[room-full] room={room_id} sid={sid}")
                broadcaster.to_connection(sid, 'room-full')
                return
            join_room(room_channel(room_id))
            store.bind(sid, room_id)
            current_app.logger.info(f"[room-join] room={room_id} sid={sid} players={count}")
            broadcaster.snapshot(session, sid)
            broadcaster.hand_counts(session)


def _is_connected(sid) -> bool:
    # False once python-socketio has started disconnecting the sid
    return socketio.server.manager.is_connected(sid, request.namespace)


def _leave_room(sid):
    store = _store()
    with store.lock:
        room_id = store.unbind(sid)
        session = store.get(room_id) if room_id is not None else None
        if session is None:
            return
        with session.lock:
            session.leave(sid)
            leave_room(room_channel(room_id), sid=sid)
            current_app.logger.info(f"[room-leave] room={room_id} sid={sid} players={len(session.players)}")
            if not store.evict_if_empty(room_id, session):
                _broadcaster().hand_counts(session)


# ---- Deck & hands ----

@session_event('draw-card')
def handle_draw_card(session, sid, data):
    if session.draw_card(sid) is None:
        _noop('draw-card', session, sid)
        return
    broadcaster = _broadcaster()
    broadcaster.hand(session, sid)
    broadcaster.hand_counts(session)


@session_event('shuffle-main-deck')
def handle_shuffle_main_deck(session, sid, data):
    session.shuffle_deck()


@session_event('return-card-from-hand')
def handle_return_card_from_hand(session, sid, data):
    fields = _payload('return-card-from-hand', data, card=_is_card)
    if fields is None:
        return
    if not session.return_card_from_hand(sid, *fields):
        _noop('return-card-from-hand', session, sid)
        return
    broadcaster = _broadcaster()
    broadcaster.hand(session, sid)
    broadcaster.hand_counts(session)


@session_event('return-card-from-table')
def handle_return_card_from_table(session, sid, data):
    fields = _payload('return-card-from-table', data, index=is_index, card=_is_card)
    if fields is None:
        return
    if not session.return_card_from_table(*fields):
        _noop('return-card-from-table', session, sid)
        return
    broadcaster = _broadcaster()
    broadcaster.table(session)
    broadcaster.hand_counts(session)


# ---- Table ----

@session_event('play-card')
def handle_play_card(session, sid, data):
    fields = _payload('play-card', data, card=_is_card, x=is_coordinate, y=is_coordinate)
    if fields is None:
        return
    session.play_card(sid, *fields)
    broadcaster = _broadcaster()
    broadcaster.table(session)
    broadcaster.hand(session, sid)
    broadcaster.hand_counts(session)


@session_event('move-table-card')
def handle_move_table_card(session, sid, data):
    fields = _payload('move-table-card', data, index=is_index, x=is_coordinate, y=is_coordinate)
    if fields is None:
        return
    if not session.move_table_card(*fields):
        _noop('move-table-card', session, sid)
        return
    _broadcaster().table(session)


# ---- Positioned-object layers ----

def make_move_handler(spec):
    @session_event(spec.move_event)
    def handle_move(session, sid, data):
        fields = _payload(spec.move_event, data, index=is_index, x=is_coordinate, y=is_coordinate)
        if fields is None:
            return
        if not session.move_object(spec.name, *fields):
            _noop(spec.move_event, session, sid)
            return
        _broadcaster().layer(session, spec.name)
    return handle_move


def make_update_handler(spec):
    @session_event(spec.update_event)
    def handle_update(session, sid, data):
        fields = _payload(spec.update_event, data, index=is_index, value=is_scalar)
        if fields is None:
            return
        if not session.update_value(spec.name, *fields):
            _noop(spec.update_event, session, sid)
            return
        _broadcaster().layer(session, spec.name)
    return handle_update


def handle_error(exc):
    event = (getattr(request, 'event', None) or {}).get('message')
    current_app.logger.error(f"[handler-error] event={event} sid={_get_sid()} error={exc!r}", exc_info=exc)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Each layer in LAYER_SPECS gets its own move handler, and an update
    handler when it carries a value.
    """
    handlers = {
        'connect': handle_connect,
        'disconnect': handle_disconnect,
        'join-room': handle_join_room,
        'draw-card': handle_draw_card,
        'shuffle-main-deck': handle_shuffle_main_deck,
        'play-card': handle_play_card,
        'move-table-card': handle_move_table_card,
        'return-card-from-hand': handle_return_card_from_hand,
        'return-card-from-table': handle_return_card_from_table,
    }
    for spec in LAYER_SPECS:
        handlers[spec.move_event] = make_move_handler(spec)
        if spec.has_value:
            handlers[spec.update_event] = make_update_handler(spec)

    for event, handler in handlers.items():
        socketio.on_event(event, handler, namespace=namespace)
    socketio.on_error(namespace)(handle_error)
