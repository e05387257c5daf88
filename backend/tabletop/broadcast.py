from typing import Any

from tabletop.services.session import GameSession


def room_channel(room_id: str) -> str:
    return f"room:{room_id}"


class RoomBroadcaster:
    """Fans session state out to Socket.IO clients.

    Private messages go to the connection's own sid; deltas go to every
    member of the room channel, the sender included.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def to_connection(self, sid: str, event: str, payload: Any = None) -> None:
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)

    def to_room(self, room_id: str, event: str, payload: Any = None) -> None:
        self.socketio.emit(event, payload, to=room_channel(room_id), namespace=self.namespace)

    def snapshot(self, session: GameSession, sid: str) -> None:
        self.to_connection(sid, 'joined', len(session.players))
        self.hand(session, sid)
        self.to_connection(sid, 'table-update', session.table_to_list())
        for layer in session.layers.values():
            self.to_connection(sid, layer.spec.update_broadcast, layer.to_list())

    def hand(self, session: GameSession, sid: str) -> None:
        self.to_connection(sid, 'your-hand', session.hand_of(sid))

    def hand_counts(self, session: GameSession) -> None:
        self.to_room(session.room_id, 'hand-counts', session.hand_counts())

    def table(self, session: GameSession) -> None:
        self.to_room(session.room_id, 'table-update', session.table_to_list())

    def layer(self, session: GameSession, layer_name: str) -> None:
        layer = session.layers[layer_name]
        self.to_room(session.room_id, layer.spec.update_broadcast, layer.to_list())
