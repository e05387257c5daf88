import random
import threading
from typing import Dict, List, Optional

from tabletop.models import Card, Layer, PlacedCard, is_index
from tabletop.services.layout import LAYER_SPECS


class RoomFull(Exception):
    """Raised by GameSession.join when the roster is at capacity."""

    def __init__(self, room_id: str, max_players: int):
        super().__init__(f'room {room_id!r} is full ({max_players} players)')
        self.room_id = room_id
        self.max_players = max_players


def new_deck(card_count: int = 36, rng: Optional[random.Random] = None) -> List[Card]:
    deck = [str(i).zfill(2) for i in range(1, card_count + 1)]
    (rng or random).shuffle(deck)
    return deck


class GameSession:
    """Authoritative state of one room.

    Every mutating method assumes the caller holds ``lock`` and returns
    False when the request refers to something that no longer exists
    (stale card, bad index, unknown participant). Nothing is mutated in
    that case.
    """

    def __init__(self, room_id: str, max_players: int = 4, card_count: int = 36,
                 rng: Optional[random.Random] = None):
        self.room_id = room_id
        self.max_players = max_players
        self.card_count = card_count
        self.rng = rng or random.Random()
        self.lock = threading.RLock()
        self.players: List[str] = []
        self.hands: Dict[str, List[Card]] = {}
        self.deck: List[Card] = new_deck(card_count, self.rng)
        self.table: List[PlacedCard] = []
        self.layers: Dict[str, Layer] = {spec.name: Layer.seeded(spec) for spec in LAYER_SPECS}

    # ---- roster ----

    @property
    def is_empty(self) -> bool:
        return not self.players

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    def has_player(self, sid: str) -> bool:
        return sid in self.hands

    def join(self, sid: str) -> int:
        if self.has_player(sid):
            return len(self.players)
        if self.is_full:
            raise RoomFull(self.room_id, self.max_players)
        self.players.append(sid)
        self.hands[sid] = []
        return len(self.players)

    def leave(self, sid: str) -> bool:
        if not self.has_player(sid):
            return False
        self.players.remove(sid)
        # Departing hand is discarded, not returned to the deck
        del self.hands[sid]
        return True

    def hand_counts(self):
        return [{'id': sid, 'count': len(self.hands.get(sid, []))} for sid in self.players]

    # ---- deck & hands ----

    def shuffle_deck(self) -> None:
        self.rng.shuffle(self.deck)

    def draw_card(self, sid: str) -> Optional[Card]:
        if not self.has_player(sid) or not self.deck:
            return None
        card = self.deck.pop()
        self.hands[sid].append(card)
        return card

    def return_card_from_hand(self, sid: str, card: Card) -> bool:
        hand = self.hands.get(sid)
        if hand is None or card not in hand:
            return False
        hand.remove(card)
        self.deck.append(card)
        self.shuffle_deck()
        return True

    def return_card_from_table(self, index, card: Card) -> bool:
        if not self._valid_table_index(index) or self.table[index].card != card:
            return False
        placed = self.table.pop(index)
        self.deck.append(placed.card)
        self.shuffle_deck()
        return True

    # ---- table ----

    def play_card(self, sid: str, card: Card, x, y) -> bool:
        hand = self.hands.get(sid)
        if hand is None:
            return False
        if card in hand:
            hand.remove(card)
        # Placed even when missing from the hand: the client's hand view may be stale
        self.table.append(PlacedCard(card=card, x=x, y=y))
        return True

    def move_table_card(self, index, x, y) -> bool:
        if not self._valid_table_index(index):
            return False
        placed = self.table[index]
        placed.x = x
        placed.y = y
        return True

    def _valid_table_index(self, index) -> bool:
        return is_index(index) and 0 <= index < len(self.table)

    # ---- positioned-object layers ----

    def move_object(self, layer_name: str, index, x, y) -> bool:
        layer = self.layers.get(layer_name)
        return layer is not None and layer.move(index, x, y)

    def update_value(self, layer_name: str, index, value) -> bool:
        layer = self.layers.get(layer_name)
        return layer is not None and layer.update_value(index, value)

    # ---- serialization ----

    def hand_of(self, sid: str) -> List[Card]:
        return list(self.hands.get(sid, []))

    def table_to_list(self):
        return [p.to_dict() for p in self.table]

    def layer_to_list(self, layer_name: str):
        return self.layers[layer_name].to_list()

    def card_total(self) -> int:
        return len(self.deck) + sum(len(h) for h in self.hands.values()) + len(self.table)
