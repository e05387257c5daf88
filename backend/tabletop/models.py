from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Dict, List, Optional

Card = str


def is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_coordinate(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_scalar(value: Any) -> bool:
    return isinstance(value, str) or is_coordinate(value)


@dataclass
class PlacedCard:
    card: Card
    x: float
    y: float

    def to_dict(self):
        return {
            'card': self.card,
            'x': self.x,
            'y': self.y,
        }


@dataclass
class PositionedObject:
    x: float
    y: float
    value: Any = None

    def to_dict(self, with_value: bool = False):
        data = {'x': self.x, 'y': self.y}
        if with_value:
            data['value'] = self.value
        return data


@dataclass(frozen=True)
class LayerSpec:
    """Static description of one positioned-object layer.

    ``name`` doubles as the outbound event prefix (``dots`` -> ``dots-update``),
    ``move_event``/``update_event`` are the inbound event names, and ``seed``
    builds the initial objects for a new room.
    """
    name: str
    move_event: str
    seed: Callable[[], List[PositionedObject]]
    update_event: Optional[str] = None

    @property
    def has_value(self) -> bool:
        return self.update_event is not None

    @property
    def update_broadcast(self) -> str:
        return f'{self.name}-update'


@dataclass
class Layer:
    """Fixed-length sequence of positioned objects, mutated in place only."""
    spec: LayerSpec
    objects: List[PositionedObject] = field(default_factory=list)

    @classmethod
    def seeded(cls, spec: LayerSpec) -> 'Layer':
        return cls(spec=spec, objects=spec.seed())

    def __len__(self):
        return len(self.objects)

    def _valid(self, index) -> bool:
        return is_index(index) and 0 <= index < len(self.objects)

    def move(self, index, x, y) -> bool:
        if not self._valid(index):
            return False
        obj = self.objects[index]
        obj.x = x
        obj.y = y
        return True

    def update_value(self, index, value) -> bool:
        if not self.spec.has_value or not self._valid(index):
            return False
        self.objects[index].value = value
        return True

    def to_list(self) -> List[Dict[str, Any]]:
        return [o.to_dict(with_value=self.spec.has_value) for o in self.objects]
