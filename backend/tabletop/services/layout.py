"""Initial placement of every positioned-object layer.

Coordinates are in board pixels and must match the client stylesheet.
Every function is pure: a new room always starts from the same layout.
"""

from typing import List

from tabletop.models import LayerSpec, PositionedObject

WIDTH = 850
HEIGHT = 650

DOT_COUNT = 6
DOT_SIZE = 20
DOT_MARGIN = 10
DOT_LEFT_OFFSET = 10
DOT_RIGHT_OFFSET = WIDTH - DOT_SIZE - DOT_LEFT_OFFSET

HEX_COUNT = 10
HEX_START_VALUE = 20

SQUARE_MARGIN = 10
# Per-row count used to locate the bottom row
SQUARE_COUNT = 5

IMAGE_COUNT = 14
IMAGE_WIDTH = 20
IMAGE_HEIGHT = 34
IMAGE_MARGIN = 10
IMAGE_LEFT_OFFSET = DOT_RIGHT_OFFSET - IMAGE_WIDTH - IMAGE_MARGIN
C_IMAGE_LEFT_OFFSET = IMAGE_LEFT_OFFSET - IMAGE_WIDTH - IMAGE_MARGIN

G_IMAGE_COUNT = 10
G_IMAGE_WIDTH = 50
G_IMAGE_HEIGHT = 50
G_IMAGE_LEFT_OFFSET = C_IMAGE_LEFT_OFFSET - G_IMAGE_WIDTH - IMAGE_MARGIN

CS_IMAGE_COUNT = 7
CS_IMAGE_HEIGHT = 70
CS_IMAGE_LEFT_OFFSET = DOT_LEFT_OFFSET

D_IMAGE_COUNT = 3
D_IMAGE_WIDTH = 50
D_IMAGE_HEIGHT = 50

# Dice shapes along the top and bottom edges; each starts on its max face
SQUARE_SHAPES = [
    ('triangle', 1, 4),
    ('square', 1, 6),
    ('square', 1, 6),
    ('square', 1, 6),
    ('square', 1, 6),
    ('square', 1, 6),
    ('hexagon', 1, 8),
    ('diamond', 0, 10),
    ('decagon', 1, 12),
]


def _column(x, count, height, margin) -> List[PositionedObject]:
    total_h = count * height + (count - 1) * margin
    start_y = (HEIGHT - total_h) / 2
    return [PositionedObject(x=x, y=start_y + i * (height + margin)) for i in range(count)]


def _dot_column_height() -> int:
    return DOT_COUNT * DOT_SIZE + (DOT_COUNT - 1) * DOT_MARGIN


def init_dots() -> List[PositionedObject]:
    start_y = HEIGHT - _dot_column_height() - 100
    return [
        PositionedObject(x=DOT_RIGHT_OFFSET, y=start_y + i * (DOT_SIZE + DOT_MARGIN))
        for i in range(DOT_COUNT)
    ]


def init_hexes() -> List[PositionedObject]:
    # Stacked upwards from just above the dot column
    start_y = HEIGHT - _dot_column_height() - 135
    return [
        PositionedObject(x=DOT_RIGHT_OFFSET, y=start_y - i * (DOT_SIZE + DOT_MARGIN), value=HEX_START_VALUE)
        for i in range(HEX_COUNT)
    ]


def init_squares() -> List[PositionedObject]:
    count = len(SQUARE_SHAPES)
    total_w = count * DOT_SIZE + (count - 1) * SQUARE_MARGIN
    start_x = (WIDTH - total_w) / 2
    top_y = DOT_MARGIN
    bottom_y = HEIGHT - DOT_MARGIN - DOT_SIZE

    def row(y):
        objs = []
        for i, (clip, _low, high) in enumerate(SQUARE_SHAPES):
            # The diamond die face is shown zero padded ("10")
            value = str(high).zfill(2) if clip == 'diamond' else high
            objs.append(PositionedObject(x=start_x + i * (DOT_SIZE + SQUARE_MARGIN), y=y, value=value))
        return objs

    return row(top_y) + row(bottom_y)


def init_images() -> List[PositionedObject]:
    return _column(IMAGE_LEFT_OFFSET, IMAGE_COUNT, IMAGE_HEIGHT, IMAGE_MARGIN)


def init_c_images() -> List[PositionedObject]:
    return _column(C_IMAGE_LEFT_OFFSET, IMAGE_COUNT, IMAGE_HEIGHT, IMAGE_MARGIN)


def init_g_images() -> List[PositionedObject]:
    return _column(G_IMAGE_LEFT_OFFSET, G_IMAGE_COUNT, G_IMAGE_HEIGHT, IMAGE_MARGIN)


def init_cs_images() -> List[PositionedObject]:
    return _column(CS_IMAGE_LEFT_OFFSET, CS_IMAGE_COUNT, CS_IMAGE_HEIGHT, IMAGE_MARGIN)


def init_d_images() -> List[PositionedObject]:
    """One row centred just above the bottom row of dice."""
    total_w = D_IMAGE_COUNT * D_IMAGE_WIDTH + (D_IMAGE_COUNT - 1) * IMAGE_MARGIN
    start_x = (WIDTH - total_w) / 2
    squares = init_squares()
    bottom_y = squares[len(squares) - SQUARE_COUNT].y
    y = bottom_y - D_IMAGE_HEIGHT - IMAGE_MARGIN
    return [PositionedObject(x=start_x + i * (D_IMAGE_WIDTH + IMAGE_MARGIN), y=y) for i in range(D_IMAGE_COUNT)]


LAYER_SPECS = (
    LayerSpec('dots', 'move-dot', init_dots),
    LayerSpec('hexes', 'move-hex', init_hexes, update_event='update-hex'),
    LayerSpec('squares', 'move-square', init_squares, update_event='update-square'),
    LayerSpec('images', 'move-image', init_images),
    LayerSpec('c-images', 'move-c-image', init_c_images),
    LayerSpec('g-images', 'move-g-image', init_g_images),
    LayerSpec('cs-images', 'move-cs-image', init_cs_images),
    LayerSpec('d-images', 'move-d-image', init_d_images),
)
