from tabletop.services import layout


def positions(objs):
    return [(o.x, o.y) for o in objs]


def test_dots_form_right_column():
    dots = layout.init_dots()
    assert positions(dots) == [(820, 380 + 30 * i) for i in range(6)]
    assert all(o.value is None for o in dots)


def test_hexes_stack_upwards_with_start_value():
    hexes = layout.init_hexes()
    assert len(hexes) == 10
    assert [o.y for o in hexes] == [345 - 30 * i for i in range(10)]
    assert {o.value for o in hexes} == {20}


def test_squares_start_on_max_face():
    squares = layout.init_squares()
    assert len(squares) == 18
    values = [o.value for o in squares[:9]]
    assert values == [4, 6, 6, 6, 6, 6, 8, '10', 12]
    assert [o.value for o in squares[9:]] == values
    assert {o.y for o in squares[:9]} == {10}
    assert {o.y for o in squares[9:]} == {620}
    assert squares[0].x == (850 - (9 * 20 + 8 * 10)) / 2


def test_image_columns():
    images = layout.init_images()
    c_images = layout.init_c_images()
    assert len(images) == len(c_images) == 14
    assert {o.x for o in images} == {790}
    assert {o.x for o in c_images} == {760}
    assert images[0].y == 22
    assert {o.x for o in layout.init_g_images()} == {700}
    assert {o.x for o in layout.init_cs_images()} == {10}


def test_d_images_sit_above_bottom_dice():
    d_images = layout.init_d_images()
    assert positions(d_images) == [(340, 560), (400, 560), (460, 560)]


def test_layouts_are_deterministic():
    for spec in layout.LAYER_SPECS:
        assert positions(spec.seed()) == positions(spec.seed())


def test_layer_specs():
    names = [spec.name for spec in layout.LAYER_SPECS]
    assert names == ['dots', 'hexes', 'squares', 'images', 'c-images', 'g-images', 'cs-images', 'd-images']
    valued = {spec.name for spec in layout.LAYER_SPECS if spec.has_value}
    assert valued == {'hexes', 'squares'}
