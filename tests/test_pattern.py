from projector.pattern import WEEKDAY_NAMES, WEEKDAYS, parse_weekly_pattern


def test_single_letter_codes():
    assert parse_weekly_pattern("m,w,f") == (1, 3, 5)


def test_full_names_mixed_case_and_spacing():
    assert parse_weekly_pattern("Tuesday, Thursday") == (2, 4)


def test_unknown_tokens_are_dropped():
    assert parse_weekly_pattern("xyz,mon") == (1,)


def test_t_is_tuesday_and_r_is_thursday():
    assert parse_weekly_pattern("t") == (2,)
    assert parse_weekly_pattern("r") == (4,)
    assert parse_weekly_pattern("tu,th") == (2, 4)


def test_s_is_saturday_and_u_is_sunday():
    assert parse_weekly_pattern("s,u") == (0, 6)
    assert parse_weekly_pattern("sa,su") == (0, 6)


def test_duplicates_collapse_and_order_is_ascending():
    assert parse_weekly_pattern("fri,monday,f,MON,sun") == (0, 1, 5)


def test_empty_inputs():
    assert parse_weekly_pattern("") == ()
    assert parse_weekly_pattern(None) == ()
    assert parse_weekly_pattern(" , ,") == ()
    assert parse_weekly_pattern("everyday") == ()


def test_every_full_name_maps_to_its_index():
    for index, name in enumerate(WEEKDAY_NAMES):
        assert parse_weekly_pattern(name) == (index,)
        assert parse_weekly_pattern(name[:3]) == (index,)


def test_parsing_is_repeatable():
    pattern = "Mon, wed ,FRI,bogus"
    assert parse_weekly_pattern(pattern) == parse_weekly_pattern(pattern)


def test_weekday_table_is_read_only():
    try:
        WEEKDAYS["x"] = 1
    except TypeError:
        pass
    else:
        raise AssertionError("weekday table should not accept writes")
    assert "x" not in WEEKDAYS
