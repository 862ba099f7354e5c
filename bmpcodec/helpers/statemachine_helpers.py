def pair_is_end_of_line(pair):
    return pair[0] == 0 and pair[1] == 0


def pair_is_end_of_bitmap(pair):
    return pair[0] == 0 and pair[1] == 1


def pair_is_delta(pair):
    return pair[0] == 0 and pair[1] == 2


def pair_is_absolute(pair):
    return pair[0] == 0 and pair[1] > 2


def pair_is_encoded(pair):
    return pair[0] > 0
