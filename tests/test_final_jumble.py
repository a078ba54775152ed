import pytest

from app.errors import InvalidPosition
from app.services.feed_parser import ClueComplete, ClueMissing, CluePartial
from app.services.final_jumble import circled_letters, derive_final_jumble, parse_positions


def complete(answer, positions, index=1):
    return ClueComplete(index=index, word="", answer=answer, positions=positions)


def test_parse_positions():
    assert parse_positions("2,4") == (2, 4)
    assert parse_positions(" 3 , 1 ,") == (3, 1)
    assert parse_positions("") == ()


@pytest.mark.parametrize("raw", ["0", "-1", "a", "1,x"])
def test_parse_positions_rejects_bad_tokens(raw):
    with pytest.raises(InvalidPosition):
        parse_positions(raw)


def test_circled_letters_follow_position_order():
    assert circled_letters(complete("GARDEN", "2,4")) == "AD"
    assert circled_letters(complete("GARDEN", "4,2")) == "DA"
    assert circled_letters(complete("Garden", "1,2")) == "Ga"


def test_derive_concatenates_in_clue_order():
    clues = [complete("GARDEN", "2,4", 1), complete("PLANT", "1,3", 2)]
    assert derive_final_jumble(clues) == "ADPA"
    assert derive_final_jumble(clues) == derive_final_jumble(list(clues))


def test_partial_and_missing_clues_are_skipped():
    clues = [
        CluePartial(index=1, word="TAC", answer="CAT"),
        complete("PLANT", "1,3", 2),
        ClueMissing(index=3, word="ABC"),
        complete("SEED", "4", 4),
    ]
    assert derive_final_jumble(clues) == "PAD"


def test_no_participating_clues_gives_empty_string():
    assert derive_final_jumble([]) == ""
    assert derive_final_jumble([CluePartial(index=1, word="TAC", answer="CAT")]) == ""


def test_out_of_range_position_is_an_error():
    with pytest.raises(InvalidPosition):
        derive_final_jumble([complete("CAT", "1,4")])
