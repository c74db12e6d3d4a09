import pytest

from lexicon import DEFAULT_WORDS, load_lexicon


def test_txt_keeps_valid_words_in_file_order(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("Crane\nelder\n\ncrane\nabc\nelders\nab1de\n  enter  \n")
    lex = load_lexicon(path)
    assert lex.words == ["crane", "elder", "enter"]
    assert lex.weights == {}
    assert "elder" in lex
    assert len(lex) == 3


def test_csv_reads_weights(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("word,frequency\nelder,0.5\ncrane,2\nelder,9\ntoolong,1\nenter,\n")
    lex = load_lexicon(path)
    assert lex.words == ["elder", "crane", "enter"]
    assert lex.weights == {"elder": 0.5, "crane": 2.0, "enter": 0.0}


def test_csv_bad_frequency(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("word,frequency\nelder,lots\n")
    with pytest.raises(ValueError):
        load_lexicon(path)


def test_csv_without_word_column(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("term,frequency\nelder,1\n")
    with pytest.raises(ValueError):
        load_lexicon(path)


def test_missing_and_empty_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_lexicon(tmp_path / "nope.txt")
    empty = tmp_path / "empty.txt"
    empty.write_text("abc\n")
    with pytest.raises(ValueError):
        load_lexicon(empty)


def test_bundled_lists():
    lex = load_lexicon()
    assert DEFAULT_WORDS.exists()
    assert "elder" in lex
    assert len(lex) > 400
    weighted = load_lexicon(DEFAULT_WORDS.with_suffix(".csv"))
    assert weighted.weights["about"] > weighted.weights["erode"]
