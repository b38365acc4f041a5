from bedrock_series.extractor import extract, loose_key_value, strict_array


def test_strict_array_is_pulled_out_of_commentary():
    result = extract('Extra commentary [{"series": "Friends"}] more text')
    assert result.resolved is True
    assert result.series == "Friends"
    assert result.render() == '[{"series": "Friends"}]'


def test_strict_array_tolerates_whitespace_around_punctuation():
    raw = 'Answer:\n[ {\n  "series" :  "The Wire"\n } ]\nDone.'
    assert extract(raw).render() == '[{"series": "The Wire"}]'


def test_loose_key_value_without_array():
    result = extract('The value "series": "Breaking Bad" was found.')
    assert result.render() == '[{"series": "Breaking Bad"}]'


def test_no_pattern_falls_back_to_trimmed_text():
    result = extract("  No structured data here.\n")
    assert result.resolved is False
    assert result.series is None
    assert result.render() == "No structured data here."


def test_empty_text_yields_empty_output():
    result = extract("")
    assert result.resolved is False
    assert result.render() == ""


def test_strict_match_wins_over_earlier_loose_pair():
    raw = '"series": "Draft" then final [{"series": "Lost"}]'
    assert strict_array(raw) == "Lost"
    assert loose_key_value(raw) == "Draft"
    assert extract(raw).series == "Lost"


def test_first_strict_match_is_used():
    raw = '[{"series": "Dark"}] or maybe [{"series": "1899"}]'
    assert extract(raw).series == "Dark"


def test_value_is_taken_literally():
    assert extract('[{"series": "  the OFFICE "}]').series == "  the OFFICE "
    assert extract('[{"series": ""}]').render() == '[{"series": ""}]'


def test_fallback_is_idempotent():
    once = extract("\t Seinfeld, probably \n").render()
    assert extract(once).render() == once


def test_only_ascii_whitespace_separates_tokens():
    raw = '[{"series":\u00a0"Dark"}]'
    result = extract(raw)
    assert result.resolved is False
    assert result.render() == raw


def test_non_ascii_value_is_kept():
    assert extract('[{"series": "Casa de Papel, Berlín"}]').series == "Casa de Papel, Berlín"
