import pytest

from plainini import IniDocument, ParseResult, parse, serialize


def _doc(data):
    doc = IniDocument()
    for section, pairs in data.items():
        doc.set_section(section, pairs)
    return doc


def _normalized(text):
    """Sort sections and keys so serialized text compares order-free."""
    return serialize(_doc({
        s: dict(sorted(p.items())) for s, p in sorted(parse(text).document.items())
    }))


def test_parse_empty():
    result = parse('')
    assert result.success
    assert len(result.document) == 0


def test_parse_basic():
    doc = parse('[S]\nK1=V1\nK2=V2\n[T]\nK=V').document
    assert doc == {'S': {'K1': 'V1', 'K2': 'V2'}, 'T': {'K': 'V'}}


def test_lines_before_section_go_to_empty_section():
    doc = parse('Key1=Value1\n[S]\nKey2=Value2').document
    assert doc.get_value('', 'Key1') == 'Value1'
    assert doc.get_value('S', 'Key2') == 'Value2'


def test_value_may_contain_delimiter():
    doc = parse('K=a=b=c').document
    assert doc.get_value('', 'K') == 'a=b=c'


def test_malformed_lines_ignored():
    result = parse('=NoKey\nNoValue=\nJustText')
    assert result.success
    assert len(result.document) == 0


@pytest.mark.parametrize('line', ['=', '[]', '', '   ', 'no delimiter'])
def test_structurally_invalid_line_is_skipped(line):
    assert len(parse(f'[S]\n{line}\n').document) == 0


def test_crlf_normalization():
    assert parse('[S]\r\nK=V\r\n').document == parse('[S]\nK=V\n').document


def test_stray_carriage_returns_are_removed():
    doc = parse('[S\r]\nK=V\rW').document
    assert doc.get_value('S', 'K') == 'VW'


def test_no_trimming():
    doc = parse('[ S ]\n Key = Value \n').document
    assert doc.get_value(' S ', ' Key ') == ' Value '


def test_comments_are_part_of_value():
    doc = parse('[S]\nKey4=Value4 ; a comment').document
    assert doc.get_value('S', 'Key4') == 'Value4 ; a comment'


def test_section_is_first_bracket_span():
    doc = parse('junk [First] [Second] tail\nK=V').document
    assert doc.get_value('First', 'K') == 'V'
    assert 'Second' not in doc


def test_header_skips_empty_brackets():
    doc = parse('[][Name]\nK=V').document
    assert doc.get_value('Name', 'K') == 'V'


def test_bracket_span_wins_over_pair():
    doc = parse('K=[S]\nA=B').document
    assert doc.get_value('', 'K') is None
    assert doc.get_value('S', 'A') == 'B'


def test_header_without_pairs_creates_nothing():
    doc = parse('[Empty]\n[S]\nK=V').document
    assert 'Empty' not in doc
    assert doc == {'S': {'K': 'V'}}


def test_repeated_section_merges_last_write_wins():
    doc = parse('[S]\nK=1\nA=x\n[T]\nK=2\n[S]\nK=3').document
    assert doc.get_section('S') == {'K': '3', 'A': 'x'}
    assert doc.get_value('T', 'K') == '2'


def test_parse_failure_is_reported_not_raised():
    result = parse(None)
    assert not result
    assert result.success is False
    assert result.document is None
    assert isinstance(result.error, Exception)


def test_parse_result_unpacks():
    document, error = parse('K=V')
    assert error is None
    assert isinstance(document, IniDocument)
    assert isinstance(parse(''), ParseResult)


def test_serialize_empty_document():
    assert serialize(IniDocument()) == ''


def test_serialize_uses_crlf():
    doc = IniDocument()
    doc.set_value('S', 'K', 'V')
    doc.set_section('Empty', {})
    text = serialize(doc)
    assert '[S]\r\nK=V\r\n' in text
    assert '[Empty]\r\n' in text
    assert text.count('\r\n') == 3
    assert '\n' not in text.replace('\r\n', '')


def test_serialize_does_not_escape():
    doc = IniDocument()
    doc.set_value('S', 'K', 'a=[b]; c')
    assert serialize(doc) == '[S]\r\nK=a=[b]; c\r\n'


def test_round_trip():
    data = {
        'Alpha': {'One': '1', 'Two': 'two words', 'Eq': 'x=y'},
        'Beta': {'Path': 'C:\\Temp', 'Spaced': ' padded '},
    }
    doc = _doc(data)
    doc.set_value('Gamma', 'Late', 'value')
    assert parse(serialize(doc)).document == doc


def test_idempotence_under_normalized_order():
    doc = _doc({'B': {'y': '2', 'x': '1'}, 'A': {'k': 'v'}})
    once = serialize(doc)
    twice = serialize(parse(once).document)
    assert _normalized(once) == _normalized(twice)
