import json

import pytest

from docexport.docs.errors import ValidationError
from docexport.docs.json_io import load_document, loads_document, read_elements
from docexport.docs.model import (
    ExtractedDocument,
    HeaderElement,
    ImageElement,
    ParagraphElement,
    TableElement,
    TitleElement,
    UnknownElement,
)


def test_read_elements_maps_each_tag_in_order():
    items = [
        {'type': 'Title', 'text': 'Sample Document Title'},
        {'type': 'Header', 'text': 'Introduction'},
        {'type': 'Paragraph', 'text': 'Body text.'},
        {'type': 'Table', 'data': [['Name', 'Age'], ['John Doe', 30]]},
        {'type': 'Image', 'src': 'aGVsbG8='},
    ]
    doc = read_elements(items)
    assert len(doc) == 5
    assert doc[0] == TitleElement(text='Sample Document Title')
    assert doc[1] == HeaderElement(text='Introduction')
    assert doc[2] == ParagraphElement(text='Body text.')
    # numeric cells are coerced to strings
    assert doc[3] == TableElement(rows=(('Name', 'Age'), ('John Doe', '30')))
    assert doc[4] == ImageElement(data='aGVsbG8=')
    assert [e.tag for e in doc] == ['Title', 'Header', 'Paragraph', 'Table', 'Image']


def test_unknown_tag_is_preserved_with_text():
    doc = read_elements([{'type': 'Footnote', 'text': 'see page 4'}, {'type': 'Caption'}])
    assert doc[0] == UnknownElement(tag='Footnote', text='see page 4')
    assert doc[1] == UnknownElement(tag='Caption', text='')


def test_missing_text_defaults_to_empty_and_reports_issue():
    issues = []
    doc = read_elements([{'type': 'Paragraph'}, {'type': 'Title', 'text': 'ok'}], issues=issues)
    assert doc[0] == ParagraphElement(text='')
    assert doc[1] == TitleElement(text='ok')
    assert len(issues) == 1
    assert isinstance(issues[0], ValidationError)
    assert issues[0].index == 0
    assert issues[0].field == 'text'


def test_bad_table_and_image_do_not_abort_document():
    issues = []
    doc = read_elements(
        [
            {'type': 'Table'},
            {'type': 'Table', 'data': ['not', 'rows']},
            {'type': 'Image', 'src': ''},
            {'type': 'Paragraph', 'text': 'still here'},
        ],
        issues=issues,
    )
    assert doc[0] == TableElement(rows=())
    assert doc[1] == TableElement(rows=())
    assert doc[2] == ImageElement(data='')
    assert doc[3] == ParagraphElement(text='still here')
    assert [i.index for i in issues] == [0, 1, 2]


def test_rows_alias_and_none_cells():
    doc = read_elements([{'type': 'Table', 'rows': [['a', None], ['b']]}])
    assert doc[0].rows == (('a', ''), ('b',))


def test_image_data_uri_prefix_and_whitespace_stripped():
    doc = read_elements([{'type': 'Image', 'src': 'data:image/png;base64,aGVs\nbG8='}])
    assert doc[0].data == 'aGVsbG8='


def test_non_object_item_becomes_unknown():
    issues = []
    doc = read_elements(['oops', {'type': 'Paragraph', 'text': 'x'}], issues=issues)
    assert isinstance(doc[0], UnknownElement)
    assert doc[1].text == 'x'
    assert len(issues) == 1


def test_warnings_printed_without_issue_list(capsys):
    read_elements([{'type': 'Header'}])
    out = capsys.readouterr().out
    assert 'Warning:' in out
    assert 'element 0' in out


def test_top_level_must_be_array():
    with pytest.raises(ValueError):
        read_elements({'type': 'Title', 'text': 'x'})


def test_empty_array_is_empty_document():
    doc = loads_document('[]')
    assert doc == ExtractedDocument.empty()
    assert len(doc) == 0
    assert not doc


def test_load_document_from_file(tmp_path):
    p = tmp_path / 'extracted.json'
    p.write_text(json.dumps([{'type': 'Title', 'text': 'Q1 Report'}]), encoding='utf-8')
    doc = load_document(str(p))
    assert list(doc) == [TitleElement(text='Q1 Report')]


def test_elements_are_immutable():
    doc = read_elements([{'type': 'Title', 'text': 'x'}])
    with pytest.raises(Exception):
        doc[0].text = 'y'
