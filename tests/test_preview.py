import base64
import io
import struct
import zlib

from PIL import Image

from docexport.docs.json_io import read_elements
from docexport.docs.model import ExtractedDocument, ImageElement, TableElement, UnknownElement
from docexport.render.preview import render_fragments, render_html


def _png_b64():
    buf = io.BytesIO()
    Image.new('RGB', (4, 4), (0, 128, 255)).save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode('ascii')


def test_one_fragment_per_element_in_order():
    doc = read_elements([
        {'type': 'Title', 'text': 'Q1 Report'},
        {'type': 'Header', 'text': 'Summary'},
        {'type': 'Paragraph', 'text': 'Revenue grew 12%.'},
        {'type': 'Table', 'data': [['Name', 'Age'], ['Ann', '31']]},
        {'type': 'Image', 'src': _png_b64()},
        {'type': 'Sidebar', 'text': 'extra'},
    ])
    frags = render_fragments(doc)
    assert len(frags) == len(doc)
    assert [f.index for f in frags] == list(range(len(doc)))
    assert [f.kind for f in frags] == ['h1', 'h2', 'p', 'table', 'img', 'div']
    assert frags[0].html == '<h1>Q1 Report</h1>'
    assert frags[5].html == '<div>extra</div>'


def test_table_header_and_row_banding():
    rows = (('Name', 'Age'), ('Ann', '31'), ('Bob', '40'), ('Cy', '22'))
    html = render_fragments(ExtractedDocument(elements=(TableElement(rows=rows),)))[0].html
    assert '<thead><tr><th>Name</th><th>Age</th></tr></thead>' in html
    assert html.count('class="even"') == 2
    assert html.count('class="odd"') == 1
    assert html.index('<tr class="even"><td>Ann</td>') < html.index('<tr class="odd"><td>Bob</td>')


def test_ragged_and_empty_tables_render():
    doc = ExtractedDocument(elements=(
        TableElement(rows=(('a', 'b', 'c'), ('d',))),
        TableElement(rows=()),
    ))
    frags = render_fragments(doc)
    assert '<td>d</td>' in frags[0].html
    assert frags[1].html == '<table></table>'


def test_image_rendered_inline_with_fit_style():
    data = _png_b64()
    frag = render_fragments(ExtractedDocument(elements=(ImageElement(data=data),)))[0]
    assert frag.kind == 'img'
    assert f'src="data:image/png;base64,{data}"' in frag.html
    assert 'max-width:100%' in frag.html


def test_undecodable_image_gets_placeholder(capsys):
    frag = render_fragments(ExtractedDocument(elements=(ImageElement(data='bm90IGFuIGltYWdl'),)))[0]
    assert frag.kind == 'div'
    assert 'image-error' in frag.html
    assert 'Warning:' in capsys.readouterr().out


def test_text_is_escaped():
    doc = ExtractedDocument(elements=(UnknownElement(tag='X', text='<b>&</b>'),))
    assert render_fragments(doc)[0].html == '<div>&lt;b&gt;&amp;&lt;/b&gt;</div>'


def test_empty_document_renders_nothing():
    assert render_fragments(ExtractedDocument.empty()) == []
    page = render_html(ExtractedDocument.empty())
    assert '<div class="extracted-content">\n\n</div>' in page


def test_render_html_page_contains_fragments():
    doc = read_elements([{'type': 'Title', 'text': 'T'}])
    page = render_html(doc, title='report.pdf')
    assert page.startswith('<!DOCTYPE html>')
    assert '<title>report.pdf</title>' in page
    assert '<h1>T</h1>' in page


def _png_chunk(cid, payload):
    return struct.pack('>I', len(payload)) + cid + payload + struct.pack('>I', zlib.crc32(cid + payload) & 0xFFFFFFFF)


def _png_with_bad_idat_crc():
    raw = bytearray(base64.b64decode(_png_b64()))
    start = raw.index(b'IDAT')
    length = struct.unpack('>I', bytes(raw[start - 4:start]))[0]
    raw[start + 4 + length] ^= 0xFF
    return base64.b64encode(bytes(raw)).decode('ascii')


def _png_oversized_header():
    ihdr = struct.pack('>IIBBBBB', 30000, 30000, 8, 2, 0, 0, 0)
    data = (
        b'\x89PNG\r\n\x1a\n'
        + _png_chunk(b'IHDR', ihdr)
        + _png_chunk(b'IDAT', zlib.compress(b'\x00' * 16))
        + _png_chunk(b'IEND', b'')
    )
    return base64.b64encode(data).decode('ascii')


def test_image_with_broken_chunk_crc_gets_placeholder():
    doc = ExtractedDocument(elements=(ImageElement(data=_png_with_bad_idat_crc()), UnknownElement(tag='X', text='after')))
    frags = render_fragments(doc)
    assert len(frags) == 2
    assert frags[0].kind == 'div'
    assert 'image-error' in frags[0].html
    assert frags[1].html == '<div>after</div>'


def test_oversized_image_header_gets_placeholder():
    frags = render_fragments(ExtractedDocument(elements=(ImageElement(data=_png_oversized_header()),)))
    assert len(frags) == 1
    assert frags[0].kind == 'div'
    assert 'image-error' in frags[0].html
