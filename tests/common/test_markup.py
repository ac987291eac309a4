"""
Tests pour format_markup (mise en forme du HTML de debug()).
"""

from reselect.common.markup import format_markup


def test_empty_markup():
    assert format_markup("") == ""
    assert format_markup("   \n ") == ""
    assert format_markup(None) == ""


def test_nested_elements_are_indented():
    markup = "<ul><li>a</li><li>b</li></ul>"

    assert format_markup(markup) == "<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>"


def test_existing_indentation_is_normalized():
    markup = "<ul>\n        <li>a</li>\n\n   <li>b</li>\n</ul>"

    assert format_markup(markup) == "<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>"


def test_leaf_element_unchanged():
    assert format_markup('<button class="primary">Save</button>') == '<button class="primary">Save</button>'


def test_sibling_fragments_on_separate_lines():
    assert format_markup("<p>x</p><p>y</p>") == "<p>x</p>\n<p>y</p>"


def test_plain_text():
    assert format_markup("  just text  ") == "just text"


def test_output_is_deterministic():
    markup = "<section><h2>Docs</h2><p>API <b>v2</b></p></section>"

    assert format_markup(markup) == format_markup(markup)
    assert format_markup(format_markup(markup)) == format_markup(markup)


def test_body_element_is_kept_with_attributes():
    markup = '<body class="home"><div>x</div></body>'

    assert format_markup(markup) == '<body class="home">\n  <div>x</div>\n</body>'


def test_html_element_is_kept():
    formatted = format_markup('<html lang="en"><body><p>a</p></body></html>')

    assert formatted.startswith('<html lang="en">')
    assert formatted.endswith("</html>")
    assert "<body>\n    <p>a</p>\n  </body>" in formatted


def test_document_tag_detection_is_case_insensitive():
    assert format_markup("<BODY><p>a</p></BODY>") == "<body>\n  <p>a</p>\n</body>"


def test_fragment_named_like_document_tag_prefix():
    assert format_markup("<header><h1>T</h1></header>") == "<header>\n  <h1>T</h1>\n</header>"
